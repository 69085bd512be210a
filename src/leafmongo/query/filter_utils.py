# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Query by Example: equality filters from keyword arguments, dicts or objects.

Example::

    FilterUtils.by(name="Alice", active=True)
    # {"$and": [{"name": {"$eq": "Alice"}}, {"active": {"$eq": True}}]}

    FilterUtils.from_example(UserFilter(role="admin"))
    # {"role": {"$eq": "admin"}}
"""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import BaseModel

from leafmongo.query.combinators import and_
from leafmongo.query.operators import FilterOperator
from leafmongo.query.value import FilterDocument, without_nulls


class FilterUtils:
    """Build ``$eq`` filters from partial data, ANDed together."""

    @classmethod
    def by(cls, **kwargs: Any) -> FilterDocument:
        """Create a filter from keyword arguments (all eq, ANDed)."""
        return cls._combine_and([FilterOperator.eq(field, value) for field, value in kwargs.items()])

    @classmethod
    def from_dict(cls, filters: dict[str, Any]) -> FilterDocument:
        """Create a filter from a dict of field->value pairs. ``None`` values are skipped."""
        return cls._combine_and(
            [FilterOperator.eq(field, value) for field, value in filters.items() if value is not None]
        )

    @classmethod
    def from_example(cls, example: Any) -> FilterDocument:
        """Create a filter from an example object.

        Non-``None`` attributes become eq conditions. Supports pydantic
        models (dumped in JSON mode, by alias), dataclasses (converted
        recursively, so nested dataclasses expand to dotted paths) and any
        object with ``__dict__``.
        """
        if isinstance(example, BaseModel):
            fields = example.model_dump(mode="json", by_alias=True, exclude_none=True)
        elif dataclasses.is_dataclass(example) and not isinstance(example, type):
            fields = without_nulls(dataclasses.asdict(example))
        else:
            fields = vars(example)
        return cls.from_dict(fields)

    @staticmethod
    def _combine_and(filters: list[FilterDocument]) -> FilterDocument:
        """AND-combine *filters*; an empty list matches everything."""
        if not filters:
            return {}
        if len(filters) == 1:
            return filters[0]
        return and_(*filters)
