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
"""Top-level logical combinators.

These are plain constructors: arguments are deep-copied into a new list,
nothing is flattened or simplified, and calling with no arguments yields an
empty array (whose meaning is up to the server).

Example::

    or_(FilterOperator.gte("price", 10), FilterOperator.lt("qty", 5))
    # {"$or": [{"price": {"$gte": 10}}, {"qty": {"$lt": 5}}]}
"""

from __future__ import annotations

import copy

from leafmongo.query.value import FilterDocument


def and_(*filters: FilterDocument) -> FilterDocument:
    """All of *filters* must match (``$and``)."""
    return {"$and": copy.deepcopy(list(filters))}


def or_(*filters: FilterDocument) -> FilterDocument:
    """At least one of *filters* must match (``$or``)."""
    return {"$or": copy.deepcopy(list(filters))}


def nor(*filters: FilterDocument) -> FilterDocument:
    """None of *filters* may match (``$nor``)."""
    return {"$nor": copy.deepcopy(list(filters))}


def elem_match(filter: FilterDocument) -> FilterDocument:
    """Element condition for use inside array operators (``$elemMatch``).

    Example::

        FilterOperator.all(
            "qty",
            elem_match(and_(FilterOperator.eq("size", "M"), FilterOperator.gt("num", 50))),
            elem_match(and_(FilterOperator.eq("num", 100), FilterOperator.eq("color", "green"))),
        )
    """
    return {"$elemMatch": copy.deepcopy(filter)}
