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
"""Field-level query operators producing MongoDB filter documents.

Provides :class:`FilterOperator` with one static method per query operator
and :class:`Field`, a fluent wrapper bound to a single field name.

Example::

    FilterOperator.gte("price", 10)
    # {"price": {"$gte": 10}}

    Field("qty").in_(5, 15)
    # {"qty": {"$in": [5, 15]}}

    FilterOperator.eq("size", {"w": 21, "uom": "cm"})
    # {"size.w": {"$eq": 21}, "size.uom": {"$eq": "cm"}}

    FilterOperator.not_("price", lambda f: FilterOperator.gt(f, 1.99))
    # {"price": {"$not": {"$gt": 1.99}}}
"""

from __future__ import annotations

import copy
import re
from collections.abc import Callable
from typing import Any

from bson.regex import Regex

from leafmongo.kernel.exceptions import InvalidArgumentException
from leafmongo.query.expansion import expand_operator
from leafmongo.query.native import native_not, native_regex, to_native_filter, to_plain_filter, to_structured_value
from leafmongo.query.value import FilterDocument, StructuredValue


def _require_field(field: str) -> str:
    if not field:
        raise InvalidArgumentException("Field name should be non empty")
    return field


class FilterOperator:
    """MongoDB query operators keyed by field name.

    Comparison operators (``eq``, ``ne``, ``gt``, ``gte``, ``lt``, ``lte``)
    expand structured values into dotted paths; the remaining operators
    attach their operand to the field as is.
    """

    @staticmethod
    def eq(field: str, value: StructuredValue) -> FilterDocument:
        """Equal to (``$eq``)."""
        return expand_operator(field, "$eq", value)

    @staticmethod
    def ne(field: str, value: StructuredValue) -> FilterDocument:
        """Not equal to (``$ne``). Also matches documents without the field."""
        return expand_operator(field, "$ne", value)

    @staticmethod
    def gt(field: str, value: StructuredValue) -> FilterDocument:
        """Greater than (``$gt``)."""
        return expand_operator(field, "$gt", value)

    @staticmethod
    def gte(field: str, value: StructuredValue) -> FilterDocument:
        """Greater than or equal (``$gte``)."""
        return expand_operator(field, "$gte", value)

    @staticmethod
    def lt(field: str, value: StructuredValue) -> FilterDocument:
        """Less than (``$lt``)."""
        return expand_operator(field, "$lt", value)

    @staticmethod
    def lte(field: str, value: StructuredValue) -> FilterDocument:
        """Less than or equal (``$lte``)."""
        return expand_operator(field, "$lte", value)

    @staticmethod
    def in_(field: str, *values: StructuredValue) -> FilterDocument:
        """Value equals any of *values* (``$in``)."""
        return {_require_field(field): {"$in": copy.deepcopy(list(values))}}

    @staticmethod
    def nin(field: str, *values: StructuredValue) -> FilterDocument:
        """Value is none of *values*, or the field is absent (``$nin``)."""
        return {_require_field(field): {"$nin": copy.deepcopy(list(values))}}

    @staticmethod
    def exists(field: str, exists: bool = True) -> FilterDocument:
        """Field presence (``$exists``). ``True`` also matches explicit nulls."""
        return {_require_field(field): {"$exists": bool(exists)}}

    @staticmethod
    def regex(field: str, pattern: str | re.Pattern[str] | Regex, options: str | None = None) -> FilterDocument:
        """Pattern match (``$regex``).

        A plain string pattern is used verbatim, with ``$options`` added when
        *options* is given. A compiled :class:`re.Pattern` (or a bson
        :class:`~bson.regex.Regex`) is encoded by the driver, carrying its
        own flags in ``$options``; passing *options* as well is an error.
        """
        _require_field(field)
        if isinstance(pattern, (re.Pattern, Regex)):
            if options is not None:
                raise InvalidArgumentException(
                    "Options cannot be combined with a compiled pattern",
                    context={"field": field, "options": options},
                )
            return to_structured_value(native_regex(field, pattern))
        condition: dict[str, Any] = {"$regex": pattern}
        if options is not None:
            condition["$options"] = options
        return {field: condition}

    @staticmethod
    def all(field: str, *values: StructuredValue) -> FilterDocument:
        """Array contains every one of *values* (``$all``)."""
        return {_require_field(field): {"$all": copy.deepcopy(list(values))}}

    @staticmethod
    def elem_match(field: str, sub_filter: FilterDocument) -> FilterDocument:
        """At least one array element matches *sub_filter* (``$elemMatch``)."""
        return {_require_field(field): {"$elemMatch": copy.deepcopy(sub_filter)}}

    @staticmethod
    def size(field: str, size: int) -> FilterDocument:
        """Array has exactly *size* elements (``$size``)."""
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidArgumentException(
                f"Array size should be an integer, got {size!r}",
                context={"field": field},
            )
        return {_require_field(field): {"$size": size}}

    @staticmethod
    def not_(field: str, builder: Callable[[str], FilterDocument]) -> FilterDocument:
        """Negate the condition *builder* produces for *field* (``$not``).

        The negation is computed on the native document so that literal
        values, operator expressions and regexes are each negated the way
        the server expects.
        """
        condition = builder(_require_field(field))
        return to_plain_filter(native_not(to_native_filter(condition)))


class Field:
    """Fluent operator access for a single field.

    Usage::

        Field("qty").gt(20)
        Field("tags").all("ssl", "security")
        Field("price").not_(lambda f: FilterOperator.gt(f, 1.99))
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = _require_field(name)

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Field({self._name!r})"

    def eq(self, value: StructuredValue) -> FilterDocument:
        return FilterOperator.eq(self._name, value)

    def ne(self, value: StructuredValue) -> FilterDocument:
        return FilterOperator.ne(self._name, value)

    def gt(self, value: StructuredValue) -> FilterDocument:
        return FilterOperator.gt(self._name, value)

    def gte(self, value: StructuredValue) -> FilterDocument:
        return FilterOperator.gte(self._name, value)

    def lt(self, value: StructuredValue) -> FilterDocument:
        return FilterOperator.lt(self._name, value)

    def lte(self, value: StructuredValue) -> FilterDocument:
        return FilterOperator.lte(self._name, value)

    def in_(self, *values: StructuredValue) -> FilterDocument:
        return FilterOperator.in_(self._name, *values)

    def nin(self, *values: StructuredValue) -> FilterDocument:
        return FilterOperator.nin(self._name, *values)

    def exists(self, exists: bool = True) -> FilterDocument:
        return FilterOperator.exists(self._name, exists)

    def regex(self, pattern: str | re.Pattern[str] | Regex, options: str | None = None) -> FilterDocument:
        return FilterOperator.regex(self._name, pattern, options)

    def all(self, *values: StructuredValue) -> FilterDocument:
        return FilterOperator.all(self._name, *values)

    def elem_match(self, sub_filter: FilterDocument) -> FilterDocument:
        return FilterOperator.elem_match(self._name, sub_filter)

    def size(self, size: int) -> FilterDocument:
        return FilterOperator.size(self._name, size)

    def not_(self, builder: Callable[[str], FilterDocument]) -> FilterDocument:
        return FilterOperator.not_(self._name, builder)
