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
"""Path expansion: flattening nested structured values into dotted-path filters.

``{"a": {"b": 1, "c": {"$gt": 2}}}`` expanded under prefix ``"x"`` becomes::

    {"x.a.b": 1, "x.a.c": {"$gt": 2}}

Operator keys stop the descent: the operator and its operand stay together
under the path that led to them. :func:`expand_operator` is the variant used
by field operators, which additionally wraps every discovered leaf in an
explicit operator (``{"x.a.b": {"$eq": 1}}``).
"""

from __future__ import annotations

import copy

from leafmongo.kernel.exceptions import InvalidArgumentException
from leafmongo.query.value import (
    FilterDocument,
    StructuredValue,
    is_object,
    is_operator_key,
    join_path,
    merge_paths,
)


def expand(prefix: str, value: StructuredValue) -> FilterDocument:
    """Flatten *value* into a filter document keyed by dotted paths under *prefix*.

    With an empty *prefix*, top-level operator keys pass through unchanged so
    that logical documents like ``{"$or": [...]}`` survive expansion.

    Raises:
        InvalidArgumentException: If *value* is not an object and *prefix* is
            empty, since there is no path to attach the value to.
    """
    if not is_object(value):
        if not prefix:
            raise InvalidArgumentException(
                "Cannot expand a non-object value without a field path",
                context={"value": value},
            )
        return {prefix: copy.deepcopy(value)}
    return _expand_paths(prefix, copy.deepcopy(value))


def _expand_paths(prefix: str, value: StructuredValue) -> FilterDocument:
    if not is_object(value):
        return {prefix: value}

    result: FilterDocument = {}
    for key, sub_value in value.items():
        if is_operator_key(key):
            merge_paths(result, {prefix: {key: sub_value}} if prefix else {key: sub_value})
        else:
            merge_paths(result, _expand_paths(join_path(prefix, key), sub_value))
    return result


def expand_operator(field: str, operator: str, value: StructuredValue) -> FilterDocument:
    """Expand *value* under *field*, wrapping each leaf as ``{path: {operator: leaf}}``.

    Nested operator documents are kept intact inside the wrapping operator:
    ``expand_operator("a", "$not", {"$gt": 1})`` gives ``{"a": {"$not": {"$gt": 1}}}``.

    Raises:
        InvalidArgumentException: If *field* or *operator* is empty.
    """
    if not field:
        raise InvalidArgumentException("Field name should be non empty", context={"operator": operator})
    if not operator:
        raise InvalidArgumentException("Query operator should be non empty", context={"field": field})
    return _wrap_paths(field, operator, copy.deepcopy(value))


def _wrap_paths(path: str, operator: str, value: StructuredValue) -> FilterDocument:
    if not is_object(value):
        return {path: {operator: value}}

    result: FilterDocument = {}
    for key, sub_value in value.items():
        if is_operator_key(key):
            merge_paths(result, {path: {operator: {key: sub_value}}})
        else:
            merge_paths(result, _wrap_paths(join_path(path, key), operator, sub_value))
    return result
