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
"""Structured values: the JSON-like representation shared by entities and filters.

A *structured value* is built from Python built-ins only: ``None``, ``bool``,
``int``/``float``, ``str``, ``list`` and ``dict`` with string keys. A
*filter document* is a structured value that is always a ``dict``.

Keys starting with :data:`OPERATOR_PREFIX` are operator keys (``$eq``,
``$and``, ...); every other key is a field-path segment.
"""

from __future__ import annotations

from typing import Any, TypeAlias

StructuredValue: TypeAlias = Any
FilterDocument: TypeAlias = dict[str, Any]

OPERATOR_PREFIX = "$"
PATH_SEPARATOR = "."


def is_operator_key(key: str) -> bool:
    """Return ``True`` when *key* names a query operator rather than a field."""
    return key.startswith(OPERATOR_PREFIX)


def is_object(value: StructuredValue) -> bool:
    return isinstance(value, dict)


def join_path(prefix: str, key: str) -> str:
    """Join a field-path *prefix* and a segment with a dot (no dot for an empty prefix)."""
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key


def merge_paths(accumulator: FilterDocument, paths: FilterDocument) -> FilterDocument:
    """Union *paths* into *accumulator* and return it.

    Merging is shallow and last-write-wins: a key already present in
    *accumulator* is overwritten by the value from *paths*. Path expansion
    never produces the same dotted path twice for a well-formed input, so an
    overwrite only happens when the input itself repeats a path (e.g. two
    operator keys under one field when wrapping with an explicit operator).
    """
    for key, value in paths.items():
        accumulator[key] = value
    return accumulator


def without_nulls(value: StructuredValue) -> StructuredValue:
    """Recursively drop ``None`` members from objects. Array elements are kept."""
    if isinstance(value, dict):
        return {key: without_nulls(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [without_nulls(item) for item in value]
    return value
