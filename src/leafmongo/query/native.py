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
"""Bridge between structured filter documents and pymongo-native documents.

pymongo accepts any mapping as a filter; :func:`to_native_filter` produces
order-preserving :class:`bson.son.SON` documents. The reverse direction goes
through pymongo's legacy extended JSON so BSON-only values get a stable
structured form (a regex becomes ``{"$regex": ..., "$options": ...}``, an
``ObjectId`` becomes ``{"$oid": ...}``).

The regex and negation builders here work on native documents and are what
:class:`~leafmongo.query.operators.FilterOperator` delegates to for compiled
patterns and ``$not``.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from bson import json_util
from bson.regex import Regex
from bson.son import SON

from leafmongo.kernel.exceptions import ShapeMismatchException
from leafmongo.query.value import FilterDocument, is_operator_key


def to_native_filter(document: Mapping[str, Any]) -> SON:
    """Convert a filter document into a pymongo-native ``SON`` document.

    Raises:
        ShapeMismatchException: If *document* is not a mapping or has a
            non-string key anywhere in its tree.
    """
    if not isinstance(document, Mapping):
        raise ShapeMismatchException(
            f"Expected a filter document, but got {type(document).__name__}",
            context={"value": document},
        )
    return _to_native(document)


def _to_native(value: Any) -> Any:
    if isinstance(value, Mapping):
        native = SON()
        for key, item in value.items():
            if not isinstance(key, str):
                raise ShapeMismatchException(
                    f"Document keys must be strings, but got {key!r}",
                    context={"key": key},
                )
            native[key] = _to_native(item)
        return native
    if isinstance(value, (list, tuple)):
        return [_to_native(item) for item in value]
    return value


def to_structured_value(native: Any) -> FilterDocument:
    """Render a native document as a plain structured object.

    Raises:
        ShapeMismatchException: If *native* is not a document, or contains a
            value that has no extended JSON representation.
    """
    if not isinstance(native, Mapping):
        raise ShapeMismatchException(
            f"Expected a document, but got {type(native).__name__}",
            context={"value": native},
        )
    try:
        rendered = json_util.dumps(native, json_options=json_util.LEGACY_JSON_OPTIONS)
    except (TypeError, ValueError) as exc:
        raise ShapeMismatchException(f"Document is not representable as a structured value: {exc}") from exc

    value = json.loads(rendered)
    if not isinstance(value, dict):
        raise ShapeMismatchException(
            f"Expected a structured object, but got {type(value).__name__}",
            context={"value": value},
        )
    return value


def to_plain_filter(native: Mapping[str, Any]) -> FilterDocument:
    """Copy a native document into plain ``dict``/``list`` containers.

    Unlike :func:`to_structured_value`, BSON leaves (``ObjectId``,
    ``datetime``, ``Regex``, ...) are kept as they are, so the result can be
    sent back through :func:`to_native_filter` with the same meaning.
    """
    if not isinstance(native, Mapping):
        raise ShapeMismatchException(
            f"Expected a document, but got {type(native).__name__}",
            context={"value": native},
        )
    return _to_plain(native)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


def native_regex(field: str, pattern: re.Pattern[str] | Regex) -> SON:
    """Build ``{field: <BSON regex>}`` keeping the pattern's flags as the driver encodes them."""
    regex = pattern if isinstance(pattern, Regex) else Regex.from_native(pattern)
    return SON([(field, regex)])


def native_not(native_filter: Mapping[str, Any]) -> SON:
    """Negate a native filter document.

    A single field condition is negated in place with ``$not``; a literal
    value is first turned into an ``$eq`` condition since ``$not`` only takes
    operator expressions or regexes. Anything else (several conditions, or
    a top-level logical operator) is wrapped in ``$nor``.
    """
    if len(native_filter) != 1:
        return SON([("$nor", [native_filter])])

    ((field, value),) = native_filter.items()
    if is_operator_key(field):
        return SON([("$nor", [native_filter])])
    if _is_operator_document(value) or isinstance(value, (Regex, re.Pattern)):
        return SON([(field, SON([("$not", value)]))])
    return SON([(field, SON([("$not", SON([("$eq", value)]))]))])


_DBREF_KEYS = (frozenset({"$ref", "$id"}), frozenset({"$ref", "$id", "$db"}))


def _is_operator_document(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    # A DBRef is a literal even though its keys start with "$".
    if frozenset(value) in _DBREF_KEYS:
        return False
    return any(is_operator_key(key) for key in value)
