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
"""leafmongo query: typed builders for MongoDB filter documents.

Filters are plain dicts. Field operators live on :class:`FilterOperator`
(or the fluent :class:`Field`), logical combinators are module functions,
and :mod:`leafmongo.query.native` converts to and from pymongo documents.
"""

from leafmongo.query.combinators import and_, elem_match, nor, or_
from leafmongo.query.expansion import expand, expand_operator
from leafmongo.query.filter_utils import FilterUtils
from leafmongo.query.native import native_not, native_regex, to_native_filter, to_plain_filter, to_structured_value
from leafmongo.query.operators import Field, FilterOperator
from leafmongo.query.value import (
    FilterDocument,
    StructuredValue,
    is_operator_key,
    merge_paths,
    without_nulls,
)

__all__ = [
    "Field",
    "FilterDocument",
    "FilterOperator",
    "FilterUtils",
    "StructuredValue",
    "and_",
    "elem_match",
    "expand",
    "expand_operator",
    "is_operator_key",
    "merge_paths",
    "native_not",
    "native_regex",
    "nor",
    "or_",
    "to_native_filter",
    "to_plain_filter",
    "to_structured_value",
    "without_nulls",
]
