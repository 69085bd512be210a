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
"""leafmongo: MongoDB filter DSL and generic async DAO.

Two layers:
    - **Query** (``leafmongo.query``): field operators, logical combinators
      and dotted-path expansion producing plain filter documents.
    - **DAO** (``leafmongo.dao``): ``MongoDao[ID, E]`` running CRUD
      operations on a Motor collection with a pluggable codec.
"""

from leafmongo.core.config import Config, config_properties
from leafmongo.dao import DaoCodec, MongoDao, Order, Page, Pageable, Sort, TypeAdapterCodec
from leafmongo.kernel.exceptions import (
    InvalidArgumentException,
    LeafMongoException,
    ResourceNotFoundException,
    ShapeMismatchException,
)
from leafmongo.query import (
    Field,
    FilterOperator,
    FilterUtils,
    and_,
    elem_match,
    expand,
    nor,
    or_,
    to_native_filter,
    to_structured_value,
)

__all__ = [
    "Config",
    "DaoCodec",
    "Field",
    "FilterOperator",
    "FilterUtils",
    "InvalidArgumentException",
    "LeafMongoException",
    "MongoDao",
    "Order",
    "Page",
    "Pageable",
    "ResourceNotFoundException",
    "ShapeMismatchException",
    "Sort",
    "TypeAdapterCodec",
    "and_",
    "config_properties",
    "elem_match",
    "expand",
    "nor",
    "or_",
    "to_native_filter",
    "to_structured_value",
]
