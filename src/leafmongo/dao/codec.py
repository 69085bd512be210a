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
"""Entity and id codecs: converting between Python values and structured values."""

from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter

from leafmongo.query.value import StructuredValue

ID = TypeVar("ID")
E = TypeVar("E")


@runtime_checkable
class DaoCodec(Protocol[ID, E]):
    """Serialization a :class:`~leafmongo.dao.repository.MongoDao` needs for its types.

    ``decode`` may raise any error the underlying serializer raises; the DAO
    does not catch it.
    """

    def encode_id(self, id: ID) -> StructuredValue: ...

    def encode(self, entity: E) -> StructuredValue: ...

    def decode(self, value: StructuredValue) -> E: ...


class TypeAdapterCodec(Generic[ID, E]):
    """:class:`DaoCodec` backed by pydantic ``TypeAdapter`` instances.

    Values are dumped in JSON mode and by alias, so a model declaring
    ``id: str = Field(alias="_id")`` maps onto MongoDB's primary key.
    Decoding raises :class:`pydantic.ValidationError` on bad documents.

    Usage::

        codec = TypeAdapterCodec(str, Product)
    """

    def __init__(self, id_type: Any, entity_type: Any) -> None:
        self._id_adapter: TypeAdapter[ID] = TypeAdapter(id_type)
        self._entity_adapter: TypeAdapter[E] = TypeAdapter(entity_type)

    def encode_id(self, id: ID) -> StructuredValue:
        return self._id_adapter.dump_python(id, mode="json", by_alias=True)

    def encode(self, entity: E) -> StructuredValue:
        return self._entity_adapter.dump_python(entity, mode="json", by_alias=True)

    def decode(self, value: StructuredValue) -> E:
        return self._entity_adapter.validate_python(value)
