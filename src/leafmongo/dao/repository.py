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
"""Generic async data-access object over a Motor collection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from leafmongo.dao.page import Page
from leafmongo.dao.pageable import Pageable, Sort
from leafmongo.kernel.exceptions import ResourceNotFoundException
from leafmongo.query.combinators import or_
from leafmongo.query.expansion import expand
from leafmongo.query.native import to_native_filter, to_structured_value
from leafmongo.query.operators import FilterOperator
from leafmongo.query.value import FilterDocument, StructuredValue, without_nulls

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

    from leafmongo.core.config import Config
    from leafmongo.dao.codec import DaoCodec

logger = logging.getLogger(__name__)

ID = TypeVar("ID")
E = TypeVar("E")


class MongoDao(Generic[ID, E]):
    """CRUD operations for entities of type ``E`` identified by ``ID``.

    Filters, updates and pipelines are filter documents built with
    :mod:`leafmongo.query`; they are converted to native documents right
    before each driver call. Stored documents are converted back to
    structured values and decoded with the codec; decoding errors propagate
    unchanged.

    Args:
        collection: Motor collection holding the entities.
        codec: Serialization for ids and entities.
        primary_key: Document field holding the id (``_id``, ``id``, ``key``, ...).
        skip_null: Drop ``None`` members when writing entities.

    Usage::

        dao = MongoDao[str, Product](db["products"], TypeAdapterCodec(str, Product))
        cheap = await dao.find_by(FilterOperator.lt("price", 10), sort=Sort.by("price"))
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        codec: DaoCodec[ID, E],
        primary_key: str = "_id",
        skip_null: bool = True,
    ) -> None:
        self._collection = collection
        self._codec = codec
        self._primary_key = primary_key
        self._skip_null = skip_null

    @classmethod
    def from_config(
        cls,
        config: Config,
        collection_name: str,
        codec: DaoCodec[ID, E],
        client: AsyncIOMotorClient | None = None,
    ) -> MongoDao[ID, E]:
        """Create a DAO for *collection_name* using ``leafmongo.mongodb`` settings.

        A new Motor client is created from the configured URI unless *client*
        is given.
        """
        from leafmongo.dao.client import MongoProperties, create_motor_client

        props = config.bind(MongoProperties)
        client = client if client is not None else create_motor_client(props)
        return cls(
            client[props.database][collection_name],
            codec,
            primary_key=props.primary_key,
            skip_null=props.skip_null,
        )

    @property
    def primary_key(self) -> str:
        return self._primary_key

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def _to_document(self, entity: E) -> StructuredValue:
        value = self._codec.encode(entity)
        return without_nulls(value) if self._skip_null else value

    def _decode(self, document: Any) -> E:
        return self._codec.decode(to_structured_value(document))

    def _decode_optional(self, document: Any) -> E | None:
        return None if document is None else self._decode(document)

    def _id_filter(self, id: ID) -> FilterDocument:
        return FilterOperator.eq(self._primary_key, self._codec.encode_id(id))

    # ------------------------------------------------------------------
    # Insert
    # ------------------------------------------------------------------

    async def insert(self, entity: E) -> None:
        """Insert a single entity."""
        document = to_native_filter(self._to_document(entity))
        logger.debug("DAO.insert_one: %s", document)
        await self._collection.insert_one(document)

    async def insert_all(self, entities: Sequence[E]) -> None:
        """Insert several entities in one call. Nothing happens for an empty sequence."""
        if not entities:
            return
        documents = [to_native_filter(self._to_document(entity)) for entity in entities]
        logger.debug("DAO.insert_many: %d documents", len(documents))
        await self._collection.insert_many(documents)

    # ------------------------------------------------------------------
    # Find
    # ------------------------------------------------------------------

    async def _find(
        self,
        filter: FilterDocument,
        offset: int = 0,
        limit: int = 0,
        sort: Sort | None = None,
    ) -> list[Any]:
        native = to_native_filter(filter)
        logger.debug("DAO.find: %s (offset=%d, limit=%d)", native, offset, limit)
        kwargs: dict[str, Any] = {"skip": offset, "limit": limit}
        if sort is not None and sort.orders:
            kwargs["sort"] = sort.to_pymongo()
        return await self._collection.find(native, **kwargs).to_list(None)

    async def find_one_by(self, filter: FilterDocument, offset: int = 0, sort: Sort | None = None) -> E | None:
        """Return the first entity matching *filter*, or ``None``."""
        documents = await self._find(filter, offset, 1, sort)
        return self._decode(documents[0]) if documents else None

    async def find_by(
        self,
        filter: FilterDocument,
        offset: int = 0,
        limit: int = 0,
        sort: Sort | None = None,
    ) -> list[E]:
        """Return entities matching *filter*. A *limit* of 0 means no limit."""
        return [self._decode(document) for document in await self._find(filter, offset, limit, sort)]

    async def find_all(self, offset: int = 0, limit: int = 0, sort: Sort | None = None) -> list[E]:
        return await self.find_by({}, offset, limit, sort)

    async def find_page(self, filter: FilterDocument, pageable: Pageable) -> Page[E]:
        """Return one page of entities matching *filter*, with the total match count."""
        total = await self.count(filter)
        items = await self.find_by(filter, pageable.offset, pageable.size, pageable.sort)
        return Page(items=items, total=total, page=pageable.page, size=pageable.size)

    async def count(self, filter: FilterDocument | None = None) -> int:
        return await self._collection.count_documents(to_native_filter(filter or {}))

    async def get_by_id(self, id: ID) -> E:
        """Return the entity with *id*.

        Raises:
            ResourceNotFoundException: If no document has that id.
        """
        entity = await self.find_by_id(id)
        if entity is None:
            raise ResourceNotFoundException(
                f"No document with {self._primary_key}={id!r}",
                context={"primary_key": self._primary_key, "id": id},
            )
        return entity

    async def find_by_id(self, id: ID) -> E | None:
        """Return the entity with *id*, or ``None``."""
        return await self.find_one_by(self._id_filter(id))

    async def find_by_ids_in(
        self,
        ids: Sequence[ID],
        offset: int = 0,
        limit: int = 0,
        sort: Sort | None = None,
    ) -> list[E]:
        """Find entities whose id is in *ids* using ``$in``.

        Object ids are compared as whole sub-documents, so stored key order
        matters; use :meth:`find_by_ids_or` for those.
        """
        if not ids:
            return []
        if len(ids) == 1:
            entity = await self.find_by_id(ids[0])
            return [] if entity is None else [entity]
        filter = FilterOperator.in_(self._primary_key, *(self._codec.encode_id(id) for id in ids))
        return await self.find_by(filter, offset, limit, sort)

    async def find_by_ids_or(
        self,
        ids: Sequence[ID],
        offset: int = 0,
        limit: int = 0,
        sort: Sort | None = None,
    ) -> list[E]:
        """Find entities whose id is one of *ids*, matching each id by dotted paths.

        ``{"$or": [{"_id.a": 1, "_id.b": 2}, ...]}`` does not depend on the
        key order of stored object ids.
        """
        if not ids:
            return []
        if len(ids) == 1:
            entity = await self.find_by_id(ids[0])
            return [] if entity is None else [entity]
        filter = or_(*(expand(self._primary_key, self._codec.encode_id(id)) for id in ids))
        return await self.find_by(filter, offset, limit, sort)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def _update_by(self, filter: FilterDocument, update: FilterDocument, upsert: bool) -> E | None:
        native = to_native_filter(filter)
        logger.debug("DAO.find_one_and_update: %s (upsert=%s)", native, upsert)
        # Returns the document as it was before the update.
        previous = await self._collection.find_one_and_update(native, to_native_filter(update), upsert=upsert)
        return self._decode_optional(previous)

    async def update_by_id(self, id: ID, update: FilterDocument, upsert: bool = False) -> E | None:
        """Apply *update* (e.g. ``{"$set": {...}}``) to the entity with *id*; return it as before."""
        return await self._update_by(self._id_filter(id), update, upsert)

    async def update_by(self, filter: FilterDocument, update: FilterDocument, upsert: bool = False) -> E | None:
        """Apply *update* to the first entity matching *filter*; return it as before."""
        return await self._update_by(filter, update, upsert)

    # ------------------------------------------------------------------
    # Replace
    # ------------------------------------------------------------------

    async def _replace_by(self, filter: FilterDocument, entity: E, upsert: bool) -> E | None:
        native = to_native_filter(filter)
        logger.debug("DAO.find_one_and_replace: %s (upsert=%s)", native, upsert)
        previous = await self._collection.find_one_and_replace(
            native, to_native_filter(self._to_document(entity)), upsert=upsert
        )
        return self._decode_optional(previous)

    async def replace_by_id(self, id: ID, entity: E, upsert: bool = False) -> E | None:
        """Replace the entity with *id*; return the previous one."""
        return await self._replace_by(self._id_filter(id), entity, upsert)

    async def create_or_replace_by_id(self, id: ID, entity: E) -> E | None:
        return await self.replace_by_id(id, entity, upsert=True)

    async def replace_or_insert_by_id(self, id: ID, entity: E) -> E | None:
        """Replace the entity with *id*, inserting it when absent. Not atomic.

        Upserts cannot be used with a dotted ``_id`` query, so this replaces
        without upsert and falls back to an insert.

        Returns:
            The previous entity if one was replaced, ``None`` if inserted.
        """
        previous = await self.replace_by_id(id, entity)
        if previous is not None:
            return previous
        await self.insert(entity)
        return None

    async def replace_by(self, filter: FilterDocument, entity: E, upsert: bool = False) -> E | None:
        return await self._replace_by(filter, entity, upsert)

    async def create_or_replace_by(self, filter: FilterDocument, entity: E) -> E | None:
        return await self.replace_by(filter, entity, upsert=True)

    # ------------------------------------------------------------------
    # Distinct / aggregate
    # ------------------------------------------------------------------

    async def distinct(self, field: str, filter: FilterDocument | None = None) -> list[Any]:
        """Distinct values of *field* among documents matching *filter*."""
        return await self._collection.distinct(field, to_native_filter(filter or {}))

    async def aggregate(self, pipeline: Sequence[FilterDocument]) -> list[FilterDocument]:
        """Run an aggregation pipeline; results come back as structured documents."""
        stages = [to_native_filter(stage) for stage in pipeline]
        logger.debug("DAO.aggregate: %s", stages)
        documents = await self._collection.aggregate(stages).to_list(None)
        return [to_structured_value(document) for document in documents]

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_by_id(self, id: ID) -> E | None:
        """Delete the entity with *id*; return it, or ``None`` if there was none."""
        native = to_native_filter(self._id_filter(id))
        logger.debug("DAO.find_one_and_delete: %s", native)
        return self._decode_optional(await self._collection.find_one_and_delete(native))

    async def delete_by_ids(self, ids: Sequence[ID]) -> int:
        """Delete every entity whose id is in *ids*. Returns the number deleted."""
        if not ids:
            return 0
        native = to_native_filter(FilterOperator.in_(self._primary_key, *(self._codec.encode_id(id) for id in ids)))
        logger.debug("DAO.delete_many: %s", native)
        result = await self._collection.delete_many(native)
        return result.deleted_count
