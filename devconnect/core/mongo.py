"""MongoDB-backed document store built on motor."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from devconnect.core.database import Query, SortSpec, new_object_id
from devconnect.core.exceptions import DatabaseError, DuplicateKeyError

logger = logging.getLogger(__name__)


class MongoDatabase:
    """
    Document store with the same async surface as ``Database``.

    Identities are stored as string ``_id`` values so both backends hand
    the repositories identical documents.
    """

    name = "mongo"

    def __init__(self, uri: str, db_name: str, client: Optional[AsyncIOMotorClient] = None):
        self._client = client or AsyncIOMotorClient(uri, tz_aware=True)
        self.db = self._client[db_name]

    async def create_index(self, collection: str, keys: Sequence[str], unique: bool = False) -> None:
        try:
            await self.db[collection].create_index(
                [(key, ASCENDING) for key in keys], unique=unique
            )
        except PyMongoError as e:
            raise DatabaseError(f"Failed to create index on {collection}: {str(e)}") from e

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(document)
        doc.setdefault("_id", new_object_id())
        try:
            await self.db[collection].insert_one(doc)
        except MongoDuplicateKeyError as e:
            raise DuplicateKeyError(f"Duplicate key in {collection}: {str(e)}") from e
        except PyMongoError as e:
            raise DatabaseError(f"Failed to insert into {collection}: {str(e)}") from e
        return doc

    async def find_one(self, collection: str, query: Optional[Query] = None,
                       projection: Optional[Iterable[str]] = None) -> Optional[Dict[str, Any]]:
        try:
            return await self.db[collection].find_one(query or {}, self._projection(projection))
        except PyMongoError as e:
            raise DatabaseError(f"Failed to read from {collection}: {str(e)}") from e

    async def find(self, collection: str, query: Optional[Query] = None,
                   projection: Optional[Iterable[str]] = None,
                   sort: Optional[SortSpec] = None,
                   skip: int = 0, limit: int = 0) -> List[Dict[str, Any]]:
        cursor = self.db[collection].find(query or {}, self._projection(projection))
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        items: List[Dict[str, Any]] = []
        try:
            async for doc in cursor:
                items.append(doc)
        except PyMongoError as e:
            raise DatabaseError(f"Failed to read from {collection}: {str(e)}") from e
        return items

    async def update_one(self, collection: str, query: Query,
                         changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self.db[collection].find_one_and_update(
                query,
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except MongoDuplicateKeyError as e:
            raise DuplicateKeyError(f"Duplicate key in {collection}: {str(e)}") from e
        except PyMongoError as e:
            raise DatabaseError(f"Failed to update {collection}: {str(e)}") from e

    async def close(self) -> None:
        self._client.close()
        logger.info("MongoDB client closed")

    @staticmethod
    def _projection(fields: Optional[Iterable[str]]) -> Optional[Dict[str, int]]:
        if fields is None:
            return None
        return {field: 1 for field in fields}
