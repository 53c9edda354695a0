"""In-process document store used by default and in tests."""

import asyncio
import logging
from collections import defaultdict
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId

from devconnect.core.exceptions import DatabaseError, DuplicateKeyError

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

Query = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


def new_object_id() -> str:
    """Generate an opaque identity for a new document; ids sort in creation order."""
    return str(ObjectId())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _match_condition(value: Any, condition: Any) -> bool:
    """Check a single field value against an operator dict or a literal."""
    if not isinstance(condition, dict):
        return value == condition

    for operator, operand in condition.items():
        if operator == "$eq":
            if value != operand:
                return False
        elif operator == "$ne":
            if value == operand:
                return False
        elif operator == "$in":
            if value not in operand:
                return False
        elif operator == "$nin":
            if value in operand:
                return False
        else:
            raise DatabaseError(f"Unsupported query operator: {operator}")
    return True


def matches(document: Dict[str, Any], query: Optional[Query]) -> bool:
    """
    Evaluate a Mongo-style query against a document.

    Supports field equality, ``$eq``, ``$ne``, ``$in``, ``$nin`` and the
    ``$or`` / ``$and`` combinators, which is all the repositories use.
    """
    if not query:
        return True

    for key, condition in query.items():
        if key == "$or":
            if not any(matches(document, sub) for sub in condition):
                return False
        elif key == "$and":
            if not all(matches(document, sub) for sub in condition):
                return False
        elif not _match_condition(document.get(key), condition):
            return False
    return True


def project(document: Dict[str, Any], fields: Optional[Iterable[str]]) -> Dict[str, Any]:
    """Return a copy of the document restricted to ``fields`` (``_id`` always kept)."""
    if fields is None:
        return deepcopy(document)
    wanted = {"_id", *fields}
    return {key: deepcopy(value) for key, value in document.items() if key in wanted}


class Database:
    """
    Async in-process document store.

    Documents live in per-collection dicts keyed by ``_id``; dict insertion
    order doubles as creation order. Writes are serialized with an
    ``asyncio.Lock`` so unique indexes hold under concurrent requests.
    """

    name = "memory"

    def __init__(self, initial_data: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        """
        Initialize the store with optional seed documents.

        Args:
            initial_data: Mapping of collection name to documents to insert
        """
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self.indexes: Dict[str, List[Tuple[Tuple[str, ...], bool]]] = defaultdict(list)
        self._mutex = asyncio.Lock()

        for collection, documents in (initial_data or {}).items():
            for document in documents:
                doc = deepcopy(document)
                doc.setdefault("_id", new_object_id())
                self.collections[collection][doc["_id"]] = doc

    async def create_index(self, collection: str, keys: Sequence[str], unique: bool = False) -> None:
        """
        Register an index over ``keys``. Only unique indexes have an effect here.

        Raises:
            DuplicateKeyError: If existing documents already violate the index
        """
        spec = (tuple(keys), unique)
        async with self._mutex:
            if spec in self.indexes[collection]:
                return
            if unique:
                seen = set()
                for document in self.collections[collection].values():
                    value = self._index_value(document, spec[0])
                    if value in seen:
                        raise DuplicateKeyError(
                            f"Cannot build unique index {spec[0]} on {collection}: duplicate {value}"
                        )
                    seen.add(value)
            self.indexes[collection].append(spec)
            logger.debug(f"Created index {spec[0]} on {collection} (unique={unique})")

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a document, assigning an ``_id`` when it has none.

        Returns:
            The stored document

        Raises:
            DuplicateKeyError: If the document violates a unique index
        """
        doc = deepcopy(document)
        doc.setdefault("_id", new_object_id())

        async with self._mutex:
            documents = self.collections[collection]
            if doc["_id"] in documents:
                raise DuplicateKeyError(f"Duplicate _id {doc['_id']} in {collection}")
            self._check_unique(collection, doc)
            documents[doc["_id"]] = doc

        return deepcopy(doc)

    async def find_one(self, collection: str, query: Optional[Query] = None,
                       projection: Optional[Iterable[str]] = None) -> Optional[Dict[str, Any]]:
        """Return the first document matching ``query``, or None."""
        for document in self.collections[collection].values():
            if matches(document, query):
                return project(document, projection)
        return None

    async def find(self, collection: str, query: Optional[Query] = None,
                   projection: Optional[Iterable[str]] = None,
                   sort: Optional[SortSpec] = None,
                   skip: int = 0, limit: int = 0) -> List[Dict[str, Any]]:
        """
        Return all documents matching ``query``.

        Args:
            collection: Collection name
            query: Mongo-style filter
            projection: Fields to keep, ``_id`` is always included
            sort: ``(field, direction)`` pairs, applied after filtering
            skip: Number of matching documents to drop from the front
            limit: Maximum documents to return, 0 means no limit

        Returns:
            List of matching documents
        """
        results = [doc for doc in self.collections[collection].values() if matches(doc, query)]

        # Python's sort is stable, so apply keys from least to most significant.
        for field, direction in reversed(list(sort or [])):
            results.sort(
                key=lambda doc: (doc.get(field) is None, doc.get(field)),
                reverse=direction == DESCENDING,
            )

        results = results[skip:]
        if limit:
            results = results[:limit]
        return [project(doc, projection) for doc in results]

    async def update_one(self, collection: str, query: Query,
                         changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply ``changes`` to the first document matching ``query``.

        The match and the write happen under one lock, so the query acts as
        a compare-and-set guard.

        Returns:
            The updated document, or None when nothing matched
        """
        async with self._mutex:
            for key, document in self.collections[collection].items():
                if not matches(document, query):
                    continue
                updated = {**document, **deepcopy(changes)}
                self._check_unique(collection, updated, ignore_id=key)
                self.collections[collection][key] = updated
                return deepcopy(updated)
        return None

    async def close(self) -> None:
        """Nothing to release for the in-process store."""
        return None

    @staticmethod
    def _index_value(document: Dict[str, Any], keys: Tuple[str, ...]) -> Tuple[Any, ...]:
        return tuple(document.get(key) for key in keys)

    def _check_unique(self, collection: str, document: Dict[str, Any],
                      ignore_id: Optional[str] = None) -> None:
        """Raise DuplicateKeyError if ``document`` collides on any unique index."""
        for keys, unique in self.indexes[collection]:
            if not unique:
                continue
            value = self._index_value(document, keys)
            for other_id, other in self.collections[collection].items():
                if other_id == ignore_id:
                    continue
                if self._index_value(other, keys) == value:
                    raise DuplicateKeyError(
                        f"Duplicate key {dict(zip(keys, value))} in {collection}"
                    )
