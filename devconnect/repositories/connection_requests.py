"""Persistence of connection requests between users."""

from typing import List, Optional, Tuple

from devconnect.core.database import ASCENDING, new_object_id, utc_now
from devconnect.core.exceptions import ConflictError, DuplicateKeyError
from devconnect.models.connection_request import ConnectionRequest, ConnectionStatus


CREATION_ORDER = [("created_at", ASCENDING), ("_id", ASCENDING)]


class ConnectionRequestRepository:
    collection = "connection_requests"

    def __init__(self, database):
        self.database = database

    async def ensure_indexes(self) -> None:
        # One edge per unordered pair, whichever side sent it.
        await self.database.create_index(self.collection, ["pair_key"], unique=True)
        await self.database.create_index(self.collection, ["from_user_id", "to_user_id"])
        await self.database.create_index(self.collection, ["to_user_id", "status"])

    async def get_between(self, user_a: str, user_b: str) -> Optional[ConnectionRequest]:
        """Find the edge between two users in either orientation."""
        doc = await self.database.find_one(
            self.collection,
            {
                "$or": [
                    {"from_user_id": user_a, "to_user_id": user_b},
                    {"from_user_id": user_b, "to_user_id": user_a},
                ]
            },
        )
        return ConnectionRequest.from_dict(doc) if doc else None

    async def create(self, from_user_id: str, to_user_id: str,
                     status: ConnectionStatus) -> ConnectionRequest:
        now = utc_now()
        request = ConnectionRequest(
            id=new_object_id(),
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status=status,
            created_at=now,
            updated_at=now,
        )
        try:
            doc = await self.database.insert_one(self.collection, request.to_dict())
        except DuplicateKeyError as e:
            raise ConflictError("Connection request already exists!") from e
        return ConnectionRequest.from_dict(doc)

    async def find_endpoints_involving(self, user_id: str) -> List[Tuple[str, str]]:
        """``(from_user_id, to_user_id)`` of every edge touching ``user_id``, any status."""
        docs = await self.database.find(
            self.collection,
            {"$or": [{"from_user_id": user_id}, {"to_user_id": user_id}]},
            projection=["from_user_id", "to_user_id"],
        )
        return [(str(doc["from_user_id"]), str(doc["to_user_id"])) for doc in docs]

    async def find_received(self, user_id: str,
                            status: ConnectionStatus = ConnectionStatus.INTERESTED) -> List[ConnectionRequest]:
        docs = await self.database.find(
            self.collection,
            {"to_user_id": user_id, "status": status.value},
            sort=CREATION_ORDER,
        )
        return [ConnectionRequest.from_dict(doc) for doc in docs]

    async def find_with_status(self, user_id: str, status: ConnectionStatus) -> List[ConnectionRequest]:
        """Edges in ``status`` where ``user_id`` is either endpoint."""
        docs = await self.database.find(
            self.collection,
            {
                "$or": [
                    {"to_user_id": user_id, "status": status.value},
                    {"from_user_id": user_id, "status": status.value},
                ]
            },
            sort=CREATION_ORDER,
        )
        return [ConnectionRequest.from_dict(doc) for doc in docs]

    async def transition(self, request_id: str, recipient_id: str,
                         current: ConnectionStatus, target: ConnectionStatus) -> Optional[ConnectionRequest]:
        """
        Move a request addressed to ``recipient_id`` from ``current`` to ``target``.

        Returns None when no request with that id is addressed to the
        recipient in the ``current`` state.
        """
        doc = await self.database.update_one(
            self.collection,
            {"_id": str(request_id), "to_user_id": recipient_id, "status": current.value},
            {"status": target.value, "updated_at": utc_now()},
        )
        return ConnectionRequest.from_dict(doc) if doc else None
