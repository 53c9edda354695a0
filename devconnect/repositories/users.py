"""Persistence of user records."""

from typing import Any, Dict, Iterable, List, Optional

from devconnect.core.database import ASCENDING, utc_now
from devconnect.core.exceptions import ConflictError, DuplicateKeyError
from devconnect.models.user import SAFE_PROFILE_FIELDS, User, safe_profile


# Stable order for anything paginated over users.
CREATION_ORDER = [("created_at", ASCENDING), ("_id", ASCENDING)]


class UserRepository:
    collection = "users"

    def __init__(self, database):
        self.database = database

    async def ensure_indexes(self) -> None:
        await self.database.create_index(self.collection, ["email"], unique=True)
        await self.database.create_index(self.collection, ["created_at"])

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.database.find_one(self.collection, {"_id": str(user_id)})
        return User.from_dict(doc) if doc else None

    async def get_by_email(self, email: str) -> Optional[User]:
        doc = await self.database.find_one(self.collection, {"email": email})
        return User.from_dict(doc) if doc else None

    async def create(self, first_name: str, last_name: str, email: str,
                     password_hash: str, **profile: Any) -> User:
        now = utc_now()
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password_hash": password_hash,
            "created_at": now,
            "updated_at": now,
            **profile,
        }
        try:
            doc = await self.database.insert_one(self.collection, data)
        except DuplicateKeyError as e:
            raise ConflictError("Email already registered!") from e
        return User.from_dict(doc)

    async def update_profile(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        doc = await self.database.update_one(
            self.collection,
            {"_id": str(user_id)},
            {**changes, "updated_at": utc_now()},
        )
        return User.from_dict(doc) if doc else None

    async def get_safe_profiles(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Look up safe profiles for ``user_ids``, keyed by identity."""
        ids = list({str(user_id) for user_id in user_ids})
        if not ids:
            return {}
        docs = await self.database.find(
            self.collection,
            {"_id": {"$in": ids}},
            projection=SAFE_PROFILE_FIELDS,
        )
        return {str(doc["_id"]): safe_profile(doc) for doc in docs}

    async def find_safe_profiles_excluding(self, excluded_ids: Iterable[str], viewer_id: str,
                                           skip: int = 0, limit: int = 0) -> List[Dict[str, Any]]:
        """
        Safe profiles of every user outside ``excluded_ids`` other than the viewer.

        Args:
            excluded_ids: Identities that must not be returned
            viewer_id: Identity of the caller, always left out
            skip: Number of candidates to drop from the front
            limit: Maximum candidates to return

        Returns:
            Safe profiles in creation order
        """
        docs = await self.database.find(
            self.collection,
            {
                "$and": [
                    {"_id": {"$nin": sorted(excluded_ids)}},
                    {"_id": {"$ne": str(viewer_id)}},
                ]
            },
            projection=SAFE_PROFILE_FIELDS,
            sort=CREATION_ORDER,
            skip=skip,
            limit=limit,
        )
        return [safe_profile(doc) for doc in docs]
