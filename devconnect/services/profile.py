"""Profile edits restricted to a whitelist of fields."""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PayloadError

from devconnect.core.exceptions import NotFoundError, ValidationError
from devconnect.models.user import Gender, User
from devconnect.repositories import UserRepository

logger = logging.getLogger(__name__)

EDITABLE_PROFILE_FIELDS = frozenset({
    "first_name",
    "last_name",
    "photo_url",
    "gender",
    "age",
    "about",
    "skills",
})

# Only age may be cleared; every other editable field has a non-null value.
NULLABLE_PROFILE_FIELDS = frozenset({"age"})

MAX_SKILLS = 10


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    photo_url: Optional[str] = Field(None, max_length=2048)
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=0, le=120)
    about: Optional[str] = Field(None, max_length=500)
    skills: Optional[List[str]] = Field(None, max_length=MAX_SKILLS)


def validate_edit_profile_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check an edit body against the whitelist and return the changes to store.

    Raises:
        ValidationError: If the body is empty, names a field outside the
            whitelist, or carries an invalid value
    """
    if not data or not set(data) <= EDITABLE_PROFILE_FIELDS:
        raise ValidationError("Invalid edit request")

    try:
        update = ProfileUpdate.model_validate(data)
    except PayloadError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"Invalid value for {field}: {error['msg']}") from e

    changes = update.model_dump(exclude_unset=True)
    for name, value in changes.items():
        if value is None and name not in NULLABLE_PROFILE_FIELDS:
            raise ValidationError(f"Invalid value for {name}: must not be null")
    if "gender" in changes:
        changes["gender"] = changes["gender"].value
    return changes


class ProfileService:
    def __init__(self, users: UserRepository):
        self.users = users

    async def edit(self, viewer: User, data: Dict[str, Any]) -> User:
        changes = validate_edit_profile_data(data)
        user = await self.users.update_profile(viewer.id, changes)
        if user is None:
            raise NotFoundError("User not found!")

        logger.info(f"User {user.id} updated profile fields {sorted(changes)}")
        return user
