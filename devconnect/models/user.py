"""User model for the connection service."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

# Fields another user may see. Credential and email never leave the service
# through these views.
SAFE_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "photo_url",
    "age",
    "gender",
    "about",
    "skills",
)

DEFAULT_PHOTO_URL = "https://geographyandyou.com/images/user-profile.png"
DEFAULT_ABOUT = "This is a default about of the user!"


class Gender(Enum):
    """Genders a profile may declare."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass(frozen=True)
class User:
    """Represents a stored user record, credential included."""

    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str = field(repr=False)
    age: Optional[int] = None
    gender: Gender = Gender.OTHER
    is_premium: bool = False
    about: str = DEFAULT_ABOUT
    skills: List[str] = field(default_factory=list)
    photo_url: str = DEFAULT_PHOTO_URL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert user to its stored document form."""
        return {
            '_id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'password_hash': self.password_hash,
            'age': self.age,
            'gender': self.gender.value,
            'is_premium': self.is_premium,
            'about': self.about,
            'skills': list(self.skills),
            'photo_url': self.photo_url,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Create User instance from a stored document."""
        return cls(
            id=str(data['_id']),
            first_name=data['first_name'],
            last_name=data['last_name'],
            email=data['email'],
            password_hash=data['password_hash'],
            age=data.get('age'),
            gender=Gender(data.get('gender') or Gender.OTHER.value),
            is_premium=data.get('is_premium', False),
            about=data.get('about', DEFAULT_ABOUT),
            skills=list(data.get('skills') or []),
            photo_url=data.get('photo_url', DEFAULT_PHOTO_URL),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )

    def safe_profile(self) -> Dict[str, Any]:
        """Profile fields that may be shown to other users."""
        return safe_profile(self.to_dict())

    def own_profile(self) -> Dict[str, Any]:
        """Everything the owner may see about themselves, minus the credential."""
        data = self.safe_profile()
        data.update({
            'email': self.email,
            'is_premium': self.is_premium,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        })
        return data


def safe_profile(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the outward-facing profile from a user document.

    Accepts full documents as well as documents already projected down to
    SAFE_PROFILE_FIELDS, which is how the feed and connection queries read
    users.
    """
    profile = {'id': str(document['_id'])}
    for name in SAFE_PROFILE_FIELDS:
        value = document.get(name)
        if name == 'skills':
            value = list(value or [])
        profile[name] = value
    return profile
