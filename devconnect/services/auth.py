"""Signup, login and resolving the viewer behind a token."""

import logging
from typing import Optional

from devconnect.core.exceptions import AuthenticationError, ConflictError
from devconnect.core.security import decode_token, hash_password, verify_credential
from devconnect.models.user import User
from devconnect.repositories import UserRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, users: UserRepository):
        self.users = users

    async def signup(self, first_name: str, last_name: str, email: str, password: str) -> User:
        email = normalize_email(email)
        if await self.users.get_by_email(email) is not None:
            raise ConflictError("Email already registered!")

        user = await self.users.create(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email,
            password_hash=hash_password(password),
        )
        logger.info(f"User {user.id} signed up")
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.users.get_by_email(normalize_email(email))
        if user is None or not verify_credential(user, password):
            raise AuthenticationError("Invalid credentials")

        logger.info(f"User {user.id} logged in")
        return user

    async def resolve_viewer(self, token: Optional[str]) -> User:
        """
        Turn a credential token into the viewer's user record.

        Raises:
            AuthenticationError: If the token is missing, invalid, expired or
                names a user that no longer exists
        """
        if not token:
            raise AuthenticationError("Please login!")

        data = decode_token(token)
        user = await self.users.get_by_id(data.sub)
        if user is None:
            raise AuthenticationError("User not found")
        return user
