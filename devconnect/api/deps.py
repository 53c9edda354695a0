"""FastAPI dependencies wiring the store, services and the viewer."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from devconnect.config import settings
from devconnect.models.user import User
from devconnect.repositories import ConnectionRequestRepository, UserRepository
from devconnect.services.auth import AuthService
from devconnect.services.connections import ConnectionService
from devconnect.services.feed import FeedService
from devconnect.services.profile import ProfileService
from devconnect.services.requests import RequestService

token_cookie = APIKeyCookie(name=settings.cookie_name, auto_error=False)


def get_database(request: Request):
    return request.app.state.database


def get_user_repository(database=Depends(get_database)) -> UserRepository:
    return UserRepository(database)


def get_request_repository(database=Depends(get_database)) -> ConnectionRequestRepository:
    return ConnectionRequestRepository(database)


def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(users)


def get_profile_service(users: UserRepository = Depends(get_user_repository)) -> ProfileService:
    return ProfileService(users)


def get_request_service(
    users: UserRepository = Depends(get_user_repository),
    requests: ConnectionRequestRepository = Depends(get_request_repository),
) -> RequestService:
    return RequestService(users, requests)


def get_connection_service(
    users: UserRepository = Depends(get_user_repository),
    requests: ConnectionRequestRepository = Depends(get_request_repository),
) -> ConnectionService:
    return ConnectionService(users, requests)


def get_feed_service(
    users: UserRepository = Depends(get_user_repository),
    requests: ConnectionRequestRepository = Depends(get_request_repository),
) -> FeedService:
    return FeedService(users, requests)


async def get_viewer(
    token: Optional[str] = Depends(token_cookie),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the authenticated viewer from the auth cookie."""
    return await auth.resolve_viewer(token)
