from devconnect.repositories.connection_requests import ConnectionRequestRepository
from devconnect.repositories.users import UserRepository

__all__ = [
    "ConnectionRequestRepository",
    "UserRepository",
]
