"""Connection request lifecycle: sending and reviewing."""

import logging
from typing import Optional, Tuple

from devconnect.core.exceptions import ConflictError, NotFoundError, ValidationError
from devconnect.models.connection_request import (
    REVIEW_STATUSES,
    SEND_STATUSES,
    ConnectionRequest,
    ConnectionStatus,
)
from devconnect.models.user import User
from devconnect.repositories import ConnectionRequestRepository, UserRepository

logger = logging.getLogger(__name__)


def parse_status(value: str) -> Optional[ConnectionStatus]:
    """Map a raw status string to ConnectionStatus, None when unknown."""
    try:
        return ConnectionStatus(str(value).lower())
    except ValueError:
        return None


class RequestService:
    def __init__(self, users: UserRepository, requests: ConnectionRequestRepository):
        self.users = users
        self.requests = requests

    async def send(self, sender: User, to_user_id: str, status: str) -> Tuple[ConnectionRequest, User]:
        """
        Create an edge from ``sender`` to ``to_user_id``.

        Args:
            sender: The authenticated viewer
            to_user_id: Recipient identity
            status: ``interested`` or ``ignored``

        Returns:
            The created request and the recipient

        Raises:
            ValidationError: If the status is not sendable or the target is the sender
            NotFoundError: If the recipient does not exist
            ConflictError: If an edge already exists between the pair in either direction
        """
        new_status = parse_status(status)
        if new_status not in SEND_STATUSES:
            raise ValidationError(f"Invalid status type: {status}")
        if str(to_user_id) == sender.id:
            raise ValidationError("Cannot send a connection request to yourself!")

        recipient = await self.users.get_by_id(to_user_id)
        if recipient is None:
            raise NotFoundError("User not found!")

        if await self.requests.get_between(sender.id, recipient.id) is not None:
            raise ConflictError("Connection request already exists!")

        # The pair index rejects a concurrent writer that got past the check above.
        request = await self.requests.create(sender.id, recipient.id, new_status)
        logger.info(f"User {sender.id} sent {new_status.value} request {request.id} to {recipient.id}")
        return request, recipient

    async def review(self, reviewer_id: str, request_id: str, status: str) -> ConnectionRequest:
        """
        Accept or reject an interested request addressed to the reviewer.

        Raises:
            ValidationError: If the status is not a review outcome
            NotFoundError: If no interested request with that id is addressed to the reviewer
        """
        new_status = parse_status(status)
        if new_status not in REVIEW_STATUSES:
            raise ValidationError("Status not allowed!")

        request = await self.requests.transition(
            request_id,
            reviewer_id,
            current=ConnectionStatus.INTERESTED,
            target=new_status,
        )
        if request is None:
            raise NotFoundError("Connection request not found")

        logger.info(f"User {reviewer_id} {new_status.value} request {request.id}")
        return request
