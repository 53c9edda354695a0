"""Views over the connection graph relative to a viewer."""

import logging
from typing import Any, Dict, List

from devconnect.models.connection_request import ConnectionStatus
from devconnect.repositories import ConnectionRequestRepository, UserRepository

logger = logging.getLogger(__name__)


class ConnectionService:
    def __init__(self, users: UserRepository, requests: ConnectionRequestRepository):
        self.users = users
        self.requests = requests

    async def received_pending(self, viewer_id: str) -> List[Dict[str, Any]]:
        """
        Interested requests addressed to the viewer, oldest first.

        Each entry carries the request fields plus the sender's safe profile
        under ``from_user``.
        """
        pending = await self.requests.find_received(viewer_id, ConnectionStatus.INTERESTED)
        senders = await self.users.get_safe_profiles(r.from_user_id for r in pending)

        results = []
        for request in pending:
            sender = senders.get(request.from_user_id)
            if sender is None:
                logger.warning(f"Request {request.id} references missing user {request.from_user_id}")
                continue
            results.append({**request.to_response(), "from_user": sender})
        return results

    async def accepted_connections(self, viewer_id: str) -> List[Dict[str, Any]]:
        """Safe profiles of the other party of every accepted edge touching the viewer."""
        accepted = await self.requests.find_with_status(viewer_id, ConnectionStatus.ACCEPTED)
        other_ids = [request.other_party(viewer_id) for request in accepted]
        profiles = await self.users.get_safe_profiles(other_ids)

        results = []
        for other_id in other_ids:
            profile = profiles.get(other_id)
            if profile is None:
                logger.warning(f"Accepted connection of {viewer_id} references missing user {other_id}")
                continue
            results.append(profile)
        return results
