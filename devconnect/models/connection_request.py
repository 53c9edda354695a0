"""Connection request model and its status lifecycle."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ConnectionStatus(Enum):
    """States a connection request can be in."""
    INTERESTED = "interested"
    IGNORED = "ignored"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Statuses a sender may create a request with.
SEND_STATUSES = frozenset({ConnectionStatus.INTERESTED, ConnectionStatus.IGNORED})

# Statuses a recipient may move an interested request to.
REVIEW_STATUSES = frozenset({ConnectionStatus.ACCEPTED, ConnectionStatus.REJECTED})


def pair_key(user_a: str, user_b: str) -> str:
    """Orientation-free key for the pair of users an edge connects."""
    low, high = sorted((str(user_a), str(user_b)))
    return f"{low}:{high}"


@dataclass(frozen=True)
class ConnectionRequest:
    """A directed edge from sender to recipient."""

    id: str
    from_user_id: str
    to_user_id: str
    status: ConnectionStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def other_party(self, viewer_id: str) -> str:
        """Return the endpoint that is not ``viewer_id``."""
        if self.from_user_id == viewer_id:
            return self.to_user_id
        return self.from_user_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert request to its stored document form."""
        return {
            '_id': self.id,
            'from_user_id': self.from_user_id,
            'to_user_id': self.to_user_id,
            'pair_key': pair_key(self.from_user_id, self.to_user_id),
            'status': self.status.value,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConnectionRequest':
        """Create ConnectionRequest instance from a stored document."""
        return cls(
            id=str(data['_id']),
            from_user_id=str(data['from_user_id']),
            to_user_id=str(data['to_user_id']),
            status=ConnectionStatus(data['status']),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )

    def to_response(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'from_user_id': self.from_user_id,
            'to_user_id': self.to_user_id,
            'status': self.status.value,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
