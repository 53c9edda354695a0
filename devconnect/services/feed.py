"""Discovery feed: users the viewer has never interacted with."""

import logging
from typing import Any, Dict, Iterable, List, Set, Tuple, Union

from devconnect.repositories import ConnectionRequestRepository, UserRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50

PageParam = Union[int, str, None]


def _positive_int(value: PageParam, default: int) -> int:
    """Parse ``value`` as a positive integer, falling back to ``default``."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def normalize_pagination(page: PageParam = None, limit: PageParam = None) -> Tuple[int, int]:
    """
    Resolve raw page/limit input into usable values.

    Missing, non-numeric or non-positive values fall back to the defaults;
    a limit above MAX_LIMIT is clamped rather than rejected.

    Returns:
        ``(page, limit)`` with page 1-based
    """
    page = _positive_int(page, DEFAULT_PAGE)
    limit = min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)
    return page, limit


def build_exclusion_set(edges: Iterable[Tuple[str, str]], viewer_id: str) -> Set[str]:
    """
    Identities hidden from the viewer's feed.

    Both endpoints of every edge are hidden regardless of the edge's status,
    and the viewer is always hidden from themselves.
    """
    excluded = {str(viewer_id)}
    for from_user_id, to_user_id in edges:
        excluded.add(str(from_user_id))
        excluded.add(str(to_user_id))
    return excluded


class FeedService:
    """Computes one page of the discovery feed per call, with no cursor state."""

    def __init__(self, users: UserRepository, requests: ConnectionRequestRepository):
        self.users = users
        self.requests = requests

    async def get_feed(self, viewer_id: str, page: PageParam = None,
                       limit: PageParam = None) -> List[Dict[str, Any]]:
        """
        Return a page of safe profiles the viewer has never exchanged a request with.

        Args:
            viewer_id: Identity of the authenticated caller
            page: 1-based page number, raw from the caller
            limit: Page size, raw from the caller

        Returns:
            Safe profiles in creation order; empty when the page is past the end
        """
        page, limit = normalize_pagination(page, limit)

        edges = await self.requests.find_endpoints_involving(viewer_id)
        excluded = build_exclusion_set(edges, viewer_id)

        profiles = await self.users.find_safe_profiles_excluding(
            excluded,
            viewer_id,
            skip=(page - 1) * limit,
            limit=limit,
        )
        logger.debug(f"Feed for {viewer_id}: page={page} limit={limit} "
                     f"excluded={len(excluded)} returned={len(profiles)}")
        return profiles
