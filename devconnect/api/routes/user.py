from typing import Optional

from fastapi import APIRouter, Depends

from devconnect.api.deps import get_connection_service, get_feed_service, get_viewer
from devconnect.models.user import User
from devconnect.services.connections import ConnectionService
from devconnect.services.feed import FeedService

router = APIRouter(tags=["User"])


@router.get("/user/requests/received")
async def received_requests(viewer: User = Depends(get_viewer),
                            connections: ConnectionService = Depends(get_connection_service)):
    data = await connections.received_pending(viewer.id)
    return {"message": "Data fetched successfully", "data": data}


@router.get("/user/connections")
async def accepted_connections(viewer: User = Depends(get_viewer),
                               connections: ConnectionService = Depends(get_connection_service)):
    data = await connections.accepted_connections(viewer.id)
    return {"message": "Data fetched successfully", "data": data}


# page and limit stay strings so junk input falls back to defaults instead of a 422
@router.get("/feed")
async def feed(page: Optional[str] = None, limit: Optional[str] = None,
               viewer: User = Depends(get_viewer),
               feed_service: FeedService = Depends(get_feed_service)):
    data = await feed_service.get_feed(viewer.id, page=page, limit=limit)
    return {"message": "Data fetched successfully", "data": data}
