from fastapi import APIRouter, Depends

from devconnect.api.deps import get_request_service, get_viewer
from devconnect.models.user import User
from devconnect.services.requests import RequestService

router = APIRouter(prefix="/request", tags=["Requests"])


@router.post("/send/{status}/{to_user_id}")
async def send_request(status: str, to_user_id: str,
                       viewer: User = Depends(get_viewer),
                       requests: RequestService = Depends(get_request_service)):
    request, recipient = await requests.send(viewer, to_user_id, status)
    return {
        "message": f"{viewer.first_name} is {request.status.value} in {recipient.first_name}",
        "data": request.to_response(),
    }


@router.post("/review/{status}/{request_id}")
async def review_request(status: str, request_id: str,
                         viewer: User = Depends(get_viewer),
                         requests: RequestService = Depends(get_request_service)):
    request = await requests.review(viewer.id, request_id, status)
    return {"message": f"Connection request {request.status.value}", "data": request.to_response()}
