from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from devconnect.api.deps import get_profile_service, get_viewer
from devconnect.models.user import User
from devconnect.services.profile import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/view")
async def view_profile(viewer: User = Depends(get_viewer)):
    return {"message": "Profile fetched successfully", "data": viewer.own_profile()}


@router.patch("/edit")
async def edit_profile(data: Dict[str, Any] = Body(...),
                       viewer: User = Depends(get_viewer),
                       profiles: ProfileService = Depends(get_profile_service)):
    user = await profiles.edit(viewer, data)
    return {
        "message": f"{user.first_name}, your profile was updated successfully!",
        "data": user.own_profile(),
    }
