from fastapi import APIRouter, Depends, Response, status

from devconnect.api.deps import get_auth_service
from devconnect.api.schemas import LoginPayload, SignupPayload
from devconnect.config import settings
from devconnect.core.security import issue_token
from devconnect.models.user import User
from devconnect.services.auth import AuthService

router = APIRouter(tags=["Auth"])


def set_auth_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        settings.cookie_name,
        issue_token(user),
        max_age=settings.jwt_expires_in,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupPayload, response: Response,
                 auth: AuthService = Depends(get_auth_service)):
    user = await auth.signup(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
    )
    set_auth_cookie(response, user)
    return {"message": "User registered successfully!", "data": user.own_profile()}


@router.post("/login")
async def login(payload: LoginPayload, response: Response,
                auth: AuthService = Depends(get_auth_service)):
    user = await auth.login(payload.email, payload.password)
    set_auth_cookie(response, user)
    return {"message": "Login successful!", "data": user.own_profile()}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.cookie_name, httponly=True, secure=settings.is_production)
    return {"message": "Logout successful!"}
