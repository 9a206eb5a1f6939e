from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from eventhub.core.errors import AuthError
from eventhub.core.security import CurrentUser
from eventhub.dependencies import get_auth_service, get_current_user, get_optional_user, oauth2_scheme
from eventhub.schemas.auth import (
    Credentials,
    CurrentUserRead,
    ResetPasswordRequest,
    SignUpRequest,
    TokenResponse,
    UpdatePasswordRequest,
)
from eventhub.services import AuthService

router = APIRouter()


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
async def sign_up(payload: SignUpRequest, auth: AuthService = Depends(get_auth_service)):
    user = await auth.sign_up(payload.email, payload.password)
    return {"success": True, "userId": user.id}


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(payload: Credentials, auth: AuthService = Depends(get_auth_service)):
    issued = await auth.sign_in(payload.email, payload.password)
    return TokenResponse(access_token=issued.access_token, expires_in=issued.expires_in)


@router.post("/token", response_model=TokenResponse)
async def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    auth: AuthService = Depends(get_auth_service),
):
    """OAuth2 password flow, used by the interactive docs."""
    issued = await auth.sign_in(form_data.username, form_data.password)
    return TokenResponse(access_token=issued.access_token, expires_in=issued.expires_in)


@router.post("/sign-out")
async def sign_out(
    bearer: str | None = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
):
    if not bearer:
        raise AuthError("Not authenticated")
    await auth.sign_out(bearer)
    return {"success": True}


@router.post("/reset-password", status_code=status.HTTP_202_ACCEPTED)
async def reset_password(payload: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    await auth.reset_password(payload.email, payload.redirect_to)
    return {"success": True}


@router.post("/update-password")
async def update_password(
    payload: UpdatePasswordRequest,
    user: CurrentUser | None = Depends(get_optional_user),
    auth: AuthService = Depends(get_auth_service),
):
    if payload.reset_token:
        await auth.complete_password_reset(payload.reset_token, payload.password)
    elif user is not None:
        await auth.update_password(user, payload.password)
    else:
        raise AuthError("Not authenticated")
    return {"success": True}


@router.get("/me", response_model=CurrentUserRead)
async def me(user: CurrentUser = Depends(get_current_user)):
    return CurrentUserRead(id=user.id, email=user.email or "")
