"""
Authentication API Endpoints.

Registration, email verification, login, token refresh and logout. The
refresh token travels in an httpOnly cookie; the access token is returned in
the body and sent back as a Bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Cookie, Query, Response, status
from fastapi.responses import RedirectResponse

from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import (
    AccountResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    ResultResponse,
    build_response,
)
from readcycle.server.core.config import settings
from readcycle.server.core.constant import REFRESH_TOKEN_COOKIE
from readcycle.server.services.deps import AuthServiceDep, CurrentUserDep, OptionalUserDep, UserServiceDep

logger = get_logger(__name__)

router = APIRouter()


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=refresh_token,
        max_age=settings.jwt.refresh_token_validity_seconds,
        path="/",
        httponly=True,
    )


@router.post(
    "/register",
    response_model=ResultResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register Account",
    description="Create a member account. A verification mail is sent to the given address.",
    responses={
        201: {"description": "Account created, waiting for email verification"},
        400: {"description": "Invalid registration data or email already exists"},
    },
)
async def register(payload: RegisterRequest, users: UserServiceDep):
    data = await users.register(payload)
    return build_response(data, "Register account", status.HTTP_201_CREATED)


@router.get(
    "/verify-email",
    status_code=status.HTTP_302_FOUND,
    summary="Verify Email",
    description="Follow-up of the verification mail. Redirects to the front-end success or failure page.",
    responses={302: {"description": "Redirect to the verification result page"}},
)
async def verify_email(auth: AuthServiceDep, token: str = Query(..., description="Verification token from the mail")):
    """
    Verify an account.

    An expired or invalid token deletes the pending account so the address can
    register again.
    """
    verified = await auth.verify_email(token)
    frontend = settings.frontend
    target = frontend.verify_email_success_url if verified else frontend.verify_email_failed_url
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)


@router.post(
    "/login",
    response_model=ResultResponse[LoginResponse],
    summary="Login",
    description="Sign in with email and password. Sets the refresh token cookie.",
    responses={
        200: {"description": "Signed in"},
        400: {"description": "Bad credentials, unverified or disabled account, or maintenance mode"},
    },
)
async def login(payload: LoginRequest, response: Response, auth: AuthServiceDep):
    tokens = await auth.login(payload)
    _set_refresh_cookie(response, tokens.refresh_token)
    return build_response(tokens.response, "Login")


@router.get(
    "/account",
    response_model=ResultResponse[AccountResponse],
    summary="Get Current Account",
    description="Identity of the signed-in user.",
    responses={401: {"description": "Missing or invalid access token"}},
)
async def account(user: CurrentUserDep, auth: AuthServiceDep):
    return build_response(auth.account(user), "Get current user login")


@router.get(
    "/refresh",
    response_model=ResultResponse[LoginResponse],
    summary="Refresh Tokens",
    description="Issue new tokens from the refresh token cookie.",
    responses={400: {"description": "Missing, invalid or revoked refresh token"}},
)
async def refresh(
    response: Response,
    auth: AuthServiceDep,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
):
    tokens = await auth.refresh(refresh_token)
    _set_refresh_cookie(response, tokens.refresh_token)
    return build_response(tokens.response, "Get refresh token")


@router.post(
    "/logout",
    response_model=ResultResponse[None],
    summary="Logout",
    description="Revoke the stored refresh token and expire the cookie.",
    responses={400: {"description": "Missing or invalid access token"}},
)
async def logout(response: Response, user: OptionalUserDep, auth: AuthServiceDep):
    await auth.logout(user)
    response.set_cookie(key=REFRESH_TOKEN_COOKIE, value="", max_age=0, path="/", httponly=True)
    return build_response(None)
