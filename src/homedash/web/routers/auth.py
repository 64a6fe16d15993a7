from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from homedash.config import Config
from homedash.core.modules.session.models import AuthToken
from homedash.core.modules.user.models import UserView
from homedash.web.deps import SESSION_COOKIE_NAME, AppDep, AuthTokenDep
from homedash.web.envelope import Envelope, ok
from homedash.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Username/password pair for register and login."""

    username: str = Field(default="", description="Username (surrounding whitespace is ignored)")
    password: str = Field(default="", description="Password")


class LogoutResult(BaseModel):
    success: bool


def apply_session_cookie(response: Response, auth_token: AuthToken, config: Config) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=auth_token,
        httponly=True,
        samesite="lax",
        secure=config.production,
        path="/",
        max_age=config.session_ttl_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, config: Config) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/", httponly=True, samesite="lax", secure=config.production)


@router.post(
    "/auth/register",
    summary="Create account",
    description="Create a user account and start a session for it. The session token is set as the `sid` cookie.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created and signed in"},
        400: {"model": ErrorResponse, "description": "Missing fields, invalid credentials format or username taken"},
    },
)
async def register(credentials: CredentialsRequest, app: AppDep, response: Response) -> Envelope[UserView]:
    user, auth_token = await app.register(credentials.username, credentials.password)
    apply_session_cookie(response, auth_token, app.config)
    return ok(user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with username and password. The session token is set as the `sid` cookie.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(credentials: CredentialsRequest, app: AppDep, response: Response) -> Envelope[UserView]:
    user, auth_token = await app.login(credentials.username, credentials.password)
    apply_session_cookie(response, auth_token, app.config)
    return ok(user)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Destroy the current session, if any, and clear the cookie. Always succeeds.",
    operation_id="logout",
    responses={200: {"description": "Signed out"}},
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> Envelope[LogoutResult]:
    await app.logout(auth_token)
    clear_session_cookie(response, app.config)
    return ok(LogoutResult(success=True))
