from fastapi import APIRouter, Response

from homedash.core.modules.user.models import UserView
from homedash.web.deps import AppDep, CurrentUserDep
from homedash.web.envelope import Envelope, ok
from homedash.web.openapi import ErrorResponse
from homedash.web.routers.auth import clear_session_cookie

router = APIRouter(tags=["profile"])


@router.get(
    "/me",
    summary="Get current user",
    description="Get the public profile of the user owning the session.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_me(current_user: CurrentUserDep) -> Envelope[UserView]:
    return ok(current_user)


@router.delete(
    "/me",
    summary="Delete account",
    description="Delete the current user together with all their records and sessions.",
    operation_id="deleteCurrentUser",
    responses={
        200: {"description": "Account deleted, returns the removed profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def delete_me(app: AppDep, current_user: CurrentUserDep, response: Response) -> Envelope[UserView]:
    await app.delete_account(current_user)
    clear_session_cookie(response, app.config)
    return ok(current_user)
