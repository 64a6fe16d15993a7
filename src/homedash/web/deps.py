from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from homedash.app import App
from homedash.core.modules.session.models import AuthToken
from homedash.core.modules.user.models import UserView

SESSION_COOKIE_NAME = "sid"

# Security scheme
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, scheme_name="SessionCookie", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> AuthToken | None:
    """Session token from the cookie, if any. Not validated."""
    return AuthToken(token_cookie) if token_cookie else None


async def get_current_user(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    auth_token: Annotated[AuthToken | None, Depends(get_auth_token)],
) -> UserView:
    """Auth guard: validate the session cookie and attach the user to the request."""
    user = await app.authenticate(auth_token)
    request.state.user = user
    return user


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken | None, Depends(get_auth_token)]
CurrentUserDep = Annotated[UserView, Depends(get_current_user)]
