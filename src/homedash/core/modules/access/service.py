import structlog

from homedash.core.core import Service
from homedash.core.modules.session.models import AuthToken
from homedash.core.modules.user.models import User
from homedash.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken | None) -> User:
        """Resolve a session token to its user, refreshing the session.

        Raises AuthenticationError when the token is missing, unknown or idle past
        its lifetime, or when the user behind it no longer exists (the session is
        destroyed in that case).
        """
        if not auth_token:
            raise AuthenticationError("Authentication required")

        session = await self.core.services.session.touch_session(auth_token)
        if session is None:
            raise AuthenticationError("Session expired")

        user = await self.core.services.user.find_user(session.user_id)
        if user is None:
            await self.core.services.session.invalidate_session(auth_token)
            logger.info("orphaned_session_destroyed", user_id=session.user_id)
            raise AuthenticationError("User no longer exists")
        return user
