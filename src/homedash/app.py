import time
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from homedash.config import Config
from homedash.core.core import Core
from homedash.core.modules.record.models import CollectionDefinition, Payload, Record
from homedash.core.modules.session.models import AuthToken
from homedash.core.modules.user.models import UserView
from homedash.core.modules.weather.models import WeatherReport
from homedash.core.modules.weather.validators import validate_coordinates
from homedash.errors import NotFoundError, ValidationError
from homedash.utils import now


def _package_version() -> str:
    try:
        return version("homedash")
    except PackageNotFoundError:
        return "0.0.0"


class App:
    """Facade for all application operations.

    Handlers resolve the current user once through ``authenticate`` and pass it
    to the record operations, which only ever touch that user's bucket.
    """

    def __init__(self, config: Config) -> None:
        self._core = Core(config)
        self._started_at = time.monotonic()

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            self._started_at = time.monotonic()
            yield

    # === Authentication ===
    async def register(self, username: str, password: str) -> tuple[UserView, AuthToken]:
        """Create an account and open a session for it."""
        username, password = self._normalize_credentials(username, password)
        user = await self._core.services.user.create_user(username, password)
        auth_token = await self._core.services.session.create_session(user.id)
        return UserView.from_domain(user), auth_token

    async def login(self, username: str, password: str) -> tuple[UserView, AuthToken]:
        """Authenticate user and create session."""
        username, password = self._normalize_credentials(username, password)
        user = await self._core.services.user.authenticate(username, password)
        auth_token = await self._core.services.session.create_session(user.id)
        return UserView.from_domain(user), auth_token

    async def logout(self, auth_token: AuthToken | None) -> None:
        """Invalidate the session if there is one; never fails."""
        if auth_token:
            await self._core.services.session.invalidate_session(auth_token)

    async def authenticate(self, auth_token: AuthToken | None) -> UserView:
        """Resolve the session token to the current user (auth guard)."""
        user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(user)

    async def delete_account(self, current_user: UserView) -> None:
        """Delete the current user with all their records and sessions."""
        await self._core.services.user.delete_user(current_user.id)

    # === Collections ===
    async def list_records[R: Record](
        self, current_user: UserView, definition: CollectionDefinition[R], params: Mapping[str, str]
    ) -> list[R]:
        records = await self._core.services.record.list_records(definition, current_user.id)
        return definition.prepare_list(records, params)

    async def create_record[R: Record](self, current_user: UserView, definition: CollectionDefinition[R], payload: Payload) -> R:
        fields = definition.normalize_create(payload)
        return await self._core.services.record.create_record(definition, current_user.id, fields)

    async def update_record[R: Record](
        self, current_user: UserView, definition: CollectionDefinition[R], record_id: str, payload: Payload
    ) -> R:
        """Validate a partial update against the stored record and apply it."""
        existing = await self._core.services.record.find_record(definition, current_user.id, record_id)
        updates = definition.normalize_update(payload, existing)
        if not updates:
            raise ValidationError("No fields to update")
        if existing is None:
            raise NotFoundError("Record not found")
        return await self._core.services.record.update_record(definition, current_user.id, record_id, updates)

    async def delete_record[R: Record](self, current_user: UserView, definition: CollectionDefinition[R], record_id: str) -> R:
        return await self._core.services.record.delete_record(definition, current_user.id, record_id)

    # === Weather ===
    async def get_weather(self, lat: str | None, lon: str | None) -> WeatherReport:
        coordinates = validate_coordinates(lat, lon)
        return await self._core.services.weather.get_forecast(coordinates)

    # === Health ===
    def get_health(self) -> dict[str, str | float]:
        return {
            "status": "ok",
            "uptime": round(time.monotonic() - self._started_at, 3),
            "version": _package_version(),
            "commit": self.config.git_commit_hash,
            "timestamp": now().isoformat(),
        }

    @staticmethod
    def _normalize_credentials(username: str, password: str) -> tuple[str, str]:
        username = username.strip()
        if not username or not password:
            raise ValidationError("Username and password required")
        return username, password
