import asyncio

import bcrypt
import structlog
from pymongo.errors import DuplicateKeyError

from homedash.core.core import Database, Service
from homedash.core.modules.user.models import User
from homedash.core.modules.user.validators import password_too_long, validate_password, validate_username
from homedash.errors import AuthenticationError, NotFoundError, ValidationError
from homedash.utils import now

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class UserService(Service):
    """Manages user accounts and password verification."""

    def __init__(self, database: Database) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._dummy_hash: bytes | None = None

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("username", 1)], unique=True)

    async def find_user(self, user_id: str) -> User | None:
        doc = await self._collection.find_one({"_id": user_id})
        return User.model_validate(doc) if doc is not None else None

    async def find_user_by_username(self, username: str) -> User | None:
        doc = await self._collection.find_one({"username": username})
        return User.model_validate(doc) if doc is not None else None

    async def get_user(self, user_id: str) -> User:
        """Get user by ID, raising NotFoundError if absent."""
        user = await self.find_user(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    async def create_user(self, username: str, password: str) -> User:
        """Create user with hashed password."""
        validate_username(username)
        validate_password(password)
        if await self.find_user_by_username(username) is not None:
            raise ValidationError("Username already exists")

        timestamp = now()
        user = User(
            username=username,
            password_hash=await asyncio.to_thread(self._hash_password, password),
            created_at=timestamp,
            updated_at=timestamp,
        )
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError("Username already exists") from e
        logger.info("user_registered", user_id=user.id, username=username)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown usernames and wrong passwords raise the same AuthenticationError,
        and both paths run one bcrypt check. Passwords too long to have been
        registered fail without hashing.
        """
        if password_too_long(password):
            raise AuthenticationError(INVALID_CREDENTIALS)
        user = await self.find_user_by_username(username)
        if user is None:
            await asyncio.to_thread(self._check_dummy_password, password)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not await asyncio.to_thread(bcrypt.checkpw, password.encode("utf-8"), user.password_hash.encode("utf-8")):
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    async def delete_user(self, user_id: str) -> None:
        """Delete a user and everything they own."""
        result = await self._collection.delete_one({"_id": user_id})
        if result.deleted_count == 0:
            raise NotFoundError(f"User '{user_id}' not found")
        await self.core.services.record.delete_records_by_user(user_id)
        await self.core.services.session.invalidate_user_sessions(user_id)
        logger.info("user_deleted", user_id=user_id)

    def _hash_password(self, password: str) -> str:
        rounds = self.core.config.password_hash_rounds
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")

    def _check_dummy_password(self, password: str) -> None:
        bcrypt.checkpw(password.encode("utf-8"), self._get_dummy_hash())

    def _get_dummy_hash(self) -> bytes:
        if self._dummy_hash is None:
            self._dummy_hash = self._hash_password("dummy-password").encode("utf-8")
        return self._dummy_hash
