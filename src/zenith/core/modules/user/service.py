from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from zenith.core.core import Service
from zenith.core.modules.user.models import User, UserProfile, UserProfilePatch
from zenith.core.modules.user.validators import fits_bcrypt, normalize_email, validate_registration
from zenith.errors import NotFoundError, PersistenceError, ValidationError

logger = structlog.get_logger(__name__)

EMAIL_IN_USE_MESSAGE = "This email is already in use. Please log in."


class UserService(Service):
    """Manages user accounts and profiles."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        await self._collection.create_index([("email", 1)], unique=True)

    async def create_user(self, email: str, password: str, display_name: str) -> User:
        """Register a new user with a hashed password."""
        validate_registration(email, password, display_name)
        email = normalize_email(email)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        user = User(email=email, display_name=display_name.strip(), password_hash=password_hash)
        try:
            if await self._collection.find_one({"email": email}) is not None:
                raise ValidationError(EMAIL_IN_USE_MESSAGE)  # noqa: TRY301
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError(EMAIL_IN_USE_MESSAGE) from e
        except PyMongoError as e:
            logger.exception("user_create_failed", email=email)
            raise PersistenceError("Could not create account.") from e
        logger.info("user_registered", user_id=user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the credentials match, otherwise None."""
        if not fits_bcrypt(password):
            return None
        try:
            doc = await self._collection.find_one({"email": normalize_email(email)})
        except PyMongoError as e:
            logger.exception("user_authenticate_failed")
            raise PersistenceError("Could not sign in.") from e
        if doc is None:
            return None
        user = User.model_validate(doc)
        if not bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8")):
            return None
        return user

    async def get_user(self, user_id: UUID) -> User:
        try:
            doc = await self._collection.find_one({"_id": user_id})
        except PyMongoError as e:
            logger.exception("user_fetch_failed", user_id=user_id)
            raise PersistenceError("Could not load profile.") from e
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def get_user_profile(self, user_id: UUID) -> UserProfile | None:
        """Get the public profile, or None if missing or unreadable."""
        try:
            doc = await self._collection.find_one({"_id": user_id})
        except PyMongoError:
            logger.exception("user_profile_fetch_failed", user_id=user_id)
            return None
        if doc is None:
            return None
        return UserProfile.from_domain(User.model_validate(doc))

    async def update_user_profile(self, user_id: UUID, patch: UserProfilePatch) -> UserProfile:
        """Apply a partial profile update."""
        update = patch.model_dump(exclude_none=True)
        if "display_name" in update:
            update["display_name"] = update["display_name"].strip()
            if not update["display_name"]:
                raise ValidationError("Display name cannot be empty.")
        if update:
            await self._write(user_id, update)
        return UserProfile.from_domain(await self.get_user(user_id))

    async def update_photo_url(self, user_id: UUID, photo_url: str) -> UserProfile:
        await self._write(user_id, {"photo_url": photo_url})
        return UserProfile.from_domain(await self.get_user(user_id))

    async def _write(self, user_id: UUID, update: dict[str, Any]) -> None:
        try:
            result = await self._collection.update_one({"_id": user_id}, {"$set": update})
        except PyMongoError as e:
            logger.exception("user_profile_update_failed", user_id=user_id, fields=list(update))
            raise PersistenceError("Could not update profile.") from e
        if result.matched_count == 0:
            raise NotFoundError(f"User '{user_id}' not found")
