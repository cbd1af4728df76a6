import logging

from shortlink_app.auth.passwords import hash_password, verify_password
from shortlink_app.config import settings
from shortlink_app.exceptions import (
    AuthenticationError,
    InvalidPasswordError,
    NoUserError,
    UserExistsError,
)
from shortlink_app.store.strategies import KeyValueStore

logger = logging.getLogger("shortlink.accounts")

USER_KEY = "user"


class AccountService:
    """
    Single-account management.

    The service has one user, stored as a bcrypt hash under ``user``.
    The account can be created once; there is no update or removal.
    """

    def __init__(self, store: KeyValueStore, min_password_length: int = None):
        self.store = store
        self.min_password_length = min_password_length or settings.password_min_length

    async def user_exists(self) -> bool:
        return await self.store.exists(USER_KEY)

    async def create_user(self, password: str) -> None:
        if await self.user_exists():
            raise UserExistsError("User already exists")
        if not password:
            raise InvalidPasswordError("Password is required")
        if len(password) < self.min_password_length:
            raise InvalidPasswordError(
                f"Password must be at least {self.min_password_length} characters"
            )

        # Another setup request may have won since the check above
        if not await self.store.set_if_absent(USER_KEY, hash_password(password)):
            raise UserExistsError("User already exists")
        logger.info("Created user account")

    async def authenticate(self, password: str) -> None:
        """Raise unless ``password`` matches the stored account"""
        password_hash = await self.store.get(USER_KEY)
        if password_hash is None:
            raise NoUserError("No user exists")
        if not verify_password(password, password_hash):
            raise AuthenticationError("Incorrect password")
