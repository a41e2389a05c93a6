from __future__ import annotations

import hashlib
import logging
import os

from days.core.config import Settings, get_settings
from days.core.exceptions import UnauthorizedError, ValidationAppError
from days.core.security import Argon2Params, create_access_token, hash_password, parse_access_token, verify_password
from days.domain.entities import User
from days.domain.repositories import UserRepository
from days.domain.value_objects import Email
from days.schemas.auth import LoginRequest, LoginResponse
from days.schemas.user import UserRead

logger = logging.getLogger(__name__)


def _email_fingerprint(email: str) -> str:
    return hashlib.sha256(email.encode("utf-8", "backslashreplace")).hexdigest()[:16]


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        settings: Settings | None = None,
        password_params: Argon2Params | None = None,
    ) -> None:
        self.users = users
        self.settings = settings or get_settings()
        self.password_params = password_params
        self._dummy_hash: str | None = None

    def _unknown_user_hash(self) -> str:
        # Unknown emails still pay for one Argon2 run, same as a wrong password.
        if self._dummy_hash is None:
            self._dummy_hash = hash_password(os.urandom(16).hex(), self.password_params)
        return self._dummy_hash

    async def login(self, payload: LoginRequest) -> LoginResponse:
        try:
            email = Email.parse(payload.email)
        except ValidationAppError as exc:
            raise UnauthorizedError("Invalid email or password") from exc

        user = await self.users.get_by_email(email)
        stored_hash = user.password_hash if user is not None else self._unknown_user_hash()
        password_ok = verify_password(payload.password, stored_hash, self.password_params)
        if user is None or not password_ok:
            logger.warning("Failed login attempt", extra={"email_fingerprint": _email_fingerprint(email.value)})
            raise UnauthorizedError("Invalid email or password")

        ttl_seconds = self.settings.jwt_access_ttl_min * 60
        access_token = create_access_token(
            user.id,
            secret=self.settings.jwt_secret,
            ttl_seconds=ttl_seconds,
            algorithm=self.settings.jwt_algorithm,
        )
        return LoginResponse(user=UserRead.from_entity(user), access_token=access_token, expires_in=ttl_seconds)

    async def authenticate(self, token: str) -> User:
        user_id = parse_access_token(token, secret=self.settings.jwt_secret)
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        return user
