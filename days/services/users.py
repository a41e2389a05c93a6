from __future__ import annotations

import logging

from days.core.exceptions import UnauthorizedError, ValidationAppError
from days.core.security import Argon2Params, hash_password, verify_password
from days.domain.entities import User, normalize_username
from days.domain.repositories import UserRepository
from days.domain.services import UserDomainService
from days.domain.value_objects import Email, Identifier
from days.schemas.user import ChangePasswordRequest, CreateUserRequest, UpdateUserRequest, UserRead

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


def validate_password_strength(password: str) -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationAppError(
            f"password must be at least {PASSWORD_MIN_LENGTH} characters",
            details={"field": "password"},
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationAppError(
            f"password must be at most {PASSWORD_MAX_LENGTH} characters",
            details={"field": "password"},
        )


class UserService:
    def __init__(self, users: UserRepository, password_params: Argon2Params | None = None) -> None:
        self.users = users
        self.rules = UserDomainService(users)
        self.password_params = password_params

    async def create_user(self, payload: CreateUserRequest) -> UserRead:
        email = Email.parse(payload.email)
        username = normalize_username(payload.username)
        validate_password_strength(payload.password)

        await self.rules.validate_unique_constraints(email, username)

        user = User.create(email, username, hash_password(payload.password, self.password_params))
        if payload.first_name is not None:
            user.update_first_name(payload.first_name)
        if payload.last_name is not None:
            user.update_last_name(payload.last_name)
        if payload.timezone is not None:
            user.update_timezone(payload.timezone)

        await self.users.save(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return UserRead.from_entity(user)

    async def get_user(self, user_id: Identifier) -> UserRead:
        user = await self.rules.validate_user_exists(user_id)
        return UserRead.from_entity(user)

    async def update_user(self, user_id: Identifier, payload: UpdateUserRequest) -> UserRead:
        user = await self.rules.validate_user_exists(user_id)

        email = Email.parse(payload.email) if payload.email is not None else user.email
        username = normalize_username(payload.username) if payload.username is not None else user.username
        if email != user.email or username != user.username:
            await self.rules.validate_unique_constraints(email, username, exclude_user_id=user.id)
            if email != user.email:
                user.update_email(email)
            if username != user.username:
                user.update_username(username)

        fields = payload.model_fields_set
        if "first_name" in fields:
            user.update_first_name(payload.first_name)
        if "last_name" in fields:
            user.update_last_name(payload.last_name)
        if "timezone" in fields:
            user.update_timezone(payload.timezone)

        await self.users.update(user)
        return UserRead.from_entity(user)

    async def change_password(self, user_id: Identifier, payload: ChangePasswordRequest) -> None:
        user = await self.rules.validate_user_exists(user_id)
        if not verify_password(payload.current_password, user.password_hash, self.password_params):
            raise UnauthorizedError("Current password is incorrect")
        validate_password_strength(payload.new_password)
        user.update_password_hash(hash_password(payload.new_password, self.password_params))
        await self.users.update(user)

    async def delete_user(self, user_id: Identifier) -> None:
        await self.rules.validate_user_exists(user_id)
        await self.users.delete(user_id)
        logger.info("User deleted", extra={"user_id": str(user_id)})
