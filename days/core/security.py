from __future__ import annotations

import hmac
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from jose import JWTError, jwt

from days.core.config import HMAC_ALGORITHMS, Settings, get_settings
from days.core.exceptions import UnauthorizedError, ValidationAppError
from days.domain.value_objects import Identifier


ACCESS_TOKEN_TYPE = "access"


class InvalidTokenError(UnauthorizedError):
    def __init__(self, message: str = "Invalid token", details: dict | None = None) -> None:
        super().__init__(message=message, details=details)


@dataclass(frozen=True)
class Argon2Params:
    time_cost: int = 1
    memory_cost_kib: int = 64 * 1024
    parallelism: int = 4
    hash_len: int = 32
    salt_len: int = 16

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Argon2Params":
        settings = settings or get_settings()
        return cls(
            time_cost=settings.argon2_time_cost,
            memory_cost_kib=settings.argon2_memory_cost_kib,
            parallelism=settings.argon2_parallelism,
            hash_len=settings.argon2_hash_len,
            salt_len=settings.argon2_salt_len,
        )


def _argon2id(password: str, salt: bytes, params: Argon2Params, hash_len: int) -> bytes:
    return hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost_kib,
        parallelism=params.parallelism,
        hash_len=hash_len,
        type=Type.ID,
    )


def hash_password(password: str, params: Argon2Params | None = None) -> str:
    """Hash ``password`` with Argon2id and a fresh random salt.

    The result is ``hex(salt):hex(hash)``.
    """
    params = params or Argon2Params.from_settings()
    salt = os.urandom(params.salt_len)
    try:
        digest = _argon2id(password, salt, params, params.hash_len)
    except UnicodeEncodeError as exc:
        raise ValidationAppError("Password is not valid UTF-8", details={"field": "password"}) from exc
    return f"{salt.hex()}:{digest.hex()}"


def verify_password(password: str, stored_hash: str, params: Argon2Params | None = None) -> bool:
    """Check ``password`` against a ``salt:hash`` value.

    Malformed stored values and unencodable candidates never raise, they
    simply do not verify.
    """
    parts = (stored_hash or "").split(":")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return False
    try:
        salt = bytes.fromhex(parts[0])
        expected = bytes.fromhex(parts[1])
    except ValueError:
        return False

    params = params or Argon2Params.from_settings()
    try:
        actual = _argon2id(password, salt, params, len(expected))
    except (HashingError, UnicodeEncodeError):
        return False
    return hmac.compare_digest(actual, expected)


def create_access_token(
    user_id: Identifier,
    *,
    secret: str | None = None,
    ttl_seconds: int | None = None,
    algorithm: str | None = None,
) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    ttl = ttl_seconds if ttl_seconds is not None else settings.jwt_access_ttl_min * 60
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        # Prevent collisions for tokens issued within the same second.
        "jti": str(uuid4()),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl)).timestamp()),
    }
    return jwt.encode(
        payload,
        secret if secret is not None else settings.jwt_secret,
        algorithm=algorithm or settings.jwt_algorithm,
    )


def decode_token(token: str, *, secret: str | None = None) -> dict[str, Any]:
    if not token:
        raise InvalidTokenError("Token is empty")
    secret = secret if secret is not None else get_settings().jwt_secret
    try:
        return jwt.decode(token, secret, algorithms=list(HMAC_ALGORITHMS))
    except JWTError as exc:
        raise InvalidTokenError() from exc


def ensure_token_type(payload: dict[str, Any], expected: str) -> None:
    token_type = payload.get("type")
    if token_type != expected:
        raise InvalidTokenError("Invalid token type")


def parse_access_token(token: str, *, secret: str | None = None) -> Identifier:
    payload = decode_token(token, secret=secret)
    ensure_token_type(payload, ACCESS_TOKEN_TYPE)

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Invalid token payload")
    try:
        return Identifier.parse(subject)
    except ValidationAppError as exc:
        raise InvalidTokenError("Invalid token payload") from exc
