"""Domain entities.

``create`` factories validate their input and fail fast. The plain constructor
rebuilds an entity from trusted storage data without validation. Every mutator
validates the field it changes and refreshes ``updated_at``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from days.domain.exceptions import InvalidValueError
from days.domain.value_objects import CalendarDate, Email, HexColor, Identifier


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PERSON_NAME_MAX_LENGTH = 100
TIMEZONE_MAX_LENGTH = 64
DEFAULT_TIMEZONE = "UTC"
CALENDAR_NAME_MAX_LENGTH = 100
COLOR_SETTING_NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
NOTES_MAX_LENGTH = 1000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _required_text(field_name: str, value: str | None, max_length: int, min_length: int = 1) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise InvalidValueError(field_name, f"{field_name} is required")
    if len(normalized) < min_length or len(normalized) > max_length:
        raise InvalidValueError(
            field_name,
            f"{field_name} must be between {min_length} and {max_length} characters",
        )
    return normalized


def _optional_text(field_name: str, value: str | None, max_length: int) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not normalized:
        return None
    if len(normalized) > max_length:
        raise InvalidValueError(field_name, f"{field_name} must be at most {max_length} characters")
    return normalized


def _require(field_name: str, value: object) -> None:
    if value is None:
        raise InvalidValueError(field_name, f"{field_name} is required")


def normalize_username(value: str | None) -> str:
    return _required_text("username", value, USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH).lower()


@dataclass
class User:
    id: Identifier
    email: Email
    username: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    timezone: str = DEFAULT_TIMEZONE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, email: Email, username: str, password_hash: str) -> User:
        _require("email", email)
        if not password_hash:
            raise InvalidValueError("password", "password hash is required")
        now = utcnow()
        return cls(
            id=Identifier.generate(),
            email=email,
            username=normalize_username(username),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    @property
    def display_name(self) -> str:
        full_name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full_name or self.username

    def _touch(self) -> None:
        self.updated_at = utcnow()

    def update_email(self, email: Email) -> None:
        _require("email", email)
        self.email = email
        self._touch()

    def update_username(self, username: str) -> None:
        self.username = normalize_username(username)
        self._touch()

    def update_first_name(self, first_name: str | None) -> None:
        self.first_name = _optional_text("first_name", first_name, PERSON_NAME_MAX_LENGTH)
        self._touch()

    def update_last_name(self, last_name: str | None) -> None:
        self.last_name = _optional_text("last_name", last_name, PERSON_NAME_MAX_LENGTH)
        self._touch()

    def update_timezone(self, timezone_name: str | None) -> None:
        self.timezone = _optional_text("timezone", timezone_name, TIMEZONE_MAX_LENGTH) or DEFAULT_TIMEZONE
        self._touch()

    def update_password_hash(self, password_hash: str) -> None:
        if not password_hash:
            raise InvalidValueError("password", "password hash is required")
        self.password_hash = password_hash
        self._touch()


@dataclass
class Calendar:
    id: Identifier
    user_id: Identifier
    name: str
    description: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, user_id: Identifier, name: str, description: str | None = None) -> Calendar:
        _require("user_id", user_id)
        now = utcnow()
        return cls(
            id=Identifier.generate(),
            user_id=user_id,
            name=_required_text("name", name, CALENDAR_NAME_MAX_LENGTH),
            description=_optional_text("description", description, DESCRIPTION_MAX_LENGTH),
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str) -> None:
        self.name = _required_text("name", name, CALENDAR_NAME_MAX_LENGTH)
        self.updated_at = utcnow()

    def update_description(self, description: str | None) -> None:
        self.description = _optional_text("description", description, DESCRIPTION_MAX_LENGTH)
        self.updated_at = utcnow()

    def belongs_to_user(self, user_id: Identifier) -> bool:
        return self.user_id == user_id


@dataclass
class ColorSetting:
    id: Identifier
    user_id: Identifier
    calendar_id: Identifier
    name: str
    hex_color: HexColor
    description: str | None = None
    is_default: bool = False
    sort_order: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, user_id: Identifier, calendar_id: Identifier, name: str, hex_color: HexColor) -> ColorSetting:
        _require("user_id", user_id)
        _require("calendar_id", calendar_id)
        _require("hex_color", hex_color)
        now = utcnow()
        return cls(
            id=Identifier.generate(),
            user_id=user_id,
            calendar_id=calendar_id,
            name=_required_text("name", name, COLOR_SETTING_NAME_MAX_LENGTH),
            hex_color=hex_color,
            created_at=now,
            updated_at=now,
        )

    def _touch(self) -> None:
        self.updated_at = utcnow()

    def rename(self, name: str) -> None:
        self.name = _required_text("name", name, COLOR_SETTING_NAME_MAX_LENGTH)
        self._touch()

    def update_hex_color(self, hex_color: HexColor) -> None:
        _require("hex_color", hex_color)
        self.hex_color = hex_color
        self._touch()

    def update_description(self, description: str | None) -> None:
        self.description = _optional_text("description", description, DESCRIPTION_MAX_LENGTH)
        self._touch()

    def update_sort_order(self, sort_order: int) -> None:
        if sort_order < 0:
            raise InvalidValueError("sort_order", "sort_order must not be negative")
        self.sort_order = sort_order
        self._touch()

    def set_default(self, is_default: bool) -> None:
        self.is_default = is_default
        self._touch()

    def belongs_to_user(self, user_id: Identifier) -> bool:
        return self.user_id == user_id

    def belongs_to_calendar(self, calendar_id: Identifier) -> bool:
        return self.calendar_id == calendar_id


@dataclass
class CalendarEntry:
    id: Identifier
    user_id: Identifier
    calendar_id: Identifier
    date: CalendarDate
    color_setting_id: Identifier
    notes: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        user_id: Identifier,
        calendar_id: Identifier,
        date: CalendarDate,
        color_setting_id: Identifier,
    ) -> CalendarEntry:
        _require("user_id", user_id)
        _require("calendar_id", calendar_id)
        _require("date", date)
        _require("color_setting_id", color_setting_id)
        now = utcnow()
        return cls(
            id=Identifier.generate(),
            user_id=user_id,
            calendar_id=calendar_id,
            date=date,
            color_setting_id=color_setting_id,
            created_at=now,
            updated_at=now,
        )

    def update_color_setting(self, color_setting_id: Identifier | None) -> None:
        _require("color_setting_id", color_setting_id)
        self.color_setting_id = color_setting_id
        self.updated_at = utcnow()

    def update_notes(self, notes: str | None) -> None:
        self.notes = _optional_text("notes", notes, NOTES_MAX_LENGTH)
        self.updated_at = utcnow()

    def belongs_to_user(self, user_id: Identifier) -> bool:
        return self.user_id == user_id

    def is_for_date(self, date: CalendarDate) -> bool:
        return self.date == date
