"""Immutable value objects shared by the entities and use-cases.

Each type exposes a ``parse`` constructor that validates and normalizes raw
input. Direct construction is reserved for values that are already known to be
valid (for example, rows loaded from storage).
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime, time, timedelta, timezone

from email_validator import EmailNotValidError, validate_email

from days.domain.exceptions import InvalidFormatError, InvalidValueError


_HEX_COLOR_RE = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Email:
    value: str

    @classmethod
    def parse(cls, raw: str | None) -> Email:
        candidate = (raw or "").strip()
        if not candidate:
            raise InvalidValueError("email", "email is required")
        try:
            validated = validate_email(candidate, check_deliverability=False)
        except EmailNotValidError as exc:
            raise InvalidFormatError("email", f"Invalid email format: {exc}") from exc
        return cls(validated.normalized.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HexColor:
    """A color normalized to uppercase ``#RRGGBB``."""

    value: str

    @staticmethod
    def normalize(raw: str) -> str:
        candidate = raw.strip()
        match = _HEX_COLOR_RE.match(candidate)
        if match is None:
            raise InvalidFormatError("hex_color", "hex color must look like #RGB or #RRGGBB")
        digits = match.group(1).upper()
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return f"#{digits}"

    @classmethod
    def parse(cls, raw: str | None) -> HexColor:
        if raw is None or not raw.strip():
            raise InvalidValueError("hex_color", "hex color is required")
        return cls(cls.normalize(raw))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A day in the calendar, independent of time of day."""

    date: date_type

    @classmethod
    def parse(cls, raw: str | None) -> CalendarDate:
        candidate = (raw or "").strip()
        if not candidate:
            raise InvalidValueError("date", "date is required")
        if not _DATE_RE.match(candidate):
            raise InvalidFormatError("date", "date must use the YYYY-MM-DD format")
        try:
            parsed = datetime.strptime(candidate, DATE_FORMAT).date()
        except ValueError as exc:
            raise InvalidFormatError("date", f"{candidate} is not a valid calendar date") from exc
        return cls(parsed)

    @classmethod
    def from_datetime(cls, value: datetime | date_type | None) -> CalendarDate:
        if value is None:
            raise InvalidValueError("date", "date is required")
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return cls(value.date())
        return cls(value)

    @classmethod
    def today(cls) -> CalendarDate:
        return cls(datetime.now(timezone.utc).date())

    @property
    def value(self) -> datetime:
        return datetime.combine(self.date, time.min, tzinfo=timezone.utc)

    def before(self, other: CalendarDate) -> bool:
        return self.date < other.date

    def after(self, other: CalendarDate) -> bool:
        return self.date > other.date

    def add_days(self, days: int) -> CalendarDate:
        return CalendarDate(self.date + timedelta(days=days))

    def __str__(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class Identifier:
    value: uuid.UUID

    @classmethod
    def parse(cls, raw: str | uuid.UUID | None) -> Identifier:
        if isinstance(raw, uuid.UUID):
            return cls(raw)
        candidate = (raw or "").strip()
        if not candidate:
            raise InvalidValueError("id", "identifier is required")
        try:
            return cls(uuid.UUID(candidate))
        except ValueError as exc:
            raise InvalidFormatError("id", f"{candidate} is not a valid identifier") from exc

    @classmethod
    def of(cls, value: uuid.UUID) -> Identifier:
        return cls(value)

    @classmethod
    def generate(cls) -> Identifier:
        return cls(uuid.uuid4())

    def __str__(self) -> str:
        return str(self.value)
