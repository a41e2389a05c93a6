from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from days.db.base import Base
from days.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class CalendarRecord(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "calendars"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user = relationship("UserRecord", back_populates="calendars")
    color_settings = relationship(
        "ColorSettingRecord",
        back_populates="calendar",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )
    entries = relationship("CalendarEntryRecord", back_populates="calendar", cascade="all,delete-orphan", passive_deletes=True)


Index("uq_calendars_user_id_lower_name", CalendarRecord.user_id, func.lower(CalendarRecord.name), unique=True)
