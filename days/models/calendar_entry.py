from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from days.db.base import Base
from days.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class CalendarEntryRecord(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "calendar_entries"
    __table_args__ = (UniqueConstraint("calendar_id", "entry_date", name="uq_calendar_entries_calendar_id_entry_date"),)

    calendar_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("calendars.id", ondelete="CASCADE"),
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # No ON DELETE action: a referenced setting cannot be removed on its own,
    # but the whole calendar can.
    color_setting_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("color_settings.id"),
        index=True,
    )
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    calendar = relationship("CalendarRecord", back_populates="entries")
