from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from days.db.base import Base
from days.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class ColorSettingRecord(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "color_settings"
    __table_args__ = (UniqueConstraint("calendar_id", "hex_color", name="uq_color_settings_calendar_id_hex_color"),)

    calendar_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("calendars.id", ondelete="CASCADE"),
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hex_color: Mapped[str] = mapped_column(String(7), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    calendar = relationship("CalendarRecord", back_populates="color_settings")


Index(
    "uq_color_settings_calendar_id_lower_name",
    ColorSettingRecord.calendar_id,
    func.lower(ColorSettingRecord.name),
    unique=True,
)
