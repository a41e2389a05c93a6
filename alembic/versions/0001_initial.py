"""initial schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19 10:00:00
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=512), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default="UTC"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "calendars",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_calendars_user_id", "calendars", ["user_id"], unique=False)
    op.create_index(
        "uq_calendars_user_id_lower_name",
        "calendars",
        ["user_id", sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "color_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column(
            "calendar_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("calendars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("hex_color", sa.String(length=7), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.UniqueConstraint("calendar_id", "hex_color", name="uq_color_settings_calendar_id_hex_color"),
    )
    op.create_index("ix_color_settings_calendar_id", "color_settings", ["calendar_id"], unique=False)
    op.create_index("ix_color_settings_user_id", "color_settings", ["user_id"], unique=False)
    op.create_index(
        "uq_color_settings_calendar_id_lower_name",
        "color_settings",
        ["calendar_id", sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "calendar_entries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column(
            "calendar_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("calendars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "color_setting_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("color_settings.id"),
            nullable=False,
        ),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("calendar_id", "entry_date", name="uq_calendar_entries_calendar_id_entry_date"),
    )
    op.create_index("ix_calendar_entries_calendar_id", "calendar_entries", ["calendar_id"], unique=False)
    op.create_index("ix_calendar_entries_user_id", "calendar_entries", ["user_id"], unique=False)
    op.create_index("ix_calendar_entries_color_setting_id", "calendar_entries", ["color_setting_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_calendar_entries_color_setting_id", table_name="calendar_entries")
    op.drop_index("ix_calendar_entries_user_id", table_name="calendar_entries")
    op.drop_index("ix_calendar_entries_calendar_id", table_name="calendar_entries")
    op.drop_table("calendar_entries")

    op.drop_index("uq_color_settings_calendar_id_lower_name", table_name="color_settings")
    op.drop_index("ix_color_settings_user_id", table_name="color_settings")
    op.drop_index("ix_color_settings_calendar_id", table_name="color_settings")
    op.drop_table("color_settings")

    op.drop_index("uq_calendars_user_id_lower_name", table_name="calendars")
    op.drop_index("ix_calendars_user_id", table_name="calendars")
    op.drop_table("calendars")

    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
