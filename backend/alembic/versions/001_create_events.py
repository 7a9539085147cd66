"""Create events table — recurring event definitions scoped by customer.

Revision ID: 001_create_events
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_create_events"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("customer_id", UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("interval_days", sa.Integer, nullable=False),
        sa.Column("stop_at", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("interval_days > 0", name="events_interval_days_positive"),
        sa.CheckConstraint("stop_at IS NULL OR stop_at >= start_date", name="events_stop_after_start"),
    )
    op.create_index("ix_events_customer_id", "events", ["customer_id"])
    op.create_index("ix_events_customer_id_created_at", "events", ["customer_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_events_customer_id_created_at", table_name="events")
    op.drop_index("ix_events_customer_id", table_name="events")
    op.drop_table("events")
