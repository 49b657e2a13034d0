# backend/alembic/versions/001_forest_reservation_schema.py
"""Availability slots and reservations

Revision ID: 001_forest_reservation_schema
Revises:
Create Date: 2024-05-01 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_forest_reservation_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create availability and reservations tables."""
    print("Creating availability and reservation tables...")

    op.create_table(
        "availability",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time_slot", sa.String(length=16), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("reserved", sa.Integer(), server_default="0", nullable=False),
        sa.Column("available", sa.Boolean(), nullable=True),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("date", "time_slot", name="uq_availability_date_time_slot"),
        sa.CheckConstraint("reserved >= 0", name="ck_availability_reserved_non_negative"),
        sa.CheckConstraint("capacity >= 0", name="ck_availability_capacity_non_negative"),
        sa.CheckConstraint(
            "time_slot IN ('morning', 'afternoon')", name="ck_availability_time_slot"
        ),
    )
    op.create_index("ix_availability_date", "availability", ["date"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("reservation_id", sa.String(length=20), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time_slot", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("inst_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("participants", sa.Integer(), nullable=False),
        sa.Column("desired_activity", sa.String(length=16), nullable=False),
        sa.Column("parent_participation", sa.String(length=8), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reservation_id"),
        sa.CheckConstraint("participants > 0", name="ck_reservations_participants_positive"),
    )
    op.create_index("ix_reservations_date_time_slot", "reservations", ["date", "time_slot"])
    op.create_index("ix_reservations_phone", "reservations", ["phone"])

    print("Availability and reservation tables created")


def downgrade() -> None:
    """Drop availability and reservations tables."""
    op.drop_index("ix_reservations_phone", table_name="reservations")
    op.drop_index("ix_reservations_date_time_slot", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_availability_date", table_name="availability")
    op.drop_table("availability")
