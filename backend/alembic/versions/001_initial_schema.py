"""Initial schema — users and sensor_data.

Revision ID: 001_initial
Revises: None
Create Date: 2025-03-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("device_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.UniqueConstraint("device_id", name="uq_users_device_id"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "sensor_data",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("device_id", sa.String(255), nullable=False),
        sa.Column("temperature", sa.Float, nullable=False),
        sa.Column("humidity", sa.Float, nullable=False),
        sa.Column("air_quality", sa.Float, nullable=False),
        sa.Column("lpg_level", sa.Float, nullable=False),
        sa.Column(
            "timestamp", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_sensor_data_device_id_timestamp",
        "sensor_data", ["device_id", "timestamp"],
    )


def downgrade() -> None:
    op.drop_index("ix_sensor_data_device_id_timestamp", table_name="sensor_data")
    op.drop_table("sensor_data")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
