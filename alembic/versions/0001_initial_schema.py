"""initial schema: users, sensors, measurements

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("whatsapp", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_whatsapp", "users", ["whatsapp"])

    op.create_table(
        "sensors",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("hardware_id", sa.String(100), nullable=False),
        sa.Column("friendly_name", sa.String(100), nullable=False),
        sa.Column("alert_threshold", sa.Float(), nullable=False),
        sa.Column("owner_id", sa.BigInteger(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("last_alert_sent", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_sensors_id", "sensors", ["id"])
    op.create_index("ix_sensors_hardware_id", "sensors", ["hardware_id"], unique=True)
    op.create_index("ix_sensors_owner_id", "sensors", ["owner_id"])

    op.create_table(
        "measurements",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("sensor_id", sa.String(100), nullable=False),
        sa.Column("temperature_c", sa.Float(), nullable=False),
        sa.Column("voltage_v", sa.Float(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_measurements_id", "measurements", ["id"])
    op.create_index("ix_measurements_sensor_id", "measurements", ["sensor_id"])
    op.create_index("ix_measurements_timestamp", "measurements", ["timestamp"])
    op.create_index("ix_measurements_sensor_timestamp", "measurements", ["sensor_id", "timestamp"])


def downgrade() -> None:
    op.drop_table("measurements")
    op.drop_table("sensors")
    op.drop_table("users")
