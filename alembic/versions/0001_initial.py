"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("phone", sa.Text),
        sa.Column("role", sa.Text, nullable=False, server_default=sa.text("'client'")),
        sa.Column("loyalty_points", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("email_notifications", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("sms_notifications", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text, nullable=False),
    )
    op.create_table(
        "services",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("duration_min", sa.Integer, nullable=False),
        sa.Column("loyalty_points_earned", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text, nullable=False),
    )
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("service_id", sa.Integer, sa.ForeignKey("services.id"), nullable=False),
        sa.Column("date", sa.Text, nullable=False),
        sa.Column("time_slot", sa.Text, nullable=False),
        sa.Column("duration_min", sa.Integer, nullable=False),
        sa.Column("status", sa.Text, nullable=False, server_default=sa.text("'confirmed'")),
        sa.Column("notes", sa.Text),
        sa.Column("reminder_sent", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text, nullable=False),
    )
    op.create_index("ix_appointments_date_status", "appointments", ["date", "status"])
    op.create_index("ix_appointments_user_id", "appointments", ["user_id"])
    op.create_table(
        "waitlist",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("service_id", sa.Integer, sa.ForeignKey("services.id"), nullable=False),
        sa.Column("date", sa.Text, nullable=False),
        sa.Column("preferred_time_slots", sa.Text, nullable=False, server_default=sa.text("'[]'")),
        sa.Column("status", sa.Text, nullable=False, server_default=sa.text("'waiting'")),
        sa.Column("notified_at", sa.Text),
        sa.Column("notified_slot", sa.Text),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text, nullable=False),
    )
    op.create_index("ix_waitlist_date_status", "waitlist", ["date", "status"])
    op.create_index("ix_waitlist_user_id", "waitlist", ["user_id"])


def downgrade():
    op.drop_table("waitlist")
    op.drop_table("appointments")
    op.drop_table("services")
    op.drop_table("users")
