"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the enrollment request tracker:
users, student_profiles, requests, subject_lines, status_history.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users (identity collaborator) ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False, server_default=""),
        sa.Column("role", sa.String(20), nullable=False, server_default="STUDENT"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- student_profiles (profile collaborator) ---
    op.create_table(
        "student_profiles",
        sa.Column("profile_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, unique=True),
        sa.Column("student_no", sa.String(50), nullable=False, unique=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("section", sa.String(50), nullable=True),
        sa.Column("year_level", sa.Integer, nullable=True),
        sa.Column("course", sa.String(150), nullable=True),
    )

    # --- requests ---
    op.create_table(
        "requests",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("request_type", sa.String(20), nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column("semester", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="FOR_EVALUATION"),
        sa.Column("remarks", sa.Text, nullable=True),
        sa.Column("requested_by_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_requests_requested_by_id", "requests", ["requested_by_id"])

    # --- subject_lines ---
    op.create_table(
        "subject_lines",
        sa.Column("subject_id", sa.String(36), primary_key=True),
        sa.Column("request_id", sa.String(36), sa.ForeignKey("requests.request_id"), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("units", sa.Integer, nullable=False),
        sa.Column("section", sa.String(50), nullable=True),
        sa.Column("schedule", sa.String(255), nullable=True),
        sa.CheckConstraint("units > 0", name="ck_subject_lines_units_positive"),
    )
    op.create_index("ix_subject_lines_request_id", "subject_lines", ["request_id"])

    # --- status_history (append-only) ---
    op.create_table(
        "status_history",
        sa.Column("entry_id", sa.String(36), primary_key=True),
        sa.Column("request_id", sa.String(36), sa.ForeignKey("requests.request_id"), nullable=False),
        sa.Column("sequence", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("remark", sa.Text, nullable=True),
        sa.Column("changed_by_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("request_id", "sequence", name="uq_status_history_request_sequence"),
    )
    op.create_index("ix_status_history_request_id", "status_history", ["request_id"])


def downgrade() -> None:
    op.drop_table("status_history")
    op.drop_table("subject_lines")
    op.drop_table("requests")
    op.drop_table("student_profiles")
    op.drop_table("users")
