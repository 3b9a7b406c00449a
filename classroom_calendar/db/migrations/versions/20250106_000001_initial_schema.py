"""Initial classroom calendar schema."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20250106_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "instructors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_instructors_email"), "instructors", ["email"], unique=True)

    op.create_table(
        "classrooms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("frequency", sa.String(length=128), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=True),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.Column("state", sa.String(length=32), nullable=False, server_default="upcoming"),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_classrooms_code"), "classrooms", ["code"], unique=True)

    op.create_table(
        "class_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("classroom_id", sa.Integer(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("starts_at", sa.DateTime(), nullable=True),
        sa.Column("ends_at", sa.DateTime(), nullable=True),
        sa.Column("state", sa.String(length=32), nullable=False, server_default="scheduled"),
        sa.Column("instructor_id", sa.Integer(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.ForeignKeyConstraint(["classroom_id"], ["classrooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["instructor_id"], ["instructors.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("classroom_id", "sequence", name="uq_class_sessions_sequence"),
    )
    op.create_index(
        op.f("ix_class_sessions_classroom_id"), "class_sessions", ["classroom_id"], unique=False
    )
    op.create_index(
        op.f("ix_class_sessions_instructor_id"), "class_sessions", ["instructor_id"], unique=False
    )

    op.create_table(
        "incidents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("classroom_id", sa.Integer(), nullable=False),
        sa.Column("classroom_code", sa.String(length=64), nullable=False),
        sa.Column("session_sequence", sa.Integer(), nullable=False),
        sa.Column("original_date", sa.Date(), nullable=False),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("substitute_instructor_id", sa.Integer(), nullable=True),
        sa.Column("new_date", sa.Date(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("approval_state", sa.String(length=32), nullable=False, server_default="approved"),
        sa.Column("registered_by", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["classroom_id"], ["classrooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["substitute_instructor_id"], ["instructors.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_incidents_classroom_id"), "incidents", ["classroom_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_incidents_classroom_id"), table_name="incidents")
    op.drop_table("incidents")
    op.drop_index(op.f("ix_class_sessions_instructor_id"), table_name="class_sessions")
    op.drop_index(op.f("ix_class_sessions_classroom_id"), table_name="class_sessions")
    op.drop_table("class_sessions")
    op.drop_index(op.f("ix_classrooms_code"), table_name="classrooms")
    op.drop_table("classrooms")
    op.drop_index(op.f("ix_instructors_email"), table_name="instructors")
    op.drop_table("instructors")
