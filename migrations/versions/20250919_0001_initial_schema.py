"""initial schema: centers, classrooms, children, users, attendances, refresh tokens

Revision ID: 20250919_0001
Revises:
Create Date: 2025-09-19 09:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "20250919_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "centers",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(160), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(160), nullable=True),
        sa.Column("open_time", sa.Time(), nullable=True),
        sa.Column("close_time", sa.Time(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_centers"),
    )

    op.create_table(
        "classrooms",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("center_id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("age_group_min", sa.Integer(), nullable=False),
        sa.Column("age_group_max", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(["center_id"], ["centers.id"], name="fk_classrooms_center_id_centers"),
        sa.PrimaryKeyConstraint("id", name="pk_classrooms"),
    )
    op.create_index("ix_classrooms_center_id", "classrooms", ["center_id"])

    op.create_table(
        "children",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("first_name", sa.String(80), nullable=False),
        sa.Column("last_name", sa.String(80), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=False),
        sa.Column("gender", sa.String(20), nullable=False, server_default="other"),
        sa.Column("allergies", sa.Text(), nullable=True),
        sa.Column("emergency_contact_name", sa.String(160), nullable=True),
        sa.Column("emergency_contact_phone", sa.String(30), nullable=True),
        sa.Column("center_id", sa.String(36), nullable=True),
        sa.Column("classroom_id", sa.String(36), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(["center_id"], ["centers.id"], name="fk_children_center_id_centers"),
        sa.ForeignKeyConstraint(["classroom_id"], ["classrooms.id"], name="fk_children_classroom_id_classrooms"),
        sa.PrimaryKeyConstraint("id", name="pk_children"),
    )
    op.create_index("ix_children_center_id", "children", ["center_id"])
    op.create_index("ix_children_classroom_id", "children", ["classroom_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(160), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(80), nullable=False),
        sa.Column("last_name", sa.String(80), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="family"),
        sa.Column("center_id", sa.String(36), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(["center_id"], ["centers.id"], name="fk_users_center_id_centers"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "attendances",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("child_id", sa.String(36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("check_in_time", sa.Time(), nullable=True),
        sa.Column("check_out_time", sa.Time(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="absent"),
        sa.Column("check_in_notes", sa.Text(), nullable=True),
        sa.Column("check_out_notes", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("center_id", sa.String(36), nullable=True),
        sa.Column("check_in_by_user_id", sa.String(36), nullable=True),
        sa.Column("check_out_by_user_id", sa.String(36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["child_id"], ["children.id"], name="fk_attendances_child_id_children"),
        sa.ForeignKeyConstraint(["center_id"], ["centers.id"], name="fk_attendances_center_id_centers"),
        sa.ForeignKeyConstraint(["check_in_by_user_id"], ["users.id"], name="fk_attendances_check_in_by_user_id_users"),
        sa.ForeignKeyConstraint(["check_out_by_user_id"], ["users.id"], name="fk_attendances_check_out_by_user_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_attendances"),
    )
    op.create_index("ix_attendances_child_id", "attendances", ["child_id"])
    op.create_index("ix_attendances_date", "attendances", ["date"])
    # um registro ativo por criança/dia; registros inativos ficam fora do índice
    op.create_index(
        "uq_attendance_active_child_date",
        "attendances",
        ["child_id", "date"],
        unique=True,
        sqlite_where=sa.text("is_active = 1"),
        postgresql_where=sa.text("is_active"),
    )

    op.create_table(
        "refresh_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("jti", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_refresh_tokens_user_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_refresh_tokens"),
    )
    op.create_index("ix_refresh_tokens_jti", "refresh_tokens", ["jti"], unique=True)
    op.create_index("ix_refresh_tokens_user_id", "refresh_tokens", ["user_id"])


def downgrade() -> None:
    op.drop_table("refresh_tokens")
    op.drop_index("uq_attendance_active_child_date", table_name="attendances")
    op.drop_table("attendances")
    op.drop_table("users")
    op.drop_table("children")
    op.drop_table("classrooms")
    op.drop_table("centers")
