"""Initial schema: users, reports, measurements, badges.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_type = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("goal", sa.Enum("cut", "bulk", "maintain", name="goal"), nullable=False, server_default="maintain"),
        sa.Column("competition_start", sa.Date(), nullable=True),
        sa.Column("competition_end", sa.Date(), nullable=True),
        sa.Column("is_demo", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # reports: confirmed=false while extracted fields await review
    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("measured_at", sa.String(length=32), nullable=False),
        sa.Column("confirmed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("raw_json", json_type, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE", name="fk_reports_user_id_users"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reports_user_measured", "reports", ["user_id", "measured_at"])

    # measurements: 1:1 with a confirmed report
    op.create_table(
        "measurements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("report_id", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("skeletal_muscle", sa.Float(), nullable=True),
        sa.Column("body_fat_mass", sa.Float(), nullable=True),
        sa.Column("body_fat_pct", sa.Float(), nullable=True),
        sa.Column("bmi", sa.Float(), nullable=True),
        sa.Column("total_body_water", sa.Float(), nullable=True),
        sa.Column("visceral_fat_level", sa.Integer(), nullable=True),
        sa.Column("basal_metabolic_rate", sa.Integer(), nullable=True),
        sa.Column("inbody_score", sa.Integer(), nullable=True),
        sa.Column("segmental_lean", json_type, nullable=True),
        sa.Column("segmental_fat", json_type, nullable=True),
        sa.ForeignKeyConstraint(["report_id"], ["reports.id"], ondelete="CASCADE", name="fk_measurements_report_id_reports"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("report_id", name="uq_measurements_report_id"),
    )

    # badges: one row per (user, badge_type), never revoked
    op.create_table(
        "badges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("badge_type", sa.String(length=32), nullable=False),
        sa.Column("badge_label", sa.String(length=64), nullable=False),
        sa.Column("earned_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE", name="fk_badges_user_id_users"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "badge_type", name="uq_badges_user_type"),
    )


def downgrade() -> None:
    op.drop_table("badges")
    op.drop_table("measurements")
    op.drop_index("ix_reports_user_measured", table_name="reports")
    op.drop_table("reports")
    op.drop_table("users")
    sa.Enum(name="goal").drop(op.get_bind(), checkfirst=True)
