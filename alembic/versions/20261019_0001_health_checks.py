"""Health check results schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the table backing HealthCheckStore:
- health_checks: scored assessments per user, with raw answers and the
  result snapshot (category scores, strengths, red flags, risks)
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
    # ==========================================================================
    # health_checks table
    # ==========================================================================
    op.create_table(
        "health_checks",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("assessment_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("follow_up_answers", sa.JSON(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("category_scores", sa.JSON(), nullable=False),
        sa.Column("strengths", sa.JSON(), nullable=False),
        sa.Column("red_flags", sa.JSON(), nullable=False),
        sa.Column("risks", sa.JSON(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="completed"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("score >= 0 AND score <= 100", name="ck_health_checks_score_range"),
    )

    op.create_index("ix_health_checks_user_date", "health_checks", ["user_id", "assessment_date"])
    op.create_index("ix_health_checks_score", "health_checks", ["score"])


def downgrade() -> None:
    op.drop_index("ix_health_checks_score", table_name="health_checks")
    op.drop_index("ix_health_checks_user_date", table_name="health_checks")
    op.drop_table("health_checks")
