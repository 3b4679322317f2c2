"""Create the assessment_reports table.

One row per submission: user details, raw answers and the scored report
body (JSONB), addressed by a unique ``submission_id``.

Revision ID: 20261019_reports
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# revision identifiers, used by Alembic.
revision = "20261019_reports"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "assessment_reports",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("submission_id", sa.Text(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column(
            "answers",
            JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("data", JSONB(), nullable=False),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
        sa.UniqueConstraint("submission_id", name="uq_assessment_reports_submission_id"),
    )
    op.create_index(
        "ix_assessment_reports_email", "assessment_reports", ["email"],
    )
    op.create_index(
        "ix_assessment_reports_created_at", "assessment_reports", ["created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_assessment_reports_created_at", table_name="assessment_reports")
    op.drop_index("ix_assessment_reports_email", table_name="assessment_reports")
    op.drop_table("assessment_reports")
