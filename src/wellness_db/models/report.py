"""AssessmentReport ORM model — one row per completed submission.

The row keeps both what the user sent (details + raw answers) and what was
computed from it (the scored report).  The report body is stored as JSONB
exactly as it is served, so a report fetch is a single-row lookup with no
re-scoring.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Index, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from wellness_db.models.base import Base


class AssessmentReport(Base):
    """A persisted, scored assessment addressed by its submission id."""

    __tablename__ = "assessment_reports"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Opaque token handed to the browser and used in ?submissionId=...
    submission_id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    # --- What the user sent ---
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    email: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    # Raw qid -> answer mapping, including answers to questions later hidden
    answers: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )

    # --- What was computed ---
    # Camel-cased ScoredReport body, served verbatim by GET /api/report
    data: Mapped[dict] = mapped_column(JSONB, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_assessment_reports_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<AssessmentReport(id={self.id!s}, submission={self.submission_id!r}, "
            f"email={self.email!r})>"
        )
