"""ORM models for wellness_db."""

from wellness_db.models.base import Base
from wellness_db.models.report import AssessmentReport

__all__ = ["Base", "AssessmentReport"]
