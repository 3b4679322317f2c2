"""Public model re-exports for wellness_engine.

Consumers should import from ``wellness_engine.models`` rather than
reaching into sub-modules directly.
"""

from wellness_engine.models.base import WireModel

# --- Definition ---
from wellness_engine.models.question import (
    Condition,
    Question,
    Section,
    SeverityLevel,
)

# --- Report / HTTP payloads ---
from wellness_engine.models.report import (
    Domain,
    InsightsResponse,
    ReportFailed,
    ReportOutcome,
    ReportReady,
    ScoredReport,
    SubmissionReceipt,
    SubmissionRequest,
)

# --- Session / step ---
from wellness_engine.models.session import (
    DetailsStep,
    QuestionPayload,
    SectionStep,
    SessionState,
    StepView,
    SubmissionAccepted,
    SubmissionFailed,
    SubmissionRejected,
    SubmissionResult,
    SubmissionStatus,
    UserDetails,
    ValidationIssue,
)

__all__ = [
    "WireModel",
    # Definition
    "Condition",
    "Question",
    "Section",
    "SeverityLevel",
    # Report
    "Domain",
    "InsightsResponse",
    "ReportFailed",
    "ReportOutcome",
    "ReportReady",
    "ScoredReport",
    "SubmissionReceipt",
    "SubmissionRequest",
    # Session
    "DetailsStep",
    "QuestionPayload",
    "SectionStep",
    "SessionState",
    "StepView",
    "SubmissionAccepted",
    "SubmissionFailed",
    "SubmissionRejected",
    "SubmissionResult",
    "SubmissionStatus",
    "UserDetails",
    "ValidationIssue",
]
