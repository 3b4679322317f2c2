"""Session and step models — the contract between the engine and its callers.

``SessionState`` is the single explicit value every engine operation takes
and returns; nothing about a session lives anywhere else.  The step models
are render-ready views of that state for a presentation layer.

Step types:
  - DetailsStep: collect first name, last name and email (step 0)
  - SectionStep: answer the visible questions of one section (steps 1..N)

Submission outcomes:
  - SubmissionAccepted: persisted, report addressable by ``submission_id``
  - SubmissionFailed: validation or transport failure, safe to retry
  - SubmissionRejected: duplicate submit while pending or after success
"""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field

from wellness_engine.models.base import WireModel


class SubmissionStatus(str, enum.Enum):
    """Lifecycle of the single in-session submission.

    Transitions:
        idle -> in_flight        (submit started)
        failed -> in_flight      (retry)
        in_flight -> succeeded   (submission id received)
        in_flight -> failed      (validation or transport error)
    """

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class UserDetails(WireModel):
    """Identity collected before the first section.

    Non-emptiness of ``first_name`` and ``email`` is checked by the engine
    (after trimming) rather than by the model, so partially typed details
    can still be held in state.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""


class SessionState(BaseModel):
    """Everything one assessment session knows.

    ``answers`` only ever grows during a session: answers to questions that
    later become hidden stay here but are ignored by completeness checks
    and scoring.
    """

    step: int = 0
    details: UserDetails = Field(default_factory=UserDetails)
    answers: dict[str, str] = Field(default_factory=dict)
    submission: SubmissionStatus = SubmissionStatus.IDLE
    submission_id: str | None = None
    error: str | None = None

    @property
    def is_submitting(self) -> bool:
        return self.submission == SubmissionStatus.IN_FLIGHT


class ValidationIssue(BaseModel):
    """Why a step cannot be completed yet.

    ``target`` is a detail field name (``first_name``, ``email``) or a qid.
    """

    target: str
    reason: Literal["missing_required_detail", "unanswered_question"]


class QuestionPayload(BaseModel):
    """Flattened question for rendering: number, text, options, selection."""

    qid: str
    number: int
    text: str
    mandatory: bool
    options: list[str]
    selected: str | None = None


class DetailsStep(BaseModel):
    """Engine step: collect user details."""

    type: Literal["details"] = "details"
    step: int = 0
    details: UserDetails
    can_advance: bool
    total_sections: int


class SectionStep(BaseModel):
    """Engine step: answer one visible section."""

    type: Literal["section"] = "section"
    step: int
    section_id: str
    title: str
    description: str
    questions: list[QuestionPayload]
    # (index + 1) / total, in the 0..1 range
    progress: float
    total_sections: int
    can_advance: bool
    # On the last visible section the caller offers "submit" instead of "next"
    is_last: bool


# Callers can match on step.type to dispatch rendering logic.
StepView = DetailsStep | SectionStep


class SubmissionAccepted(BaseModel):
    type: Literal["submitted"] = "submitted"
    submission_id: str
    # Relative location of the report page, e.g. "/?submissionId=abc123"
    report_location: str


class SubmissionFailed(BaseModel):
    type: Literal["failed"] = "failed"
    message: str
    issues: list[ValidationIssue] = Field(default_factory=list)


class SubmissionRejected(BaseModel):
    type: Literal["rejected"] = "rejected"
    message: str


SubmissionResult = SubmissionAccepted | SubmissionFailed | SubmissionRejected
