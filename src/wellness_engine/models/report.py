"""Report and HTTP payload models.

These are the bodies exchanged with the server.  They all derive from
``WireModel`` so they serialise to the camelCase JSON the browser client
expects.

Report outcomes (what :class:`~wellness_engine.report.ReportAssembler`
returns to a presentation layer):
  - ReportReady: merged report, ready to render
  - ReportFailed: terminal error for this attempt; the user may restart
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from wellness_engine.models.base import WireModel
from wellness_engine.models.session import UserDetails


class Domain(WireModel):
    """One scored section of the assessment."""

    id: str
    name: str
    score: int
    max_score: int
    severity: str
    summary: str
    insights_and_support: str


class ScoredReport(WireModel):
    """The persisted, per-domain result of one submission."""

    individual_id: str
    first_name: str
    last_name: str = ""
    email: str
    assessment_date: datetime
    domains: list[Domain]


class SubmissionRequest(WireModel):
    """Body of ``POST /api/submit-assessment``: flat details plus answers."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    answers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def build(cls, details: UserDetails, answers: dict[str, str]) -> SubmissionRequest:
        return cls(
            first_name=details.first_name,
            last_name=details.last_name,
            email=details.email,
            answers=dict(answers),
        )

    @property
    def details(self) -> UserDetails:
        return UserDetails(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )


class SubmissionReceipt(WireModel):
    """Response of a successful submission."""

    submission_id: str


class InsightsResponse(WireModel):
    """Response of ``POST /api/generate-insights``.

    ``insights[i]`` belongs to ``report.domains[i]``; the list may be shorter
    than the domain list.
    """

    insights: list[str | None] = Field(default_factory=list)


class ReportReady(BaseModel):
    type: Literal["report"] = "report"
    report: ScoredReport


class ReportFailed(BaseModel):
    type: Literal["error"] = "error"
    kind: Literal["not_found", "transport"]
    message: str
    # Every report error resolves to "start a new assessment"
    restartable: bool = True


ReportOutcome = ReportReady | ReportFailed
