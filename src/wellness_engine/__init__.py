"""wellness_engine — conditional questionnaire SDK for the wellness assessment.

Public API:
    QuestionnaireStore — loads the YAML definition (sections, options, levels)
    AssessmentEngine   — visibility, step completeness, clamping, submission states
    AssessmentFlow     — one session's mutable holder with single-flight submit
    AssessmentApiClient — httpx client for submit / report / insights
    ReportAssembler    — report fetch followed by insights merge
    score_submission   — server-side {details, answers} -> ScoredReport

Visibility helpers:
    compute_visible_sections, visible_questions_of, is_question_visible

Interfaces:
    InsightGenerator   — ABC for narrative insight generation
"""

from wellness_engine.client import AssessmentApiClient
from wellness_engine.engine import AssessmentEngine
from wellness_engine.errors import (
    AssessmentError,
    InsightsError,
    InvalidSubmissionError,
    NotFoundError,
    SubmissionInFlightError,
    TransportError,
)
from wellness_engine.flow import AssessmentFlow
from wellness_engine.interfaces import InsightGenerator
from wellness_engine.questionnaire import QuestionnaireStore
from wellness_engine.report import ReportAssembler, merge_insights
from wellness_engine.scoring import score_submission
from wellness_engine.visibility import (
    compute_visible_sections,
    is_question_visible,
    visible_questions_of,
)

__all__ = [
    # Engine & store
    "AssessmentEngine",
    "AssessmentFlow",
    "QuestionnaireStore",
    # Collaborators
    "AssessmentApiClient",
    "ReportAssembler",
    "merge_insights",
    "score_submission",
    "InsightGenerator",
    # Visibility
    "compute_visible_sections",
    "is_question_visible",
    "visible_questions_of",
    # Errors
    "AssessmentError",
    "InsightsError",
    "InvalidSubmissionError",
    "NotFoundError",
    "SubmissionInFlightError",
    "TransportError",
]
