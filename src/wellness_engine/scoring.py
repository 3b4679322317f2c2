"""Scoring — turn {details, answers} into a per-domain ScoredReport.

Runs on the server at submission intake.  Each *visible* section becomes
one domain; only visible, answered questions contribute points, so answers
left behind by a branch the user later closed do not count.

Points for an answer are its index in the ordered answer options
(``Not at all`` = 0 ... ``Nearly every day`` = 3).  The domain's severity
is the highest level whose ``min_percent`` the score reaches.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping

from wellness_engine.models.question import Section
from wellness_engine.models.report import Domain, ScoredReport
from wellness_engine.models.session import UserDetails
from wellness_engine.questionnaire import QuestionnaireStore
from wellness_engine.visibility import compute_visible_sections, visible_questions_of


def score_section(
    store: QuestionnaireStore, section: Section, answers: Mapping[str, str]
) -> Domain:
    """Score one section against the current answers."""
    questions = visible_questions_of(section, answers)
    score = sum(store.points_for(answers[q.qid]) for q in questions if q.qid in answers)
    max_score = store.max_points * len(questions)
    percent = 100.0 * score / max_score if max_score else 0.0
    level = store.severity_for(percent)
    return Domain(
        id=section.id,
        name=section.title,
        score=score,
        max_score=max_score,
        severity=level.label,
        summary=level.summary.format(domain=section.title),
        insights_and_support=level.insights_and_support.format(domain=section.title),
    )


def score_submission(
    store: QuestionnaireStore,
    *,
    submission_id: str,
    details: UserDetails,
    answers: Mapping[str, str],
    assessed_at: datetime | None = None,
) -> ScoredReport:
    """Build the full report for a validated submission."""
    sections = compute_visible_sections(store.sections, answers)
    return ScoredReport(
        individual_id=submission_id,
        first_name=details.first_name.strip(),
        last_name=details.last_name.strip(),
        email=details.email.strip(),
        assessment_date=assessed_at or datetime.now(timezone.utc),
        domains=[score_section(store, s, answers) for s in sections],
    )
