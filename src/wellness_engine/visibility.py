"""Visibility rules — which questions and sections are currently shown.

Everything here is a pure function of (static definition, answers).  There
is exactly one predicate, :func:`is_question_visible`; section visibility
and per-section filtering are both built on it so the two can never drift
apart.

Nothing is cached: callers recompute after every answer change, which is
cheap for a questionnaire of this size and can never go stale.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from wellness_engine.models.question import Condition, Question, Section


def is_condition_satisfied(condition: Condition, answers: Mapping[str, str]) -> bool:
    """True if ANY trigger's current answer is one of the required values.

    A trigger that has not been answered never satisfies the condition.
    """
    for trigger in condition.trigger_ids:
        answer = answers.get(trigger)
        if answer is not None and answer in condition.required_values:
            return True
    return False


def is_question_visible(question: Question, answers: Mapping[str, str]) -> bool:
    """Unconditioned questions are always visible; others follow their condition."""
    if question.condition is None:
        return True
    return is_condition_satisfied(question.condition, answers)


def visible_questions_of(section: Section | None, answers: Mapping[str, str]) -> list[Question]:
    """Return the section's currently visible questions in definition order.

    ``None`` (e.g. a step index past the end) yields an empty list.
    """
    if section is None:
        return []
    return [q for q in section.questions if is_question_visible(q, answers)]


def is_section_visible(section: Section, answers: Mapping[str, str]) -> bool:
    """A section is visible iff at least one of its questions is."""
    return any(is_question_visible(q, answers) for q in section.questions)


def compute_visible_sections(
    sections: Iterable[Section], answers: Mapping[str, str]
) -> list[Section]:
    """Filter the static section list, preserving its order."""
    return [s for s in sections if is_section_visible(s, answers)]


def relevant_answers(sections: Iterable[Section], answers: Mapping[str, str]) -> dict[str, str]:
    """Answers to currently visible questions only.

    Answers to hidden questions remain in the session but are dropped here
    before scoring.
    """
    relevant: dict[str, str] = {}
    for section in sections:
        for q in visible_questions_of(section, answers):
            if q.qid in answers:
                relevant[q.qid] = answers[q.qid]
    return relevant
