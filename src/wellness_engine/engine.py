"""AssessmentEngine — step logic for the multi-step assessment form.

Stateless engine pattern: every operation takes a ``SessionState`` and
returns a new one (or a derived view).  No session data is held on the
engine itself, so one engine serves every session in the process.

Step overview:
    0      Details   — first name, last name, email
    1..N   Sections  — the currently visible sections, in definition order

Which sections exist at steps 1..N depends on the answers so far.  When an
answer change hides sections ahead of the user, the step index is clamped
back into range as part of that same operation.

The engine never forbids an incomplete ``advance``; callers check
:meth:`AssessmentEngine.is_step_complete` first (a UI disables its "next"
button).  :class:`~wellness_engine.flow.AssessmentFlow` does exactly that.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from wellness_engine.constants import DETAILS_STEP, REPORT_PATH
from wellness_engine.errors import InvalidSubmissionError, SubmissionInFlightError
from wellness_engine.models.question import Question, Section
from wellness_engine.models.report import SubmissionRequest
from wellness_engine.models.session import (
    DetailsStep,
    QuestionPayload,
    SectionStep,
    SessionState,
    StepView,
    SubmissionStatus,
    UserDetails,
    ValidationIssue,
)
from wellness_engine.questionnaire import QuestionnaireStore
from wellness_engine.visibility import compute_visible_sections, visible_questions_of

logger = logging.getLogger(__name__)

# Detail fields that must be non-empty after trimming.
_REQUIRED_DETAILS = ("first_name", "email")

# Allowed submission transitions; anything else is a programming error,
# except a second "-> in_flight" which is a duplicate submit.
_SUBMISSION_TRANSITIONS: dict[SubmissionStatus, set[SubmissionStatus]] = {
    SubmissionStatus.IDLE: {SubmissionStatus.IN_FLIGHT},
    SubmissionStatus.FAILED: {SubmissionStatus.IN_FLIGHT},
    SubmissionStatus.IN_FLIGHT: {SubmissionStatus.SUCCEEDED, SubmissionStatus.FAILED},
    SubmissionStatus.SUCCEEDED: set(),
}


# ----------------------------------------------------------------------
# Step arithmetic
# ----------------------------------------------------------------------

def next_step(step: int) -> int:
    """Advance one step.  May point past the last section; see clamping."""
    return step + 1


def previous_step(step: int) -> int:
    """Go back one step, saturating at the details step."""
    return max(DETAILS_STEP, step - 1)


def clamp_step_index(step: int, section_count: int) -> int:
    """Pull ``step`` back to ``section_count`` if it now points past the end."""
    if step > section_count:
        return section_count
    return step


def report_location(submission_id: str) -> str:
    """Relative URL of the report page for a submission."""
    return f"{REPORT_PATH}?submissionId={submission_id}"


class AssessmentEngine:
    """Computes visibility, completeness and transitions for a session.

    Args:
        store: a loaded :class:`QuestionnaireStore`
    """

    def __init__(self, store: QuestionnaireStore) -> None:
        self._store = store

    @property
    def store(self) -> QuestionnaireStore:
        return self._store

    # ==================================================================
    # Queries
    # ==================================================================

    def visible_sections(self, answers: Mapping[str, str]) -> list[Section]:
        return compute_visible_sections(self._store.sections, answers)

    def visible_questions_of(
        self, section: Section | None, answers: Mapping[str, str]
    ) -> list[Question]:
        return visible_questions_of(section, answers)

    def missing_items(
        self,
        step: int,
        details: UserDetails,
        answers: Mapping[str, str],
        visible_sections: list[Section] | None = None,
    ) -> list[ValidationIssue]:
        """List what keeps ``step`` from being complete.

        Step 0 checks the required detail fields; steps 1..N check that
        every visible question of that section has an answer.  Answers to
        questions that are now hidden are neither required nor removed.

        Raises:
            IndexError: if ``step`` does not address a visible section.
        """
        if step == DETAILS_STEP:
            return [
                ValidationIssue(target=name, reason="missing_required_detail")
                for name in _REQUIRED_DETAILS
                if not getattr(details, name).strip()
            ]

        if visible_sections is None:
            visible_sections = self.visible_sections(answers)
        if step < 1 or step > len(visible_sections):
            raise IndexError(f"No visible section at step {step}")

        section = visible_sections[step - 1]
        return [
            ValidationIssue(target=q.qid, reason="unanswered_question")
            for q in visible_questions_of(section, answers)
            if q.qid not in answers
        ]

    def is_step_complete(
        self,
        step: int,
        details: UserDetails,
        answers: Mapping[str, str],
        visible_sections: list[Section] | None = None,
    ) -> bool:
        """True if the user may move on from ``step``.

        A step past the visible section count is simply incomplete.
        """
        if visible_sections is None:
            visible_sections = self.visible_sections(answers)
        if step != DETAILS_STEP and not 1 <= step <= len(visible_sections):
            return False
        return not self.missing_items(step, details, answers, visible_sections)

    def missing_for_submission(self, state: SessionState) -> list[ValidationIssue]:
        """Issues across the details step and every visible section."""
        sections = self.visible_sections(state.answers)
        issues = self.missing_items(DETAILS_STEP, state.details, state.answers, sections)
        for step in range(1, len(sections) + 1):
            issues.extend(self.missing_items(step, state.details, state.answers, sections))
        return issues

    def current_step(self, state: SessionState) -> StepView:
        """Render-ready view of the step the session is on."""
        sections = self.visible_sections(state.answers)
        step = clamp_step_index(state.step, len(sections))

        if step == DETAILS_STEP:
            return DetailsStep(
                details=state.details,
                can_advance=self.is_step_complete(step, state.details, state.answers, sections),
                total_sections=len(sections),
            )

        section = sections[step - 1]
        questions = [
            QuestionPayload(
                qid=q.qid,
                number=i,
                text=q.text,
                mandatory=q.mandatory,
                options=list(self._store.answer_options),
                selected=state.answers.get(q.qid),
            )
            for i, q in enumerate(visible_questions_of(section, state.answers), start=1)
        ]
        return SectionStep(
            step=step,
            section_id=section.id,
            title=section.title,
            description=section.description,
            questions=questions,
            progress=step / len(sections),
            total_sections=len(sections),
            can_advance=self.is_step_complete(step, state.details, state.answers, sections),
            is_last=step == len(sections),
        )

    # ==================================================================
    # State transitions
    # ==================================================================

    def update_details(self, state: SessionState, **fields: Any) -> SessionState:
        """Return a state with some detail fields replaced."""
        unknown = set(fields) - set(UserDetails.model_fields)
        if unknown:
            raise ValueError(f"Unknown detail field(s): {sorted(unknown)}")
        details = state.details.model_copy(update=fields)
        return state.model_copy(update={"details": details})

    def answer(self, state: SessionState, qid: str, value: str) -> SessionState:
        """Record an answer and re-clamp the step.

        Raises:
            ValueError: if the qid or the answer option is unknown.
        """
        if not self._store.has_question(qid):
            raise ValueError(f"Unknown question: {qid}")
        if value not in self._store.answer_options:
            raise ValueError(f"Unknown answer option for {qid}: {value!r}")

        answers = {**state.answers, qid: value}
        updated = state.model_copy(update={"answers": answers})
        return self.clamp_step(updated)

    def advance(self, state: SessionState) -> SessionState:
        return state.model_copy(update={"step": next_step(state.step)})

    def retreat(self, state: SessionState) -> SessionState:
        return state.model_copy(update={"step": previous_step(state.step)})

    def clamp_step(
        self, state: SessionState, visible_sections: list[Section] | None = None
    ) -> SessionState:
        """Clamp the step if visible sections shrank below it."""
        if visible_sections is None:
            visible_sections = self.visible_sections(state.answers)
        clamped = clamp_step_index(state.step, len(visible_sections))
        if clamped == state.step:
            return state
        logger.debug("Clamping step %d -> %d", state.step, clamped)
        return state.model_copy(update={"step": clamped})

    # ==================================================================
    # Submission state machine
    # ==================================================================

    def begin_submission(self, state: SessionState) -> SessionState:
        """Move to ``in_flight``.

        Raises:
            SubmissionInFlightError: if a submission is pending or has
                already succeeded for this session.
        """
        return self._transition(state, SubmissionStatus.IN_FLIGHT, error=None)

    def complete_submission(self, state: SessionState, submission_id: str) -> SessionState:
        return self._transition(
            state, SubmissionStatus.SUCCEEDED, submission_id=submission_id, error=None,
        )

    def fail_submission(self, state: SessionState, message: str) -> SessionState:
        """Record a failure; answers are kept so the user can retry."""
        return self._transition(state, SubmissionStatus.FAILED, error=message)

    def build_request(self, state: SessionState) -> SubmissionRequest:
        """Full payload for the persistence collaborator."""
        return SubmissionRequest.build(state.details, state.answers)

    def _transition(
        self, state: SessionState, target: SubmissionStatus, **update: Any
    ) -> SessionState:
        current = state.submission
        if target not in _SUBMISSION_TRANSITIONS[current]:
            if target == SubmissionStatus.IN_FLIGHT:
                if current == SubmissionStatus.SUCCEEDED:
                    raise SubmissionInFlightError("This assessment has already been submitted.")
                raise SubmissionInFlightError("A submission is already in progress.")
            raise ValueError(
                f"Invalid submission transition: {current.value} -> {target.value}"
            )
        logger.debug("Submission %s -> %s", current.value, target.value)
        return state.model_copy(update={"submission": target, **update})

    # ==================================================================
    # Server-side intake validation
    # ==================================================================

    def validate_submission(self, request: SubmissionRequest) -> None:
        """Check a submitted payload before it is scored and stored.

        Unlike the client-side step checks, only *mandatory* visible
        questions must be answered here.

        Raises:
            InvalidSubmissionError: with a user-facing message.
        """
        details = request.details
        for name in _REQUIRED_DETAILS:
            if not getattr(details, name).strip():
                label = name.replace("_", " ")
                raise InvalidSubmissionError(f"The {label} field is required.")

        for qid, value in request.answers.items():
            if not self._store.has_question(qid):
                raise InvalidSubmissionError(f"Unknown question: {qid}")
            if value not in self._store.answer_options:
                raise InvalidSubmissionError(f"Invalid answer for question {qid}.")

        for section in self.visible_sections(request.answers):
            for q in visible_questions_of(section, request.answers):
                if q.mandatory and q.qid not in request.answers:
                    raise InvalidSubmissionError(
                        f"Please answer every required question (missing: {q.qid})."
                    )
