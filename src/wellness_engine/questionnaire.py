"""QuestionnaireStore — loads the assessment definition from YAML.

This is the single source of truth for the static definition at runtime.
The store is loaded once at startup and never mutated afterwards.

Usage::

    store = QuestionnaireStore()      # defaults to definitions/questionnaire.yaml
    store.load()                      # parse and validate

    section = store.get_section("mood")
    q = store.get_question("phq_1")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from wellness_engine.constants import ANSWER_OPTIONS
from wellness_engine.models.question import Question, Section, SeverityLevel

logger = logging.getLogger(__name__)

DEFAULT_DEFINITION_PATH = Path(__file__).parent / "definitions" / "questionnaire.yaml"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class QuestionnaireStore:
    """Loads sections, questions and severity levels and provides lookup.

    Attributes populated after :meth:`load`:

        answer_options   — list[str], least to most severe
        severity_levels  — list[SeverityLevel], ascending ``min_percent``
        sections         — list[Section] in presentation order
    """

    def __init__(self, definition_path: str | Path | None = None) -> None:
        self._path = Path(definition_path) if definition_path else DEFAULT_DEFINITION_PATH

        # Populated by load()
        self.answer_options: list[str] = []
        self.severity_levels: list[SeverityLevel] = []
        self.sections: list[Section] = []

        self._questions: dict[str, Question] = {}
        self._sections_by_id: dict[str, Section] = {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> QuestionnaireStore:
        """Build a loaded store from an in-memory definition (used by tests)."""
        store = cls()
        store._parse(raw)
        return store

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse and validate the definition file.

        Raises ``FileNotFoundError`` if the file is missing and
        ``ValueError`` if the definition is inconsistent.
        """
        self._parse(load_yaml(self._path))
        logger.info(
            "QuestionnaireStore loaded: %d sections, %d questions, %d severity levels",
            len(self.sections),
            len(self._questions),
            len(self.severity_levels),
        )

    def _parse(self, raw: dict[str, Any]) -> None:
        self.answer_options = list(raw.get("answer_options") or ANSWER_OPTIONS)
        self.severity_levels = sorted(
            (SeverityLevel(**lvl) for lvl in raw.get("severity_levels", [])),
            key=lambda lvl: lvl.min_percent,
        )
        self.sections = [Section(**s) for s in raw.get("sections", [])]

        self._questions = {}
        self._sections_by_id = {}
        for section in self.sections:
            if section.id in self._sections_by_id:
                raise ValueError(f"Duplicate section id '{section.id}'")
            self._sections_by_id[section.id] = section
            for q in section.questions:
                self._check_question(q)
                self._questions[q.qid] = q

        if not self.severity_levels:
            raise ValueError("At least one severity level is required")
        if self.severity_levels[0].min_percent > 0:
            raise ValueError("The lowest severity level must start at 0 percent")

    def _check_question(self, q: Question) -> None:
        """Validate a question against everything defined before it.

        Triggers must refer to earlier questions so that a condition can
        only depend on answers the user could already have given.
        """
        if q.qid in self._questions:
            raise ValueError(f"Duplicate question id '{q.qid}'")
        if q.condition is None:
            return
        for trigger in q.condition.trigger_ids:
            if trigger not in self._questions:
                raise ValueError(
                    f"Question '{q.qid}' is conditioned on unknown or later question '{trigger}'"
                )
        for value in q.condition.required_values:
            if value not in self.answer_options:
                raise ValueError(
                    f"Question '{q.qid}' requires unknown answer option '{value}'"
                )

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_question(self, qid: str) -> Question:
        """Look up a question by qid.  Raises ``KeyError`` if unknown."""
        return self._questions[qid]

    def has_question(self, qid: str) -> bool:
        return qid in self._questions

    def get_section(self, section_id: str) -> Section:
        """Look up a section by id.  Raises ``KeyError`` if unknown."""
        return self._sections_by_id[section_id]

    def points_for(self, answer: str) -> int:
        """Points contributed by an answer option (its index)."""
        return self.answer_options.index(answer)

    @property
    def max_points(self) -> int:
        return len(self.answer_options) - 1

    def severity_for(self, percent: float) -> SeverityLevel:
        """Return the highest level whose threshold ``percent`` reaches."""
        matched = self.severity_levels[0]
        for level in self.severity_levels:
            if percent >= level.min_percent:
                matched = level
        return matched
