"""Questionnaire definition models.

The definition is static: sections and questions are parsed once from
YAML by :class:`~wellness_engine.questionnaire.QuestionnaireStore` and never
mutated afterwards.  Visibility is derived from these models plus the
current answers (see :mod:`wellness_engine.visibility`), never stored on
them.

  - Condition: gate a question on prior answers (ANY trigger matches)
  - Question: one prompt answered with a severity option
  - Section: an ordered group of questions shown as one step
  - SeverityLevel: score band used when building a report
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Condition(BaseModel):
    """Visibility rule for a question.

    Satisfied when at least one of ``trigger_ids`` currently holds an answer
    contained in ``required_values``.  Triggers are OR-ed; there is no
    ALL-triggers mode.
    """

    model_config = ConfigDict(frozen=True)

    trigger_ids: List[str]
    required_values: List[str]

    @model_validator(mode="after")
    def _chk(self):
        if not self.trigger_ids:
            raise ValueError("condition needs at least one trigger id")
        if not self.required_values:
            raise ValueError("condition needs at least one required value")
        return self


class Question(BaseModel):
    """A single question answered with one of the severity options."""

    model_config = ConfigDict(frozen=True)

    qid: str
    text: str
    mandatory: bool = True
    condition: Optional[Condition] = None

    @property
    def is_conditional(self) -> bool:
        return self.condition is not None


class Section(BaseModel):
    """Named, ordered group of questions presented together as one step.

    Each section is also one scored domain in the final report.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    questions: List[Question]

    @property
    def qids(self) -> List[str]:
        return [q.qid for q in self.questions]


class SeverityLevel(BaseModel):
    """A score band: applies when ``100 * score / max >= min_percent``.

    ``summary`` and ``insights_and_support`` may reference ``{domain}``,
    which is replaced by the section title.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    min_percent: float
    summary: str
    insights_and_support: str
