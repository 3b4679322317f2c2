"""Visibility rule tests — conditions, question and section visibility.

Conditions OR their triggers: a question is shown when ANY trigger's
current answer is one of the required values.  Sections are shown iff at
least one of their questions is.
"""

import pytest
from pydantic import ValidationError

from wellness_engine.models.question import Condition, Question, Section
from wellness_engine.visibility import (
    compute_visible_sections,
    is_condition_satisfied,
    is_question_visible,
    is_section_visible,
    relevant_answers,
    visible_questions_of,
)

HIGH = ["More than half the days", "Nearly every day"]


def _q(qid, triggers=None, values=None, mandatory=True):
    condition = None
    if triggers:
        condition = Condition(trigger_ids=triggers, required_values=values or HIGH)
    return Question(qid=qid, text=f"Question {qid}", mandatory=mandatory, condition=condition)


def _section(sid, *questions):
    return Section(id=sid, title=sid.title(), questions=list(questions))


# =====================================================================
# Conditions
# =====================================================================


class TestCondition:
    def test_single_trigger_match(self):
        cond = Condition(trigger_ids=["a"], required_values=HIGH)
        assert is_condition_satisfied(cond, {"a": "Nearly every day"})

    def test_single_trigger_no_match(self):
        cond = Condition(trigger_ids=["a"], required_values=HIGH)
        assert not is_condition_satisfied(cond, {"a": "Several days"})

    def test_unanswered_trigger_never_matches(self):
        cond = Condition(trigger_ids=["a"], required_values=HIGH)
        assert not is_condition_satisfied(cond, {})

    def test_any_trigger_is_enough(self):
        cond = Condition(trigger_ids=["a", "b"], required_values=HIGH)
        answers = {"a": "Not at all", "b": "More than half the days"}
        assert is_condition_satisfied(cond, answers), (
            "One matching trigger should satisfy the condition"
        )

    def test_no_trigger_matches(self):
        cond = Condition(trigger_ids=["a", "b"], required_values=HIGH)
        answers = {"a": "Not at all", "b": "Several days"}
        assert not is_condition_satisfied(cond, answers)

    def test_empty_triggers_rejected(self):
        with pytest.raises(ValidationError):
            Condition(trigger_ids=[], required_values=HIGH)

    def test_empty_required_values_rejected(self):
        with pytest.raises(ValidationError):
            Condition(trigger_ids=["a"], required_values=[])


# =====================================================================
# Questions and sections
# =====================================================================


class TestQuestionVisibility:
    def test_unconditional_always_visible(self):
        assert is_question_visible(_q("a"), {})

    def test_conditional_follows_condition(self):
        q = _q("b", triggers=["a"])
        assert not is_question_visible(q, {"a": "Not at all"})
        assert is_question_visible(q, {"a": "Nearly every day"})

    def test_visible_questions_of_none(self):
        assert visible_questions_of(None, {"a": "Nearly every day"}) == []

    def test_visible_questions_preserve_order(self):
        section = _section(
            "s",
            _q("a"),
            _q("b", triggers=["x"]),
            _q("c"),
            _q("d", triggers=["x"]),
        )
        visible = visible_questions_of(section, {"x": "Nearly every day"})
        assert [q.qid for q in visible] == ["a", "b", "c", "d"]

        visible = visible_questions_of(section, {"x": "Several days"})
        assert [q.qid for q in visible] == ["a", "c"]


class TestSectionVisibility:
    def test_section_hidden_when_all_questions_hidden(self):
        section = _section("s", _q("b", triggers=["a"]), _q("c", triggers=["a"]))
        assert not is_section_visible(section, {})

    def test_section_visible_when_one_question_visible(self):
        section = _section("s", _q("b", triggers=["a"]), _q("c", triggers=["z"]))
        assert is_section_visible(section, {"z": "Nearly every day"})

    def test_compute_visible_sections_order(self):
        s1 = _section("one", _q("a"))
        s2 = _section("two", _q("b", triggers=["a"]))
        s3 = _section("three", _q("c"))

        hidden = compute_visible_sections([s1, s2, s3], {"a": "Not at all"})
        assert [s.id for s in hidden] == ["one", "three"]

        shown = compute_visible_sections([s1, s2, s3], {"a": "Nearly every day"})
        assert [s.id for s in shown] == ["one", "two", "three"]

    def test_section_and_question_predicates_agree(self):
        """A visible section always has at least one visible question."""
        sections = [
            _section("one", _q("a")),
            _section("two", _q("b", triggers=["a"]), _q("c", triggers=["a"], values=["Several days"])),
        ]
        for value in ["Not at all", "Several days", "More than half the days", "Nearly every day"]:
            answers = {"a": value}
            for section in compute_visible_sections(sections, answers):
                assert visible_questions_of(section, answers), (
                    f"Section {section.id} visible with no visible questions for {value!r}"
                )


class TestRelevantAnswers:
    def test_hidden_answers_dropped(self):
        sections = [_section("one", _q("a")), _section("two", _q("b", triggers=["a"]))]
        answers = {"a": "Not at all", "b": "Nearly every day"}
        assert relevant_answers(sections, answers) == {"a": "Not at all"}

    def test_visible_answers_kept(self):
        sections = [_section("one", _q("a")), _section("two", _q("b", triggers=["a"]))]
        answers = {"a": "Nearly every day", "b": "Several days"}
        assert relevant_answers(sections, answers) == answers
