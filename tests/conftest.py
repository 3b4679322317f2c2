import pytest

from wellness_engine.engine import AssessmentEngine
from wellness_engine.questionnaire import QuestionnaireStore

from helpers.definitions import MINI_DEFINITION


@pytest.fixture(scope="session")
def store():
    """The bundled questionnaire definition, loaded once."""
    s = QuestionnaireStore()
    s.load()
    return s


@pytest.fixture
def engine(store):
    return AssessmentEngine(store)


@pytest.fixture
def mini_store():
    return QuestionnaireStore.from_dict(MINI_DEFINITION)


@pytest.fixture
def mini_engine(mini_store):
    return AssessmentEngine(mini_store)
