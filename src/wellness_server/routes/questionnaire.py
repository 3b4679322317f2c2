"""Questionnaire definition endpoint — read-only reference data.

Gives presentation clients the answer options and every section with its
questions and visibility conditions, in the camelCase shape the browser
form uses (``triggerIds`` / ``requiredValues``).
"""

from fastapi import APIRouter, Depends

from wellness_engine.questionnaire import QuestionnaireStore

from wellness_server.dependencies import get_store

router = APIRouter(tags=["questionnaire"])


@router.get("/questionnaire")
def get_questionnaire(
    store: QuestionnaireStore = Depends(get_store),
) -> dict:
    """Return ``{answerOptions, sections}`` from the loaded definition."""
    return {
        "answerOptions": list(store.answer_options),
        "sections": [
            {
                "id": section.id,
                "title": section.title,
                "description": section.description,
                "questions": [
                    {
                        "id": q.qid,
                        "text": q.text,
                        "mandatory": q.mandatory,
                        "condition": (
                            {
                                "triggerIds": list(q.condition.trigger_ids),
                                "requiredValues": list(q.condition.required_values),
                            }
                            if q.condition is not None
                            else None
                        ),
                    }
                    for q in section.questions
                ],
            }
            for section in store.sections
        ],
    }
