"""Shared pydantic base for models that cross the HTTP boundary.

The browser client speaks camelCase (``firstName``, ``submissionId``,
``insightsAndSupport``) while Python code uses snake_case attributes.
``WireModel`` accepts either spelling on input and dumps camelCase when
``by_alias=True`` (FastAPI does this for response models by default).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base class for JSON payloads exchanged with the server."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """JSON-ready dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
