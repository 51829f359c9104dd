"""
Common base for API payload models.
"""
from pydantic import BaseModel, ConfigDict


class CentralModel(BaseModel):
    """
    Base class for Central payloads.

    Attributes use snake_case names with the API's camelCase keys as aliases.
    All optional fields default to None and are only sent when they were
    explicitly assigned, so a model built with a single field produces a
    partial update.
    """

    model_config = ConfigDict(populate_by_name=True)
