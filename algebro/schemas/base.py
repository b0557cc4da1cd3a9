"""Shared Pydantic base for models that travel as camelCase JSON."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """
    Base for models whose JSON form uses camelCase keys.

    Python code uses snake_case attributes; both spellings are accepted on
    input and `model_dump(by_alias=True)` produces the stored/LLM form.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
