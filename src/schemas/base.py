"""Shared schema base.

The API speaks camelCase JSON (``createdAt``, ``documentType``) while the
Python side keeps snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
