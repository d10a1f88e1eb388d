"""
==============================================================================
Common Schemas Module
==============================================================================

Shared schema building blocks used across all API endpoints.

- CamelModel: base model exchanging camelCase JSON keys
- Money: Decimal rendered as a JSON number
- SuccessResponse: ``{"success": true}``

==============================================================================
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base schema using camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = Field(default=True)
