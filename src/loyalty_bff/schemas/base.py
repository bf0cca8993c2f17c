"""
loyalty_bff.schemas.base

Shared base model and field types for client-facing DTOs.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Mobile clients parse prices as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationRequest(ApiModel):
    current_page: int = Field(ge=1, le=10000)
    page_size: int = Field(ge=1, le=500)


# --- Module Notes -----------------------------------------------------------
# `Money` goes through float on the wire, so a price beyond ~15 significant digits
# is rounded. Downstream prices carry two decimals, well inside that range.
