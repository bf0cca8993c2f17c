"""
loyalty_bff.schemas.passwords

Password policy DTOs used for client-side hinting.
"""

from __future__ import annotations

from pydantic import Field

from loyalty_bff.schemas.base import ApiModel


class PasswordValidationRulesResponse(ApiModel):
    min_length: int
    max_length: int
    min_lower_case: int
    min_upper_case: int
    min_numbers: int
    min_special_symbols: int
    allowed_special_symbols: str
    allow_white_spaces: bool
    message: str


class PasswordValidationRequest(ApiModel):
    password: str = Field(max_length=1024)


class PasswordValidationResponse(ApiModel):
    is_valid: bool
    message: str | None = None
