"""
loyalty_bff.api.routers.passwords

Password policy endpoints used by the registration and change-password screens.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from loyalty_bff.api.deps import password_validator_dep
from loyalty_bff.schemas.passwords import (
    PasswordValidationRequest,
    PasswordValidationResponse,
    PasswordValidationRulesResponse,
)
from loyalty_bff.services.password_validator import PasswordValidator

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("/passwordValidationRules", response_model=PasswordValidationRulesResponse)
async def get_password_validation_rules(
    validator: PasswordValidator = Depends(password_validator_dep),
) -> PasswordValidationRulesResponse:
    return PasswordValidationRulesResponse(
        **validator.rules.model_dump(),
        message=validator.build_validation_message(),
    )


@router.post("/passwordValidation", response_model=PasswordValidationResponse)
async def validate_password(
    body: PasswordValidationRequest,
    validator: PasswordValidator = Depends(password_validator_dep),
) -> PasswordValidationResponse:
    if validator.is_valid_password(body.password):
        return PasswordValidationResponse(is_valid=True)
    return PasswordValidationResponse(
        is_valid=False,
        message=validator.build_validation_message(),
    )
