"""
loyalty_bff.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, downstream clients and orchestration variants.
- Carry the password policy as an immutable value loaded once at startup.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PasswordValidationRules(BaseModel):
    """
    Password policy thresholds.

    Frozen so the validator can hold a reference without copying.
    """

    model_config = ConfigDict(frozen=True)

    min_length: int = Field(default=8, ge=1)
    max_length: int = Field(default=100, ge=1)
    min_lower_case: int = Field(default=1, ge=0)
    min_upper_case: int = Field(default=1, ge=0)
    min_numbers: int = Field(default=1, ge=0)
    min_special_symbols: int = Field(default=1, ge=0)
    allowed_special_symbols: str = "!@#$%&*?"
    allow_white_spaces: bool = False

    @model_validator(mode="after")
    def _check_bounds(self) -> PasswordValidationRules:
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        return self


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOYALTY_BFF_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "loyalty-bff"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Customer identity (tokens are issued by the auth service)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "loyalty-auth"
    jwt_audience: str = "loyalty-customer-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_leeway_seconds: int = Field(default=30, ge=0)

    # Downstream services
    partner_management_url: str = "http://partner-management:5000"
    smart_vouchers_url: str = "http://smart-vouchers:5000"
    payment_management_url: str = "http://payment-management:5000"
    downstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # Orchestration variants
    campaign_details_require_partner: bool = True
    fold_payment_error_into_no_vouchers: bool = False

    password_rules: PasswordValidationRules = Field(default_factory=PasswordValidationRules)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Nested values are set with a double underscore, e.g.
# LOYALTY_BFF_PASSWORD_RULES__MIN_LENGTH=10.
