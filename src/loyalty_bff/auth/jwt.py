"""
loyalty_bff.auth.jwt

Customer token handling.

Responsibilities:
- Verify customer bearer tokens (signature, issuer, audience, expiry) and resolve the
  customer id they were issued for.
- Mint customer tokens for local development and the test suite.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError

_REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud", "sub"]


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str
    # Tolerated clock skew between the auth service and this one.
    leeway: timedelta = timedelta(seconds=30)


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    issued_at = datetime.now(tz=UTC)
    claims = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(claims, cfg.secret, algorithm=cfg.alg)


def decode_customer_id(*, cfg: JwtConfig, token: str) -> uuid.UUID:
    try:
        claims = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            leeway=cfg.leeway,
            options={"require": _REQUIRED_CLAIMS},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    # Customer tokens carry the customer id as subject.
    try:
        return uuid.UUID(str(claims["sub"]))
    except ValueError as e:
        raise JwtValidationError("token subject is not a customer id") from e


# --- Module Notes -----------------------------------------------------------
# Production tokens come from the auth service; `issue_token` backs
# `api/routers/dev_auth.py` and the tests.
