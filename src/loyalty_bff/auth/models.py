"""
loyalty_bff.auth.models

The authenticated customer resolved from a bearer token.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Customer:
    # Also the seller identity when a partner employee redeems a voucher.
    customer_id: uuid.UUID
