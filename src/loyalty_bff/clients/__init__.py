"""
loyalty_bff.clients

Downstream service client package.

Responsibilities:
- Provide protocol interfaces and httpx implementations for partner management,
  smart vouchers and payment management.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on `clients.protocols` only, never on httpx directly.
