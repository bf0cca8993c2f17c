"""
loyalty_bff.services

Service-layer package.

Responsibilities:
- Orchestrate downstream calls per customer-facing operation.
- Validate passwords against the configured policy.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are pure Python over the client protocols and are tested with in-memory fakes.
