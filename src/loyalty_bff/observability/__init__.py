"""
loyalty_bff.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request id propagation for consistent log enrichment across service hops.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Downstream clients read the bound request id from here; see `clients.transport`.
