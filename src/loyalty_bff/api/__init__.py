"""
loyalty_bff.api

API package for the loyalty customer BFF.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + identity + delegation to services.
