"""
loyalty_bff.auth

Customer identity package.

Responsibilities:
- JWT helpers and validation.
- FastAPI dependency resolving the calling customer from the bearer token.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Tokens are issued by the customer auth service; this package only reads them.
