"""
loyalty_bff.schemas

Client-facing request and response DTOs.

Responsibilities:
- Define the JSON shapes returned to the mobile application (camelCase on the wire).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# DTOs carry no behavior; shape transformations live in `services.mapping`.
