"""
mfe_registry.api

HTTP layer for the app registry.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and camelCase request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request parsing + guard dependencies + delegation to the
# registry/telemetry components.
