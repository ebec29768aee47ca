"""
mfe_registry.auth

Authentication/authorization package.

Responsibilities:
- Token service (JWT issue/validate).
- Authorization guard over raw bearer headers.
- FastAPI role-gate dependencies.
"""

# Package marker.
