"""
mfe_registry.api.routers

Route modules: auth (login), registry, telemetry, SPA forwarding.
"""

# Package marker.
