"""
mfe_registry.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context (correlation/request/session ids) propagation.
"""

# Package marker.
