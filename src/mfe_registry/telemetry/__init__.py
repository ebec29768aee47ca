"""
mfe_registry.telemetry

Client telemetry collection.

Responsibilities:
- Bounded in-memory event buffer (`buffer`).
- Record construction from HTTP submissions (`ingest`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Retention is count-bounded only; there is no time-based expiry and nothing survives a restart.
