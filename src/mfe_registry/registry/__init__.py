"""
mfe_registry.registry

Remote catalog, canary flag state, and registry document assembly.

Responsibilities:
- Static catalog of remotes (`catalog`).
- Concurrent canary flag store (`flags`).
- Registry document builder (`assembler`).
"""

# Package marker.
