"""
mfe_registry.auth.models

Auth domain models.

Responsibilities:
- Define the verified identity type (`Claims`) handed to guarded endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Verified identity and role payload carried by a credential.
    """

    subject: str
    roles: frozenset[str]
    issued_at: datetime
    expires_at: datetime

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


# --- Module Notes -----------------------------------------------------------
# Role names are upper-case on the wire; the shell's route guards compare them verbatim.
