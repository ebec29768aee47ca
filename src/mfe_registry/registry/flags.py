"""
mfe_registry.registry.flags

In-process canary rollout flag store.

Responsibilities:
- Hold the current `CanaryFlag` per remote id for the process lifetime.
- Validate and publish updates atomically under concurrent readers/writers.
- Fill in the default (disabled, 0%) for remotes that were never updated.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from threading import Lock

from mfe_registry.errors import NotFound, ValidationError

MIN_ROLLOUT_PERCENTAGE = 0
MAX_ROLLOUT_PERCENTAGE = 100


@dataclass(frozen=True, slots=True)
class CanaryFlag:
    remote_id: str
    enabled: bool
    rollout_percentage: int

    @classmethod
    def default(cls, remote_id: str) -> CanaryFlag:
        return cls(remote_id=remote_id, enabled=False, rollout_percentage=0)


class CanaryFlagStore:
    """
    Flags are immutable values; an update swaps the whole value for a key under the
    lock, so a reader sees either the previous flag or the new one, never a mix.
    """

    def __init__(self, known_remote_ids: Iterable[str]) -> None:
        self._known = frozenset(known_remote_ids)
        self._lock = Lock()
        self._flags: dict[str, CanaryFlag] = {}

    def get(self, remote_id: str) -> CanaryFlag:
        with self._lock:
            flag = self._flags.get(remote_id)
        return flag if flag is not None else CanaryFlag.default(remote_id)

    def upsert(self, remote_id: str, enabled: bool, percentage: int) -> CanaryFlag:
        if not MIN_ROLLOUT_PERCENTAGE <= percentage <= MAX_ROLLOUT_PERCENTAGE:
            raise ValidationError(
                f"rolloutPercentage must be between {MIN_ROLLOUT_PERCENTAGE} "
                f"and {MAX_ROLLOUT_PERCENTAGE}"
            )
        if remote_id not in self._known:
            raise NotFound("Unknown remoteId")

        updated = CanaryFlag(remote_id=remote_id, enabled=bool(enabled), rollout_percentage=percentage)
        with self._lock:
            self._flags[remote_id] = updated
        return updated

    def list_all(self, catalog_ids: Iterable[str]) -> list[CanaryFlag]:
        with self._lock:
            current = dict(self._flags)
        return [current.get(rid) or CanaryFlag.default(rid) for rid in catalog_ids]


# --- Module Notes -----------------------------------------------------------
# Rollout percentage is advisory: it is stored and served to clients, which decide
# for themselves whether to load the canary remote.
