"""
mfe_registry.registry.assembler

Builds the registry document served to every shell client.

Responsibilities:
- Merge the static remote catalog with live canary flag state.
- Recompute on every call (no caching, always the latest flag values).
"""

from __future__ import annotations

from dataclasses import dataclass

from mfe_registry.registry.catalog import Catalog, RemoteSeed, RemoteVersion, catalog_ids
from mfe_registry.registry.flags import CanaryFlag, CanaryFlagStore


@dataclass(frozen=True, slots=True)
class RolloutConfig:
    canary_enabled: bool
    canary_percentage: int


@dataclass(frozen=True, slots=True)
class RemoteConfig:
    scope: str
    module: str
    stable: RemoteVersion
    canary: RemoteVersion
    rollout: RolloutConfig


@dataclass(frozen=True, slots=True)
class RouteConfig:
    id: str
    title: str
    path: str
    required_roles: tuple[str, ...]
    remote: RemoteConfig


@dataclass(frozen=True, slots=True)
class RegistryDocument:
    platform: str
    routes: tuple[RouteConfig, ...]


class RegistryAssembler:
    def __init__(self, *, catalog: Catalog, flags: CanaryFlagStore, platform: str) -> None:
        self._catalog = catalog
        self._flags = flags
        self._platform = platform

    def catalog_ids(self) -> tuple[str, ...]:
        return catalog_ids(self._catalog)

    def build_registry(self) -> RegistryDocument:
        # Each remote reads its flag independently; a concurrent update may land between two
        # remotes of the same document.
        routes = tuple(_route(seed, self._flags.get(seed.id)) for seed in self._catalog)
        return RegistryDocument(platform=self._platform, routes=routes)

    def list_flags(self) -> list[CanaryFlag]:
        return self._flags.list_all(self.catalog_ids())


def _route(seed: RemoteSeed, flag: CanaryFlag) -> RouteConfig:
    return RouteConfig(
        id=seed.id,
        title=seed.title,
        path=seed.path,
        required_roles=seed.required_roles,
        remote=RemoteConfig(
            scope=seed.scope,
            module=seed.module,
            stable=seed.stable,
            canary=seed.canary,
            rollout=RolloutConfig(
                canary_enabled=flag.enabled,
                canary_percentage=flag.rollout_percentage,
            ),
        ),
    )
