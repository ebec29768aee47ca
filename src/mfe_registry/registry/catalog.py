"""
mfe_registry.registry.catalog

Static catalog of micro-frontend remotes.

Responsibilities:
- Define the immutable `RemoteSeed` descriptor.
- Build the process-lifetime catalog from settings (remote entry URLs).
"""

from __future__ import annotations

from dataclasses import dataclass

from mfe_registry.auth.models import ADMIN_ROLE, USER_ROLE
from mfe_registry.settings import Settings

REMOTE_MODULE = "./App"
STABLE_VERSION = "1.0.0-stable"
CANARY_VERSION = "1.0.0-canary"


@dataclass(frozen=True, slots=True)
class RemoteVersion:
    url: str
    version: str


@dataclass(frozen=True, slots=True)
class RemoteSeed:
    id: str
    title: str
    path: str
    # Any one of these grants access; evaluated by the shell, not here.
    required_roles: tuple[str, ...]
    scope: str
    module: str
    stable: RemoteVersion
    canary: RemoteVersion

    def __post_init__(self) -> None:
        if not self.required_roles:
            raise ValueError(f"remote {self.id!r} must require at least one role")


Catalog = tuple[RemoteSeed, ...]


def build_catalog(settings: Settings) -> Catalog:
    return (
        RemoteSeed(
            id="remote-accounts",
            title="Accounts",
            path="/accounts",
            required_roles=(USER_ROLE, ADMIN_ROLE),
            scope="remote_accounts",
            module=REMOTE_MODULE,
            stable=RemoteVersion(settings.accounts_stable_url, STABLE_VERSION),
            canary=RemoteVersion(settings.accounts_canary_url, CANARY_VERSION),
        ),
        RemoteSeed(
            id="remote-billing",
            title="Billing",
            path="/billing",
            required_roles=(USER_ROLE, ADMIN_ROLE),
            scope="remote_billing",
            module=REMOTE_MODULE,
            stable=RemoteVersion(settings.billing_stable_url, STABLE_VERSION),
            canary=RemoteVersion(settings.billing_canary_url, CANARY_VERSION),
        ),
        RemoteSeed(
            id="remote-analytics",
            title="Analytics",
            path="/analytics",
            required_roles=(ADMIN_ROLE,),
            scope="remote_analytics",
            module=REMOTE_MODULE,
            stable=RemoteVersion(settings.analytics_stable_url, STABLE_VERSION),
            canary=RemoteVersion(settings.analytics_canary_url, CANARY_VERSION),
        ),
    )


def catalog_ids(catalog: Catalog) -> tuple[str, ...]:
    return tuple(seed.id for seed in catalog)
