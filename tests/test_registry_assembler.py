from __future__ import annotations

import pytest

from mfe_registry.registry.assembler import RegistryAssembler, RolloutConfig
from mfe_registry.registry.catalog import RemoteSeed, RemoteVersion, build_catalog, catalog_ids
from mfe_registry.registry.flags import CanaryFlagStore
from mfe_registry.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        accounts_stable_url="https://cdn.example/accounts/1.0.0/remoteEntry.js",
        accounts_canary_url="https://cdn.example/accounts/1.1.0-rc/remoteEntry.js",
    )


@pytest.fixture
def store(settings: Settings) -> CanaryFlagStore:
    return CanaryFlagStore(catalog_ids(build_catalog(settings)))


@pytest.fixture
def assembler(settings: Settings, store: CanaryFlagStore) -> RegistryAssembler:
    return RegistryAssembler(
        catalog=build_catalog(settings), flags=store, platform=settings.platform_name
    )


def test_one_route_per_catalog_entry_in_order(assembler: RegistryAssembler) -> None:
    doc = assembler.build_registry()

    assert doc.platform == "mfe-platform"
    assert [r.id for r in doc.routes] == ["remote-accounts", "remote-billing", "remote-analytics"]
    assert all(r.remote.rollout == RolloutConfig(False, 0) for r in doc.routes)


def test_static_fields_come_from_catalog(assembler: RegistryAssembler) -> None:
    accounts, billing, analytics = assembler.build_registry().routes

    assert accounts.title == "Accounts"
    assert accounts.path == "/accounts"
    assert accounts.remote.scope == "remote_accounts"
    assert accounts.remote.module == "./App"
    assert accounts.remote.stable == RemoteVersion(
        "https://cdn.example/accounts/1.0.0/remoteEntry.js", "1.0.0-stable"
    )
    assert accounts.remote.canary == RemoteVersion(
        "https://cdn.example/accounts/1.1.0-rc/remoteEntry.js", "1.0.0-canary"
    )
    assert set(billing.required_roles) == {"USER", "ADMIN"}
    assert analytics.required_roles == ("ADMIN",)


def test_rollout_reflects_current_flags_on_every_build(
    assembler: RegistryAssembler, store: CanaryFlagStore
) -> None:
    before = assembler.build_registry()
    store.upsert("remote-billing", True, 30)
    after = assembler.build_registry()

    assert before.routes[1].remote.rollout == RolloutConfig(False, 0)
    assert after.routes[1].remote.rollout == RolloutConfig(True, 30)
    assert after.routes[0].remote.rollout == RolloutConfig(False, 0)


def test_list_flags_covers_catalog(assembler: RegistryAssembler) -> None:
    assert [f.remote_id for f in assembler.list_flags()] == list(assembler.catalog_ids())


def test_seed_requires_a_role() -> None:
    version = RemoteVersion("http://x/remoteEntry.js", "1.0.0")
    with pytest.raises(ValueError):
        RemoteSeed("r", "R", "/r", (), "r", "./App", version, version)
