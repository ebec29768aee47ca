"""
mfe_registry.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT signing secret).
- Offer a cached settings instance for the process entrypoint.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration with defaults safe for local dev.

    Every field can be overridden with an `MFE_REGISTRY_<FIELD>` variable;
    list fields (CORS origins) are parsed as JSON.
    """

    model_config = SettingsConfigDict(env_prefix="MFE_REGISTRY_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "app-registry"
    log_level: str = "INFO"
    # Console rendering is easier to read locally; aggregators expect JSON.
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "app-registry"
    jwt_audience: str = "mfe-shell"
    jwt_secret: str = Field(
        default="dev-secret-change-me-to-a-32-byte-value", repr=False, min_length=1
    )
    jwt_expiration_minutes: int = Field(default=60, ge=1)

    # Registry
    platform_name: str = "mfe-platform"
    accounts_stable_url: str = "http://localhost:5174/assets/remoteEntry.js"
    accounts_canary_url: str = "http://localhost:5174/assets/remoteEntry.js"
    billing_stable_url: str = "http://localhost:5175/assets/remoteEntry.js"
    billing_canary_url: str = "http://localhost:5175/assets/remoteEntry.js"
    analytics_stable_url: str = "http://localhost:5176/assets/remoteEntry.js"
    analytics_canary_url: str = "http://localhost:5176/assets/remoteEntry.js"

    # Telemetry
    telemetry_max_events: int = Field(default=500, ge=1)

    # HTTP edge
    cors_allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    # Built shell (index.html + assets). SPA forwarding is disabled when unset.
    spa_static_dir: str | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `create_app` takes Settings explicitly and only `api.__main__` calls `get_settings()`,
# so tests can build several differently configured apps side by side.
