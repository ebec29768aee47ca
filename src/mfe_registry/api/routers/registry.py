"""
mfe_registry.api.routers.registry

Registry endpoints consumed by the shell and the canary control page.

Responsibilities:
- Serve the public registry document.
- Admin-only views of routes and canary flags, and canary flag updates.
- Static health indicator.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import StrictBool, StrictInt

from mfe_registry.api.deps import flag_store, registry_assembler
from mfe_registry.api.models import CamelModel
from mfe_registry.auth.deps import require_admin
from mfe_registry.auth.models import Claims
from mfe_registry.errors import ValidationError
from mfe_registry.observability.logging import get_logger
from mfe_registry.registry.assembler import RegistryAssembler, RegistryDocument, RouteConfig
from mfe_registry.registry.catalog import RemoteVersion
from mfe_registry.registry.flags import CanaryFlag, CanaryFlagStore

router = APIRouter(prefix="/api/registry", tags=["registry"])

log = get_logger(__name__)


class RemoteVersionModel(CamelModel):
    url: str
    version: str

    @classmethod
    def of(cls, v: RemoteVersion) -> RemoteVersionModel:
        return cls(url=v.url, version=v.version)


class RolloutModel(CamelModel):
    canary_enabled: bool
    canary_percentage: int


class RemoteModel(CamelModel):
    scope: str
    module: str
    stable: RemoteVersionModel
    canary: RemoteVersionModel
    rollout: RolloutModel


class RouteModel(CamelModel):
    id: str
    title: str
    path: str
    required_roles: list[str]
    remote: RemoteModel

    @classmethod
    def of(cls, route: RouteConfig) -> RouteModel:
        remote = route.remote
        return cls(
            id=route.id,
            title=route.title,
            path=route.path,
            required_roles=list(route.required_roles),
            remote=RemoteModel(
                scope=remote.scope,
                module=remote.module,
                stable=RemoteVersionModel.of(remote.stable),
                canary=RemoteVersionModel.of(remote.canary),
                rollout=RolloutModel(
                    canary_enabled=remote.rollout.canary_enabled,
                    canary_percentage=remote.rollout.canary_percentage,
                ),
            ),
        )


class RegistryResponse(CamelModel):
    platform: str
    routes: list[RouteModel]

    @classmethod
    def of(cls, doc: RegistryDocument) -> RegistryResponse:
        return cls(platform=doc.platform, routes=[RouteModel.of(r) for r in doc.routes])


class CanaryFlagResponse(CamelModel):
    remote_id: str
    enabled: bool
    rollout_percentage: int

    @classmethod
    def of(cls, flag: CanaryFlag) -> CanaryFlagResponse:
        return cls(
            remote_id=flag.remote_id,
            enabled=flag.enabled,
            rollout_percentage=flag.rollout_percentage,
        )


class UpdateCanaryFlagRequest(CamelModel):
    # Both are required; presence is checked in the handler so the error is a plain 400.
    # Strict types: `true` is not a percentage and `"yes"` is not a boolean.
    enabled: StrictBool | None = None
    rollout_percentage: StrictInt | None = None


@router.get("", response_model=RegistryResponse)
async def get_registry(
    assembler: RegistryAssembler = Depends(registry_assembler),
) -> RegistryResponse:
    return RegistryResponse.of(assembler.build_registry())


@router.get(
    "/admin/routes",
    response_model=RegistryResponse,
    dependencies=[Depends(require_admin)],
)
async def get_admin_routes(
    assembler: RegistryAssembler = Depends(registry_assembler),
) -> RegistryResponse:
    # Same document as the public endpoint; the admin route exists for authenticated checks.
    return RegistryResponse.of(assembler.build_registry())


@router.get(
    "/admin/canary-flags",
    response_model=list[CanaryFlagResponse],
    dependencies=[Depends(require_admin)],
)
async def list_canary_flags(
    assembler: RegistryAssembler = Depends(registry_assembler),
) -> list[CanaryFlagResponse]:
    return [CanaryFlagResponse.of(f) for f in assembler.list_flags()]


@router.put("/admin/canary-flags/{remote_id}", response_model=CanaryFlagResponse)
async def update_canary_flag(
    remote_id: str,
    body: UpdateCanaryFlagRequest | None = None,
    claims: Claims = Depends(require_admin),
    flags: CanaryFlagStore = Depends(flag_store),
) -> CanaryFlagResponse:
    if body is None or body.enabled is None or body.rollout_percentage is None:
        raise ValidationError("enabled and rolloutPercentage are required")

    updated = flags.upsert(remote_id, body.enabled, body.rollout_percentage)
    log.info(
        "canary_flag_updated",
        remote_id=updated.remote_id,
        enabled=updated.enabled,
        rollout_percentage=updated.rollout_percentage,
        actor=claims.subject,
    )
    return CanaryFlagResponse.of(updated)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "UP"}


# --- Module Notes -----------------------------------------------------------
# The shell reads `GET /api/registry` on boot; rollout values are advisory and the
# client picks stable vs canary itself.
