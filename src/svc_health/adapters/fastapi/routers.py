"""FastAPI adapter – health router and app factory."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse

from svc_health.adapters.fastapi.endpoint import HealthEndpoint
from svc_health.observability.health import CheckRegistry


def HealthRouter(
    endpoint: HealthEndpoint,
    path: str = "",
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a router serving ``{path}/ready`` and ``{path}/live``.

    Parameters
    ----------
    endpoint:
        The :class:`HealthEndpoint` answering both probes.
    path:
        Optional base path prefix.  Empty by default so the probes sit at
        ``/ready`` and ``/live``.
    tags:
        OpenAPI tags for the generated routes.
    """
    router = APIRouter(tags=tags or ["ops"])

    @router.get(f"{path}/ready")
    async def readiness() -> Any:
        """Readiness probe – 200 with ``{"ready": <bool>}``."""
        return JSONResponse(status_code=200, content=await endpoint.get_readiness())

    @router.get(f"{path}/live", response_class=PlainTextResponse)
    async def liveness() -> Any:
        """Liveness probe – runs every registered checker."""
        result = await endpoint.get_liveness()
        return PlainTextResponse(result.body, status_code=result.status_code)

    return router


def create_health_app(registry: CheckRegistry, path: str = "") -> FastAPI:
    """Build a bare FastAPI app exposing the health router for *registry*."""
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    app.include_router(HealthRouter(HealthEndpoint(registry), path=path))
    return app


__all__ = ["HealthRouter", "create_health_app"]
