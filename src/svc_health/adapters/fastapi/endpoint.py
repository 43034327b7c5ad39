"""FastAPI adapter – HealthEndpoint.

Framework-free query operations over a :class:`CheckRegistry`; the router
only maps them to HTTP responses.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from svc_health.kernel.errors import CheckFailedError
from svc_health.observability.health import CheckRegistry

__all__ = ["HealthEndpoint", "LivenessResult"]


@dataclass(frozen=True)
class LivenessResult:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class HealthEndpoint:
    """Exposes registry state as readiness and liveness answers."""

    def __init__(self, registry: CheckRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    async def get_readiness(self) -> dict[str, Any]:
        """Always answered with 200; the flag is the payload."""
        return {"ready": await self._registry.is_ready()}

    async def get_liveness(self) -> LivenessResult:
        """Run every checker; 500 with the first failure's message."""
        try:
            await self._registry.run_all_checks()
        except CheckFailedError as exc:
            return LivenessResult(status_code=500, body=exc.message)
        return LivenessResult(status_code=200, body="ok")
