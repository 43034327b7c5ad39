from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = ["CheckResult", "Checker"]


@dataclass
class CheckResult:
    healthy: bool
    detail: str | None = None
    latency_ms: float = 0.0


class Checker(ABC):
    """A named probe. Implementations must be fast and idempotent."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def check(self) -> CheckResult: ...

    async def timed_check(self) -> CheckResult:
        """Run :meth:`check`; an exception becomes an unhealthy result."""
        start = time.monotonic()
        try:
            result = await self.check()
        except Exception as exc:  # noqa: BLE001
            result = CheckResult(healthy=False, detail=str(exc) or type(exc).__name__)
        result.latency_ms = (time.monotonic() - start) * 1000
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
