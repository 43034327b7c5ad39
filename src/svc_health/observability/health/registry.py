"""Observability – CheckRegistry.

Holds the readiness flag and the ordered checker list behind a single
:class:`asyncio.Lock`. Every read and write takes the lock, including the
whole of :meth:`CheckRegistry.run_all_checks`.
"""
from __future__ import annotations

import asyncio
from typing import Iterable

from svc_health.kernel.errors import CheckFailedError
from svc_health.observability.health.check import Checker
from svc_health.observability.logging import get_logger

__all__ = ["CheckRegistry"]

logger = get_logger(__name__)


class CheckRegistry:
    """Readiness flag plus append-only, ordered checkers."""

    def __init__(self) -> None:
        self._ready = False
        self._checkers: list[Checker] = []
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._checkers)

    async def add_checker(self, checker: Checker) -> None:
        logger.debug("checker.added", checker=checker.name)
        async with self._lock:
            self._checkers.append(checker)

    async def add_checkers(self, checkers: Iterable[Checker]) -> None:
        for checker in checkers:
            await self.add_checker(checker)

    async def checker_names(self) -> list[str]:
        async with self._lock:
            return [c.name for c in self._checkers]

    async def set_ready(self, ready: bool) -> None:
        async with self._lock:
            self._ready = ready
            if ready:
                logger.info("server.ready")
            else:
                logger.info("server.not_ready")

    async def is_ready(self) -> bool:
        async with self._lock:
            return self._ready

    async def run_all_checks(self) -> None:
        """Run checkers in insertion order, stopping at the first failure.

        Raises
        ------
        CheckFailedError
            Carrying the failing checker's name and detail.
        """
        async with self._lock:
            for checker in self._checkers:
                result = await checker.timed_check()
                if not result.healthy:
                    logger.error(
                        "checker.failed",
                        checker=checker.name,
                        detail=result.detail,
                        latency_ms=round(result.latency_ms, 2),
                    )
                    raise CheckFailedError(checker.name, result.detail)
            logger.info("checkers.passed", count=len(self._checkers))
