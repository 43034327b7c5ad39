"""Lifecycle – HealthServer.

Composes the registry, the FastAPI app and the coordinator, and drives
them from a stop event::

    server = HealthServer.from_env()
    await server.add_checker(FuncChecker("simple", lambda: None))
    await server.run(stop_event)
"""
from __future__ import annotations

import asyncio
from typing import Iterable, Mapping

from svc_health.adapters.fastapi import create_health_app
from svc_health.config import EnvSettingsLoader, HealthSettings
from svc_health.kernel.errors import ListenerError
from svc_health.lifecycle.coordinator import LifecycleCoordinator
from svc_health.observability.health import CheckRegistry, Checker
from svc_health.observability.logging import get_logger

__all__ = ["HealthServer"]

logger = get_logger(__name__)


class HealthServer:
    """Supervisor tying readiness to the listener lifecycle."""

    def __init__(
        self,
        settings: HealthSettings | None = None,
        registry: CheckRegistry | None = None,
    ) -> None:
        self.settings = settings or HealthSettings()
        self.registry = registry or CheckRegistry()
        self.app = create_health_app(self.registry)
        self.coordinator = LifecycleCoordinator(
            self.registry,
            self.app,
            host=self.settings.host,
            port=self.settings.debug_port,
            shutdown_timeout=self.settings.shutdown_timeout,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HealthServer":
        return cls(EnvSettingsLoader(environ).load(HealthSettings))

    async def add_checker(self, checker: Checker) -> None:
        await self.registry.add_checker(checker)

    async def add_checkers(self, checkers: Iterable[Checker]) -> None:
        await self.registry.add_checkers(checkers)

    async def run(self, stop: asyncio.Event) -> None:
        """Serve until *stop* is set, then shut down gracefully.

        Readiness turns true only after the listener is up and turns false
        before the listener is asked to stop.

        Raises
        ------
        BindError
            The listener could not start.
        ShutdownTimeoutError
            The listener did not stop in time.
        ListenerError
            The listener exited before *stop* was set.
        """
        logger.info("server.run")
        await self.coordinator.start()
        await self.registry.set_ready(True)

        stop_waiter = asyncio.create_task(stop.wait())
        closed_waiter = asyncio.create_task(self.coordinator.wait_closed())
        try:
            await asyncio.wait({stop_waiter, closed_waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            logger.warning("server.run_cancelled")
            await self.registry.set_ready(False)
            await self.coordinator.shutdown()
            raise
        finally:
            stop_waiter.cancel()
            closed_waiter.cancel()

        listener_exited = not stop.is_set()
        if listener_exited:
            logger.error("server.listener_exited")
        else:
            logger.info("server.stop_requested")

        await self.registry.set_ready(False)
        await self.coordinator.shutdown()

        if listener_exited:
            raise ListenerError("Listener exited without a stop request")
        logger.info("server.stopped")
