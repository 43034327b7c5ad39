"""Process entry point: ``python -m svc_health`` or ``svc-health``.

Loads :class:`HealthSettings` from the environment, configures logging,
registers a trivially-passing ``simple`` checker and serves until SIGINT.
Exits 1 on bind failure, shutdown timeout or bad configuration.
"""
from __future__ import annotations

import asyncio
import logging
import signal
import sys

from svc_health.config import ConfigError, EnvSettingsLoader, HealthSettings
from svc_health.kernel.errors import LifecycleError
from svc_health.lifecycle import HealthServer
from svc_health.observability.health import FuncChecker
from svc_health.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger("svc_health")


async def serve(settings: HealthSettings) -> None:
    server = HealthServer(settings)
    await server.add_checker(FuncChecker("simple", lambda: None))

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, stop.set)
    try:
        await server.run(stop)
    finally:
        loop.remove_signal_handler(signal.SIGINT)


def main() -> int:
    try:
        settings = EnvSettingsLoader().load(HealthSettings)
    except ConfigError as exc:
        JsonLoggerFactory.configure(logging.INFO)
        logger.critical("service.config_invalid", code=exc.code, error=exc.message)
        return 1

    JsonLoggerFactory.configure(settings.log_level_value, json=settings.log_json)
    logger.info("service.starting", port=settings.debug_port)
    try:
        asyncio.run(serve(settings))
    except LifecycleError as exc:
        logger.critical("service.fatal", code=exc.code, error=exc.message)
        return 1
    logger.info("service.stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
