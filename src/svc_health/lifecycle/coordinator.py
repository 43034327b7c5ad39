"""Lifecycle – LifecycleCoordinator.

Owns the HTTP listener: binds the socket, runs :class:`uvicorn.Server`
as a background task, and stops it within a bounded timeout.

States::

    CREATED ──start()──▶ LISTENING ──shutdown()──▶ SHUTTING_DOWN ──▶ STOPPED
       │
       └──bind failure──▶ FAILED

``STOPPED`` and ``FAILED`` are terminal.
"""
from __future__ import annotations

import asyncio
import contextlib
import socket
from typing import Any, Iterator

import uvicorn

from svc_health.config.settings.health import DEFAULT_DEBUG_PORT, DEFAULT_SHUTDOWN_TIMEOUT
from svc_health.kernel.errors import BindError, LifecycleError, ShutdownTimeoutError
from svc_health.lifecycle.state import LifecycleState
from svc_health.observability.health import CheckRegistry
from svc_health.observability.logging import get_logger

__all__ = ["LifecycleCoordinator"]

logger = get_logger(__name__)

_STARTUP_POLL_SECONDS = 0.01


class _Listener(uvicorn.Server):
    """uvicorn server that leaves process signals to its owner."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class LifecycleCoordinator:
    """Start/stop state machine around a single uvicorn listener."""

    def __init__(
        self,
        registry: CheckRegistry,
        app: Any,
        host: str = "0.0.0.0",
        port: int = DEFAULT_DEBUG_PORT,
        shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
    ) -> None:
        self._registry = registry
        self._app = app
        self._host = host
        self._port = port
        self._shutdown_timeout = shutdown_timeout
        self._state = LifecycleState.CREATED
        self._socket: socket.socket | None = None
        self._bound_port: int | None = None
        self._server: _Listener | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def listening(self) -> bool:
        return self._state is LifecycleState.LISTENING

    @property
    def shutdown_timeout(self) -> float:
        return self._shutdown_timeout

    def set_shutdown_timeout(self, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError("shutdown timeout must be positive")
        self._shutdown_timeout = seconds

    @property
    def bound_port(self) -> int | None:
        """Actual port once bound; differs from the configured one for port 0."""
        return self._bound_port

    @property
    def socket_closed(self) -> bool:
        return self._socket is None or self._socket.fileno() == -1

    async def start(self) -> None:
        """Bind and start serving; returns once the listener accepts connections.

        Raises
        ------
        BindError
            The socket could not be bound. The coordinator ends up
            ``FAILED`` and readiness is forced to false.
        LifecycleError
            ``start()`` was called outside the ``CREATED`` state.
        """
        if self._state is not LifecycleState.CREATED:
            raise LifecycleError(f"Cannot start listener in state {self._state.value}")

        logger.info("server.starting", host=self._host, port=self._port)
        try:
            sock = self._bind()
        except OSError as exc:
            await self._fail()
            logger.error("server.bind_failed", host=self._host, port=self._port, error=str(exc))
            raise BindError(self._host, self._port, cause=exc) from exc
        self._socket = sock
        self._bound_port = sock.getsockname()[1]

        config = uvicorn.Config(
            self._app,
            log_config=None,
            access_log=False,
            lifespan="off",
        )
        server = _Listener(config)
        task = asyncio.create_task(server.serve(sockets=[sock]), name="health-listener")
        self._server = server
        self._task = task

        while not server.started:
            if task.done():
                self._close_socket()
                await self._fail()
                cause = None if task.cancelled() else task.exception()
                raise BindError(
                    self._host,
                    self._port,
                    "Listener exited during startup",
                    cause=cause,
                )
            await asyncio.sleep(_STARTUP_POLL_SECONDS)

        self._state = LifecycleState.LISTENING
        logger.info("server.listening", host=self._host, port=self.bound_port)

    async def shutdown(self) -> None:
        """Mark not-ready, then stop the listener within ``shutdown_timeout``.

        A call made while another shutdown is in progress waits for the
        same listener to stop, under the same deadline.

        Raises
        ------
        ShutdownTimeoutError
            The listener was still running when the deadline passed. The
            listener task is cancelled and the coordinator is ``STOPPED``,
            but the condition is fatal for the process.
        """
        logger.info("server.shutting_down", timeout=self._shutdown_timeout)
        await self._registry.set_ready(False)

        if self._state is LifecycleState.CREATED:
            self._state = LifecycleState.STOPPED
            return
        if self._state is LifecycleState.SHUTTING_DOWN:
            await self._await_in_progress_shutdown()
            return
        if self._state is not LifecycleState.LISTENING:
            return

        server, task = self._server, self._task
        if server is None or task is None:
            raise LifecycleError("Listener is marked listening but was never started")

        self._state = LifecycleState.SHUTTING_DOWN
        server.should_exit = True
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=self._shutdown_timeout)
        except asyncio.TimeoutError as exc:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            self._close_socket()
            logger.critical("server.shutdown_timeout", timeout=self._shutdown_timeout)
            raise ShutdownTimeoutError(self._shutdown_timeout, cause=exc) from exc
        finally:
            self._state = LifecycleState.STOPPED

        logger.info("server.shutdown_graceful")

    async def wait_closed(self) -> None:
        """Resolve once the listener task has ended, for whatever reason."""
        if self._task is None:
            return
        await asyncio.wait({self._task})

    async def _await_in_progress_shutdown(self) -> None:
        if self._task is None:
            return
        done, _ = await asyncio.wait({self._task}, timeout=self._shutdown_timeout)
        if not done:
            raise ShutdownTimeoutError(self._shutdown_timeout)

    def _bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self._host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self._host, self._port))
        except OSError:
            sock.close()
            raise
        return sock

    def _close_socket(self) -> None:
        if self._socket is not None:
            self._socket.close()

    async def _fail(self) -> None:
        self._state = LifecycleState.FAILED
        await self._registry.set_ready(False)
