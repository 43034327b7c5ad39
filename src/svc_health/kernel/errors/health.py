"""Health errors — failed probes and listener lifecycle failures."""

from __future__ import annotations

from typing import Any

from svc_health.kernel.errors.base import BaseError


class HealthError(BaseError):
    """Base class for everything raised by the health subsystem."""

    default_code = "health_error"


class CheckFailedError(HealthError):
    """A named checker reported failure.

    Recoverable: the liveness endpoint turns it into a 500 response and
    the registry stays usable for the next call.
    """

    default_code = "check_failed"

    def __init__(self, checker_name: str, reason: str | None = None, **kwargs: Any) -> None:
        reason = reason or "check failed"
        super().__init__(
            f"{checker_name}: {reason}",
            detail={"checker": checker_name, "reason": reason},
            **kwargs,
        )
        self.checker_name = checker_name
        self.reason = reason


class LifecycleError(HealthError):
    """The listener lifecycle was driven through an invalid transition."""

    default_code = "lifecycle_error"


class BindError(LifecycleError):
    """The listener could not bind its socket. Fatal."""

    default_code = "bind_failed"

    def __init__(self, host: str, port: int, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"Could not bind listener to {host}:{port}",
            detail={"host": host, "port": port},
            **kwargs,
        )
        self.host = host
        self.port = port


class ShutdownTimeoutError(LifecycleError):
    """The listener did not stop within the shutdown deadline. Fatal."""

    default_code = "shutdown_timeout"

    def __init__(self, timeout: float, **kwargs: Any) -> None:
        super().__init__(
            f"Listener did not stop within {timeout}s",
            detail={"timeout_seconds": timeout},
            **kwargs,
        )
        self.timeout = timeout


class ListenerError(LifecycleError):
    """The listener exited without being asked to stop."""

    default_code = "listener_exited"


__all__ = [
    "BindError",
    "CheckFailedError",
    "HealthError",
    "LifecycleError",
    "ListenerError",
    "ShutdownTimeoutError",
]
