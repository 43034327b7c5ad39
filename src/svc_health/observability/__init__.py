"""Observability – structured logging and health checks."""

from svc_health.observability.health import CheckRegistry, Checker, CheckResult, FuncChecker
from svc_health.observability.logging import JsonLoggerFactory, get_logger

__all__ = [
    "CheckRegistry",
    "CheckResult",
    "Checker",
    "FuncChecker",
    "JsonLoggerFactory",
    "get_logger",
]
