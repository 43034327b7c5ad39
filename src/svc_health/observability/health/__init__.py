"""Observability – Health Checks."""
from svc_health.observability.health.builtin import FuncChecker, HttpEndpointChecker
from svc_health.observability.health.check import Checker, CheckResult
from svc_health.observability.health.registry import CheckRegistry

__all__ = [
    "CheckRegistry",
    "CheckResult",
    "Checker",
    "FuncChecker",
    "HttpEndpointChecker",
]
