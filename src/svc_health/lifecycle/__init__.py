"""Lifecycle – listener start/stop and the supervising server."""
from svc_health.lifecycle.coordinator import LifecycleCoordinator
from svc_health.lifecycle.server import HealthServer
from svc_health.lifecycle.state import LifecycleState

__all__ = ["HealthServer", "LifecycleCoordinator", "LifecycleState"]
