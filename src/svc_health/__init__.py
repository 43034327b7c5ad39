"""
svc_health – readiness/liveness health subsystem.

Import path convention::

    from svc_health.observability.health import CheckRegistry, FuncChecker
    from svc_health.adapters.fastapi import create_health_app
    from svc_health.lifecycle import HealthServer, LifecycleCoordinator
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
