"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── HealthError            (health.py)
    │   ├── CheckFailedError
    │   └── LifecycleError
    │       ├── BindError
    │       ├── ShutdownTimeoutError
    │       └── ListenerError
    └── ConfigError            (svc_health.config.validation)
"""

from svc_health.kernel.errors.base import BaseError
from svc_health.kernel.errors.health import (
    BindError,
    CheckFailedError,
    HealthError,
    LifecycleError,
    ListenerError,
    ShutdownTimeoutError,
)

__all__ = [
    "BaseError",
    "BindError",
    "CheckFailedError",
    "HealthError",
    "LifecycleError",
    "ListenerError",
    "ShutdownTimeoutError",
]
