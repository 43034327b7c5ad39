"""FastAPI adapter – readiness/liveness endpoint and router."""
from svc_health.adapters.fastapi.endpoint import HealthEndpoint, LivenessResult
from svc_health.adapters.fastapi.routers import HealthRouter, create_health_app

__all__ = ["HealthEndpoint", "HealthRouter", "LivenessResult", "create_health_app"]
