"""Observability – structlog configuration and logger helper."""
from svc_health.observability.logging.factory import JsonLoggerFactory
from svc_health.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
