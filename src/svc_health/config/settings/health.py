"""Config settings – HealthSettings."""
from __future__ import annotations

import dataclasses
import logging

from svc_health.config.settings.base import Settings
from svc_health.config.validation import InvalidSettingValueError

DEFAULT_DEBUG_PORT = 8084
DEFAULT_SHUTDOWN_TIMEOUT = 30.0


@dataclasses.dataclass
class HealthSettings(Settings):
    """Settings for the health listener.

    Environment variables: ``DEBUG_PORT``, ``HOST``, ``SHUTDOWN_TIMEOUT``,
    ``LOG_LEVEL`` and ``LOG_JSON``.
    """

    debug_port: int = DEFAULT_DEBUG_PORT
    host: str = "0.0.0.0"
    shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if not 0 <= self.debug_port <= 65535:
            raise InvalidSettingValueError("debug_port", self.debug_port, "must be within 0..65535")
        if self.shutdown_timeout <= 0:
            raise InvalidSettingValueError(
                "shutdown_timeout", self.shutdown_timeout, "must be positive"
            )

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


__all__ = ["DEFAULT_DEBUG_PORT", "DEFAULT_SHUTDOWN_TIMEOUT", "HealthSettings"]
