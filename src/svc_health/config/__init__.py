"""Config – 12-factor settings for the health listener."""

from svc_health.config.settings import (
    EnvSettingsLoader,
    HealthSettings,
    Settings,
    SettingsLoader,
    parse_duration,
)
from svc_health.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "HealthSettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "parse_duration",
]
