"""Config settings – env-based configuration."""
from svc_health.config.settings.base import Settings
from svc_health.config.settings.health import HealthSettings
from svc_health.config.settings.loaders import EnvSettingsLoader, SettingsLoader, parse_duration

__all__ = ["EnvSettingsLoader", "HealthSettings", "Settings", "SettingsLoader", "parse_duration"]
