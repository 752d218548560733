"""Cosmetic dashboard settings and their cache."""

from .cache import SettingsCache, load_settings_file
from .models import ACCENT_PRESETS, BackgroundGradient, DashboardSettings, client_settings, dashboard_config

__all__ = [
    "ACCENT_PRESETS",
    "BackgroundGradient",
    "DashboardSettings",
    "SettingsCache",
    "client_settings",
    "dashboard_config",
    "load_settings_file",
]
