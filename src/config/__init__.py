"""
Configuration package for fancymark

Provides application settings and rendering presets via pydantic-settings.
"""

from .settings import (
    appsettings,
    AppSettings,
    RenderingSettings,
    StyleOptions,
    SettingsError,
    PRESETS,
    presets_listAvailable,
    renderingSettings_resolve,
)

__all__ = [
    "appsettings",
    "AppSettings",
    "RenderingSettings",
    "StyleOptions",
    "SettingsError",
    "PRESETS",
    "presets_listAvailable",
    "renderingSettings_resolve",
]
