"""Settings package exports."""

from .loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_NAME,
    PublishSettings,
    ToolSettings,
    load_settings,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_NAME",
    "PublishSettings",
    "ToolSettings",
    "load_settings",
]
