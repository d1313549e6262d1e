from .settings import (
    LoggingConfig,
    QuiverAPIConfig,
    ServerConfig,
    Settings,
    get_settings,
    set_settings,
)

__all__ = [
    "LoggingConfig",
    "QuiverAPIConfig",
    "ServerConfig",
    "Settings",
    "get_settings",
    "set_settings",
]
