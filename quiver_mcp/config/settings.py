"""
Unified configuration management

Typed dataclass settings populated from environment variables (and a
``.env`` file when present). Naming convention: ``QUIVER_{KEY}`` for the
upstream API, ``QUIVER_MCP_{KEY}`` for the gateway itself.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from quiver_mcp import SERVER_NAME, __version__
from quiver_mcp.utils.exceptions import ConfigException

load_dotenv()


@dataclass
class QuiverAPIConfig:
    """Upstream QuiverQuant API configuration"""
    base_url: str = "https://api.quiverquant.com"
    api_token: str = ""
    timeout: float = 30.0  # seconds, per request
    user_agent: str = f"QuiverMCP/{__version__}"

    def __post_init__(self):
        self.base_url = os.getenv("QUIVER_BASE_URL", self.base_url)
        self.api_token = os.getenv("QUIVER_API_TOKEN", self.api_token)
        self.timeout = float(os.getenv("QUIVER_TIMEOUT", str(self.timeout)))


@dataclass
class ServerConfig:
    """Gateway server configuration"""
    name: str = SERVER_NAME
    version: str = __version__
    transport: str = "stdio"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origin: str = "*"

    def __post_init__(self):
        self.transport = os.getenv("QUIVER_MCP_TRANSPORT", self.transport).lower()
        self.host = os.getenv("QUIVER_MCP_HOST", self.host)
        self.cors_origin = os.getenv("QUIVER_MCP_CORS_ORIGIN", self.cors_origin)
        raw_port = os.getenv("QUIVER_MCP_PORT", os.getenv("PORT", str(self.port)))
        try:
            self.port = int(raw_port)
        except ValueError as e:
            raise ConfigException(f"Invalid port: {raw_port!r}", {"port": raw_port}) from e


@dataclass
class LoggingConfig:
    """Logging configuration"""
    global_level: str = "INFO"
    console_level: str = "INFO"
    file_level: str = "DEBUG"
    # File logging is off unless a directory is configured.
    log_dir: Optional[str] = None

    module_levels: Dict[str, str] = field(default_factory=lambda: {
        "upstream": "INFO",
        "tools": "INFO",
        "transport": "INFO",
    })

    def __post_init__(self):
        self.global_level = os.getenv("QUIVER_MCP_LOG_LEVEL", os.getenv("LOG_LEVEL", self.global_level)).upper()
        self.console_level = os.getenv("QUIVER_MCP_CONSOLE_LOG_LEVEL", self.global_level).upper()
        self.file_level = os.getenv("QUIVER_MCP_FILE_LOG_LEVEL", self.file_level).upper()
        self.log_dir = os.getenv("QUIVER_MCP_LOG_DIR", self.log_dir or "") or None
        for module in list(self.module_levels):
            level = os.getenv(f"QUIVER_MCP_LOG_{module.upper()}")
            if level:
                self.module_levels[module] = level.upper()


@dataclass
class Settings:
    """
    Unified settings

    Sub-configurations read their own environment overrides on construction.
    """
    quiver: QuiverAPIConfig = field(default_factory=QuiverAPIConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Raise ConfigException when the gateway cannot talk to the upstream API."""
        if not self.quiver.api_token:
            raise ConfigException("QUIVER_API_TOKEN environment variable is required")
        if self.server.transport not in ("stdio", "http"):
            raise ConfigException(
                f"Unsupported transport: {self.server.transport}",
                {"transport": self.server.transport},
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view with the token redacted."""
        return {
            "quiver": {
                "base_url": self.quiver.base_url,
                "api_token_set": bool(self.quiver.api_token),
                "timeout": self.quiver.timeout,
            },
            "server": {
                "name": self.server.name,
                "version": self.server.version,
                "transport": self.server.transport,
                "host": self.server.host,
                "port": self.server.port,
                "cors_origin": self.server.cors_origin,
            },
            "logging": {
                "global_level": self.logging.global_level,
                "console_level": self.logging.console_level,
                "file_level": self.logging.file_level,
                "log_dir": self.logging.log_dir,
                "module_levels": self.logging.module_levels,
            },
        }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the process-wide settings instance (None resets it)"""
    global _settings
    _settings = settings
