"""
Unified logging configuration

Single entry point ``configure_logging(settings)`` for the whole package,
built on the standard library ``logging.config.dictConfig``:
- console output on stderr (stdout carries the stdio JSON-RPC stream)
- optional rotating files when a log directory is configured
- per-module levels
- context fields injected into every record (tool/ticker/request_id)
"""

import contextvars
import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from quiver_mcp.config.settings import LoggingConfig, get_settings

LOGGING_ENABLED_ENV = "QUIVER_MCP_LOGGING_ENABLED"
BASE_LOGGER = "quiver_mcp"


class LogModule:
    """Logger categories

    Usage:
        from quiver_mcp.observability.logging import LogModule, get_module_logger

        logger = get_module_logger(LogModule.TOOLS)
        logger.info("Tool call started")
    """
    UPSTREAM = "upstream"
    TOOLS = "tools"
    TRANSPORT = "transport"
    DEFAULT = "app"


LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


_context_vars = {
    "tool": contextvars.ContextVar("tool", default=None),
    "ticker": contextvars.ContextVar("ticker", default=None),
    "request_id": contextvars.ContextVar("request_id", default=None),
}


class ContextFilter(logging.Filter):
    """Inject tool/ticker/request_id into log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tool = _context_vars["tool"].get() or "-"
        record.ticker = _context_vars["ticker"].get() or "-"
        record.request_id = _context_vars["request_id"].get() or "-"
        return True


def get_context(key: str) -> Optional[Any]:
    if key in _context_vars:
        return _context_vars[key].get()
    return None


class LogContext:
    """Context manager that temporarily sets log context values"""

    def __init__(self, **kwargs):
        self._tokens = {}
        self._kwargs = kwargs

    def __enter__(self):
        for key, value in self._kwargs.items():
            if key in _context_vars:
                self._tokens[key] = _context_vars[key].set(value)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for key, token in self._tokens.items():
            _context_vars[key].reset(token)
        return False


def _build_dict_config(config: LoggingConfig) -> Dict[str, Any]:
    """Build the dictConfig mapping for the given logging settings"""
    date_format = "%Y-%m-%d %H:%M:%S"
    handlers = ["console"]

    dict_config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "context_filter": {
                "()": ContextFilter,
            },
        },
        "formatters": {
            "console": {
                "format": "%(asctime)s | %(name)s | [%(levelname)s] | tool=%(tool)s | %(message)s",
                "datefmt": date_format,
            },
            "context_standard": {
                "format": "%(asctime)s | %(name)s | [%(levelname)s] | tool=%(tool)s | ticker=%(ticker)s | request_id=%(request_id)s | %(filename)s:%(lineno)d | %(funcName)s() | %(message)s",
                "datefmt": date_format,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": config.console_level,
                "formatter": "console",
                "stream": "ext://sys.stderr",
                "filters": ["context_filter"],
            },
        },
        "loggers": {},
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }

    if config.log_dir:
        log_dir = Path(config.log_dir).resolve()
        log_dir.mkdir(parents=True, exist_ok=True)
        dict_config["handlers"]["file_app"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": config.file_level,
            "formatter": "context_standard",
            "filename": str(log_dir / "quiver_mcp.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
            "filters": ["context_filter"],
        }
        dict_config["handlers"]["file_error"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": logging.ERROR,
            "formatter": "context_standard",
            "filename": str(log_dir / "error.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
            "filters": ["context_filter"],
        }
        handlers = ["console", "file_app", "file_error"]
        dict_config["root"]["handlers"] = handlers

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "mcp"):
        dict_config["loggers"][name] = {
            "level": "INFO" if name.startswith("uvicorn") else "WARNING",
            "handlers": handlers,
            "propagate": False,
        }

    dict_config["loggers"][BASE_LOGGER] = {
        "level": config.global_level,
        "handlers": handlers,
        "propagate": False,
    }
    for module, level in config.module_levels.items():
        dict_config["loggers"][f"{BASE_LOGGER}.{module}"] = {
            "level": level,
            "handlers": handlers,
            "propagate": False,
        }

    return dict_config


def configure_logging(
    settings: Optional[LoggingConfig] = None, force: bool = False
) -> None:
    """
    Configure logging for the gateway

    Args:
        settings: logging settings; read from get_settings() when None
        force: reconfigure even if the root logger already has handlers
    """
    if settings is None:
        settings = get_settings().logging

    enabled = os.getenv(LOGGING_ENABLED_ENV, "true").lower() == "true"
    if not enabled:
        return

    if logging.getLogger().handlers and not force:
        return

    try:
        logging.config.dictConfig(_build_dict_config(settings))
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as e:
        sys.stderr.write(f"Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.INFO,
            stream=sys.stderr,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def get_logger(name: str) -> logging.Logger:
    """Return a standard logger, usually called with ``__name__``"""
    return logging.getLogger(name)


def get_module_logger(module: str, level: Optional[str] = None) -> logging.Logger:
    """
    Return the logger for a category, named ``quiver_mcp.{module}``

    Args:
        module: category name, preferably a LogModule constant
        level: optional level override ('DEBUG'/'INFO'/...)
    """
    logger = logging.getLogger(f"{BASE_LOGGER}.{module}")
    if level:
        logger.setLevel(LOG_LEVEL_MAP.get(level.upper(), logging.INFO))
    return logger
