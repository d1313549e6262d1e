from .logging import (
    LogContext,
    LogModule,
    configure_logging,
    get_context,
    get_logger,
    get_module_logger,
)

__all__ = [
    "LogContext",
    "LogModule",
    "configure_logging",
    "get_context",
    "get_logger",
    "get_module_logger",
]
