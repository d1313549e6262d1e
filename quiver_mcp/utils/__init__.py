from .exceptions import (
    BaseAppException,
    ConfigException,
    ToolValidationError,
    UnknownIdentifierError,
)

__all__ = [
    "BaseAppException",
    "ConfigException",
    "ToolValidationError",
    "UnknownIdentifierError",
]
