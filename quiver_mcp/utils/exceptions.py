"""
Unified Exception Hierarchy for the Quiver MCP Gateway

Upstream API failures are never raised: they travel as data inside
``APIResponse``. Exceptions are reserved for problems detected locally
and are converted to transport errors by the dispatch layer only.
"""

from typing import Any, Dict, Optional


class BaseAppException(Exception):
    """Base exception for all application-specific errors"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigException(BaseAppException):
    """Configuration errors (missing API token, invalid port)"""
    pass


class ToolValidationError(BaseAppException):
    """Invalid tool or prompt arguments, raised before any upstream call"""
    pass


class UnknownIdentifierError(BaseAppException):
    """Unknown tool, prompt, resource or JSON-RPC method"""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"Unknown {kind}: {identifier}", {"kind": kind, "identifier": identifier})
        self.kind = kind
        self.identifier = identifier
