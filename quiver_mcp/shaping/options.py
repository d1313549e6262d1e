"""
Shaping options - the caller-facing contract of the response shaper

Two field lists are kept apart on purpose: ``requested_fields`` comes from
the caller and is the only list that ever projects data, while
``default_fields`` belongs to the tool and is descriptive only. The same
split applies to ``limit`` (caller, produces pagination metadata) and
``default_limit`` (tool, truncates silently).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from quiver_mcp.utils.exceptions import ToolValidationError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50

SHAPING_ARGUMENT_NAMES = ("mode", "format", "fields", "page", "page_size", "limit")


class ResponseMode(str, Enum):
    """Information density of a JSON response"""
    COMPACT = "compact"
    SUMMARY = "summary"
    DETAILED = "detailed"


class OutputFormat(str, Enum):
    """Serialization syntax, orthogonal to mode"""
    JSON = "json"
    TABLE = "table"
    CSV = "csv"


@dataclass(frozen=True)
class ToolDefaults:
    """Per-tool shaping defaults"""
    mode: ResponseMode = ResponseMode.DETAILED
    format: OutputFormat = OutputFormat.JSON
    limit: Optional[int] = None
    fields: Tuple[str, ...] = ()


class ShapingArguments(BaseModel):
    """Lenient parser for the common argument surface; unknown keys are ignored"""

    model_config = ConfigDict(extra="ignore")

    mode: Optional[ResponseMode] = None
    format: Optional[OutputFormat] = None
    fields: Optional[List[str]] = None
    page: Optional[int] = None
    page_size: Optional[int] = None
    limit: Optional[int] = None

    @field_validator("fields", mode="before")
    @classmethod
    def _split_fields(cls, value: Any) -> Any:
        # "ticker, amount" is accepted as shorthand for ["ticker", "amount"]
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


@dataclass(frozen=True)
class ShapingOptions:
    """Immutable options for one shaping pass"""
    mode: ResponseMode = ResponseMode.DETAILED
    format: OutputFormat = OutputFormat.JSON
    requested_fields: Optional[Tuple[str, ...]] = None
    default_fields: Tuple[str, ...] = ()
    page: Optional[int] = None
    page_size: Optional[int] = None
    limit: Optional[int] = None
    default_limit: Optional[int] = None

    def __post_init__(self):
        # Coerce plain strings/lists so direct construction stays convenient.
        object.__setattr__(self, "mode", ResponseMode(self.mode))
        object.__setattr__(self, "format", OutputFormat(self.format))
        if self.requested_fields is not None:
            fields = tuple(self.requested_fields)
            object.__setattr__(self, "requested_fields", fields or None)
        object.__setattr__(self, "default_fields", tuple(self.default_fields))

    @property
    def effective_limit(self) -> Optional[int]:
        return self.limit if self.limit is not None else self.default_limit

    @property
    def paginates(self) -> bool:
        """Pagination metadata is produced only for caller-supplied page/page_size/limit."""
        return self.page is not None or self.page_size is not None or self.limit is not None

    @property
    def fields_included(self) -> List[str]:
        return list(self.requested_fields) if self.requested_fields else ["all"]

    def without_pagination(self) -> ShapingOptions:
        """Drop page/page_size, for tools whose upstream paginates natively."""
        return replace(self, page=None, page_size=None)

    @classmethod
    def from_arguments(
        cls,
        arguments: Optional[Mapping[str, Any]],
        defaults: Optional[ToolDefaults] = None,
    ) -> ShapingOptions:
        """
        Merge caller arguments with tool defaults

        Args:
            arguments: raw tool-call argument bag
            defaults: the tool's default shaping fragment

        Raises:
            ToolValidationError: an option value cannot be coerced
        """
        defaults = defaults or ToolDefaults()
        try:
            parsed = ShapingArguments.model_validate(dict(arguments or {}))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ToolValidationError(
                f"Invalid shaping options: {problems}",
                {"errors": e.errors(include_url=False)},
            ) from e

        return cls(
            mode=parsed.mode or defaults.mode,
            format=parsed.format or defaults.format,
            requested_fields=tuple(parsed.fields) if parsed.fields else None,
            default_fields=defaults.fields,
            page=parsed.page,
            page_size=parsed.page_size,
            limit=parsed.limit,
            default_limit=defaults.limit,
        )


def shaping_schema_properties() -> Dict[str, Dict[str, Any]]:
    """JSON-schema properties for the common argument surface, merged into every tool"""
    return {
        "mode": {
            "type": "string",
            "enum": [m.value for m in ResponseMode],
            "description": "Response density: 'summary' (overview: count, 5-item sample, field names), "
                           "'compact' (single-line JSON string), 'detailed' (full data)",
        },
        "format": {
            "type": "string",
            "enum": [f.value for f in OutputFormat],
            "description": "Output syntax: 'json', 'table' (Markdown) or 'csv'",
        },
        "fields": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Only return these fields for each record",
        },
        "page": {
            "type": "number",
            "description": "Page number (1-based)",
        },
        "page_size": {
            "type": "number",
            "description": f"Items per page (default: {DEFAULT_PAGE_SIZE})",
        },
        "limit": {
            "type": "number",
            "description": "Maximum number of items to consider before pagination",
        },
    }
