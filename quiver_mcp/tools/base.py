"""
Tool definition primitives

A ``ToolDefinition`` is a static recipe: which upstream path to call, which
caller arguments to forward, and which shaping defaults to apply. It holds
no client and no state, so the whole catalog can be built once at import.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from mcp.types import Tool

from quiver_mcp.schemas.envelope import ShapedResponse
from quiver_mcp.shaping.options import ToolDefaults, shaping_schema_properties
from quiver_mcp.shaping.sections import SECTION_DESCRIPTIONS
from quiver_mcp.utils.exceptions import ToolValidationError

# page/page_size are forwarded upstream only for natively paginated endpoints
UPSTREAM_PAGINATION_ARGUMENTS = ("page", "page_size")


@dataclass(frozen=True)
class ToolParameter:
    """One tool-specific input (path placeholder or forwarded query filter)"""
    name: str
    type: str
    description: str
    required: bool = False

    def schema(self) -> Dict[str, Any]:
        return {"type": self.type, "description": self.description}


@dataclass(frozen=True)
class ToolDefinition:
    """Immutable catalog entry"""
    name: str
    description: str
    path: str
    parameters: Tuple[ToolParameter, ...] = ()
    defaults: ToolDefaults = field(default_factory=ToolDefaults)
    upstream_pagination: bool = False
    supports_sections: bool = False

    @property
    def required_parameters(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    @property
    def path_parameters(self) -> List[str]:
        return [name for _, name, _, _ in string.Formatter().parse(self.path) if name]

    @property
    def query_parameters(self) -> List[str]:
        in_path = set(self.path_parameters)
        names = [p.name for p in self.parameters if p.name not in in_path]
        if self.upstream_pagination:
            names.extend(UPSTREAM_PAGINATION_ARGUMENTS)
        return names

    @property
    def input_schema(self) -> Dict[str, Any]:
        """Tool parameters merged over the common shaping arguments"""
        properties = shaping_schema_properties()
        if self.upstream_pagination:
            properties["page"] = {"type": "number", "description": "Page number (passed to the API)"}
            properties["page_size"] = {"type": "number", "description": "Items per page (passed to the API)"}
        for param in self.parameters:
            properties[param.name] = param.schema()
        if self.supports_sections:
            properties["sections"] = {
                "type": "array",
                "items": {"type": "string", "enum": list(SECTION_DESCRIPTIONS)},
                "description": "Data sections to include: "
                               + "; ".join(f"{k} ({v})" for k, v in SECTION_DESCRIPTIONS.items()),
            }
        return {
            "type": "object",
            "properties": properties,
            "required": self.required_parameters,
        }

    def full_description(self) -> str:
        parts = [self.description]
        if self.defaults.limit is not None:
            parts.append(f"Default limit: {self.defaults.limit} items.")
        if self.defaults.fields:
            parts.append(f"Key fields: {', '.join(self.defaults.fields)}.")
        return " ".join(parts)

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.full_description(),
            inputSchema=self.input_schema,
        )

    def validate(self, arguments: Mapping[str, Any]) -> None:
        """
        Raises:
            ToolValidationError: a required parameter is missing or empty
        """
        for name in self.required_parameters:
            value = arguments.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ToolValidationError(
                    f"{name} parameter is required",
                    {"tool": self.name, "parameter": name},
                )

    def build_request(self, arguments: Mapping[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """Resolve the upstream path and the query parameters to forward"""
        self.validate(arguments)
        path = self.path.format(**{
            name: quote(str(arguments[name]).strip(), safe="")
            for name in self.path_parameters
        })
        params = {
            name: arguments[name]
            for name in self.query_parameters
            if arguments.get(name) is not None
        }
        return path, params


# =============================================================================
# Tool results
# =============================================================================

@dataclass(frozen=True)
class ToolSuccess:
    response: ShapedResponse
    is_error: bool = field(default=False, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return self.response.to_dict()


@dataclass(frozen=True)
class ToolFailure:
    error: str
    status: int
    is_error: bool = field(default=True, init=False)

    def message(self) -> str:
        return f"Error: {self.error} (Status: {self.status})"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "status": self.status}


ToolResult = Union[ToolSuccess, ToolFailure]


def parse_sections(value: Any) -> Optional[List[str]]:
    """Accept a list or a comma-separated string of section names"""
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise ToolValidationError("sections must be a list of section names", {"sections": value})
