from .options import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    SHAPING_ARGUMENT_NAMES,
    OutputFormat,
    ResponseMode,
    ShapingArguments,
    ShapingOptions,
    ToolDefaults,
    shaping_schema_properties,
)
from .render import NO_DATA, render, render_csv, render_table, summarize
from .sections import SECTION_DESCRIPTIONS, SECTION_MAP, select_sections
from .shaper import apply_limit, paginate, select_fields, shape

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "SHAPING_ARGUMENT_NAMES",
    "OutputFormat",
    "ResponseMode",
    "ShapingArguments",
    "ShapingOptions",
    "ToolDefaults",
    "shaping_schema_properties",
    "NO_DATA",
    "render",
    "render_csv",
    "render_table",
    "summarize",
    "SECTION_DESCRIPTIONS",
    "SECTION_MAP",
    "select_sections",
    "apply_limit",
    "paginate",
    "select_fields",
    "shape",
]
