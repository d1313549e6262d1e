"""
Response Shaper

Pure, synchronous transformation of one upstream ``APIResponse`` into a
``ShapedResponse``. Stages run in a fixed order:

    field projection -> limiting -> pagination -> mode/format rendering

Each stage is a public function so it can be exercised on its own.
"""

import math
from typing import Any, Optional, Sequence, Tuple

from quiver_mcp.schemas.envelope import (
    APIResponse,
    PaginationInfo,
    ResponseSummary,
    ShapedResponse,
)
from quiver_mcp.shaping.options import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, ShapingOptions
from quiver_mcp.shaping.render import render

# Returned for single-object payloads when pagination was requested
TRIVIAL_PAGINATION = PaginationInfo(
    current_page=1,
    page_size=1,
    total_items=1,
    total_pages=1,
    has_next=False,
    has_previous=False,
)


def select_fields(data: Any, fields: Optional[Sequence[str]]) -> Any:
    """
    Project each object in an array down to the requested keys

    Keys are emitted in requested order. An item that has none of the
    requested keys is returned unchanged rather than as an empty object.
    """
    if not fields or not isinstance(data, list):
        return data

    projected = []
    for item in data:
        if not isinstance(item, dict):
            projected.append(item)
            continue
        picked = {field: item[field] for field in fields if field in item}
        projected.append(picked if picked else item)
    return projected


def apply_limit(data: Any, limit: Optional[int]) -> Any:
    """Keep the first ``limit`` elements of an array; non-positive limits are ignored."""
    if limit is None or limit <= 0 or not isinstance(data, list):
        return data
    return data[:limit]


def paginate(
    data: Any,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> Tuple[Any, PaginationInfo]:
    """
    Slice one page out of an array

    ``total_items`` is counted before slicing. A zero page size is not
    rejected: it yields an empty page and infinite ``total_pages``. Negative
    sizes are not rejected either; the slice bounds follow Python slicing.
    """
    if not isinstance(data, list):
        return data, TRIVIAL_PAGINATION

    current_page = DEFAULT_PAGE if page is None else page
    size = DEFAULT_PAGE_SIZE if page_size is None else page_size
    total_items = len(data)

    if size == 0:
        total_pages = 0 if total_items == 0 else math.inf
    else:
        total_pages = math.ceil(total_items / size)

    start = (current_page - 1) * size
    end = start + size
    page_data = data[start:end]

    info = PaginationInfo(
        current_page=current_page,
        page_size=size,
        total_items=total_items,
        total_pages=total_pages,
        has_next=current_page < total_pages,
        has_previous=current_page > 1,
    )
    return page_data, info


def shape(response: APIResponse, options: Optional[ShapingOptions] = None) -> ShapedResponse:
    """
    Run the shaping pipeline over one upstream response

    Error envelopes short-circuit: the result carries ``{error, status}`` as
    data and neither summary nor pagination.
    """
    options = options or ShapingOptions()

    if response.is_error:
        return ShapedResponse(data={"error": response.error, "status": response.status})

    raw = response.data
    data = select_fields(raw, options.requested_fields)
    data = apply_limit(data, options.effective_limit)

    pagination = None
    if options.paginates:
        data, pagination = paginate(data, options.page, options.page_size)

    rendered = render(data, options.format, options.mode)

    summary = ResponseSummary(
        total_items=len(raw) if isinstance(raw, list) else 1,
        fields_included=options.fields_included,
        mode=options.mode.value,
        format=options.format.value,
    )
    return ShapedResponse(data=rendered, pagination=pagination, summary=summary)
