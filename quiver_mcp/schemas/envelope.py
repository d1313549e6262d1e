"""
Envelope Schemas - per-call result structures

``APIResponse`` is what the upstream client hands to the shaper;
``ShapedResponse`` is what the shaper hands back to the tool caller.
Both are immutable per-call transients.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class APIResponse:
    """Normalized upstream result: either ``data`` or ``error``, always ``status``"""
    status: int
    data: Any = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        if self.is_error:
            return {"error": self.error, "status": self.status}
        return {"data": self.data, "status": self.status}


@dataclass(frozen=True)
class PaginationInfo:
    current_page: int
    page_size: int
    total_items: int
    # float only for the degenerate page_size == 0 case (inf)
    total_pages: Union[int, float]
    has_next: bool
    has_previous: bool

    def to_dict(self) -> Dict[str, Any]:
        # JSON has no infinity; a non-finite page count is emitted as null
        total_pages = self.total_pages if math.isfinite(self.total_pages) else None
        return {
            "current_page": self.current_page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": total_pages,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }


@dataclass(frozen=True)
class ResponseSummary:
    total_items: int
    fields_included: List[str]
    mode: str
    format: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_items": self.total_items,
            "fields_included": list(self.fields_included),
            "mode": self.mode,
            "format": self.format,
        }


@dataclass(frozen=True)
class ShapedResponse:
    """Output of the response shaper"""
    data: Any
    pagination: Optional[PaginationInfo] = None
    summary: Optional[ResponseSummary] = None

    def metadata(self) -> Dict[str, Any]:
        """The envelope without ``data``: pagination (if any) and summary (if any)"""
        meta: Dict[str, Any] = {}
        if self.pagination is not None:
            meta["pagination"] = self.pagination.to_dict()
        if self.summary is not None:
            meta["summary"] = self.summary.to_dict()
        return meta

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"data": self.data}
        result.update(self.metadata())
        return result
