from .envelope import APIResponse, PaginationInfo, ResponseSummary, ShapedResponse

__all__ = ["APIResponse", "PaginationInfo", "ResponseSummary", "ShapedResponse"]
