from .base_client import BaseHTTPClient, TRANSPORT_FAILURE_STATUS

__all__ = ["BaseHTTPClient", "TRANSPORT_FAILURE_STATUS"]
