from .quiver_client import QuiverClient

__all__ = ["QuiverClient"]
