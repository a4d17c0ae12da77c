"""HTTP service (FastAPI) around the completion router."""

from .app import create_app

__all__ = ["create_app"]
