"""API module."""

from valocoach.api.routes import router

__all__ = ["router"]
