"""User feedback collection."""

from .routes import router

__all__ = ["router"]
