"""Voice catalogue feature."""

from .routes import router
from .service import VoiceService

__all__ = ["router", "VoiceService"]
