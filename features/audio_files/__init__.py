"""Audio history feature: persisted records, history listing and guest adoption."""

from .routes import router
from .service import AudioFileService

__all__ = ["router", "AudioFileService"]
