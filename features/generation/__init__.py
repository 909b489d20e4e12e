"""Audio description generation pipeline."""

from .models import Caller, GenerationResult, GenerationState
from .routes import router
from .service import GenerationRequest, GenerationService

__all__ = [
    "router",
    "Caller",
    "GenerationRequest",
    "GenerationResult",
    "GenerationService",
    "GenerationState",
]
