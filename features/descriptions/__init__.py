"""Product description writing and narration enhancement."""

from .enhancer import DescriptionEnhancer, EnhancementMode, select_mode
from .routes import router
from .service import DescriptionService

__all__ = ["router", "DescriptionEnhancer", "DescriptionService", "EnhancementMode", "select_mode"]
