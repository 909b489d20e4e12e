"""Provider Registry - Import-Time Registration of text-to-speech providers.

Importing this package registers every provider so that
:func:`core.providers.resolvers.get_tts_provider` can resolve them by name.
"""

import logging

from core.providers.registries import register_tts_provider, registered_tts_providers
from core.providers.resolvers import get_tts_provider
from core.providers.tts.google import GoogleTTSProvider
from core.providers.tts.openai import OpenAITTSProvider

register_tts_provider("openai", OpenAITTSProvider)
register_tts_provider("google", GoogleTTSProvider)

logger = logging.getLogger(__name__)
logger.debug("Provider registry initialised", extra={"tts_providers": registered_tts_providers()})

__all__ = [
    "GoogleTTSProvider",
    "OpenAITTSProvider",
    "get_tts_provider",
    "register_tts_provider",
    "registered_tts_providers",
]
