"""Concrete speech backends registered in ``core.providers``."""

from .google import GoogleTTSProvider
from .openai import OpenAITTSProvider

__all__ = ["GoogleTTSProvider", "OpenAITTSProvider"]
