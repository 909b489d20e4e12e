"""Provider-specific text-to-speech configuration."""

from . import google, openai

__all__ = ["google", "openai"]
