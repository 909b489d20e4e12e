"""Audio generation pipeline configuration."""

from __future__ import annotations

import os

from core.utils.config_helpers import parse_bool, parse_csv

# Timeouts
PIPELINE_TIMEOUT_SECONDS = float(os.getenv("GENERATION_PIPELINE_TIMEOUT", "60"))
ENHANCER_TIMEOUT_SECONDS = float(os.getenv("GENERATION_ENHANCER_TIMEOUT", "15"))

# Input limits
MAX_TEXT_LENGTH = int(os.getenv("GENERATION_MAX_TEXT_LENGTH", "1000"))
# Inputs at or above this length are treated as finished descriptions
FULL_DESCRIPTION_THRESHOLD = int(os.getenv("GENERATION_FULL_DESCRIPTION_THRESHOLD", "100"))
# Inputs shorter than this are expanded into a full description
SHORT_PROMPT_THRESHOLD = int(os.getenv("GENERATION_SHORT_PROMPT_THRESHOLD", "30"))
TITLE_MAX_LENGTH = 50

# Description model
LLM_MODEL = os.getenv("GENERATION_LLM_MODEL", "gpt-4o-mini")
LLM_TEMPERATURE = float(os.getenv("GENERATION_LLM_TEMPERATURE", "0.7"))
ENHANCE_MAX_TOKENS = 300
FULL_DESCRIPTION_MAX_TOKENS = 500
PRODUCT_DESCRIPTION_MAX_TOKENS = 200

# Per-IP abuse guard
RATE_LIMIT_WINDOW_SECONDS = 60
LLM_RATE_LIMIT_PER_MINUTE = int(os.getenv("LLM_RATE_LIMIT_PER_MINUTE", "10"))
TTS_RATE_LIMIT_PER_MINUTE = int(os.getenv("TTS_RATE_LIMIT_PER_MINUTE", "5"))

# Callers and plans
REQUIRE_AUTH = parse_bool(os.getenv("GENERATION_REQUIRE_AUTH"), True)
FREE_PLAN = "free"
FREE_PLAN_DAILY_LIMIT = int(os.getenv("FREE_PLAN_DAILY_LIMIT", "10"))
ADMIN_PLAN = "admin"
ADMIN_DAILY_LIMIT = 9999
ADMIN_EMAILS = frozenset(email.lower() for email in parse_csv(os.getenv("ADMIN_EMAILS")))

# Base64 chunk size for data URLs; must stay a multiple of 3
BASE64_CHUNK_SIZE = 3 * 1024

# User-facing messages
AUTH_REQUIRED_MESSAGE = "Authentication required to generate audio descriptions"
QUOTA_EXCEEDED_MESSAGE = (
    "You have used all your daily generations. Please try again tomorrow or upgrade your plan."
)
QUOTA_UNAVAILABLE_MESSAGE = "Could not verify your remaining generations. Please try again."
RATE_LIMITED_MESSAGE = "Too many requests. Please wait a minute before trying again."
TIMEOUT_MESSAGE = "The request took too long to complete. Try with a shorter text."
STORAGE_FAILURE_MESSAGE = "Failed to save the generated audio. Please try again."

__all__ = [
    "PIPELINE_TIMEOUT_SECONDS",
    "ENHANCER_TIMEOUT_SECONDS",
    "MAX_TEXT_LENGTH",
    "FULL_DESCRIPTION_THRESHOLD",
    "SHORT_PROMPT_THRESHOLD",
    "TITLE_MAX_LENGTH",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "ENHANCE_MAX_TOKENS",
    "FULL_DESCRIPTION_MAX_TOKENS",
    "PRODUCT_DESCRIPTION_MAX_TOKENS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "LLM_RATE_LIMIT_PER_MINUTE",
    "TTS_RATE_LIMIT_PER_MINUTE",
    "REQUIRE_AUTH",
    "FREE_PLAN",
    "FREE_PLAN_DAILY_LIMIT",
    "ADMIN_PLAN",
    "ADMIN_DAILY_LIMIT",
    "ADMIN_EMAILS",
    "BASE64_CHUNK_SIZE",
    "AUTH_REQUIRED_MESSAGE",
    "QUOTA_EXCEEDED_MESSAGE",
    "QUOTA_UNAVAILABLE_MESSAGE",
    "RATE_LIMITED_MESSAGE",
    "TIMEOUT_MESSAGE",
    "STORAGE_FAILURE_MESSAGE",
]
