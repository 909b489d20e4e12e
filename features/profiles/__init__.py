"""Profiles feature: quota state, roles, settings and usage statistics."""

from .quota import QuotaDecision, QuotaGuard
from .routes import router
from .service import ProfileService

__all__ = ["router", "ProfileService", "QuotaDecision", "QuotaGuard"]
