"""Shared utility helpers."""

from .env import get_env, get_node_env, is_production
from .result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result", "get_env", "get_node_env", "is_production"]
