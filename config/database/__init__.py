"""Database configuration: connection URL and pool tuning."""

from .defaults import COMMAND_TIMEOUT, ECHO, MAX_OVERFLOW, POOL_RECYCLE, POOL_SIZE
from .urls import MAIN_DB_URL, SQLITE_DB_PATH

__all__ = [
    "COMMAND_TIMEOUT",
    "ECHO",
    "MAIN_DB_URL",
    "MAX_OVERFLOW",
    "POOL_RECYCLE",
    "POOL_SIZE",
    "SQLITE_DB_PATH",
]
