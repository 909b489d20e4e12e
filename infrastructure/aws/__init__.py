"""AWS-compatible object storage helpers (clients and services)."""

from .clients import aws_clients, get_s3_client
from .storage import StorageService, build_audio_path

__all__ = [
    "aws_clients",
    "build_audio_path",
    "get_s3_client",
    "StorageService",
]
