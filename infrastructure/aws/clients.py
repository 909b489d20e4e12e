"""Initialise the S3 client used by the storage layer.

Supabase Storage speaks the S3 protocol, so the same boto3 client serves
AWS buckets and Supabase buckets; ``STORAGE_ENDPOINT_URL`` selects the latter.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import boto3
from botocore.config import Config as BotoConfig

from config.api_keys import AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY
from config.storage import STORAGE_ENDPOINT_URL, STORAGE_REGION

logger = logging.getLogger(__name__)

_boto_config = BotoConfig(
    region_name=STORAGE_REGION,
    retries={"max_attempts": 3, "mode": "standard"},
    connect_timeout=10,
    read_timeout=30,
    s3={"addressing_style": "path"} if STORAGE_ENDPOINT_URL else None,
)

aws_clients: Dict[str, Any] = {}


def _build_client(service_name: str) -> Any:
    """Return a boto3 client for ``service_name`` using static credentials."""

    return boto3.client(
        service_name,
        aws_access_key_id=AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=AWS_SECRET_ACCESS_KEY or None,
        endpoint_url=STORAGE_ENDPOINT_URL or None,
        config=_boto_config,
    )


def get_s3_client() -> Any:
    """Return the cached S3 client or ``None`` when credentials are missing."""

    client = aws_clients.get("s3")
    if client is not None:
        return client

    if not (AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY):
        logger.warning("Storage credentials not found, S3 client not initialised")
        return None

    client = _build_client("s3")
    aws_clients["s3"] = client
    logger.info("Initialised S3 client (endpoint=%s)", STORAGE_ENDPOINT_URL or "aws")
    return client


__all__ = ["aws_clients", "get_s3_client"]
