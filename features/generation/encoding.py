"""Chunked base64 helpers for inline (data URL) audio delivery."""

from __future__ import annotations

import base64
import binascii

from config.generation import BASE64_CHUNK_SIZE


def encode_base64_chunked(data: bytes, chunk_size: int = BASE64_CHUNK_SIZE) -> str:
    """Base64 encode ``data`` a slice at a time.

    ``chunk_size`` must be a positive multiple of 3 so that no chunk carries
    padding and the joined output equals a single-call encoding.
    """

    if chunk_size <= 0 or chunk_size % 3:
        raise ValueError(f"chunk_size must be a positive multiple of 3, got {chunk_size}")

    view = memoryview(data)
    return "".join(
        base64.b64encode(view[offset : offset + chunk_size]).decode("ascii")
        for offset in range(0, len(view), chunk_size)
    )


def to_data_url(data: bytes, content_type: str, *, chunk_size: int = BASE64_CHUNK_SIZE) -> str:
    return f"data:{content_type};base64,{encode_base64_chunked(data, chunk_size)}"


def decode_base64(text: str) -> bytes:
    """Decode plain base64 or a ``data:`` URL back into bytes."""

    payload = text.split(",", 1)[1] if text.startswith("data:") else text
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError("Invalid base64 payload") from exc


__all__ = ["decode_base64", "encode_base64_chunked", "to_data_url"]
