"""Small parsers shared by the ``config`` modules."""

from __future__ import annotations

from urllib.parse import quote_plus

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def postgres_url(
    user: str,
    password: str,
    host: str,
    database: str,
    *,
    port: int = 5432,
    schema: str | None = None,
) -> str:
    """Return an asyncpg URL; ``schema`` becomes the connection's search_path."""

    netloc = host if ":" in host else f"{host}:{port}"
    url = f"postgresql+asyncpg://{quote_plus(user)}:{quote_plus(password)}@{netloc}/{database}"
    if schema:
        url += f"?options=-csearch_path%3D{schema}"
    return url


def parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    return default


def parse_csv(value: str | None) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


__all__ = ["parse_bool", "parse_csv", "postgres_url"]
