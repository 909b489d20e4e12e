import json

import pytest

from core.exceptions import (
    AuthorizationError,
    DatabaseError,
    GenerationTimeoutError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    StorageError,
    SynthesisError,
    ValidationError,
)
from core.http.errors import error_response, format_error, status_code_for


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (ValidationError("bad", field="text"), 400),
        (AuthorizationError("admins only"), 403),
        (QuotaExceededError("no generations left"), 403),
        (NotFoundError("missing"), 404),
        (RateLimitError("slow down"), 429),
        (SynthesisError("tts down", provider="openai", http_status=500), 500),
        (StorageError("upload failed"), 500),
        (DatabaseError("db down"), 500),
        (GenerationTimeoutError("too slow"), 500),
    ],
)
def test_status_code_for_maps_taxonomy(exc, expected):
    assert status_code_for(exc) == expected


def test_format_error_includes_provider_context():
    payload = format_error(SynthesisError("tts down", provider="google", http_status=503))

    assert payload["error"] == "provider_error"
    assert payload["context"] == {"provider": "google", "http_status": 503}


def test_error_response_wraps_envelope():
    response = error_response(ValidationError("Text is required", field="text"), "Invalid request")

    assert response.status_code == 400
    body = json.loads(response.body)
    assert body["success"] is False
    assert body["message"] == "Invalid request"
    assert body["data"]["context"] == {"field": "text"}
