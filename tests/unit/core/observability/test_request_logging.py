from core.observability.request_logging import mask_headers, render_payload_preview


def test_authorization_header_is_masked():
    headers = mask_headers([("Authorization", "Bearer abc"), ("Content-Type", "application/json")])

    assert headers == {"Authorization": "***", "Content-Type": "application/json"}


def test_product_copy_is_logged_by_length_only():
    body = b'{"productDescription": "A very soft cotton t-shirt", "userId": "u1"}'

    preview = render_payload_preview(body)

    assert "cotton" not in preview
    assert '"productDescription":"<26 chars>"' in preview
    assert '"userId":"u1"' in preview


def test_tokens_are_redacted_in_nested_payloads():
    preview = render_payload_preview({"session": {"access_token": "eyJhbGciOi"}})

    assert "eyJ" not in preview
    assert "***" in preview


def test_empty_and_binary_bodies():
    assert render_payload_preview(b"") == "<empty>"
    assert render_payload_preview(b"\xff\xfe\x00") == "<binary 3 bytes>"
