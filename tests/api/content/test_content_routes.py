"""Descriptions, voices, feedback and health endpoints."""

import pytest


@pytest.mark.anyio
async def test_health(api):
    response = await api.client.get("/health")

    assert response.json() == {"status": "healthy", "version": "1.0.0"}


@pytest.mark.anyio
async def test_description_falls_back_without_openai(api):
    response = await api.client.post("/api/v1/descriptions", json={"productName": "Aurora Lamp"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["fallback"] is True
    assert data["description"].startswith("Introducing the Aurora Lamp.")


@pytest.mark.anyio
async def test_description_requires_product_name(api):
    response = await api.client.post("/api/v1/descriptions", json={"language": "en-US"})

    assert response.status_code == 400


@pytest.mark.anyio
async def test_voices_serve_fallback_catalogue(api):
    response = await api.client.get("/api/v1/voices")

    data = response.json()["data"]
    assert data["google"]["source"] == "fallback"
    assert "alloy" in data["openai"]["voices"]


@pytest.mark.anyio
async def test_feedback_is_stored(api, auth_token):
    from sqlalchemy import select

    from features.feedback.db_models import Feedback
    from infrastructure.db.sessions import session_scope

    response = await api.client.post(
        "/api/v1/feedback",
        json={"message": "  Love it  ", "rating": 5},
        headers={"Authorization": f"Bearer {auth_token}"},
    )

    assert response.status_code == 200
    async with session_scope(api.session_factory) as session:
        feedback = (await session.execute(select(Feedback))).scalar_one()
    assert feedback.id == response.json()["data"]["id"]
    assert feedback.message == "Love it"
    assert feedback.user_id == "user-1"
    assert feedback.email == "user@example.com"


@pytest.mark.anyio
async def test_feedback_rating_is_validated(api):
    response = await api.client.post("/api/v1/feedback", json={"message": "ok", "rating": 9})

    assert response.status_code == 400
