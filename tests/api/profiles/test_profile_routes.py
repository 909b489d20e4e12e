import pytest

from features.audio_files.repository import AudioFileRepository, NewAudioFile
from infrastructure.db.sessions import session_scope


def _auth(token, **extra):
    return {"Authorization": f"Bearer {token}", **extra}


@pytest.mark.anyio
async def test_session_start_returns_plan(api, auth_token):
    response = await api.client.post("/api/v1/session/start", headers=_auth(auth_token))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user_id"] == "user-1"
    assert data["plan"] == "free"
    assert data["remaining_generations"] == 10
    assert data["is_admin"] is False


@pytest.mark.anyio
async def test_session_start_adopts_guest_files(api, auth_token):
    path = "temp/guest-42/audio_1_a.mp3"
    api.storage.objects[path] = b"audio"
    async with session_scope(api.session_factory) as session:
        await AudioFileRepository(session).create(
            NewAudioFile(
                title="Guest",
                description="Guest",
                language="en-US",
                voice_name="alloy",
                audio_url=api.storage.public_url(path),
                file_path=path,
                session_id="guest-42",
                is_temporary=True,
            )
        )

    started = await api.client.post(
        "/api/v1/session/start", headers=_auth(auth_token, **{"X-Guest-Session-Id": "guest-42"})
    )
    history = await api.client.get("/api/v1/audio-files", headers=_auth(auth_token))

    assert started.json()["data"]["adopted_files"] == 1
    items = history.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["file_path"] == "audio/user-1/audio_1_a.mp3"


@pytest.mark.anyio
async def test_stats_reflect_generations(api, auth_token):
    await api.client.post(
        "/api/v1/generate-audio",
        json={"text": "w" * 120, "language": "en-US"},
        headers=_auth(auth_token),
    )

    response = await api.client.get("/api/v1/profile/stats", headers=_auth(auth_token))

    data = response.json()["data"]
    assert data["remaining_generations"] == 9
    assert data["total"] == 1
    assert data["today"] == 1


@pytest.mark.anyio
async def test_history_requires_token(api):
    response = await api.client.get("/api/v1/audio-files")

    assert response.status_code == 401


@pytest.mark.anyio
async def test_user_cannot_delete_someone_elses_file(api, auth_token, auth_token_factory):
    created = await api.client.post(
        "/api/v1/generate-audio",
        json={"text": "v" * 120, "language": "en-US"},
        headers=_auth(auth_token),
    )
    audio_id = created.json()["id"]
    other = auth_token_factory(user_id="user-2", email="other@example.com")

    foreign = await api.client.delete(f"/api/v1/audio-files/{audio_id}", headers=_auth(other))
    own = await api.client.delete(f"/api/v1/audio-files/{audio_id}", headers=_auth(auth_token))

    assert foreign.status_code == 404
    assert own.status_code == 200
