"""Shared fixtures for HTTP-level tests against the FastAPI app."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from core.rate_limiting import InMemoryRateLimiter, get_rate_limiter
from features.admin.dependencies import get_admin_service
from features.admin.service import AdminService
from features.audio_files.dependencies import get_audio_file_service
from features.audio_files.service import AudioFileService
from features.descriptions.dependencies import get_description_service
from features.descriptions.service import DescriptionService
from features.generation.dependencies import get_generation_service
from features.generation.persistence import AudioPersister
from features.generation.service import GenerationService
from features.generation.synthesis import SpeechSynthesizer
from features.profiles.dependencies import get_profile_service
from features.profiles.service import ProfileService
from features.voices.routes import get_voice_service
from features.voices.service import VoiceService
from infrastructure.db.sessions import get_main_session, session_scope
from tests.helpers import FakeEnhancer, FakeStorageService, FakeTTSProvider

ADMIN_EMAIL = "admin@example.com"


def _no_openai_client():
    from core.exceptions import ConfigurationError

    raise ConfigurationError("OPENAI_API_KEY not set", key="OPENAI_API_KEY")


def _no_google_provider():
    from core.providers.tts.google import GoogleTTSProvider

    return GoogleTTSProvider(api_key="")


@pytest.fixture()
async def api(session_factory) -> AsyncIterator[Any]:
    """Yield an HTTP client plus the fakes wired behind it."""

    from main import app

    storage = FakeStorageService()
    provider = FakeTTSProvider()
    limiter = InMemoryRateLimiter()
    audio_files = AudioFileService(session_factory=session_factory, storage_service_factory=lambda: storage)
    profiles = ProfileService(
        session_factory=session_factory, audio_file_service=audio_files, admin_emails=[ADMIN_EMAIL]
    )
    generation = GenerationService(
        session_factory=session_factory,
        enhancer=FakeEnhancer(),
        synthesizer=SpeechSynthesizer(provider_resolver=lambda settings: provider),
        persister=AudioPersister(session_factory=session_factory, delivery="inline"),
        rate_limiter=limiter,
        require_auth=True,
    )

    async def _session():
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides.update(
        {
            get_audio_file_service: lambda: audio_files,
            get_profile_service: lambda: profiles,
            get_generation_service: lambda: generation,
            get_admin_service: lambda: AdminService(session_factory=session_factory),
            get_description_service: lambda: DescriptionService(client_factory=_no_openai_client),
            get_voice_service: lambda: VoiceService(google_provider_factory=_no_google_provider),
            get_rate_limiter: lambda: limiter,
            get_main_session: _session,
        }
    )
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            yield SimpleNamespace(
                client=client,
                provider=provider,
                storage=storage,
                profiles=profiles,
                session_factory=session_factory,
            )
    finally:
        app.dependency_overrides.clear()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
