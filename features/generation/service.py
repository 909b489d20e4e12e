"""Request orchestrator for audio description generation.

One call walks ``RECEIVED -> AUTH_CHECKED -> (ENHANCING) -> SYNTHESIZING ->
PERSISTING -> SUCCEEDED``. Quota is only consumed after the record has been
persisted; a failure in any state leaves quota and history untouched.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import async_sessionmaker

from config.generation import (
    AUTH_REQUIRED_MESSAGE,
    LLM_RATE_LIMIT_PER_MINUTE,
    MAX_TEXT_LENGTH,
    PIPELINE_TIMEOUT_SECONDS,
    QUOTA_EXCEEDED_MESSAGE,
    QUOTA_UNAVAILABLE_MESSAGE,
    RATE_LIMITED_MESSAGE,
    RATE_LIMIT_WINDOW_SECONDS,
    REQUIRE_AUTH,
    TIMEOUT_MESSAGE,
    TTS_RATE_LIMIT_PER_MINUTE,
)
from core.auth import AuthenticationError
from core.exceptions import (
    AuthorizationError,
    DatabaseError,
    GenerationTimeoutError,
    QuotaExceededError,
    RateLimitError,
    ServiceError,
    ValidationError,
)
from core.observability import record_generation_failure, record_generation_success, record_rate_limit_hit
from core.providers.tts_base import TTSResult
from core.rate_limiting import RateLimiter, get_rate_limiter, rate_limit_key
from core.utils.result import Err
from features.descriptions.enhancer import DescriptionEnhancer, EnhancementMode, select_mode
from features.profiles.quota import DAILY_LIMIT_REACHED, QuotaDecision, QuotaGuard
from features.profiles.repository import AppSettingsRepository, GenerationCountRepository, ProfileRepository
from infrastructure.db.sessions import require_main_session_factory, session_scope

from .models import Caller, GenerationResult, GenerationState, PersistedAudio
from .persistence import AudioPersister
from .synthesis import SpeechSynthesizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    text: str
    language_code: str
    voice_id: str | None = None
    claimed_user_id: str | None = None


@dataclass(slots=True)
class _PipelineOutput:
    text: str
    enhanced: bool
    provider: str
    audio_bytes: int
    persisted: PersistedAudio


class _Progress:
    def __init__(self, request_id: str) -> None:
        self.request_id = request_id
        self.state = GenerationState.RECEIVED

    def advance(self, state: GenerationState) -> None:
        logger.debug("Generation %s: %s -> %s", self.request_id, self.state.value, state.value)
        self.state = state


class GenerationService:
    """Sequence quota, enhancement, synthesis and persistence per request."""

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker | None = None,
        enhancer: DescriptionEnhancer | None = None,
        synthesizer: SpeechSynthesizer | None = None,
        persister: AudioPersister | None = None,
        rate_limiter: RateLimiter | None = None,
        timeout_seconds: float = PIPELINE_TIMEOUT_SECONDS,
        require_auth: bool = REQUIRE_AUTH,
    ) -> None:
        self._session_factory = session_factory
        self._enhancer = enhancer or DescriptionEnhancer()
        self._synthesizer = synthesizer or SpeechSynthesizer()
        self._persister = persister or AudioPersister(session_factory=session_factory)
        self._rate_limiter = rate_limiter or get_rate_limiter()
        self._timeout_seconds = timeout_seconds
        self._require_auth = require_auth

    def _sessions(self) -> async_sessionmaker:
        return self._session_factory or require_main_session_factory()

    async def generate(
        self,
        request: GenerationRequest,
        *,
        caller: Caller | None,
        client_ip: str | None = None,
    ) -> GenerationResult:
        """Run one generation end to end.

        Raises :class:`AuthenticationError` or a :class:`ServiceError`
        subclass describing the failed step.
        """

        progress = _Progress(uuid.uuid4().hex[:12])
        started = time.perf_counter()
        try:
            output = await self._run(request, caller, client_ip, progress)
        except (AuthenticationError, ServiceError) as exc:
            failed_in = progress.state
            progress.advance(GenerationState.FAILED)
            record_generation_failure(
                request_id=progress.request_id,
                caller=caller.label if caller else None,
                state=failed_in.value,
                error_type=type(exc).__name__,
                error=str(exc),
                elapsed_seconds=time.perf_counter() - started,
            )
            raise

        progress.advance(GenerationState.SUCCEEDED)
        record_generation_success(
            request_id=progress.request_id,
            provider=output.provider,
            caller=caller.label if caller else "anonymous",
            enhanced=output.enhanced,
            delivery=output.persisted.delivery,
            text_length=len(output.text),
            audio_bytes=output.audio_bytes,
            elapsed_seconds=time.perf_counter() - started,
        )
        return GenerationResult(
            success=True,
            audio_url=output.persisted.audio_url,
            text=output.text,
            id=output.persisted.record_id,
        )

    async def _run(
        self,
        request: GenerationRequest,
        caller: Caller | None,
        client_ip: str | None,
        progress: _Progress,
    ) -> _PipelineOutput:
        text, language = self._validate(request)
        caller = self._check_caller(request, caller)

        mode = select_mode(text)
        limits = [("tts", TTS_RATE_LIMIT_PER_MINUTE)]
        if mode is not None:
            limits.append(("llm", LLM_RATE_LIMIT_PER_MINUTE))
        for scope, limit in limits:
            self._check_rate_limit(scope, client_ip, limit)

        decision = await self._check_quota(caller)
        # Only admitted requests count against the per-IP windows
        for scope, _ in limits:
            self._rate_limiter.hit(rate_limit_key(scope, client_ip), RATE_LIMIT_WINDOW_SECONDS)
        progress.advance(GenerationState.AUTH_CHECKED)

        try:
            final_text, enhanced, audio = await asyncio.wait_for(
                self._produce(text, language, request.voice_id, mode, progress),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.error(
                "Generation %s timed out after %.0fs in state %s",
                progress.request_id,
                self._timeout_seconds,
                progress.state.value,
            )
            raise GenerationTimeoutError(TIMEOUT_MESSAGE, timeout_seconds=self._timeout_seconds) from exc

        # Not covered by the pipeline timeout
        progress.advance(GenerationState.PERSISTING)
        persisted = await self._persister.persist(
            audio,
            caller=caller,
            text=final_text,
            language=language,
            voice_name=audio.voice or request.voice_id or "default",
        )

        await self._record_success(caller, decision)
        return _PipelineOutput(
            text=final_text,
            enhanced=enhanced,
            provider=audio.provider,
            audio_bytes=len(audio.audio_bytes),
            persisted=persisted,
        )

    def _validate(self, request: GenerationRequest) -> tuple[str, str]:
        text = (request.text or "").strip()
        if not text:
            raise ValidationError("Text is required", field="text")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f"Text must be at most {MAX_TEXT_LENGTH} characters", field="text")

        language = (request.language_code or "").strip()
        if not language:
            raise ValidationError("Language is required", field="language")
        return text, language

    def _check_caller(self, request: GenerationRequest, caller: Caller | None) -> Caller:
        if caller is None or (caller.is_guest and self._require_auth):
            raise AuthenticationError(AUTH_REQUIRED_MESSAGE, reason="token_missing")
        if caller.user_id and request.claimed_user_id and request.claimed_user_id != caller.user_id:
            raise AuthorizationError("userId does not match the authenticated user")
        return caller

    def _check_rate_limit(self, scope: str, client_ip: str | None, limit: int) -> None:
        if self._rate_limiter.allows(rate_limit_key(scope, client_ip), RATE_LIMIT_WINDOW_SECONDS, limit):
            return
        record_rate_limit_hit(scope=scope, client_ip=client_ip)
        raise RateLimitError(RATE_LIMITED_MESSAGE, retry_after=int(RATE_LIMIT_WINDOW_SECONDS), scope=scope)

    async def _check_quota(self, caller: Caller) -> QuotaDecision | None:
        if caller.user_id is None:
            return None

        async with session_scope(self._sessions()) as session:
            guard = QuotaGuard(ProfileRepository(session), AppSettingsRepository(session))
            decision = await guard.check_quota(caller.user_id, email=caller.email)

        if decision.allowed:
            return decision
        if decision.reason == DAILY_LIMIT_REACHED:
            raise QuotaExceededError(QUOTA_EXCEEDED_MESSAGE, remaining=decision.remaining)
        raise DatabaseError(QUOTA_UNAVAILABLE_MESSAGE, operation="quota.check")

    async def _produce(
        self,
        text: str,
        language: str,
        voice_id: str | None,
        mode: EnhancementMode | None,
        progress: _Progress,
    ) -> tuple[str, bool, TTSResult]:
        final_text = text
        enhanced = False
        if mode is not None:
            progress.advance(GenerationState.ENHANCING)
            rewritten = await self._enhancer.enhance(text, language, mode=mode)
            if rewritten:
                final_text = rewritten
                enhanced = True
            else:
                logger.info("Generation %s continues with the original text", progress.request_id)

        progress.advance(GenerationState.SYNTHESIZING)
        audio = await self._synthesizer.synthesize(final_text, language, voice_id)
        return final_text, enhanced, audio

    async def _record_success(self, caller: Caller, decision: QuotaDecision | None) -> None:
        """Consume one generation and bump the daily counter; failures only log."""

        if caller.user_id is None or decision is None:
            return

        try:
            async with session_scope(self._sessions()) as session:
                guard = QuotaGuard(ProfileRepository(session), AppSettingsRepository(session))
                await guard.consume(caller.user_id, decision)
        except ServiceError as exc:
            logger.warning("Quota decrement failed for %s: %s", caller.user_id, exc)

        # Own transaction, independent of the decrement
        try:
            async with session_scope(self._sessions()) as session:
                counted = await GenerationCountRepository(session).increment(
                    caller.user_id, datetime.now(UTC).date()
                )
                if isinstance(counted, Err):
                    raise counted.error
        except ServiceError as exc:
            logger.warning("Generation count not recorded for %s: %s", caller.user_id, exc)


__all__ = ["GenerationRequest", "GenerationService"]
