"""Text-to-speech via ElevenLabs, falling back to OpenAI.

ElevenLabs is tried first when both its API key and a voice id are
configured. Any unsuccessful ElevenLabs answer, or a missing configuration,
moves on to OpenAI. The caller gets audio bytes or ``None`` and never has to
handle a provider error.
"""

from typing import Any, Dict, Optional

import httpx
import structlog
from openai import APIError, AsyncOpenAI

from src.config.settings import Settings

logger = structlog.get_logger()

ELEVENLABS_TTS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
ELEVENLABS_MODEL = "eleven_turbo_v2_5"
ELEVENLABS_VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.8,
    "use_speaker_boost": True,
}

OPENAI_TTS_MODEL = "tts-1"
OPENAI_TTS_VOICE = "onyx"
OPENAI_TTS_FORMAT = "opus"


class VoiceSynthesizer:
    """Turn text into voice-note audio using the configured providers."""

    def __init__(
        self,
        config: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=config.request_timeout
        )
        self._openai_client: Optional[Any] = None

    async def synthesize(self, text: str) -> Optional[bytes]:
        """Return encoded audio for ``text``, or None if no provider delivered."""
        if self.config.elevenlabs_enabled:
            audio = await self._synthesize_elevenlabs(text)
            if audio is not None:
                return audio
            logger.info("Falling back to OpenAI text-to-speech")

        if not self.config.openai_enabled:
            logger.info("No text-to-speech provider available")
            return None

        return await self._synthesize_openai(text)

    async def _synthesize_elevenlabs(self, text: str) -> Optional[bytes]:
        """Call ElevenLabs. Any 2xx answer is returned as-is, even if empty."""
        url = ELEVENLABS_TTS_URL.format(voice_id=self.config.elevenlabs_voice_id)
        headers = {"xi-api-key": self.config.elevenlabs_api_key_str or ""}
        payload: Dict[str, Any] = {
            "text": text,
            "model_id": ELEVENLABS_MODEL,
            "voice_settings": dict(ELEVENLABS_VOICE_SETTINGS),
        }

        try:
            response = await self._http_client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.warning(
                "ElevenLabs request failed",
                error_type=type(exc).__name__,
            )
            return None

        if not response.is_success:
            logger.warning(
                "ElevenLabs returned an error status",
                status_code=response.status_code,
            )
            return None

        audio = response.content
        logger.info("ElevenLabs synthesis complete", audio_bytes=len(audio))
        return audio

    async def _synthesize_openai(self, text: str) -> Optional[bytes]:
        """Call the OpenAI speech endpoint, producing Opus audio."""
        client = self._get_openai_client()
        try:
            response = await client.audio.speech.create(
                model=OPENAI_TTS_MODEL,
                voice=OPENAI_TTS_VOICE,
                input=text,
                response_format=OPENAI_TTS_FORMAT,
            )
        except APIError as exc:
            logger.warning(
                "OpenAI speech request failed",
                error_type=type(exc).__name__,
                status_code=getattr(exc, "status_code", None),
            )
            return None

        audio = response.content
        logger.info("OpenAI synthesis complete", audio_bytes=len(audio))
        return audio

    def _get_openai_client(self) -> Any:
        """Create and cache an OpenAI client on first use."""
        if self._openai_client is not None:
            return self._openai_client

        # Shares the HTTP client with ElevenLabs; auth is added per request.
        kwargs: Dict[str, Any] = {
            "api_key": self.config.openai_api_key_str,
            "max_retries": 0,
            "http_client": self._http_client,
        }
        if self.config.request_timeout is not None:
            kwargs["timeout"] = self.config.request_timeout

        self._openai_client = AsyncOpenAI(**kwargs)
        return self._openai_client

    async def close(self) -> None:
        """Release HTTP resources held by the providers."""
        self._openai_client = None
        if self._owns_http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
