"""Thin async client for the Telegram Bot API.

Responses are returned exactly as Telegram sends them. Errors reported by
Telegram (``{"ok": false, ...}``) are data for the caller, not exceptions;
only transport failures raise.
"""

from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger()

VOICE_FILENAME = "voice.ogg"
VOICE_MIME_TYPE = "audio/ogg"


class TelegramClient:
    """Issue Bot API calls with a single bot token."""

    def __init__(
        self,
        bot_token: str,
        api_base: str = "https://api.telegram.org",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self._bot_token = bot_token
        self._api_base = api_base.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    def _method_url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._bot_token}/{method}"

    async def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """POST ``params`` as JSON to a Bot API method and return the decoded body."""
        logger.debug("Calling Telegram API", method=method)
        response = await self._client.post(self._method_url(method), json=params or {})
        data = response.json()
        if isinstance(data, dict) and data.get("ok") is False:
            logger.info(
                "Telegram API reported an error",
                method=method,
                status_code=response.status_code,
                description=data.get("description"),
            )
        return data

    async def send_voice(
        self, chat_id: Any, audio: bytes, caption: Optional[str] = None
    ) -> Any:
        """Upload ``audio`` as a voice note via multipart ``sendVoice``."""
        form: Dict[str, str] = {"chat_id": str(chat_id)}
        if caption:
            form["caption"] = caption
        files = {"voice": (VOICE_FILENAME, audio, VOICE_MIME_TYPE)}

        logger.debug("Uploading voice note", audio_bytes=len(audio))
        response = await self._client.post(
            self._method_url("sendVoice"), data=form, files=files
        )
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()
