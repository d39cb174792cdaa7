"""Route MCP tool calls to Telegram Bot API requests.

Each tool maps to exactly one handler. Results from Telegram are returned
untouched so that Telegram's own error payloads reach the client as data.
"""

from typing import Any, Awaitable, Callable, Dict, Mapping

import structlog

from src.config.settings import Settings
from src.exceptions import MissingArgumentError, UnknownToolError
from src.telegram.client import TelegramClient
from src.voice.synthesizer import VoiceSynthesizer

logger = structlog.get_logger()

PARSE_MODE = "Markdown"
DEFAULT_UPDATES_LIMIT = 10
VOICE_UNAVAILABLE_ERROR = (
    "Voice generation failed - no text-to-speech provider is configured "
    "or available"
)

ToolHandler = Callable[[Mapping[str, Any]], Awaitable[Any]]


def _require(tool_name: str, args: Mapping[str, Any], key: str) -> Any:
    value = args.get(key)
    if value is None or value == "":
        raise MissingArgumentError(tool_name, key)
    return value


class ToolDispatcher:
    """Execute a named tool with its argument mapping."""

    def __init__(self, telegram: TelegramClient, synthesizer: VoiceSynthesizer):
        self.telegram = telegram
        self.synthesizer = synthesizer
        self._handlers: Dict[str, ToolHandler] = {
            "telegram_send": self._send,
            "telegram_voice": self._voice,
            "telegram_get_me": self._get_me,
            "telegram_get_updates": self._get_updates,
            "telegram_get_chat": self._get_chat,
        }

    async def dispatch(self, name: Any, args: Mapping[str, Any]) -> Any:
        """Run tool ``name``.

        Raises:
            UnknownToolError: ``name`` is not one of the registered tools.
            MissingArgumentError: a required argument is absent.
        """
        handler = self._handlers.get(name) if isinstance(name, str) else None
        if handler is None:
            raise UnknownToolError(name)

        logger.info("Dispatching tool call", tool=name, arguments=sorted(args))
        return await handler(args)

    async def _send(self, args: Mapping[str, Any]) -> Any:
        params: Dict[str, Any] = {
            "chat_id": _require("telegram_send", args, "chat_id"),
            "text": _require("telegram_send", args, "message"),
            "parse_mode": PARSE_MODE,
        }
        if args.get("reply_to_message_id"):
            params["reply_to_message_id"] = args["reply_to_message_id"]
        return await self.telegram.call("sendMessage", params)

    async def _voice(self, args: Mapping[str, Any]) -> Any:
        chat_id = _require("telegram_voice", args, "chat_id")
        message = _require("telegram_voice", args, "message")

        # Synthesis must finish before the upload starts.
        audio = await self.synthesizer.synthesize(message)
        if audio is None:
            logger.warning("Voice note not sent, synthesis unavailable")
            return {"error": VOICE_UNAVAILABLE_ERROR}

        return await self.telegram.send_voice(chat_id, audio, args.get("caption"))

    async def _get_me(self, args: Mapping[str, Any]) -> Any:
        return await self.telegram.call("getMe")

    async def _get_updates(self, args: Mapping[str, Any]) -> Any:
        params: Dict[str, Any] = {
            "limit": args.get("limit") or DEFAULT_UPDATES_LIMIT,
        }
        if args.get("offset"):
            params["offset"] = args["offset"]
        return await self.telegram.call("getUpdates", params)

    async def _get_chat(self, args: Mapping[str, Any]) -> Any:
        chat_id = _require("telegram_get_chat", args, "chat_id")
        return await self.telegram.call("getChat", {"chat_id": chat_id})

    async def close(self) -> None:
        """Close the outbound HTTP clients."""
        await self.telegram.close()
        await self.synthesizer.close()


def create_dispatcher(settings: Settings) -> ToolDispatcher:
    """Build a dispatcher with clients configured from ``settings``."""
    telegram = TelegramClient(
        settings.telegram_token_str,
        api_base=settings.telegram_api_base,
        timeout=settings.request_timeout,
    )
    return ToolDispatcher(telegram, VoiceSynthesizer(settings))
