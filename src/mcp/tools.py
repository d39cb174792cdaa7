"""Static catalog of the Telegram tools offered to MCP clients.

The schemas are advertised for client-side discovery only; arguments are not
validated against them on the server.
"""

from typing import Any, Dict, List

from mcp.types import Tool

TOOLS: List[Tool] = [
    Tool(
        name="telegram_send",
        description="Send a text message to a Telegram chat",
        inputSchema={
            "type": "object",
            "properties": {
                "chat_id": {"type": "string", "description": "The chat ID to send to"},
                "message": {"type": "string", "description": "The message text"},
                "reply_to_message_id": {
                    "type": "number",
                    "description": "Optional message ID to reply to",
                },
            },
            "required": ["chat_id", "message"],
        },
    ),
    Tool(
        name="telegram_voice",
        description=(
            "Send a voice note to a Telegram chat "
            "(uses ElevenLabs, falls back to OpenAI)"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "chat_id": {"type": "string", "description": "The chat ID to send to"},
                "message": {"type": "string", "description": "The text to speak"},
                "caption": {
                    "type": "string",
                    "description": "Optional text caption to accompany the voice note",
                },
            },
            "required": ["chat_id", "message"],
        },
    ),
    Tool(
        name="telegram_get_me",
        description="Get information about the bot",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="telegram_get_updates",
        description="Get recent messages and updates",
        inputSchema={
            "type": "object",
            "properties": {
                "limit": {
                    "type": "number",
                    "description": "Number of updates to retrieve (default 10)",
                    "default": 10,
                },
                "offset": {"type": "number", "description": "Offset for pagination"},
            },
        },
    ),
    Tool(
        name="telegram_get_chat",
        description="Get information about a chat",
        inputSchema={
            "type": "object",
            "properties": {
                "chat_id": {"type": "string", "description": "The chat ID"},
            },
            "required": ["chat_id"],
        },
    ),
]

TOOL_NAMES: List[str] = [tool.name for tool in TOOLS]


def list_tool_descriptors() -> List[Dict[str, Any]]:
    """Return the catalog as plain JSON-ready dicts."""
    return [tool.model_dump(by_alias=True, exclude_none=True) for tool in TOOLS]
