"""Custom exceptions for Telegram Cloud MCP."""


class TelegramCloudError(Exception):
    """Base exception for Telegram Cloud MCP."""


class ConfigurationError(TelegramCloudError):
    """Configuration-related errors."""


class MissingConfigError(ConfigurationError):
    """Required configuration is missing."""


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""


class ToolError(TelegramCloudError):
    """Tool invocation errors."""


class UnknownToolError(ToolError):
    """Requested tool is not in the registry."""

    def __init__(self, tool_name: object):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class MissingArgumentError(ToolError):
    """A required tool argument was not supplied."""

    def __init__(self, tool_name: str, argument: str):
        super().__init__(f"Missing required argument '{argument}' for {tool_name}")
        self.tool_name = tool_name
        self.argument = argument
