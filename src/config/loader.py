"""Settings construction for the server and for tests."""

from typing import Any, Dict

import structlog
from pydantic import ValidationError

from src.exceptions import InvalidConfigError, MissingConfigError

from .settings import Settings

logger = structlog.get_logger()


def load_config(**overrides: Any) -> Settings:
    """Load settings from the environment, applying explicit overrides.

    Raises:
        MissingConfigError: a required value (the bot token) is absent.
        InvalidConfigError: a value is present but fails validation.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        missing = [
            ".".join(str(part) for part in err["loc"])
            for err in e.errors()
            if err["type"] == "missing"
        ]
        if missing:
            raise MissingConfigError(
                f"Required configuration missing: {', '.join(missing)}. "
                "Set TELEGRAM_BOT_TOKEN in the environment or .env file."
            ) from e
        raise InvalidConfigError(f"Invalid configuration: {e}") from e

    logger.info(
        "Configuration loaded",
        voice_provider=settings.voice_provider,
        telegram_api_base=settings.telegram_api_base,
        debug=settings.debug,
    )
    return settings


def create_test_config(**overrides: Any) -> Settings:
    """Create settings for tests, isolated from the process environment."""
    defaults: Dict[str, Any] = {
        "telegram_bot_token": "test:token",
        "telegram_api_base": "https://api.telegram.org",
        "elevenlabs_api_key": None,
        "elevenlabs_voice_id": None,
        "openai_api_key": None,
        "request_timeout": None,
        "public_base_url": None,
        "debug": False,
        "log_level": "INFO",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)
