"""Configuration management using Pydantic Settings.

Features:
- Environment variable loading (with optional .env file)
- Secret handling for the bot token and TTS provider keys
- Computed properties for the voice provider fallback chain
"""

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"


class Settings(BaseSettings):
    """Main settings, loaded once per process from the deployment environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Telegram
    telegram_bot_token: SecretStr = Field(
        ..., description="Bot token from @BotFather"
    )
    telegram_api_base: str = Field(
        DEFAULT_TELEGRAM_API_BASE,
        description="Bot API base URL (override for a self-hosted Bot API server)",
    )

    # Text-to-speech providers
    elevenlabs_api_key: Optional[SecretStr] = Field(
        None, description="ElevenLabs API key (primary voice provider)"
    )
    elevenlabs_voice_id: Optional[str] = Field(
        None, description="ElevenLabs voice identifier"
    )
    openai_api_key: Optional[SecretStr] = Field(
        None, description="OpenAI API key (fallback voice provider)"
    )

    # Outbound HTTP
    request_timeout: Optional[float] = Field(
        None, description="Timeout in seconds for outbound calls; unset means none"
    )

    # HTTP server
    api_server_host: str = Field("0.0.0.0", description="HTTP bind address")
    api_server_port: int = Field(8080, description="HTTP listen port")
    public_base_url: Optional[str] = Field(
        None, description="Externally visible origin used in the SSE endpoint event"
    )

    # Logging
    debug: bool = Field(False, description="Enable debug mode")
    log_level: str = Field("INFO", description="Logging level")

    @field_validator("telegram_api_base", "public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalise base URLs so path joins never produce '//'."""
        if v is None:
            return v
        return v.rstrip("/")

    @field_validator("elevenlabs_voice_id", mode="before")
    @classmethod
    def empty_voice_id_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty voice id the same as an absent one."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @property
    def telegram_token_str(self) -> str:
        """Get Telegram token as string."""
        return self.telegram_bot_token.get_secret_value()

    @property
    def elevenlabs_api_key_str(self) -> Optional[str]:
        """Get ElevenLabs API key as string."""
        if self.elevenlabs_api_key is None:
            return None
        return self.elevenlabs_api_key.get_secret_value() or None

    @property
    def openai_api_key_str(self) -> Optional[str]:
        """Get OpenAI API key as string."""
        if self.openai_api_key is None:
            return None
        return self.openai_api_key.get_secret_value() or None

    @property
    def elevenlabs_enabled(self) -> bool:
        """ElevenLabs needs both a key and a voice id."""
        return bool(self.elevenlabs_api_key_str and self.elevenlabs_voice_id)

    @property
    def openai_enabled(self) -> bool:
        return bool(self.openai_api_key_str)

    @property
    def voice_enabled(self) -> bool:
        """Whether any text-to-speech provider is usable."""
        return self.elevenlabs_enabled or self.openai_enabled

    @property
    def voice_provider(self) -> str:
        """Label of the provider tried first for voice notes."""
        if self.elevenlabs_enabled:
            return "ElevenLabs"
        if self.openai_enabled:
            return "OpenAI"
        return "None"
