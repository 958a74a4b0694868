"""Chat bot configuration"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chatbot.locales import LANGUAGES

logger = logging.getLogger(__name__)

# === Path Configuration ===
CHATBOT_DIR = Path(__file__).parent.parent
BACKEND_DIR = CHATBOT_DIR.parent


class BotSettings(BaseSettings):
    """Chat bot settings"""

    model_config = SettingsConfigDict(
        env_file=BACKEND_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (empty = in-memory storage)
    database_url: str = Field(default="", description="PostgreSQL database URL")

    # Chat defaults for newly seen conversations
    default_prefix: str = Field(default="!", description="Command prefix for new chats")
    default_language: str = Field(default="en", description="Language for new chats")

    # Environment
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL starts with postgresql://"""
        if v and not v.startswith("postgresql://"):
            raise ValueError("DATABASE_URL must start with 'postgresql://'")
        return v

    @field_validator("default_prefix")
    @classmethod
    def validate_default_prefix(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("DEFAULT_PREFIX must not contain whitespace")
        return v

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        if v not in LANGUAGES:
            raise ValueError(f"DEFAULT_LANGUAGE must be one of: {', '.join(LANGUAGES)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper


@lru_cache
def get_settings() -> BotSettings:
    """Get cached settings instance"""
    return BotSettings()
