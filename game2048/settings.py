from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import DotEnvSettingsSource, PydanticBaseSettingsSource


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Global settings for game2048.

    Values are loaded from environment variables and env files and shared by
    the board engine, the chat bot and the CLI.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow", populate_by_name=True
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings source precedence to include a user-level env file.

        Precedence (highest to lowest):
        - init_settings (explicit kwargs)
        - env_settings (process environment)
        - dotenv_settings (project .env)
        - user_dotenv_settings (~/.game2048/.env)
        - file_secret_settings
        """

        user_env_path = Path.home() / ".game2048" / ".env"
        user_dotenv_settings = DotEnvSettingsSource(
            settings_cls,
            env_file=user_env_path,
            env_file_encoding="utf-8",
        )

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            user_dotenv_settings,
            file_secret_settings,
        )

    seed: int | None = Field(
        default=None,
        description="Seed for tile spawning; OS entropy is used when unset",
        validation_alias="GAME2048_SEED",
    )

    four_probability: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Probability that a spawned tile is a 4 instead of a 2",
        validation_alias="GAME2048_FOUR_PROBABILITY",
    )

    command_name: str = Field(
        default="2048",
        description="Name of the chat command that starts a new game",
        validation_alias="GAME2048_COMMAND_NAME",
    )

    ephemeral_default: bool = Field(
        default=True,
        description="Whether new chat games are only visible to their player by default",
        validation_alias="GAME2048_EPHEMERAL",
    )

    log_level: LogLevel = Field(
        default="INFO",
        description="Log level used by the CLI",
        validation_alias="GAME2048_LOG_LEVEL",
    )

    log_stream: Literal["stdout", "stderr"] = Field(
        default="stderr",
        description="Stream to use for logging output: 'stdout' or 'stderr'",
        validation_alias="GAME2048_LOG_STREAM",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


# Loaded on first use by get_settings()
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Raises:
        ConfigError: if the environment holds an invalid configuration
    """
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings(**overrides: Any) -> Settings:
    """Build settings with explicit overrides on top of the environment.

    Raises:
        ConfigError: if the resulting configuration does not validate
    """
    from game2048.shared.exceptions import Game2048Exception

    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise Game2048Exception("Invalid game2048 configuration") from e
