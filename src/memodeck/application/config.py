from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from memodeck.domain.constants import (
    DEFAULT_DAILY_NEW_LIMIT,
    DEFAULT_DAILY_REVIEW_LIMIT,
    DEFAULT_QUIZ_QUESTIONS,
    LEARNING_QUEUE_CAP,
)

CONFIG_FILES = [
    Path(".config/memodeck/config.toml"),
    Path(".memodeck.toml"),
]


class AppConfig(BaseSettings):
    """
    Configuration model for memodeck.
    Supports loading from:
    1. Environment variables (MEMODECK_*)
    2. Config file (~/.config/memodeck/config.toml or ~/.memodeck.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMODECK_",
        extra="ignore",
    )

    # Deck defaults (used when a deck file does not set its own limits)
    daily_new_limit: int = Field(default=DEFAULT_DAILY_NEW_LIMIT, ge=0)
    daily_review_limit: int = Field(default=DEFAULT_DAILY_REVIEW_LIMIT, ge=0)

    # Queue Selector
    learning_queue_cap: int = Field(default=LEARNING_QUEUE_CAP, ge=0)
    sort_by_due: bool = False

    # Quiz
    quiz_question_count: int = Field(default=DEFAULT_QUIZ_QUESTIONS, ge=1)

    # Logging: 0 warnings only, 1 info, 2 or more debug
    verbose: int = Field(default=1, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing config file wins
        toml_file = None
        for rel in CONFIG_FILES:
            candidate = Path.home() / rel
            if candidate.exists():
                toml_file = candidate
                break

        # Later sources have lower priority: overrides > env > file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/memodeck/config.toml (if exists)
    3. Environment variables (MEMODECK_*)
    4. cli_overrides (passed from Typer, None values dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
