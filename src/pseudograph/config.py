from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import UNKNOWN_TYPE


class ConfigError(RuntimeError):
    """Configuration-related error."""
    pass


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "WARNING"
    format: str = "%(asctime)-20s %(name)-40s %(levelname)-8s: %(message)s"


class GraphSettings(BaseModel):
    random_seed: int | None = Field(
        default=None,
        description="Seed for sampling and random generators (None = entropy).",
    )
    max_complete_size: int = Field(
        100, ge=1, description="Largest node count accepted by the complete generator."
    )
    max_path_size: int = Field(
        1000, ge=1, description="Largest node count accepted by the path generator."
    )


class ParserSettings(BaseModel):
    default_entity_type: str = Field(
        UNKNOWN_TYPE,
        min_length=1,
        description="typeName given to parsed nodes without an explicit type.",
    )
    strict: bool = Field(
        False,
        description="Raise on lines that are not pseudo-cypher instead of skipping them.",
    )


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class AppSettings(BaseSettings):
    """
    Process-wide configuration.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables
    3. .env and .env.local
    4. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="PSEUDOGRAPH_",  # PSEUDOGRAPH_LOGGING__LEVEL, PSEUDOGRAPH_PARSER__STRICT, ...
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    app_name: str = "pseudograph"
    debug: bool = False

    logging: LoggingSettings = LoggingSettings()
    graph: GraphSettings = GraphSettings()  # type: ignore[call-arg]
    parser: ParserSettings = ParserSettings()  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    """
    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pseudograph settings: {exc}") from exc
