"""Environment-backed settings primitives for :mod:`ecobot`."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["DEFAULT_RESULT_DELAY_SECONDS", "EcoBotSettings", "get_settings"]

DEFAULT_RESULT_DELAY_SECONDS: float = 1.0
DEFAULT_SHARE_BASE_URL: str = "https://twitter.com/intent/tweet"


class EcoBotSettings(BaseSettings):
    """Expose environment-derived configuration knobs for EcoBot.

    All environment lookups go through this class. Every attribute maps to a
    documented environment variable and falls back to an inline default when
    the variable is absent or malformed.

    Attributes:
        result_delay_seconds: Pause between the final answer and the result
            message.
        factors_file: Optional path to a JSON file overriding emission
            factors.
        log_level: Logging level name used by the terminal front-end.
        log_json: Emit log records as JSON lines instead of plain text.
        share_base_url: Intent URL used to build the share link.
    """

    result_delay_seconds: float = Field(
        default=DEFAULT_RESULT_DELAY_SECONDS, alias="ECOBOT_RESULT_DELAY_SECONDS"
    )
    factors_file: str | None = Field(default=None, alias="ECOBOT_FACTORS_FILE")
    log_level: str = Field(default="WARNING", alias="ECOBOT_LOG_LEVEL")
    log_json: bool = Field(default=False, alias="ECOBOT_LOG_JSON")
    share_base_url: str = Field(
        default=DEFAULT_SHARE_BASE_URL, alias="ECOBOT_SHARE_BASE_URL"
    )

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("result_delay_seconds", mode="before")
    @classmethod
    def _parse_delay(cls, value: object) -> float:
        """Parse the result delay while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed non-negative float, or the default when conversion fails.
        """

        if isinstance(value, (int, float)):
            parsed = float(value)
        elif isinstance(value, str):
            try:
                parsed = float(value.strip())
            except ValueError:
                return DEFAULT_RESULT_DELAY_SECONDS
        else:
            return DEFAULT_RESULT_DELAY_SECONDS
        return parsed if parsed >= 0 else DEFAULT_RESULT_DELAY_SECONDS

    @field_validator("factors_file", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> str | None:
        """Treat an empty override path as unset."""

        if value in (None, ""):
            return None
        return str(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        """Upper-case the level name and reject names logging does not know."""

        if not isinstance(value, str):
            return "WARNING"
        name = value.strip().upper()
        if name not in logging.getLevelNamesMapping():
            return "WARNING"
        return name

    @property
    def log_level_number(self) -> int:
        """Return the numeric logging level."""

        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> EcoBotSettings:
    """Return an :class:`EcoBotSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return EcoBotSettings()
