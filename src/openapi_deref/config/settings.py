"""Configuration settings for the schema resolver.

Settings are loaded from environment variables prefixed with
``OPENAPI_DEREF_`` and from an optional ``.env`` file. They only tune
the behaviour of the resolution pass; the defaults reproduce the
classic full-resolution semantics.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class ResolverSettings(BaseSettings):
    """Resolver settings loaded from environment variables.

    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    :param legacy_required_positions: Mark composed properties required by
        their position in the member's ``required`` list instead of by name
    :type legacy_required_positions: bool
    :param resolve_inline_items: Also walk inline (non-``$ref``) array items
    :type resolve_inline_items: bool
    :param copy_member_extensions: Copy ``x-*`` entries of composition
        members onto the flattened schema
    :type copy_member_extensions: bool
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAPI_DEREF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )
    legacy_required_positions: bool = Field(
        False,
        description="Match required names by position instead of by name",
    )
    resolve_inline_items: bool = Field(
        False, description="Resolve references inside inline array items"
    )
    copy_member_extensions: bool = Field(
        True, description="Copy x-* extensions of composition members"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept log levels in any letter case.

        :param v: Raw log level value
        :type v: Any
        :return: Upper-cased level when given a string
        :rtype: Any
        """
        if isinstance(v, str):
            return v.strip().upper()
        return v


def load_settings(**overrides: Any) -> ResolverSettings:
    """Build settings from the environment plus explicit overrides.

    :param overrides: Field values taking precedence over the environment
    :return: Validated settings
    :rtype: ResolverSettings
    :raises ConfigurationError: If a value fails validation
    """
    try:
        return ResolverSettings(**overrides)
    except ValidationError as e:
        errors = e.errors()
        setting = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
        raise ConfigurationError(
            f"Invalid resolver configuration: {e}", setting=setting
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> ResolverSettings:
    """Return the process-wide settings instance."""
    return load_settings()
