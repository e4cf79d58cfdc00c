"""
Library configuration.

Loads settings from environment variables and .env file.
Every variable is prefixed with FSPIOP_ERRORS_ so that the library
can share an environment with the service that embeds it.
"""

from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ERROR_GROUP_PATTERN = r"^(10|20|3[0-4]|4[0-4]|5[0-4]|60)[0-9]{2}$"


class Settings(BaseSettings):
    """Library settings loaded from environment.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        reply_to_header: Request header naming the participant an error
            is addressed to.
        include_cause_extension: Whether HTTP handlers render the cause
            extension into error bodies.
        truncate_extensions: Whether HTTP handlers truncate extension
            values to the API maximum.
        error_group_pattern: Regex of error-code categories accepted for
            scheme-specific codes. New bands get added here as the API
            grows.
        error_code_overrides: Extra error-code table merged over the
            built-in one, e.g. FSPIOP_ERRORS_ERROR_CODE_OVERRIDES=
            '{"INTERNAL_SERVER_ERROR": {"http_status_code": 502}}'.
    """

    model_config = SettingsConfigDict(
        env_prefix="FSPIOP_ERRORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    reply_to_header: str = "fspiop-source"
    include_cause_extension: bool = False
    truncate_extensions: bool = True
    error_group_pattern: str = DEFAULT_ERROR_GROUP_PATTERN
    error_code_overrides: dict[str, dict[str, Any]] = {}


settings = Settings()
