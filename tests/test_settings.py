"""
Tests for library configuration and logging setup.
"""

import logging

from fspiop_errors.core.config import DEFAULT_ERROR_GROUP_PATTERN, Settings
from fspiop_errors.shared.logging import configure_logging


class TestSettings:
    """Tests for Settings loaded from the environment."""

    def test_defaults(self, monkeypatch) -> None:
        """Defaults keep cause extensions off and truncation on."""
        for name in ("INCLUDE_CAUSE_EXTENSION", "TRUNCATE_EXTENSIONS", "LOG_LEVEL"):
            monkeypatch.delenv(f"FSPIOP_ERRORS_{name}", raising=False)
        config = Settings(_env_file=None)

        assert config.log_level == "INFO"
        assert config.reply_to_header == "fspiop-source"
        assert config.include_cause_extension is False
        assert config.truncate_extensions is True
        assert config.error_group_pattern == DEFAULT_ERROR_GROUP_PATTERN
        assert config.error_code_overrides == {}

    def test_prefixed_environment_variables(self, monkeypatch) -> None:
        """Only FSPIOP_ERRORS_ prefixed variables are read."""
        monkeypatch.setenv("FSPIOP_ERRORS_INCLUDE_CAUSE_EXTENSION", "true")
        monkeypatch.setenv("FSPIOP_ERRORS_REPLY_TO_HEADER", "fspiop-destination")
        monkeypatch.setenv("TRUNCATE_EXTENSIONS", "false")
        config = Settings(_env_file=None)

        assert config.include_cause_extension is True
        assert config.reply_to_header == "fspiop-destination"
        assert config.truncate_extensions is True

    def test_error_code_overrides_parsed_from_json(self, monkeypatch) -> None:
        monkeypatch.setenv(
            "FSPIOP_ERRORS_ERROR_CODE_OVERRIDES",
            '{"INTERNAL_SERVER_ERROR": {"http_status_code": 502}}',
        )
        config = Settings(_env_file=None)
        assert config.error_code_overrides == {
            "INTERNAL_SERVER_ERROR": {"http_status_code": 502}
        }


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_applied(self) -> None:
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        configure_logging("WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("verbose")
        assert logging.getLogger().level == logging.INFO

    def test_library_level_set_separately(self) -> None:
        """The library loggers can be quietened without touching the root level."""
        configure_logging("INFO", library_level="error")
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("fspiop_errors").level == logging.ERROR
        assert not logging.getLogger("fspiop_errors.interfaces.handlers").isEnabledFor(
            logging.WARNING
        )

        configure_logging("INFO")
        assert logging.getLogger("fspiop_errors").level == logging.NOTSET
