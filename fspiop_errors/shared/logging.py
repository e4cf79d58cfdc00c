"""
Logging setup for services embedding the library.

The library itself only creates module loggers under ``fspiop_errors``
and never configures handlers. A host service calls configure_logging
once at startup, before building its FastAPI app:

    from fspiop_errors.shared.logging import configure_logging

    configure_logging()                 # level from FSPIOP_ERRORS_LOG_LEVEL
    configure_logging("DEBUG")          # explicit root level
    configure_logging(library_level="WARNING")  # quieten the library only

Never logs extension values or raw request payloads.
"""

import logging
import sys

from fspiop_errors.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LIBRARY_LOGGER = "fspiop_errors"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(level: str | None = None, library_level: str | None = None) -> None:
    """Configure root logging for the host process.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR). Defaults
            to the ``log_level`` setting; unknown names fall back to INFO.
        library_level: Separate level for the ``fspiop_errors`` loggers,
            e.g. to hide the warnings logged for every 4xx response.
    """
    logging.basicConfig(
        level=_level(level or settings.log_level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger(LIBRARY_LOGGER).setLevel(
        _level(library_level) if library_level else logging.NOTSET
    )

    # Access logs repeat what the error handlers already log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
