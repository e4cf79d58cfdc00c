"""
Factory functions for building FSPIOPErrors.

Every function either returns an FSPIOPError or raises one. An invalid
error code always surfaces as a raised INTERNAL_SERVER_ERROR, which
signals a defect in the caller rather than a fault of the remote
participant.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from pydantic import BaseModel

from fspiop_errors.core.config import settings
from fspiop_errors.domain.entities import ErrorCodeEntry
from fspiop_errors.domain.errors import (
    Extensions,
    FSPIOPError,
    is_fspiop_error,
    safe_stringify,
)
from fspiop_errors.domain.registry import (
    FSPIOPErrorCodes,
    find_error_type,
    find_fspiop_error_code,
)

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed due to error code being invalid"

# Validator error kinds mapped to error code names. Joi-style tags and
# pydantic v2 error types are both listed; anything else is a generic
# validation error.
VALIDATION_ERROR_KINDS: dict[str, str] = {
    "any.required": "MISSING_ELEMENT",
    "any.empty": "MISSING_ELEMENT",
    "missing": "MISSING_ELEMENT",
    "date.format": "MALFORMED_SYNTAX",
    "any.allowOnly": "MALFORMED_SYNTAX",
    "any.only": "MALFORMED_SYNTAX",
    "literal_error": "MALFORMED_SYNTAX",
    "enum": "MALFORMED_SYNTAX",
    "uuid_parsing": "MALFORMED_SYNTAX",
    "json_invalid": "MALFORMED_SYNTAX",
}
VALIDATION_ERROR_KIND_PREFIXES: tuple[tuple[str, str], ...] = (
    ("string.", "MALFORMED_SYNTAX"),
    ("string_", "MALFORMED_SYNTAX"),
    ("date_", "MALFORMED_SYNTAX"),
    ("datetime_", "MALFORMED_SYNTAX"),
)

SOURCE_MESSAGES: dict[str, str] = {
    "header": "'{label}' HTTP header",
    "headers": "'{label}' HTTP header",
    "params": "'{label}' URI path parameter",
    "path": "'{label}' URI path parameter",
}


def _describe(value: Any) -> str:
    if isinstance(value, ErrorCodeEntry):
        value = value.to_dict()
    return safe_stringify(value)


def _candidate_entry(api_error_code: Any) -> ErrorCodeEntry | None:
    if isinstance(api_error_code, ErrorCodeEntry):
        entry = api_error_code
    elif isinstance(api_error_code, Mapping):
        entry = ErrorCodeEntry.from_mapping(api_error_code)
    else:
        return None
    if not entry.code or not entry.message:
        return None
    return entry


def create_fspiop_error(
    api_error_code: ErrorCodeEntry | Mapping[str, Any] | None,
    message: str | None = None,
    cause: Any = None,
    reply_to: str | None = None,
    extensions: Extensions | None = None,
    use_message_as_description: bool = False,
) -> FSPIOPError:
    """Create an FSPIOPError for an error code.

    The code must either be registered or fall inside a known error-type
    band. Its HTTP status is taken from the caller when given, else from
    the registered entry or band.

    Args:
        api_error_code: A registry entry or a mapping with ``code`` and
            ``message``.
        message: Description of this occurrence of the error.
        cause: The original exception, string or value.
        reply_to: Participant to notify of the error.
        extensions: Extension list or ``{"extension": [...]}`` wrapper.
        use_message_as_description: Render ``message`` verbatim as the
            error description.

    Returns:
        The new error.

    Raises:
        FSPIOPError: INTERNAL_SERVER_ERROR if the code is invalid.
    """
    entry = _candidate_entry(api_error_code)
    if entry is not None:
        match = find_fspiop_error_code(entry.code)
        if match is not None:
            if entry.type is None:
                entry = replace(entry, type=match.type)
            if entry.http_status_code is None:
                entry = entry.with_http_status_code(match.http_status_code)
            return FSPIOPError(
                cause, message, reply_to, entry, extensions, use_message_as_description
            )
        error_type = find_error_type(entry.code)
        if error_type is not None:
            entry = replace(entry, type=error_type)
            if entry.http_status_code is None:
                entry = entry.with_http_status_code(error_type.http_status_code)
            return FSPIOPError(
                cause, message, reply_to, entry, extensions, use_message_as_description
            )

    logger.warning(
        "Invalid api_error_code passed to create_fspiop_error: %s",
        _describe(api_error_code),
    )
    raise FSPIOPError(
        cause,
        "Factory function create_fspiop_error failed due to api_error_code "
        f"being invalid - {_describe(api_error_code)}.",
        reply_to,
        FSPIOPErrorCodes.INTERNAL_SERVER_ERROR,
        extensions,
    )


def _validation_error_code(kind: str | None) -> ErrorCodeEntry:
    name = VALIDATION_ERROR_KINDS.get(kind or "")
    if name is None:
        for prefix, prefix_name in VALIDATION_ERROR_KIND_PREFIXES:
            if kind and kind.startswith(prefix):
                name = prefix_name
                break
    return FSPIOPErrorCodes[name or "VALIDATION_ERROR"]


def _validation_source(validator_error: Mapping[str, Any], cause: Any) -> str | None:
    source = validator_error.get("source")
    if source:
        return source
    # Boom-style causes carry the source in output.payload.validation
    output = getattr(cause, "output", None)
    if isinstance(cause, Mapping):
        output = cause.get("output")
    if isinstance(output, Mapping):
        validation = (output.get("payload") or {}).get("validation") or {}
        return validation.get("source")
    return None


def create_fspiop_error_from_validation_error(
    validator_error: Mapping[str, Any],
    cause: Any = None,
    reply_to: str | None = None,
    source: str | None = None,
) -> FSPIOPError:
    """Create an FSPIOPError from a schema validator error.

    Args:
        validator_error: Mapping with the error ``type`` (or ``keyword``),
            ``message`` and ``context.label`` of the offending element.
        cause: The error raised by the validation layer, if any.
        reply_to: Participant to notify of the error.
        source: Where the element came from (``header``, ``path``,
            ``params``, ``query`` or ``body``). Read from the validator
            error or the cause when not given.

    Returns:
        The new error. Missing or invalid headers and path parameters
        are described by name rather than by the validator's message.
    """
    kind = validator_error.get("type") or validator_error.get("keyword")
    api_error_code = _validation_error_code(kind)

    stack_trace = getattr(cause, "stack", None) or cause

    source = source or _validation_source(validator_error, cause)
    context = validator_error.get("context") or {}
    label = context.get("label") or context.get("key")
    template = SOURCE_MESSAGES.get(source or "")
    if template and label:
        message = template.format(label=label)
    else:
        message = validator_error.get("message")

    return create_fspiop_error(api_error_code, message, stack_trace, reply_to)


def create_internal_server_fspiop_error(
    message: str | None = None,
    cause: Any = None,
    reply_to: str | None = None,
    extensions: Extensions | None = None,
) -> FSPIOPError:
    """Create an INTERNAL_SERVER_ERROR FSPIOPError."""
    return create_fspiop_error(
        FSPIOPErrorCodes.INTERNAL_SERVER_ERROR, message, cause, reply_to, extensions
    )


def reformat_fspiop_error(
    error: BaseException | Any,
    api_error_code: ErrorCodeEntry | Mapping[str, Any] | None = None,
    reply_to: str | None = None,
    extensions: Extensions | None = None,
) -> FSPIOPError:
    """Return error as an FSPIOPError.

    FSPIOPErrors are returned as they are. Anything else is wrapped,
    keeping its message and traceback, using api_error_code
    (INTERNAL_SERVER_ERROR by default).
    """
    if is_fspiop_error(error):
        return error
    if api_error_code is None:
        api_error_code = FSPIOPErrorCodes.INTERNAL_SERVER_ERROR
    message = getattr(error, "message", None)
    if not isinstance(message, str):
        message = str(error)
    return create_fspiop_error(api_error_code, message, error, reply_to, extensions)


def create_fspiop_error_from_error_information(
    error_information: Mapping[str, Any] | BaseModel,
    cause: Any = None,
    reply_to: str | None = None,
) -> FSPIOPError:
    """Create an FSPIOPError from an ``errorInformation`` object.

    The description received is kept as it is, so an error from a remote
    participant can be forwarded without changing its text.

    Args:
        error_information: The ``errorInformation`` object, or a whole
            ``{"errorInformation": {...}}`` body, as a mapping or model.
        cause: The original error, if any.
        reply_to: Participant to notify of the error.
    """
    if isinstance(error_information, BaseModel):
        error_information = error_information.model_dump(exclude_none=True)
    if "errorInformation" in error_information:
        error_information = error_information["errorInformation"]
    api_error_code = {
        "code": error_information.get("errorCode"),
        "message": error_information.get("errorDescription"),
    }
    return create_fspiop_error(
        api_error_code,
        error_information.get("errorDescription"),
        cause,
        reply_to,
        error_information.get("extensionList"),
        True,
    )


def _code_to_validate(code: Any) -> str | int | None:
    if isinstance(code, (str, int)) and not isinstance(code, bool):
        return code
    if isinstance(code, ErrorCodeEntry):
        return code.code
    if isinstance(code, Mapping) and code.get("code"):
        return code["code"]
    return None


def _invalid_code(code: Any) -> FSPIOPError:
    logger.warning("Invalid error code: %s", _describe(code))
    return create_internal_server_fspiop_error(
        f"{VALIDATION_FAILED_MESSAGE} - {_describe(code)}."
    )


def validate_fspiop_error_code(code: Any) -> ErrorCodeEntry:
    """Return the registered entry for a code.

    Args:
        code: A four-digit code as number or string, or an entry or
            mapping carrying a ``code``.

    Raises:
        FSPIOPError: INTERNAL_SERVER_ERROR if the code is not registered.
    """
    result = find_fspiop_error_code(_code_to_validate(code))
    if result is None:
        raise _invalid_code(code)
    return result


def validate_fspiop_error_groups(code: Any, pattern: str | None = None) -> bool:
    """Check that a code falls inside a valid error category.

    Scheme-specific codes need not be registered individually, only be
    inside a category of the API, e.g. 5199 is a valid payee rejection.

    Args:
        code: A four-digit code as number or string, or an entry or
            mapping carrying a ``code``.
        pattern: Category regex. Defaults to the ``error_group_pattern``
            setting.

    Returns:
        True.

    Raises:
        FSPIOPError: INTERNAL_SERVER_ERROR if the code is outside every
            category.
    """
    pattern = pattern or settings.error_group_pattern
    code_to_validate = _code_to_validate(code)
    if code_to_validate is not None and re.fullmatch(pattern, str(code_to_validate)):
        return True
    raise _invalid_code(code)


def create_fspiop_error_from_error_code(
    code: Any,
    message: str | None = None,
    cause: Any = None,
    reply_to: str | None = None,
    extensions: Extensions | None = None,
) -> FSPIOPError:
    """Create an FSPIOPError from a registered code given as number or string.

    Raises:
        FSPIOPError: INTERNAL_SERVER_ERROR if the code is not registered.
    """
    api_error_code = validate_fspiop_error_code(code)
    return create_fspiop_error(api_error_code, message, cause, reply_to, extensions)

