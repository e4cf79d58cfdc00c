"""
Errors raised by the FSPIOP error-normalisation library.

FSPIOPError is the canonical, wire-serialisable domain error.
ParameterValidationError and RegistryError are programmer errors:
they are never FSPIOPError instances, so that building the fallback
error can not recurse into itself.
No framework imports allowed.
"""

import copy
import json
import traceback
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from fspiop_errors.domain.entities import ErrorCodeEntry
from fspiop_errors.domain.error_types import (
    CAUSE_KEY,
    CAUSE_KEYS,
    EXTENSION_VALUE_MAX_LENGTH,
)

FSPIOP_ERROR_KIND = "FSPIOPError"
STACK_DEPTH = 10

Extensions = list[dict[str, Any]] | dict[str, Any]


class ParameterValidationError(ValueError):
    """Raised when an FSPIOPError is constructed with invalid parameters."""

    def __init__(self, message: str) -> None:
        self.message = f"FSPIOPError Parameter Validation Failure - {message}"
        super().__init__(self.message)


class RegistryError(ValueError):
    """Raised when the error-code tables are inconsistent."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class DuplicateErrorCodeError(RegistryError):
    """Raised when two error-code entries claim the same wire code."""

    def __init__(self, code: str, first: str, second: str) -> None:
        super().__init__(
            f"Error code {code} is defined by both {first} and {second}"
        )
        self.code = code
        self.names = (first, second)


def is_fspiop_error(obj: object) -> bool:
    """Return True if obj carries the FSPIOPError discriminant.

    Checks the ``kind`` tag rather than the class, so errors created by
    another copy of this package are recognised too.
    """
    return getattr(obj, "kind", None) == FSPIOP_ERROR_KIND


def _decycle(value: Any, ancestors: frozenset[int]) -> Any:
    if isinstance(value, Mapping):
        if id(value) in ancestors:
            return "[Circular]"
        ancestors = ancestors | {id(value)}
        return {str(k): _decycle(v, ancestors) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        if id(value) in ancestors:
            return "[Circular]"
        ancestors = ancestors | {id(value)}
        return [_decycle(v, ancestors) for v in value]
    return value


def safe_stringify(value: Any) -> str:
    """JSON-serialise any value, replacing circular references."""
    return json.dumps(_decycle(value, frozenset()), default=str)


def render_cause(cause: Any) -> str | None:
    """Render a cause as text for the diagnostic stack.

    Strings are used verbatim, exceptions contribute their formatted
    traceback, objects exposing a string ``stack`` contribute that, and
    anything else is serialised as JSON.
    """
    if cause is None:
        return None
    if isinstance(cause, str):
        return cause
    if isinstance(cause, BaseException):
        return "".join(
            traceback.format_exception(type(cause), cause, cause.__traceback__)
        ).rstrip("\n")
    if isinstance(cause, Mapping):
        stack = cause.get("stack")
    else:
        stack = getattr(cause, "stack", None)
    if isinstance(stack, str):
        return stack
    return safe_stringify(cause)


def is_extension_wrapper(extensions: Any) -> bool:
    return isinstance(extensions, Mapping) and isinstance(
        extensions.get("extension"), list
    )


def _has_message(message: str | None) -> bool:
    return bool(message) and message != "null"


def _as_plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    return value


def normalise_extensions(extensions: Any) -> Extensions | None:
    """Return a private, plain-dict copy of an extension list.

    Accepts a bare list of key/value pairs or an ``{"extension": [...]}``
    wrapper, either of which may be given as pydantic models. The form
    given is kept.

    Raises:
        ParameterValidationError: If the shape is not a list or wrapper,
            or an item is not a key/value pair.
    """
    if extensions is None:
        return None
    extensions = _as_plain(extensions)
    if isinstance(extensions, list):
        items = extensions
    elif is_extension_wrapper(extensions):
        items = extensions["extension"]
    else:
        raise ParameterValidationError(
            "extensions is not a list or does not contain an extension list."
        )

    plain_items: list[dict[str, Any]] = []
    for item in items:
        item = _as_plain(item)
        if not isinstance(item, Mapping) or "key" not in item or "value" not in item:
            raise ParameterValidationError(
                f"extension item {safe_stringify(item)} is not a key/value pair."
            )
        plain_items.append(copy.deepcopy(dict(item)))

    if isinstance(extensions, list):
        return plain_items
    wrapper = copy.deepcopy(dict(extensions))
    wrapper["extension"] = plain_items
    return wrapper


class FSPIOPError(Exception):
    """An FSPIOP API compliant error.

    Some code entries carry an ``http_status_code`` for errors returned
    synchronously on the request. Codes without one are only expected in
    error callbacks after the request was accepted with a 202/200.

    Attributes:
        cause: The underlying error, string or value, as given.
        message: Friendly message appended to the code description.
        reply_to: Participant the error is addressed to.
        api_error_code: The resolved error-code entry.
        extensions: The error's own copy of the extension list, either a
            bare list of key/value pairs or an ``{"extension": [...]}``
            wrapper.
        use_message_as_description: Render ``message`` verbatim as the
            error description.
        cause_text: Text rendering of ``cause``.
        stack: Construction traceback followed by ``cause_text``.
    """

    kind = FSPIOP_ERROR_KIND

    def __init__(
        self,
        cause: Any,
        message: str | None,
        reply_to: str | None,
        api_error_code: ErrorCodeEntry | Mapping[str, Any],
        extensions: Extensions | None = None,
        use_message_as_description: bool = False,
    ) -> None:
        extensions = normalise_extensions(extensions)
        if isinstance(api_error_code, Mapping):
            api_error_code = ErrorCodeEntry.from_mapping(api_error_code)
        if not isinstance(api_error_code, ErrorCodeEntry) or not (
            api_error_code.code and api_error_code.message
        ):
            raise ParameterValidationError(
                "api_error_code is not valid error code enum."
            )

        super().__init__(message or "")
        self.cause = cause
        self.message = message
        self.reply_to = reply_to
        self.api_error_code = api_error_code
        self.extensions = extensions
        self.use_message_as_description = use_message_as_description
        self.cause_text = render_cause(cause)
        self.stack = self._capture_stack()

    def _capture_stack(self) -> str:
        frames = traceback.extract_stack()[:-2][-STACK_DEPTH:]
        stack = "Traceback (most recent call last):\n"
        stack += "".join(traceback.format_list(frames))
        stack += f"{type(self).__name__}: {self.message or ''}"
        if self.cause_text:
            stack = f"{stack}\n{self.cause_text}"
        return stack

    @property
    def http_status_code(self) -> int | None:
        return self.api_error_code.http_status_code

    def add_extension(self, key: str, value: Any) -> None:
        """Append a key/value pair to this error's extension list."""
        pair = {"key": key, "value": value}
        if self.extensions is None:
            self.extensions = {"extension": [pair]}
        elif isinstance(self.extensions, list):
            self.extensions.append(pair)
        else:
            self.extensions["extension"].append(pair)

    def _extension_items(self) -> list[dict[str, Any]] | None:
        if self.extensions is None:
            return None
        if isinstance(self.extensions, list):
            return copy.deepcopy(self.extensions)
        return copy.deepcopy(self.extensions["extension"])

    def to_api_error_object(
        self,
        include_cause_extension: bool = False,
        truncate_extensions: bool = True,
    ) -> dict[str, Any]:
        """Return the error as an API compliant ``errorInformation`` body.

        Args:
            include_cause_extension: Add the diagnostic stack as a
                ``cause`` extension. An existing cause extension is kept
                and prefixed with the stack. When False, cause extensions
                are stripped.
            truncate_extensions: Truncate every extension value to the
                API maximum of 128 characters.

        Returns:
            A dict ready to be serialised as the response body. The
            ``extensionList`` key is omitted when no extensions remain.
        """
        description = self.api_error_code.message
        if _has_message(self.message):
            if self.use_message_as_description:
                description = self.message
            else:
                description = f"{description} - {self.message}"

        error_information: dict[str, Any] = {
            "errorCode": self.api_error_code.code,
            "errorDescription": description,
        }

        items = self._extension_items()
        if include_cause_extension:
            items = items if items is not None else []
            existing = next((i for i in items if i.get("key") in CAUSE_KEYS), None)
            if existing is not None:
                existing["value"] = f"{self.stack}\n{existing.get('value')}"
            else:
                items.append({"key": CAUSE_KEY, "value": self.stack})
        elif items is not None:
            items = [i for i in items if i.get("key") not in CAUSE_KEYS]

        if items:
            if truncate_extensions:
                for item in items:
                    if item.get("value"):
                        item["value"] = str(item["value"])[:EXTENSION_VALUE_MAX_LENGTH]
            error_information["extensionList"] = {"extension": items}

        return {"errorInformation": error_information}

    def to_full_error_object(self) -> dict[str, Any]:
        """Return every detail of the error for logging. Never sent over the wire.

        ``cause`` carries the diagnostic stack, or None when the error has
        no cause.
        """
        return {
            "message": self.message,
            "replyTo": self.reply_to,
            "apiErrorCode": self.api_error_code.to_dict(),
            "extensions": copy.deepcopy(self.extensions),
            "cause": self.stack if self.cause is not None else None,
        }

    def __str__(self) -> str:
        return safe_stringify(self.to_full_error_object())
