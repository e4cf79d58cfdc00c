"""
Adapters from FastAPI/Starlette errors to FSPIOPErrors.

Translates request validation errors and HTTP exceptions raised by
the framework into canonical error codes. Route introspection is only
used to build the Allow header of method-not-allowed responses.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from fspiop_errors.application.factory import (
    create_fspiop_error,
    create_fspiop_error_from_validation_error,
)
from fspiop_errors.domain.entities import ErrorCodeEntry
from fspiop_errors.domain.errors import FSPIOPError
from fspiop_errors.domain.registry import FSPIOPErrorCodes

HTTP_METHODS = ("get", "post", "put", "patch", "delete")

HTTP_400 = 400
HTTP_404 = 404
HTTP_405 = 405
HTTP_415 = 415


def validator_error_from_pydantic(error: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a pydantic error into a validator error mapping.

    The first element of ``loc`` names the request part (``header``,
    ``path``, ``query`` or ``body``); the rest names the element.
    """
    loc = tuple(error.get("loc") or ())
    source = str(loc[0]) if loc else None
    label = ".".join(str(part) for part in loc[1:])
    message = error.get("msg")
    if label and message:
        message = f"'{label}' {message[0].lower()}{message[1:]}"
    return {
        "type": error.get("type"),
        "message": message,
        "context": {"label": label or None},
        "source": source,
    }


def create_fspiop_error_from_request_validation(
    exc: RequestValidationError, reply_to: str | None = None
) -> FSPIOPError:
    """Create an FSPIOPError from the first error of a failed request validation."""
    errors = exc.errors()
    validator_error = validator_error_from_pydantic(errors[0] if errors else {})
    return create_fspiop_error_from_validation_error(
        validator_error, cause=exc, reply_to=reply_to
    )


def error_code_for_status(
    status_code: int | None, allowed_methods: Sequence[str] = ()
) -> ErrorCodeEntry:
    """Map an HTTP status to the matching generic error code.

    Args:
        status_code: Status of the framework error.
        allowed_methods: Methods the requested path supports. A 404 on a
            path that exists under other methods is a method-not-allowed.
    """
    if status_code == HTTP_400:
        return FSPIOPErrorCodes.CLIENT_ERROR
    if status_code == HTTP_404:
        if allowed_methods:
            return FSPIOPErrorCodes.METHOD_NOT_ALLOWED
        return FSPIOPErrorCodes.UNKNOWN_URI
    if status_code == HTTP_405:
        return FSPIOPErrorCodes.METHOD_NOT_ALLOWED
    if status_code == HTTP_415:
        return FSPIOPErrorCodes.MALFORMED_SYNTAX
    return FSPIOPErrorCodes.INTERNAL_SERVER_ERROR


def find_matches(app: FastAPI, path: str) -> list[str]:
    """Return the lowercase methods under which the app routes a path."""
    found: set[str] = set()
    for route in app.router.routes:
        path_regex = getattr(route, "path_regex", None)
        route_methods = getattr(route, "methods", None)
        if path_regex is None or not route_methods:
            continue
        if path_regex.match(path):
            found.update(method.lower() for method in route_methods)
    return [method for method in HTTP_METHODS if method in found]


def get_allow_header(methods: Iterable[str]) -> str:
    """Join methods into an Allow header value, e.g. ``get,put``."""
    return ",".join(methods)


def create_fspiop_error_from_http_exception(
    request: Request, exc: StarletteHTTPException, reply_to: str | None = None
) -> tuple[FSPIOPError, dict[str, str]]:
    """Create an FSPIOPError from a framework HTTP exception.

    Returns:
        The error and the headers to send with it. Method-not-allowed
        errors carry the Allow header and no message of their own.
    """
    allowed_methods: list[str] = []
    if exc.status_code in (HTTP_404, HTTP_405):
        allowed_methods = find_matches(request.app, request.url.path)
        # A 404 raised by the route serving this method is a missing resource
        if exc.status_code == HTTP_404 and request.method.lower() in allowed_methods:
            allowed_methods = []
    api_error_code = error_code_for_status(exc.status_code, allowed_methods)

    headers: dict[str, str] = {}
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if api_error_code.name == "METHOD_NOT_ALLOWED":
        message = ""
        if allowed_methods:
            headers["Allow"] = get_allow_header(allowed_methods)
    return create_fspiop_error(api_error_code, message, exc, reply_to), headers
