"""
Centralized error handlers for FastAPI.

Rewrites every error leaving the application into an FSPIOP compliant
errorInformation body. Framework errors are mapped to canonical error
codes; anything unexpected becomes an INTERNAL_SERVER_ERROR.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fspiop_errors.application.factory import (
    create_fspiop_error,
    reformat_fspiop_error,
    validate_fspiop_error_code,
    validate_fspiop_error_groups,
)
from fspiop_errors.core.config import settings
from fspiop_errors.domain.errors import FSPIOPError
from fspiop_errors.domain.registry import FSPIOPErrorCodes
from fspiop_errors.interfaces.validation import (
    create_fspiop_error_from_http_exception,
    create_fspiop_error_from_request_validation,
)

logger = logging.getLogger(__name__)

HTTP_500 = 500


def get_reply_to(request: Request) -> str | None:
    """Return the participant an error for this request is addressed to."""
    return request.headers.get(settings.reply_to_header)


def error_response(
    error: FSPIOPError, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Render an FSPIOPError as a JSON response.

    Args:
        error: The error to render.
        headers: Extra response headers, e.g. Allow.
    """
    status_code = error.http_status_code or HTTP_500
    body = error.to_api_error_object(
        include_cause_extension=settings.include_cause_extension,
        truncate_extensions=settings.truncate_extensions,
    )
    logger.log(
        logging.ERROR if status_code >= HTTP_500 else logging.WARNING,
        "FSPIOPError response %s: %s",
        body["errorInformation"]["errorCode"],
        body["errorInformation"]["errorDescription"],
    )
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Register the FSPIOP error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(FSPIOPError)
    async def handle_fspiop_error(
        _request: Request, exc: FSPIOPError
    ) -> JSONResponse:
        """Render errors raised as FSPIOPErrors."""
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render failed header, path, query and body validation."""
        error = create_fspiop_error_from_request_validation(exc, get_reply_to(request))
        return error_response(error)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render framework HTTP errors such as unknown URIs."""
        error, headers = create_fspiop_error_from_http_exception(
            request, exc, get_reply_to(request)
        )
        return error_response(error, headers=headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        error = reformat_fspiop_error(exc, reply_to=get_reply_to(request))
        return error_response(error)


async def validate_incoming_error_code(request: Request) -> None:
    """Reject error callbacks whose error code is not a valid FSPIOP code.

    Use as a route dependency. Registered codes and scheme-specific codes
    inside a valid category are accepted.

    Raises:
        FSPIOPError: VALIDATION_ERROR, rendered as HTTP 400.
    """
    payload: Any = None
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Error callback body is not valid JSON")
    error_information = payload.get("errorInformation") if isinstance(payload, dict) else None
    incoming_error_code = (
        error_information.get("errorCode") if isinstance(error_information, dict) else None
    )

    try:
        validate_fspiop_error_code(incoming_error_code)
    except FSPIOPError:
        try:
            validate_fspiop_error_groups(incoming_error_code)
        except FSPIOPError:
            raise create_fspiop_error(
                FSPIOPErrorCodes.VALIDATION_ERROR,
                f"The incoming error code: {incoming_error_code} is not a valid "
                "mojaloop specification error code",
                reply_to=get_reply_to(request),
            ) from None
