"""
fspiop-errors: FSPIOP API error normalisation.

Registry of the canonical API error codes, the FSPIOPError that
renders itself into the errorInformation body, and factory functions
that turn framework and validation errors into FSPIOPErrors.

Layers:
    - domain: Error-code registry, error-type bands, FSPIOPError.
    - application: Factory functions.
    - interfaces: FastAPI handlers, framework adapters, schemas.
    - shared: Logging configuration.

Usage:
    from fspiop_errors import FSPIOPErrorCodes, create_fspiop_error

    error = create_fspiop_error(FSPIOPErrorCodes.PARTY_NOT_FOUND, "msisdn 123")
    body = error.to_api_error_object()
"""

from fspiop_errors.application.factory import (
    create_fspiop_error,
    create_fspiop_error_from_error_code,
    create_fspiop_error_from_error_information,
    create_fspiop_error_from_validation_error,
    create_internal_server_fspiop_error,
    reformat_fspiop_error,
    validate_fspiop_error_code,
    validate_fspiop_error_groups,
)
from fspiop_errors.domain.entities import ErrorCodeEntry
from fspiop_errors.domain.error_types import ERROR_TYPES, ErrorTypeRange
from fspiop_errors.domain.errors import (
    DuplicateErrorCodeError,
    FSPIOPError,
    ParameterValidationError,
    RegistryError,
    is_fspiop_error,
)
from fspiop_errors.domain.registry import (
    ErrorCodeRegistry,
    FSPIOPErrorCodes,
    find_error_type,
    find_fspiop_error_code,
    get_registry,
    init_registry,
)

__version__ = "1.0.0"

__all__ = [
    "ERROR_TYPES",
    "DuplicateErrorCodeError",
    "ErrorCodeEntry",
    "ErrorCodeRegistry",
    "ErrorTypeRange",
    "FSPIOPError",
    "FSPIOPErrorCodes",
    "ParameterValidationError",
    "RegistryError",
    "create_fspiop_error",
    "create_fspiop_error_from_error_code",
    "create_fspiop_error_from_error_information",
    "create_fspiop_error_from_validation_error",
    "create_internal_server_fspiop_error",
    "find_error_type",
    "find_fspiop_error_code",
    "get_registry",
    "init_registry",
    "is_fspiop_error",
    "reformat_fspiop_error",
    "validate_fspiop_error_code",
    "validate_fspiop_error_groups",
]
