"""
Pydantic schemas of the FSPIOP error body.

These schemas mirror the ErrorInformationObject of the API definition.
They validate error bodies received from other participants and
document the error responses in the OpenAPI schema.
No business logic belongs here.
"""

from pydantic import BaseModel, Field

from fspiop_errors.domain.error_types import (
    ERROR_DESCRIPTION_MAX_LENGTH,
    EXTENSION_KEY_MAX_LENGTH,
    EXTENSION_KEY_MIN_LENGTH,
    EXTENSION_VALUE_MAX_LENGTH,
    EXTENSION_VALUE_MIN_LENGTH,
)

ERROR_CODE_PATTERN = r"^[1-9]\d{3}$"
EXTENSION_LIST_MAX_ITEMS = 16


class Extension(BaseModel):
    """A single key/value pair of additional error information."""

    key: str = Field(
        ..., min_length=EXTENSION_KEY_MIN_LENGTH, max_length=EXTENSION_KEY_MAX_LENGTH
    )
    value: str = Field(
        ...,
        min_length=EXTENSION_VALUE_MIN_LENGTH,
        max_length=EXTENSION_VALUE_MAX_LENGTH,
    )


class ExtensionList(BaseModel):
    """Wrapper around the list of extensions."""

    extension: list[Extension] = Field(
        ..., min_length=1, max_length=EXTENSION_LIST_MAX_ITEMS
    )


class ErrorInformation(BaseModel):
    """Error code, description and optional extensions.

    Attributes:
        errorCode: Four-digit error code.
        errorDescription: Description of the error (1-128 chars).
        extensionList: Optional additional information.
    """

    errorCode: str = Field(..., pattern=ERROR_CODE_PATTERN)
    errorDescription: str = Field(
        ..., min_length=1, max_length=ERROR_DESCRIPTION_MAX_LENGTH
    )
    extensionList: ExtensionList | None = None


class ErrorInformationObject(BaseModel):
    """Body of every FSPIOP error response and error callback."""

    errorInformation: ErrorInformation
