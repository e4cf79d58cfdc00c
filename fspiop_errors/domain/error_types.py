"""
Error-type bands of the FSPIOP API.

Each band is a regex over four-digit error codes together with a
description and the default HTTP status for codes in that band.
Bands are declarative data and must not overlap.
No framework imports allowed.
"""

import re
from dataclasses import dataclass, field

EXTENSION_KEY_MIN_LENGTH = 1
EXTENSION_KEY_MAX_LENGTH = 32
EXTENSION_VALUE_MIN_LENGTH = 1
EXTENSION_VALUE_MAX_LENGTH = 128
ERROR_CODE_LENGTH = 4
ERROR_DESCRIPTION_MAX_LENGTH = 128

# Extension keys reserved for carrying the diagnostic stack
CAUSE_KEY = "cause"
CAUSE_KEYS = (CAUSE_KEY, "_cause")


@dataclass(frozen=True)
class ErrorTypeRange:
    """A band of error codes sharing a category.

    Attributes:
        name: Identifier of the band, e.g. ``PAYEE_LIMIT_ERROR``.
        regex: Pattern matched against the code string.
        description: Human-readable category name.
        http_status_code: Default HTTP status for codes in the band.
    """

    name: str
    regex: str
    description: str
    http_status_code: int
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.regex))

    def matches(self, code: str) -> bool:
        """Return True if the code string falls inside this band."""
        return self._compiled.fullmatch(code) is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "regex": self.regex,
            "description": self.description,
            "httpStatusCode": self.http_status_code,
        }


ERROR_TYPES: tuple[ErrorTypeRange, ...] = (
    ErrorTypeRange("GENERIC_COMMUNICATION_ERROR", r"^10[0-9]{2}$", "Generic Communication Error", 503),
    ErrorTypeRange("GENERIC_SERVER_ERROR", r"^20[0-9]{2}$", "Generic Server Error", 500),
    ErrorTypeRange("GENERIC_CLIENT_ERROR", r"^30[0-9]{2}$", "Generic Client Error", 400),
    ErrorTypeRange("CLIENT_VALIDATION_ERROR", r"^31[0-9]{2}$", "Client Validation Error", 400),
    ErrorTypeRange("IDENTIFIER_ERROR", r"^32[0-9]{2}$", "Identifier Error", 400),
    ErrorTypeRange("EXPIRED_ERROR", r"^33[0-9]{2}$", "Expired Error", 400),
    ErrorTypeRange("GENERIC_PAYER_ERROR", r"^40[0-9]{2}$", "Generic Payer Error", 400),
    ErrorTypeRange("PAYER_REJECTION_ERROR", r"^41[0-9]{2}$", "Payer Rejection Error", 400),
    ErrorTypeRange("PAYER_LIMIT_ERROR", r"^42[0-9]{2}$", "Payer Limit Error", 400),
    ErrorTypeRange("PAYER_PERMISSION_ERROR", r"^43[0-9]{2}$", "Payer Permission Error", 400),
    ErrorTypeRange("PAYER_BLOCKED_ERROR", r"^44[0-9]{2}$", "Payer Blocker Error", 400),
    ErrorTypeRange("GENERIC_PAYEE_ERROR", r"^50[0-9]{2}$", "Generic Payee Error", 400),
    ErrorTypeRange("PAYEE_REJECTION_ERROR", r"^51[0-9]{2}$", "Payee Rejection Error", 400),
    ErrorTypeRange("PAYEE_LIMIT_ERROR", r"^52[0-9]{2}$", "Payee Limit Error", 400),
    ErrorTypeRange("PAYEE_PERMISSION_ERROR", r"^53[0-9]{2}$", "Payee Permission Error", 400),
    ErrorTypeRange("PAYEE_BLOCKED_ERROR", r"^54[0-9]{2}$", "Payee Blocker Error", 400),
    ErrorTypeRange("GENERIC_SETTLEMENT_ERROR", r"^60[0-9]{2}$", "Settlement Related Error", 400),
)
