"""
FSPIOP API error-code tables.

MOJALOOP_API_ERROR_CODES is the base table from section 7.6 of the
API definition. Entries without an http_status_code are normally only
returned in error callbacks after the request was accepted; they
inherit the default status of their band when the registry is built.

MOJALOOP_API_ERROR_CODES_OVERRIDE is merged over the base table field
by field. It may redefine fields of an existing entry or add new ones.
"""

from typing import Any

MOJALOOP_API_ERROR_CODES: dict[str, dict[str, Any]] = {
    # Generic communication errors
    "COMMUNICATION_ERROR": {"code": "1000", "message": "Communication error"},
    "DESTINATION_COMMUNICATION_ERROR": {"code": "1001", "message": "Destination communication error"},
    # Generic server errors
    "SERVER_ERROR": {"code": "2000", "message": "Generic server error"},
    "INTERNAL_SERVER_ERROR": {"code": "2001", "message": "Internal server error"},
    "NOT_IMPLEMENTED": {"code": "2002", "message": "Not implemented", "http_status_code": 501},
    "SERVICE_CURRENTLY_UNAVAILABLE": {"code": "2003", "message": "Service currently unavailable", "http_status_code": 503},
    "SERVER_TIMED_OUT": {"code": "2004", "message": "Server timed out"},
    "SERVER_BUSY": {"code": "2005", "message": "Server busy"},
    # Generic client errors
    "CLIENT_ERROR": {"code": "3000", "message": "Generic client error", "http_status_code": 400},
    "METHOD_NOT_ALLOWED": {
        "code": "3000",
        "message": "Generic client error - Method Not Allowed",
        "http_status_code": 405,
        "alias_of": "CLIENT_ERROR",
    },
    "UNACCEPTABLE_VERSION": {"code": "3001", "message": "Unacceptable version requested", "http_status_code": 406},
    "UNKNOWN_URI": {"code": "3002", "message": "Unknown URI", "http_status_code": 404},
    "ADD_PARTY_INFO_ERROR": {"code": "3003", "message": "Add Party information error"},
    # Thrown by v1.1 switches although not listed in the v1.1 definition
    "DELETE_PARTY_INFO_ERROR": {"code": "3040", "message": "Delete Party information error"},
    # Client validation errors
    "VALIDATION_ERROR": {"code": "3100", "message": "Generic validation error", "http_status_code": 400},
    "MALFORMED_SYNTAX": {"code": "3101", "message": "Malformed syntax", "http_status_code": 400},
    "MISSING_ELEMENT": {"code": "3102", "message": "Missing mandatory element", "http_status_code": 400},
    "TOO_MANY_ELEMENTS": {"code": "3103", "message": "Too many elements", "http_status_code": 400},
    "TOO_LARGE_PAYLOAD": {"code": "3104", "message": "Too large payload", "http_status_code": 400},
    "INVALID_SIGNATURE": {"code": "3105", "message": "Invalid signature", "http_status_code": 400},
    "MODIFIED_REQUEST": {"code": "3106", "message": "Modified request", "http_status_code": 400},
    "MISSING_MANDATORY_EXTENSION": {"code": "3107", "message": "Missing mandatory extension parameter", "http_status_code": 400},
    # Identifier errors
    "ID_NOT_FOUND": {"code": "3200", "message": "Generic ID not found"},
    "DESTINATION_FSP_ERROR": {"code": "3201", "message": "Destination FSP Error"},
    "PAYER_FSP_ID_NOT_FOUND": {"code": "3202", "message": "Payer FSP ID not found"},
    "PAYEE_FSP_ID_NOT_FOUND": {"code": "3203", "message": "Payee FSP ID not found"},
    "PARTY_NOT_FOUND": {"code": "3204", "message": "Party not found"},
    "QUOTE_ID_NOT_FOUND": {"code": "3205", "message": "Quote ID not found"},
    "TXN_REQUEST_ID_NOT_FOUND": {"code": "3206", "message": "Transaction request ID not found"},
    "TXN_ID_NOT_FOUND": {"code": "3207", "message": "Transaction ID not found"},
    "TRANSFER_ID_NOT_FOUND": {"code": "3208", "message": "Transfer ID not found"},
    "BULK_QUOTE_ID_NOT_FOUND": {"code": "3209", "message": "Bulk quote ID not found"},
    "BULK_TRANSFER_ID_NOT_FOUND": {"code": "3210", "message": "Bulk transfer ID not found"},
    # Expired errors
    "EXPIRED_ERROR": {"code": "3300", "message": "Generic expired error"},
    "TXN_REQUEST_EXPIRED": {"code": "3301", "message": "Transaction request expired"},
    "QUOTE_EXPIRED": {"code": "3302", "message": "Quote expired"},
    "TRANSFER_EXPIRED": {"code": "3303", "message": "Transfer expired"},
    # Payer errors
    "PAYER_ERROR": {"code": "4000", "message": "Generic Payer error"},
    "PAYER_FSP_INSUFFICIENT_LIQUIDITY": {"code": "4001", "message": "Payer FSP insufficient liquidity"},
    "PAYER_REJECTION": {"code": "4100", "message": "Generic Payer rejection"},
    "PAYER_REJECTED_TXN_REQUEST": {"code": "4101", "message": "Payer rejected transaction request"},
    "PAYER_FSP_UNSUPPORTED_TXN_TYPE": {"code": "4102", "message": "Payer FSP unsupported transaction type"},
    "PAYER_UNSUPPORTED_CURRENCY": {"code": "4103", "message": "Payer unsupported currency"},
    "PAYER_LIMIT_ERROR": {"code": "4200", "message": "Payer limit error"},
    "PAYER_PERMISSION_ERROR": {"code": "4300", "message": "Payer permission error"},
    "PAYER_BLOCKED_ERROR": {"code": "4400", "message": "Generic Payer blocked error"},
    # Payee errors
    "PAYEE_ERROR": {"code": "5000", "message": "Generic Payee error"},
    "PAYEE_FSP_INSUFFICIENT_LIQUIDITY": {"code": "5001", "message": "Payee FSP insufficient liquidity"},
    "PAYEE_REJECTION": {"code": "5100", "message": "Generic Payee rejection"},
    "PAYEE_REJECTED_QUOTE": {"code": "5101", "message": "Payee rejected quote"},
    "PAYEE_FSP_UNSUPPORTED_TXN_TYPE": {"code": "5102", "message": "Payee FSP unsupported transaction type"},
    "PAYEE_FSP_REJECTED_QUOTE": {"code": "5103", "message": "Payee FSP rejected quote"},
    "PAYEE_REJECTED_TXN": {"code": "5104", "message": "Payee rejected transaction"},
    "PAYEE_FSP_REJECTED_TXN": {"code": "5105", "message": "Payee FSP rejected transaction"},
    "PAYEE_UNSUPPORTED_CURRENCY": {"code": "5106", "message": "Payee unsupported currency"},
    "PAYEE_LIMIT_ERROR": {"code": "5200", "message": "Payee limit error"},
    "PAYEE_PERMISSION_ERROR": {"code": "5300", "message": "Payee permission error"},
    "GENERIC_PAYEE_BLOCKED_ERROR": {"code": "5400", "message": "Generic Payee blocked error"},
}

MOJALOOP_API_ERROR_CODES_OVERRIDE: dict[str, dict[str, Any]] = {
    "GENERIC_SETTLEMENT_ERROR": {
        "code": "6000",
        "description": "Generic Settlement Error",
        "message": "Generic Settlement Error",
    },
}
