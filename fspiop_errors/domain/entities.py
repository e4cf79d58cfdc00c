"""
Domain entities for FSPIOP error normalisation.

Entities are immutable once built. The registry hands the same
instances to every caller, so nothing downstream can corrupt
process-wide state by mutating an entry.
No framework imports allowed.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from fspiop_errors.domain.error_types import ErrorTypeRange


@dataclass(frozen=True)
class ErrorCodeEntry:
    """A canonical API error code.

    Attributes:
        name: Identifier of the entry in the code table.
        code: Four-digit code as a string, e.g. ``"3102"``.
        message: Canonical description of the code.
        http_status_code: HTTP status returned when the error is sent
            synchronously. None until classified for callback-only codes.
        type: The band the code belongs to, None if unclassified.
        description: Optional longer description from an override table.
        alias_of: Name of the entry whose wire code this entry shares.
    """

    name: str
    code: str
    message: str
    http_status_code: int | None = None
    type: ErrorTypeRange | None = None
    description: str | None = None
    alias_of: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], name: str = "") -> "ErrorCodeEntry":
        """Build an entry from a raw table row or a caller-supplied mapping.

        Accepts both ``http_status_code`` and the wire-style
        ``httpStatusCode`` key.
        """
        http_status_code = data.get("http_status_code", data.get("httpStatusCode"))
        code = data.get("code")
        return cls(
            name=data.get("name") or name,
            code=str(code) if code is not None else "",
            message=data.get("message") or "",
            http_status_code=int(http_status_code) if http_status_code is not None else None,
            type=data.get("type") if isinstance(data.get("type"), ErrorTypeRange) else None,
            description=data.get("description"),
            alias_of=data.get("alias_of", data.get("aliasOf")),
        )

    def with_http_status_code(self, http_status_code: int | None) -> "ErrorCodeEntry":
        """Return a copy carrying the given HTTP status."""
        return replace(self, http_status_code=http_status_code)

    def to_dict(self) -> dict[str, Any]:
        """Render the entry with wire-style keys for logs and JSON bodies."""
        result: dict[str, Any] = {
            "name": self.name,
            "code": self.code,
            "message": self.message,
        }
        if self.http_status_code is not None:
            result["httpStatusCode"] = self.http_status_code
        if self.description is not None:
            result["description"] = self.description
        if self.alias_of is not None:
            result["aliasOf"] = self.alias_of
        if self.type is not None:
            result["type"] = self.type.to_dict()
        return result
