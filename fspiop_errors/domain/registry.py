"""
Registry of canonical FSPIOP API error codes.

Built once from the base code table, an override table and the
error-type bands:

    1. merge_overrides: layer the override table over the base table
    2. classify: attach the matching band and default HTTP status
    3. build_code_map: index entries by their wire code

The resulting ErrorCodeRegistry is immutable and safe to share
between threads. get_registry() memoises the process-wide instance.

Usage:
    registry = get_registry()
    entry = registry.find_by_code("3102")
    registry.MISSING_ELEMENT.http_status_code  # 400
"""

import copy
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from fspiop_errors.core.config import settings
from fspiop_errors.domain.entities import ErrorCodeEntry
from fspiop_errors.domain.error_codes import (
    MOJALOOP_API_ERROR_CODES,
    MOJALOOP_API_ERROR_CODES_OVERRIDE,
)
from fspiop_errors.domain.error_types import ERROR_TYPES, ErrorTypeRange
from fspiop_errors.domain.errors import DuplicateErrorCodeError, RegistryError

logger = logging.getLogger(__name__)

CodeTable = Mapping[str, Mapping[str, Any]]

# Wire-style field names accepted in code tables
FIELD_ALIASES: dict[str, str] = {
    "httpStatusCode": "http_status_code",
    "aliasOf": "alias_of",
}


def _canonical_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {
        FIELD_ALIASES.get(key, key): copy.deepcopy(value) for key, value in fields.items()
    }


def merge_overrides(base: CodeTable, override: CodeTable) -> dict[str, dict[str, Any]]:
    """Layer an override table over a base table, field by field.

    Field names are normalised first, so an override written with
    ``httpStatusCode`` replaces a base ``http_status_code``.

    Args:
        base: Code table keyed by entry name.
        override: Entries to merge. Fields of an entry already in base
            replace the matching fields only; unknown names are added as-is.

    Returns:
        A new table. Neither input is modified.
    """
    merged = {name: _canonical_fields(fields) for name, fields in base.items()}
    for name, fields in override.items():
        if name in merged:
            merged[name].update(_canonical_fields(fields))
        else:
            merged[name] = _canonical_fields(fields)
    return merged


def find_type(
    code: str | int, error_types: Iterable[ErrorTypeRange] = ERROR_TYPES
) -> ErrorTypeRange | None:
    """Return the band a code belongs to, or None."""
    code_string = str(code)
    for error_type in error_types:
        if error_type.matches(code_string):
            return error_type
    return None


def classify(
    table: CodeTable, error_types: Iterable[ErrorTypeRange] = ERROR_TYPES
) -> dict[str, ErrorCodeEntry]:
    """Attach its band to every entry of a code table.

    Entries without an HTTP status inherit the default of their band.
    Entries matching no band are kept unclassified and logged, so a
    change to the bands never silently removes a code.

    Returns:
        Entries keyed by name.
    """
    error_types = tuple(error_types)
    classified: dict[str, ErrorCodeEntry] = {}
    for name, fields in table.items():
        if not fields.get("code") or not fields.get("message"):
            raise RegistryError(f"Error code {name} has no code or message")
        entry = ErrorCodeEntry.from_mapping(fields, name=name)
        entry = replace(entry, name=name)
        error_type = find_type(entry.code, error_types)
        if error_type is None:
            logger.warning(
                "Error code %s (%s) matches no error type, keeping it unclassified",
                name,
                entry.code,
            )
        else:
            entry = replace(entry, type=error_type)
            if entry.http_status_code is None:
                entry = entry.with_http_status_code(error_type.http_status_code)
        classified[name] = entry
    return classified


def build_code_map(classified: Mapping[str, ErrorCodeEntry]) -> dict[str, ErrorCodeEntry]:
    """Index classified entries by their wire code.

    Aliases share the code of the entry they point to and are not
    indexed themselves.

    Raises:
        DuplicateErrorCodeError: If two entries claim the same code.
        RegistryError: If an alias points to a missing entry or to an
            entry with a different code.
    """
    code_map: dict[str, ErrorCodeEntry] = {}
    for name, entry in classified.items():
        if entry.alias_of is not None:
            target = classified.get(entry.alias_of)
            if target is None or target.code != entry.code:
                raise RegistryError(
                    f"Error code {name} is an alias of {entry.alias_of} "
                    f"which does not define code {entry.code}"
                )
            continue
        existing = code_map.get(entry.code)
        if existing is not None:
            raise DuplicateErrorCodeError(entry.code, existing.name, name)
        code_map[entry.code] = entry if entry.name == name else replace(entry, name=name)
    return code_map


@dataclass(frozen=True)
class ErrorCodeRegistry:
    """Read-only lookup tables of canonical error codes.

    Attributes:
        by_name: Entries keyed by name, e.g. ``INTERNAL_SERVER_ERROR``.
        by_code: Entries keyed by wire code, e.g. ``"2001"``.
        error_types: The bands used to classify the entries.
    """

    by_name: Mapping[str, ErrorCodeEntry]
    by_code: Mapping[str, ErrorCodeEntry]
    error_types: tuple[ErrorTypeRange, ...] = field(default=ERROR_TYPES)

    def find_by_code(self, code: str | int | None) -> ErrorCodeEntry | None:
        """Return the entry registered for a code, or None."""
        if code is None or code == "" or code == 0:
            return None
        return self.by_code.get(str(code))

    def find_type_by_code(self, code: str | int | None) -> ErrorTypeRange | None:
        """Return the band a code falls into, or None."""
        if code is None:
            return None
        return find_type(code, self.error_types)

    def __getitem__(self, name: str) -> ErrorCodeEntry:
        return self.by_name[name]

    def __getattr__(self, name: str) -> ErrorCodeEntry:
        by_name = self.__dict__.get("by_name")
        if name.startswith("_") or by_name is None or name not in by_name:
            raise AttributeError(name)
        return by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def __iter__(self) -> Iterator[ErrorCodeEntry]:
        return iter(self.by_name.values())

    def __len__(self) -> int:
        return len(self.by_name)


def init_registry(
    base: CodeTable | None = None,
    override: CodeTable | None = None,
    error_types: Iterable[ErrorTypeRange] | None = None,
) -> ErrorCodeRegistry:
    """Build a registry from code tables.

    Args:
        base: Base code table. Defaults to the FSPIOP API table.
        override: Override table. Defaults to the built-in overrides.
        error_types: Bands to classify with. Defaults to ERROR_TYPES.

    Raises:
        RegistryError: If the tables are inconsistent.
    """
    base = MOJALOOP_API_ERROR_CODES if base is None else base
    override = MOJALOOP_API_ERROR_CODES_OVERRIDE if override is None else override
    error_types = ERROR_TYPES if error_types is None else tuple(error_types)

    classified = classify(merge_overrides(base, override), error_types)
    code_map = build_code_map(classified)
    logger.debug(
        "Built error code registry with %d entries and %d codes",
        len(classified),
        len(code_map),
    )
    return ErrorCodeRegistry(
        by_name=MappingProxyType(classified),
        by_code=MappingProxyType(code_map),
        error_types=error_types,
    )


@lru_cache(maxsize=1)
def get_registry() -> ErrorCodeRegistry:
    """Return the process-wide registry, building it on first use.

    Overrides from the ``error_code_overrides`` setting are layered over
    the built-in override table.
    """
    override = merge_overrides(
        MOJALOOP_API_ERROR_CODES_OVERRIDE, settings.error_code_overrides
    )
    return init_registry(override=override)


def find_fspiop_error_code(code: str | int | None) -> ErrorCodeEntry | None:
    """Return the registered entry for a code, or None."""
    return get_registry().find_by_code(code)


def find_error_type(code: str | int | None) -> ErrorTypeRange | None:
    """Return the band a code falls into, or None."""
    return get_registry().find_type_by_code(code)


class _ErrorCodes:
    """Attribute access to the process-wide registry entries."""

    def __getattr__(self, name: str) -> ErrorCodeEntry:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return get_registry()[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> ErrorCodeEntry:
        return get_registry()[name]

    def __iter__(self) -> Iterator[ErrorCodeEntry]:
        return iter(get_registry())

    def __len__(self) -> int:
        return len(get_registry())


FSPIOPErrorCodes = _ErrorCodes()
