"""
Tests for the error-code registry.

Covers override merging, classification into error-type bands,
the code map and lookups. No framework or IO required.
"""

import dataclasses
import logging

import pytest

from fspiop_errors.core.config import settings
from fspiop_errors.domain.entities import ErrorCodeEntry
from fspiop_errors.domain.error_codes import MOJALOOP_API_ERROR_CODES
from fspiop_errors.domain.error_types import ERROR_TYPES
from fspiop_errors.domain.errors import DuplicateErrorCodeError, RegistryError
from fspiop_errors.domain.registry import (
    FSPIOPErrorCodes,
    build_code_map,
    classify,
    find_error_type,
    find_fspiop_error_code,
    get_registry,
    init_registry,
    merge_overrides,
)


@pytest.fixture
def registry():
    return init_registry()


class TestMergeOverrides:
    """Tests for merge_overrides."""

    def test_redefines_existing_and_adds_new_entries(self) -> None:
        error_codes = {
            "INTERNAL_SERVER_ERROR": {"code": "2001", "message": "Internal Server Error"}
        }
        override = {
            "INTERNAL_SERVER_ERROR": {"code": "9000"},
            "NEW_CUSTOM_ERROR": {"code": "9001", "message": "Custom Error"},
        }

        result = merge_overrides(error_codes, override)

        assert result == {
            "INTERNAL_SERVER_ERROR": {"code": "9000", "message": "Internal Server Error"},
            "NEW_CUSTOM_ERROR": {"code": "9001", "message": "Custom Error"},
        }

    def test_entries_only_in_base_are_unchanged(self) -> None:
        base = {"A": {"code": "3000", "message": "a"}, "B": {"code": "3001", "message": "b"}}
        result = merge_overrides(base, {"A": {"http_status_code": 418}})
        assert result["B"] == {"code": "3001", "message": "b"}
        assert result["A"] == {"code": "3000", "message": "a", "http_status_code": 418}

    def test_inputs_are_not_modified(self) -> None:
        base = {"A": {"code": "3000", "message": "a"}}
        override = {"A": {"message": "b"}, "C": {"code": "3002", "message": "c"}}

        result = merge_overrides(base, override)
        result["C"]["message"] = "changed"

        assert base == {"A": {"code": "3000", "message": "a"}}
        assert override["C"]["message"] == "c"

    def test_wire_style_field_names_replace_base_fields(self) -> None:
        base = {"A": {"code": "3000", "message": "a", "http_status_code": 400}}
        override = {"A": {"httpStatusCode": 418, "aliasOf": "B"}}
        assert merge_overrides(base, override) == {
            "A": {"code": "3000", "message": "a", "http_status_code": 418, "alias_of": "B"}
        }

    def test_wire_style_status_override_reaches_registry(self) -> None:
        registry = init_registry(override={"NOT_IMPLEMENTED": {"httpStatusCode": 500}})
        assert registry.NOT_IMPLEMENTED.http_status_code == 500
        assert registry.find_by_code("2002").http_status_code == 500


class TestClassify:
    """Tests for classify."""

    def test_every_entry_matches_its_type(self, registry) -> None:
        for entry in registry:
            assert entry.type is not None
            assert entry.type.matches(entry.code)

    def test_http_status_inherited_from_type(self, registry) -> None:
        assert registry.PARTY_NOT_FOUND.http_status_code == 400
        assert registry.COMMUNICATION_ERROR.http_status_code == 503
        assert registry.SERVER_ERROR.http_status_code == 500

    def test_explicit_http_status_kept(self, registry) -> None:
        assert registry.NOT_IMPLEMENTED.http_status_code == 501
        assert registry.UNKNOWN_URI.http_status_code == 404
        assert registry.METHOD_NOT_ALLOWED.http_status_code == 405

    def test_unmatched_entry_is_kept_and_logged(self, caplog) -> None:
        table = {"ODD_ERROR": {"code": "9999", "message": "Odd"}}
        with caplog.at_level(logging.WARNING):
            classified = classify(table)
        assert classified["ODD_ERROR"].type is None
        assert classified["ODD_ERROR"].http_status_code is None
        assert "ODD_ERROR" in caplog.text

    def test_entry_without_message_rejected(self) -> None:
        with pytest.raises(RegistryError):
            classify({"BAD": {"code": "3000"}})


class TestErrorTypes:
    """The error-type bands must never overlap."""

    def test_bands_are_mutually_exclusive(self) -> None:
        for number in range(10000):
            code = f"{number:04d}"
            matches = [t.name for t in ERROR_TYPES if t.matches(code)]
            assert len(matches) <= 1, (code, matches)

    def test_trailing_newline_does_not_match(self) -> None:
        assert find_error_type("1000\n") is None


class TestBuildCodeMap:
    """Tests for build_code_map."""

    def test_duplicate_codes_rejected(self) -> None:
        classified = classify(
            {
                "FIRST": {"code": "3000", "message": "First"},
                "SECOND": {"code": "3000", "message": "Second"},
            }
        )
        with pytest.raises(DuplicateErrorCodeError) as exc_info:
            build_code_map(classified)
        assert exc_info.value.names == ("FIRST", "SECOND")

    def test_alias_shares_code_of_target(self) -> None:
        classified = classify(
            {
                "CLIENT_ERROR": {"code": "3000", "message": "Generic client error"},
                "METHOD_NOT_ALLOWED": {
                    "code": "3000",
                    "message": "Method Not Allowed",
                    "alias_of": "CLIENT_ERROR",
                },
            }
        )
        code_map = build_code_map(classified)
        assert list(code_map) == ["3000"]
        assert code_map["3000"].name == "CLIENT_ERROR"

    def test_alias_of_missing_entry_rejected(self) -> None:
        classified = classify(
            {"ALIAS": {"code": "3000", "message": "a", "alias_of": "NOPE"}}
        )
        with pytest.raises(RegistryError):
            build_code_map(classified)

    def test_name_injected(self, registry) -> None:
        assert registry.by_code["2001"].name == "INTERNAL_SERVER_ERROR"


class TestLookups:
    """Tests for find_by_code and find_type_by_code."""

    def test_every_entry_found_by_code(self, registry) -> None:
        for entry in registry:
            found = registry.find_by_code(entry.code)
            if entry.alias_of is None:
                assert found == entry
            else:
                assert found == registry[entry.alias_of]

    def test_string_and_integer_codes(self, registry) -> None:
        expected = registry.PAYEE_FSP_INSUFFICIENT_LIQUIDITY
        assert registry.find_by_code("5001") == expected
        assert registry.find_by_code(5001) == expected
        assert expected.message == "Payee FSP insufficient liquidity"

    def test_unknown_code_not_found(self, registry) -> None:
        assert registry.find_by_code("9999") is None
        assert registry.find_by_code(9999) is None
        assert registry.find_by_code("abcd") is None

    def test_empty_codes_not_found(self, registry) -> None:
        assert registry.find_by_code(None) is None
        assert registry.find_by_code("") is None
        assert registry.find_by_code(0) is None

    def test_find_type_by_code(self, registry) -> None:
        assert registry.find_type_by_code("5199").name == "PAYEE_REJECTION_ERROR"
        assert registry.find_type_by_code(6001).name == "GENERIC_SETTLEMENT_ERROR"
        assert registry.find_type_by_code("9999") is None
        assert registry.find_type_by_code(None) is None

    def test_settlement_override_registered(self, registry) -> None:
        entry = registry.find_by_code("6000")
        assert entry.name == "GENERIC_SETTLEMENT_ERROR"
        assert entry.type.name == "GENERIC_SETTLEMENT_ERROR"
        assert entry.http_status_code == 400

    def test_module_level_lookups(self) -> None:
        assert find_fspiop_error_code("3204") == FSPIOPErrorCodes.PARTY_NOT_FOUND
        assert find_error_type("3204").name == "IDENTIFIER_ERROR"


class TestImmutability:
    """Consumers can not corrupt the registry."""

    def test_mappings_are_read_only(self, registry) -> None:
        with pytest.raises(TypeError):
            registry.by_code["2001"] = None
        with pytest.raises(TypeError):
            registry.by_name["NEW"] = None

    def test_entries_are_frozen(self, registry) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            registry.INTERNAL_SERVER_ERROR.http_status_code = 200

    def test_derived_entry_leaves_registry_untouched(self, registry) -> None:
        changed = registry.INTERNAL_SERVER_ERROR.with_http_status_code(502)
        assert changed.http_status_code == 502
        assert registry.INTERNAL_SERVER_ERROR.http_status_code == 500

    def test_base_table_untouched_by_build(self) -> None:
        init_registry()
        assert "type" not in MOJALOOP_API_ERROR_CODES["PARTY_NOT_FOUND"]
        assert "http_status_code" not in MOJALOOP_API_ERROR_CODES["PARTY_NOT_FOUND"]


class TestRegistryAccess:
    """Tests for name based access and the process-wide registry."""

    def test_attribute_and_item_access(self, registry) -> None:
        assert registry.MISSING_ELEMENT is registry["MISSING_ELEMENT"]
        assert "MISSING_ELEMENT" in registry
        assert len(registry) == len(MOJALOOP_API_ERROR_CODES) + 1

    def test_unknown_name_raises_attribute_error(self, registry) -> None:
        with pytest.raises(AttributeError):
            registry.NOT_AN_ERROR
        with pytest.raises(AttributeError):
            FSPIOPErrorCodes.NOT_AN_ERROR

    def test_get_registry_is_memoised(self) -> None:
        assert get_registry() is get_registry()

    def test_settings_overrides_applied(self, monkeypatch) -> None:
        monkeypatch.setattr(
            settings,
            "error_code_overrides",
            {
                "INTERNAL_SERVER_ERROR": {"http_status_code": 502},
                "SCHEME_LIMIT_ERROR": {"code": "5210", "message": "Scheme limit error"},
            },
        )
        get_registry.cache_clear()
        try:
            registry = get_registry()
            assert registry.INTERNAL_SERVER_ERROR.http_status_code == 502
            assert registry.find_by_code("5210").type.name == "PAYEE_LIMIT_ERROR"
            assert registry.GENERIC_SETTLEMENT_ERROR.code == "6000"
        finally:
            monkeypatch.undo()
            get_registry.cache_clear()

    def test_entry_to_dict_uses_wire_keys(self, registry) -> None:
        data = registry.UNKNOWN_URI.to_dict()
        assert data["name"] == "UNKNOWN_URI"
        assert data["httpStatusCode"] == 404
        assert data["type"]["name"] == "GENERIC_CLIENT_ERROR"

    def test_entry_from_mapping_accepts_wire_keys(self) -> None:
        entry = ErrorCodeEntry.from_mapping(
            {"code": 3100, "message": "m", "httpStatusCode": "400"}
        )
        assert entry.code == "3100"
        assert entry.http_status_code == 400
