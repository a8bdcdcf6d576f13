"""Tests for the Pydantic mapping and error models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pk11uri.models.errors import ComponentViolation, ErrorSpan, PK11URIError, ViolationCode
from pk11uri.models.mapping import PK11URIMapping


class TestErrorSpan:
    def test_length(self) -> None:
        assert len(ErrorSpan(start=7, end=49)) == 42

    def test_empty_span(self) -> None:
        assert len(ErrorSpan(start=3, end=3)) == 0

    def test_rejects_reversed_span(self) -> None:
        with pytest.raises(ValidationError):
            ErrorSpan(start=5, end=2)

    def test_rejects_negative_start(self) -> None:
        with pytest.raises(ValidationError):
            ErrorSpan(start=-1, end=2)


class TestPK11URIError:
    def test_fields(self) -> None:
        err = PK11URIError(
            pk11_uri="pkcs11:token",
            span=ErrorSpan(start=7, end=12),
            violation="Malformed component.",
            help="Please refer to RFC7512.",
            code=ViolationCode.MALFORMED_COMPONENT,
        )
        assert err.error_span == (7, 12)
        assert err.render() == (
            "pkcs11:token\n"
            "       ^^^^^ Malformed component.\n"
            "\n"
            "help: Please refer to RFC7512."
        )
        assert str(err) == err.render()

    def test_is_exception(self) -> None:
        assert issubclass(PK11URIError, Exception)


class TestComponentViolation:
    def test_carries_code_and_help(self) -> None:
        exc = ComponentViolation(ViolationCode.NAMING_COLLISION, "collision", "move it")
        assert exc.code is ViolationCode.NAMING_COLLISION
        assert str(exc) == "collision"
        assert exc.help == "move it"


class TestPK11URIMapping:
    def test_defaults(self) -> None:
        mapping = PK11URIMapping()
        assert mapping.token is None
        assert mapping.module_path is None
        assert mapping.vendor_attributes == {}

    def test_populate_by_rfc_name(self) -> None:
        mapping = PK11URIMapping(**{"library-version": "1.0", "pin-source": "file:/x"})
        assert mapping.library_version == "1.0"
        assert mapping.pin_source == "file:/x"

    def test_get_by_rfc_name(self) -> None:
        mapping = PK11URIMapping(slot_id="3", type="cert")
        assert mapping.get("slot-id") == "3"
        assert mapping.get("type") == "cert"
        assert mapping.get("module-name") is None

    def test_get_rejects_unknown(self) -> None:
        with pytest.raises(KeyError):
            PK11URIMapping().get("vendor-aaa")
        with pytest.raises(KeyError):
            PK11URIMapping().get("vendor-attributes")

    def test_vendor(self) -> None:
        mapping = PK11URIMapping(vendor_attributes={"v": ["a", "b"]})
        assert mapping.vendor("v") == ["a", "b"]
        assert mapping.vendor("w") is None

    def test_standard_items_use_rfc_names(self) -> None:
        mapping = PK11URIMapping(token="t", library_description="d", module_name="m")
        assert mapping.standard_items() == [
            ("token", "t"),
            ("library-description", "d"),
            ("module-name", "m"),
        ]

    def test_dump_by_alias(self) -> None:
        mapping = PK11URIMapping(slot_manufacturer="Sun", vendor_attributes={"v": ["1"]})
        assert mapping.model_dump(by_alias=True, exclude_none=True) == {
            "slot-manufacturer": "Sun",
            "vendor": {"v": ["1"]},
        }

    def test_copy_is_independent(self) -> None:
        mapping = PK11URIMapping(vendor_attributes={"v": ["1"]})
        clone = mapping.model_copy(deep=True)
        clone.vendor_attributes["v"].append("2")
        assert mapping.vendor("v") == ["1"]
