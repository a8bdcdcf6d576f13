"""Tests for the attribute vocabulary and name classification."""

from __future__ import annotations

import logging

import pytest

from pk11uri.models.errors import ComponentViolation, ViolationCode
from pk11uri.parser.vocabulary import (
    VOCABULARY,
    Component,
    PathAttribute,
    QueryAttribute,
    VendorAttribute,
    classify,
    is_vendor_name,
)


class TestVocabulary:
    def test_path_vocabulary(self) -> None:
        assert len(PathAttribute) == 13
        assert PathAttribute.LIBRARY_VERSION == "library-version"
        assert PathAttribute.SLOT_ID.field_name == "slot_id"

    def test_query_vocabulary(self) -> None:
        assert {a.value for a in QueryAttribute} == {
            "pin-source",
            "pin-value",
            "module-name",
            "module-path",
        }

    def test_vocabularies_are_disjoint(self) -> None:
        assert not VOCABULARY[Component.PATH] & VOCABULARY[Component.QUERY]

    def test_component_delimiters(self) -> None:
        assert Component.PATH.delimiter == ";"
        assert Component.QUERY.delimiter == "&"
        assert Component.PATH.other is Component.QUERY


class TestClassify:
    def test_standard_path_name(self) -> None:
        assert classify("object", Component.PATH) is PathAttribute.OBJECT

    def test_standard_query_name(self) -> None:
        assert classify("pin-source", Component.QUERY) is QueryAttribute.PIN_SOURCE

    def test_vendor_name(self) -> None:
        attr = classify("vendor_attr-1", Component.PATH)
        assert attr == VendorAttribute("vendor_attr-1")

    def test_unicode_alphanumeric_vendor_name(self) -> None:
        assert classify("schlüssel", Component.QUERY) == VendorAttribute("schlüssel")

    def test_empty_name(self) -> None:
        with pytest.raises(ComponentViolation, match="Missing attribute name") as exc_info:
            classify("", Component.PATH)
        assert exc_info.value.code is ViolationCode.MISSING_ATTRIBUTE_NAME

    @pytest.mark.parametrize("name", ["pin-source", "pin-value", "module-name", "module-path"])
    def test_query_name_in_path_collides(self, name: str) -> None:
        with pytest.raises(ComponentViolation) as exc_info:
            classify(name, Component.PATH)
        err = exc_info.value
        assert err.code is ViolationCode.NAMING_COLLISION
        assert err.violation == "Naming collision with standard query component."
        assert err.help == f"Move `{name}` and its value to the PKCS#11 URI query."

    @pytest.mark.parametrize("name", ["token", "slot-id", "type", "library-version"])
    def test_path_name_in_query_collides(self, name: str) -> None:
        with pytest.raises(ComponentViolation) as exc_info:
            classify(name, Component.QUERY)
        assert exc_info.value.code is ViolationCode.NAMING_COLLISION
        assert exc_info.value.violation == "Naming collision with standard path component."

    @pytest.mark.parametrize("name", ["bad.name", "with space", "a/b", "x+y"])
    def test_invalid_vendor_characters(self, name: str) -> None:
        with pytest.raises(ComponentViolation, match="pk11-v-attr-nm-char") as exc_info:
            classify(name, Component.PATH)
        assert exc_info.value.code is ViolationCode.INVALID_VENDOR_NAME

    def test_names_are_case_sensitive(self) -> None:
        assert classify("Token", Component.PATH) == VendorAttribute("Token")

    def test_without_validation_everything_falls_back_to_vendor(self) -> None:
        assert classify("pin-value", Component.PATH, validate=False) == VendorAttribute("pin-value")
        assert classify("", Component.PATH, validate=False) == VendorAttribute("")

    def test_x_prefix_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        warn = logging.getLogger("pk11uri.warnings")
        with caplog.at_level(logging.WARNING, logger="pk11uri.warnings"):
            attr = classify("x-muppet", Component.PATH, warn=warn)
        assert attr == VendorAttribute("x-muppet")
        assert "x-muppet" in caplog.text
        assert "deprecated" in caplog.text

    def test_x_prefix_silent_without_sink(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            classify("x-muppet", Component.PATH)
        assert caplog.records == []


class TestVendorNameRule:
    def test_accepts(self) -> None:
        assert is_vendor_name("vendor-aaa")
        assert is_vendor_name("A_1")

    def test_rejects(self) -> None:
        assert not is_vendor_name("")
        assert not is_vendor_name("a:b")
