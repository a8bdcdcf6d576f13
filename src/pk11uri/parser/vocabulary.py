"""Standard RFC7512 attribute vocabulary and attribute-name classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from pk11uri.models.errors import ComponentViolation, ViolationCode


class Component(StrEnum):
    PATH = "path"
    QUERY = "query"

    @property
    def delimiter(self) -> str:
        return ";" if self is Component.PATH else "&"

    @property
    def other(self) -> Component:
        return Component.QUERY if self is Component.PATH else Component.PATH


class PathAttribute(StrEnum):
    TOKEN = "token"
    MANUFACTURER = "manufacturer"
    SERIAL = "serial"
    MODEL = "model"
    LIBRARY_MANUFACTURER = "library-manufacturer"
    LIBRARY_VERSION = "library-version"
    LIBRARY_DESCRIPTION = "library-description"
    OBJECT = "object"
    TYPE = "type"
    ID = "id"
    SLOT_DESCRIPTION = "slot-description"
    SLOT_MANUFACTURER = "slot-manufacturer"
    SLOT_ID = "slot-id"

    @property
    def field_name(self) -> str:
        return self.value.replace("-", "_")


class QueryAttribute(StrEnum):
    PIN_SOURCE = "pin-source"
    PIN_VALUE = "pin-value"
    MODULE_NAME = "module-name"
    MODULE_PATH = "module-path"

    @property
    def field_name(self) -> str:
        return self.value.replace("-", "_")


@dataclass(frozen=True)
class VendorAttribute:
    """A ``pk11-v-attr-nm`` that is not part of the standard vocabulary."""

    name: str

    def __str__(self) -> str:
        return self.name


Attribute = PathAttribute | QueryAttribute | VendorAttribute

VOCABULARY: dict[Component, frozenset[str]] = {
    Component.PATH: frozenset(attr.value for attr in PathAttribute),
    Component.QUERY: frozenset(attr.value for attr in QueryAttribute),
}


def attribute_name(attr: Attribute) -> str:
    return attr.name if isinstance(attr, VendorAttribute) else attr.value


def is_vendor_name(name: str) -> bool:
    """``1*pk11-v-attr-nm-char``: alphanumerics, ``-`` and ``_``."""
    return bool(name) and all(c.isalnum() or c in "-_" for c in name)


def classify(
    name: str,
    component: Component,
    *,
    validate: bool = True,
    warn: logging.Logger | None = None,
) -> Attribute:
    """Resolve a trimmed attribute name found in ``component``.

    Standard names of the current component win.  Anything else is checked
    as a vendor-specific name, which rejects empty names, names that belong
    to the other component and names outside ``1*pk11-v-attr-nm-char``.
    With ``validate=False`` every unmatched name becomes a vendor attribute.
    """
    if component is Component.PATH and name in VOCABULARY[Component.PATH]:
        return PathAttribute(name)
    if component is Component.QUERY and name in VOCABULARY[Component.QUERY]:
        return QueryAttribute(name)

    if validate:
        _check_vendor_name(name, component)

    if warn is not None and name.startswith("x-"):
        warn.warning(
            'pkcs11 warning: per RFC7512, the previously used convention of starting vendor '
            'attributes with an "x-" prefix is now deprecated.  Identified: `%s`.',
            name,
        )
    return VendorAttribute(name)


def _check_vendor_name(name: str, component: Component) -> None:
    if not name:
        raise ComponentViolation(
            ViolationCode.MISSING_ATTRIBUTE_NAME,
            "Invalid component: Missing attribute name.",
            "The attribute name may not be blank. "
            "Refer to the RFC7512 specification for valid attributes.",
        )

    other = component.other
    if name in VOCABULARY[other]:
        if other is Component.PATH:
            help_text = "Move this attribute and its value to the PKCS#11 URI path."
        else:
            help_text = f"Move `{name}` and its value to the PKCS#11 URI query."
        raise ComponentViolation(
            ViolationCode.NAMING_COLLISION,
            f"Naming collision with standard {other} component.",
            help_text,
        )

    if not is_vendor_name(name):
        raise ComponentViolation(
            ViolationCode.INVALID_VENDOR_NAME,
            "Invalid vendor-specific component name: expected `1*pk11-v-attr-nm-char`.",
            f"`{name}` violated vendor-specific attribute name characters "
            "consisting solely of alphanumeric, '-', or '_'.",
        )
