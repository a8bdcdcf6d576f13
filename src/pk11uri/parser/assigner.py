"""Assign classified attributes into a mapping, enforcing the duplicate policy."""

from __future__ import annotations

from pk11uri.models.errors import ComponentViolation, ViolationCode
from pk11uri.models.mapping import PK11URIMapping
from pk11uri.parser.vocabulary import Attribute, Component, VendorAttribute

_STANDARD_ABNF = {Component.PATH: "pk11-pattr", Component.QUERY: "pk11-qattr"}


def assign(
    attr: Attribute,
    value: str,
    component: Component,
    mapping: PK11URIMapping,
    *,
    validate: bool = True,
) -> None:
    """Record ``value`` for ``attr`` found in ``component``.

    Standard attributes and path vendor attributes are single-valued;
    vendor attributes in the query accumulate values in URI order.
    Without ``validate`` duplicates are not rejected: the latest
    single-valued occurrence wins.
    """
    if isinstance(attr, VendorAttribute):
        _assign_vendor(attr, value, component, mapping, validate=validate)
        return

    if validate and getattr(mapping, attr.field_name) is not None:
        raise ComponentViolation(
            ViolationCode.DUPLICATE_ATTRIBUTE,
            f'Duplicate `{_STANDARD_ABNF[component]}` standard name: "{attr.value}".',
            "A PKCS #11 URI must not contain duplicate standard attributes of the same "
            f"name in the URI {component} component.",
        )
    setattr(mapping, attr.field_name, value)


def _assign_vendor(
    attr: VendorAttribute,
    value: str,
    component: Component,
    mapping: PK11URIMapping,
    *,
    validate: bool,
) -> None:
    vendor = mapping.vendor_attributes
    if component is Component.QUERY:
        vendor.setdefault(attr.name, []).append(value)
        return

    if validate and attr.name in vendor:
        raise ComponentViolation(
            ViolationCode.DUPLICATE_VENDOR_ATTRIBUTE,
            f'Duplicate `pk11-v-pattr` vendor-specific name: "{attr.name}".',
            "A PKCS #11 URI must not contain duplicate vendor attributes of the same "
            "name in the URI path component.",
        )
    vendor[attr.name] = [value]
