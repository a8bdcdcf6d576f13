"""Attribute mapping produced by a successful PKCS#11 URI parse."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PK11URIMapping(BaseModel):
    """Raw (still percent-encoded) attribute values of a parsed PKCS#11 URI.

    Standard attributes are exposed as fields named after their RFC7512
    attribute with ``-`` replaced by ``_`` (``library-version`` becomes
    ``library_version``).  Dumping with ``by_alias=True`` restores the RFC
    names.  Vendor-specific attributes may carry several values and are
    retrieved through :meth:`vendor`.
    """

    model_config = ConfigDict(populate_by_name=True)

    # pk11-pattr
    token: str | None = None
    manufacturer: str | None = None
    serial: str | None = None
    model: str | None = None
    library_manufacturer: str | None = Field(default=None, alias="library-manufacturer")
    library_version: str | None = Field(default=None, alias="library-version")
    library_description: str | None = Field(default=None, alias="library-description")
    object: str | None = None
    type: str | None = None
    id: str | None = None
    slot_description: str | None = Field(default=None, alias="slot-description")
    slot_manufacturer: str | None = Field(default=None, alias="slot-manufacturer")
    slot_id: str | None = Field(default=None, alias="slot-id")

    # pk11-qattr
    pin_source: str | None = Field(default=None, alias="pin-source")
    pin_value: str | None = Field(default=None, alias="pin-value")
    module_name: str | None = Field(default=None, alias="module-name")
    module_path: str | None = Field(default=None, alias="module-path")

    # vendor-specific attribute name -> values in URI order
    vendor_attributes: dict[str, list[str]] = Field(default_factory=dict, alias="vendor")

    def get(self, attribute: str) -> str | None:
        """Look up a standard attribute value by its RFC7512 name."""
        field_name = attribute.replace("-", "_")
        if field_name == "vendor_attributes" or field_name not in type(self).model_fields:
            raise KeyError(f"'{attribute}' is not a standard PKCS#11 URI attribute")
        return getattr(self, field_name)

    def vendor(self, attribute: str) -> list[str] | None:
        """Return the values recorded for a vendor-specific attribute, if any."""
        return self.vendor_attributes.get(attribute)

    def standard_items(self) -> list[tuple[str, str]]:
        """Return ``(rfc_name, value)`` pairs for every populated standard attribute."""
        items: list[tuple[str, str]] = []
        for field_name, info in type(self).model_fields.items():
            if field_name == "vendor_attributes":
                continue
            value = getattr(self, field_name)
            if value is not None:
                items.append((info.alias or field_name, value))
        return items
