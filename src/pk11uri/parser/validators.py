"""Attribute value validation and advisory RFC7512 "SHOULD" checks."""

from __future__ import annotations

import logging
import re

from pk11uri.models.errors import ComponentViolation, ViolationCode
from pk11uri.parser.vocabulary import (
    Attribute,
    PathAttribute,
    QueryAttribute,
    attribute_name,
)

# ---------------------------------------------------------------------------
# Value patterns (compiled once, read-only)
# ---------------------------------------------------------------------------

_LIBRARY_VERSION_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_SLOT_ID_RE = re.compile(r"[0-9]+")
_PERCENT_ENCODED_RE = re.compile(r"(?:%[0-9A-Fa-f]{2})+")

OBJECT_TYPES: tuple[str, ...] = ("public", "private", "cert", "secret-key", "data")

# pk11-res-avail; path and query values each allow a few more.
_RESERVED_AVAILABLE = frozenset("-._~:[]@!$'()*+,=")
_PATH_RESERVED_AVAILABLE = frozenset("&")
_QUERY_RESERVED_AVAILABLE = frozenset("/?|")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Path attributes whose values are validated by pattern instead of by character.
_FORMATTED_PATH_ATTRIBUTES = frozenset(
    {PathAttribute.TYPE, PathAttribute.LIBRARY_VERSION, PathAttribute.SLOT_ID}
)


def _replace_help(value: str, char: str, encoded: str) -> str:
    return f"Replace `{value}` with `{value.replace(char, encoded)}`."


def common_validation(value: str) -> None:
    """Values of both components may not contain spaces or ``#``."""
    if " " in value:
        raise ComponentViolation(
            ViolationCode.INVALID_VALUE_CHARACTER,
            "Invalid component value: Appendix A of [RFC3986] specifies component values "
            "may not contain empty spaces.",
            _replace_help(value, " ", "%20"),
        )
    if "#" in value:
        raise ComponentViolation(
            ViolationCode.INVALID_VALUE_CHARACTER,
            "Invalid component value: The '#' delimiter must always be percent-encoded.",
            _replace_help(value, "#", "%23"),
        )


def validate_path_value(attr: Attribute, value: str) -> None:
    """Raise ``ComponentViolation`` if ``value`` is not acceptable for path ``attr``."""
    if attr is PathAttribute.TYPE:
        if value not in OBJECT_TYPES:
            raise ComponentViolation(
                ViolationCode.INVALID_VALUE_FORMAT,
                'Invalid `pk11-pattr`: `pk11-type` = `"type" "=" '
                '( "public" / "private" / "cert" / "secret-key" / "data" )`.',
                f"Replace `{value}` value with one of `public`, `private`, `cert`, "
                "`secret-key`, or `data`.",
            )
    elif attr is PathAttribute.LIBRARY_VERSION:
        if not _LIBRARY_VERSION_RE.fullmatch(value):
            raise ComponentViolation(
                ViolationCode.INVALID_VALUE_FORMAT,
                'Invalid `pk11-pattr`: `pk11-lib-ver` = '
                '`"library-version" "=" 1*DIGIT [ "." 1*DIGIT ]`.',
                "The `library-version` attribute represents the major and minor version "
                "decimal number of the library and its format is `M.N`. "
                "The major version is required.",
            )
    elif attr is PathAttribute.SLOT_ID:
        if not _SLOT_ID_RE.fullmatch(value):
            raise ComponentViolation(
                ViolationCode.INVALID_VALUE_FORMAT,
                'Invalid `pk11-pattr`: `pk11-slot-id` = `"slot-id" "=" 1*DIGIT`.',
                "The `slot-id` value may only be numeric.",
            )
    else:
        common_validation(value)
        # '/' is fine in query values, but not in the path.
        if "/" in value:
            raise ComponentViolation(
                ViolationCode.UNENCODED_PATH_SLASH,
                "Invalid `pk11-pattr`: The general '/' delimiter must always be "
                "percent-encoded in a path component.",
                _replace_help(value, "/", "%2F"),
            )


def validate_query_value(attr: Attribute, value: str) -> None:
    """Query values (standard or vendor) only follow the common rule."""
    common_validation(value)


# ---------------------------------------------------------------------------
# Advisory checks: logged, never raised
# ---------------------------------------------------------------------------


def suggest_percent_encoding(
    attribute: str,
    value: str,
    extra_reserved: frozenset[str],
    warn: logging.Logger,
) -> None:
    """Warn about characters that SHOULD be percent-encoded in ``value``."""
    offset = 0
    while offset < len(value):
        char = value[offset]
        if char == "%":
            digits = 0
            while digits < 2 and offset + 1 < len(value) and value[offset + 1] in _HEX_DIGITS:
                offset += 1
                digits += 1
            if digits < 2:
                warn.warning(
                    "pkcs11 warning: identified malformed percent-encoding at offset %d "
                    "in `%s` of component `%s=%s`",
                    offset - digits,
                    value,
                    attribute,
                    value,
                )
        elif not (char.isalnum() or char in _RESERVED_AVAILABLE or char in extra_reserved):
            warn.warning(
                "pkcs11 warning: the `%s` identified at offset %d in `%s` of component "
                "`%s=%s` SHOULD be percent-encoded.",
                char,
                offset,
                value,
                attribute,
                value,
            )
        offset += 1


def warn_path_value(attr: Attribute, value: str, warn: logging.Logger) -> None:
    if attr is PathAttribute.ID:
        if not _PERCENT_ENCODED_RE.fullmatch(value):
            warn.warning(
                "pkcs11 warning: the whole value of the `id` attribute SHOULD be "
                "percent-encoded: id=%s.",
                value,
            )
    elif attr not in _FORMATTED_PATH_ATTRIBUTES:
        suggest_percent_encoding(attribute_name(attr), value, _PATH_RESERVED_AVAILABLE, warn)


def warn_query_value(attr: Attribute, value: str, warn: logging.Logger) -> None:
    if attr is QueryAttribute.MODULE_NAME and (
        value.startswith("lib") or any(c in "./\\" for c in value)
    ):
        warn.warning(
            'pkcs11 warning: the attribute "module-name" SHOULD contain a case-insensitive '
            "PKCS #11 module name (not path nor filename) without system-specific affices. "
            "Context: `module-name=%s`.",
            value,
        )
    suggest_percent_encoding(attribute_name(attr), value, _QUERY_RESERVED_AVAILABLE, warn)
