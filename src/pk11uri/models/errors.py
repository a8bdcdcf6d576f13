"""Structured PKCS#11 URI errors with character span tracking."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, model_validator


class ViolationCode(StrEnum):
    INVALID_SCHEME = "INVALID_SCHEME"
    MALFORMED_COMPONENT = "MALFORMED_COMPONENT"
    MISPLACED_DELIMITER = "MISPLACED_DELIMITER"
    NAMING_COLLISION = "NAMING_COLLISION"
    MISSING_ATTRIBUTE_NAME = "MISSING_ATTRIBUTE_NAME"
    INVALID_VENDOR_NAME = "INVALID_VENDOR_NAME"
    INVALID_VALUE_CHARACTER = "INVALID_VALUE_CHARACTER"
    UNENCODED_PATH_SLASH = "UNENCODED_PATH_SLASH"
    INVALID_VALUE_FORMAT = "INVALID_VALUE_FORMAT"
    DUPLICATE_ATTRIBUTE = "DUPLICATE_ATTRIBUTE"
    DUPLICATE_VENDOR_ATTRIBUTE = "DUPLICATE_VENDOR_ATTRIBUTE"


class ErrorSpan(BaseModel):
    """Half-open ``[start, end)`` character range into the tidied URI."""

    start: int
    end: int

    @model_validator(mode="after")
    def _check_order(self) -> ErrorSpan:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span ({self.start}, {self.end})")
        return self

    def __len__(self) -> int:
        return self.end - self.start


class ComponentViolation(Exception):
    """A single attribute's violation, raised before its position is known.

    The URI parser catches these and re-raises them as ``PK11URIError``
    once the offending component has been located in the tidied URI.
    """

    def __init__(self, code: ViolationCode, violation: str, help: str) -> None:
        self.code = code
        self.violation = violation
        self.help = help
        super().__init__(violation)


class PK11URIError(Exception):
    """Raised when a PKCS#11 URI violates RFC7512.

    ``pk11_uri`` is the *tidied* form of the parsed URI: newline and tab
    formatting has been stripped so that ``span`` indexes a single line.
    ``violation`` refers to the RFC7512 ABNF wherever possible, while
    ``help`` offers a human-friendly fix.
    """

    def __init__(
        self,
        pk11_uri: str,
        span: ErrorSpan,
        violation: str,
        help: str,
        code: ViolationCode,
    ) -> None:
        self.pk11_uri = pk11_uri
        self.span = span
        self.violation = violation
        self.help = help
        self.code = code
        super().__init__(self.render())

    @property
    def error_span(self) -> tuple[int, int]:
        return self.span.start, self.span.end

    def render(self) -> str:
        """Return the URI with the offending span underlined by carets."""
        padding = " " * self.span.start
        highlight = "^" * len(self.span)
        return (
            f"{self.pk11_uri}\n"
            f"{padding}{highlight} {self.violation}\n"
            f"\n"
            f"help: {self.help}"
        )

    def __repr__(self) -> str:
        return (
            f"PK11URIError(pk11_uri={self.pk11_uri!r}, error_span={self.error_span!r}, "
            f"code={self.code.value!r}, violation={self.violation!r}, help={self.help!r})"
        )
