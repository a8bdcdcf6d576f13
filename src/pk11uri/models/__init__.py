"""Pydantic result and error models for PKCS#11 URI parsing."""

from pk11uri.models.errors import ComponentViolation, ErrorSpan, PK11URIError, ViolationCode
from pk11uri.models.mapping import PK11URIMapping

__all__ = [
    "ComponentViolation",
    "ErrorSpan",
    "PK11URIError",
    "PK11URIMapping",
    "ViolationCode",
]
