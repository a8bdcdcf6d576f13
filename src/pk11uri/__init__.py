"""Parse and validate PKCS#11 URIs in accordance with RFC7512."""

from pk11uri.models.errors import ErrorSpan, PK11URIError, ViolationCode
from pk11uri.models.mapping import PK11URIMapping
from pk11uri.parser.uri import PK11URIParser, parse

__version__ = "0.1.5"

__all__ = [
    "ErrorSpan",
    "PK11URIError",
    "PK11URIMapping",
    "PK11URIParser",
    "ViolationCode",
    "__version__",
    "parse",
]
