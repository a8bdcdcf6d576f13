"""PKCS#11 URI parsing, classification and validation."""

from pk11uri.parser.splitter import split_components, tidy
from pk11uri.parser.uri import PKCS11_SCHEME, PK11URIParser, parse
from pk11uri.parser.vocabulary import (
    Component,
    PathAttribute,
    QueryAttribute,
    VendorAttribute,
    classify,
)

__all__ = [
    "PKCS11_SCHEME",
    "Component",
    "PK11URIParser",
    "PathAttribute",
    "QueryAttribute",
    "VendorAttribute",
    "classify",
    "parse",
    "split_components",
    "tidy",
]
