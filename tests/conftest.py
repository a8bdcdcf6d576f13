"""Shared test fixtures for pk11uri."""

from __future__ import annotations

from pathlib import Path

import pytest

from pk11uri.parser.uri import PK11URIParser

# RFC7512 section 3.3 examples, laid out over several lines as in the RFC.
RFC_CERTIFICATE_URI = """pkcs11:token=The%20Software%20PKCS%2311%20Softtoken;
            manufacturer=Snake%20Oil,%20Inc.;
            model=1.0;
            object=my-certificate;
            type=cert;
            id=%69%95%3E%5C%F4%BD%EC%91;
            serial=
            ?pin-source=file:/etc/token_pin"""

RFC_VENDOR_URI = """pkcs11:token=my-token;
            object=my-certificate;
            type=cert;
            vendor-aaa=value-a
            ?pin-source=file:/etc/token_pin
            &vendor-bbb=value-b"""

CARD_AUTH_URI = "pkcs11:object=Private key for Card Authentication;pin-value=123456"


@pytest.fixture
def parser() -> PK11URIParser:
    return PK11URIParser()


@pytest.fixture
def quiet_parser() -> PK11URIParser:
    """Parser with advisory warnings switched off."""
    return PK11URIParser(warnings=False)


@pytest.fixture
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate settings from the caller's environment and any .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("PK11URI_LOG_LEVEL", "PK11URI_VALIDATE_URI", "PK11URI_WARNINGS"):
        monkeypatch.delenv(name, raising=False)
