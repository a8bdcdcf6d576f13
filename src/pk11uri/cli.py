"""Command-line entry point: parse PKCS#11 URIs and print their attributes."""

from __future__ import annotations

import argparse
import logging
import sys

from pk11uri import __version__
from pk11uri.models.errors import PK11URIError
from pk11uri.models.mapping import PK11URIMapping
from pk11uri.parser.uri import PK11URIParser
from pk11uri.settings import Settings

logger = logging.getLogger("pk11uri.cli")


def _read_stdin_uris() -> list[str]:
    """Blank-line separated blocks, so URIs may span several lines."""
    blocks = [block.strip() for block in sys.stdin.read().split("\n\n")]
    return [block for block in blocks if block]


def format_mapping(mapping: PK11URIMapping) -> str:
    lines = [f"{name}={value}" for name, value in mapping.standard_items()]
    for name, values in mapping.vendor_attributes.items():
        lines.extend(f"{name}={value}" for value in values)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pk11uri",
        description="Parse and validate PKCS#11 URIs (RFC7512)",
    )
    parser.add_argument("uris", nargs="+", metavar="URI",
                        help="PKCS#11 URI to parse, or '-' to read from stdin")
    parser.add_argument("--json", action="store_true",
                        help="Print each mapping as JSON keyed by RFC7512 attribute names")
    parser.add_argument("--no-validate", action="store_true",
                        help="Trust the input: skip name/value validation and duplicate checks")
    parser.add_argument("--no-warnings", action="store_true",
                        help="Suppress advisory 'pkcs11 warning:' messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    uri_parser = PK11URIParser(
        validate=settings.validate_uri and not args.no_validate,
        warnings=settings.warnings and not args.no_warnings,
    )

    uris: list[str] = []
    for uri in args.uris:
        if uri == "-":
            uris.extend(_read_stdin_uris())
        else:
            uris.append(uri)

    for position, uri in enumerate(uris):
        try:
            mapping = uri_parser.parse(uri)
        except PK11URIError as exc:
            logger.debug("Rejected URI with %s at %s", exc.code, exc.error_span)
            print(exc.render(), file=sys.stderr)
            sys.exit(1)
        if position:
            print()
        if args.json:
            print(mapping.model_dump_json(by_alias=True, exclude_none=True, indent=2))
        else:
            print(format_mapping(mapping))


if __name__ == "__main__":
    main()
