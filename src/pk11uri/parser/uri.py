"""PKCS#11 URI parsing: component dispatch and positioned error reporting."""

from __future__ import annotations

import logging

from pk11uri.models.errors import ComponentViolation, ErrorSpan, PK11URIError, ViolationCode
from pk11uri.models.mapping import PK11URIMapping
from pk11uri.parser.assigner import assign
from pk11uri.parser.splitter import (
    Fragment,
    nth_delimiter_index,
    split_attribute,
    split_components,
    tidy,
)
from pk11uri.parser.validators import (
    validate_path_value,
    validate_query_value,
    warn_path_value,
    warn_query_value,
)
from pk11uri.parser.vocabulary import Component, classify
from pk11uri.settings import Settings

PKCS11_SCHEME = "pkcs11:"

logger = logging.getLogger("pk11uri.parser")
warnings_logger = logging.getLogger("pk11uri.warnings")


class PK11URIParser:
    """Parses PKCS#11 URIs into :class:`PK11URIMapping` objects.

    Parsing fails fast: the first violation raises :class:`PK11URIError`
    and no partial mapping is returned.  Advisory RFC7512 guidelines are
    reported through ``logger`` (``pk11uri.warnings`` by default) and never
    affect the outcome.  Instances hold no per-parse state and may be
    shared between threads.
    """

    def __init__(
        self,
        *,
        validate: bool = True,
        warnings: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self.validate = validate
        self._warn: logging.Logger | None = None
        if warnings:
            self._warn = logger if logger is not None else warnings_logger

    @classmethod
    def from_settings(cls, settings: Settings) -> PK11URIParser:
        return cls(validate=settings.validate_uri, warnings=settings.warnings)

    def parse(self, pk11_uri: str) -> PK11URIMapping:
        if not pk11_uri.startswith(PKCS11_SCHEME):
            raise PK11URIError(
                pk11_uri=tidy(pk11_uri),
                span=ErrorSpan(start=0, end=0),
                violation=(
                    'Invalid `pk11-URI`: expected `"pkcs11:" pk11-path [ "?" pk11-query ]`.'
                ),
                help="PKCS#11 URI must start with `pkcs11:`.",
                code=ViolationCode.INVALID_SCHEME,
            )

        logger.debug("Parsing PKCS#11 URI (length=%d)", len(pk11_uri))
        # A lone "pkcs11:" is valid and yields an empty mapping.  Regions holding
        # nothing but layout newlines and tabs are treated as empty.
        mapping = PK11URIMapping()

        query_index = pk11_uri.find("?")
        path_end = query_index if query_index != -1 else len(pk11_uri)
        pk11_path = pk11_uri[len(PKCS11_SCHEME) : path_end]
        if tidy(pk11_path):
            self._parse_component(pk11_uri, pk11_path, Component.PATH, mapping)

        if query_index != -1:
            pk11_query = pk11_uri[query_index + 1 :]
            if tidy(pk11_query):
                self._parse_component(pk11_uri, pk11_query, Component.QUERY, mapping)
            self._warn_query_combinations(mapping)

        logger.debug(
            "Parsed PKCS#11 URI: %d standard, %d vendor-specific attribute(s)",
            len(mapping.standard_items()),
            len(mapping.vendor_attributes),
        )
        return mapping

    # -- components ----------------------------------------------------------

    def _parse_component(
        self,
        pk11_uri: str,
        region: str,
        component: Component,
        mapping: PK11URIMapping,
    ) -> None:
        for fragment in split_components(region, component.delimiter):
            try:
                self._assign_fragment(fragment.text, component, mapping)
            except ComponentViolation as exc:
                raise self._positioned_error(pk11_uri, region, component, fragment, exc) from exc

    def _assign_fragment(self, text: str, component: Component, mapping: PK11URIMapping) -> None:
        name, value = split_attribute(text)
        attr = classify(name, component, validate=self.validate, warn=self._warn)
        if component is Component.PATH:
            if self.validate:
                validate_path_value(attr, value)
            if self._warn is not None:
                warn_path_value(attr, value, self._warn)
        else:
            if self.validate:
                validate_query_value(attr, value)
            if self._warn is not None:
                warn_query_value(attr, value, self._warn)
        assign(attr, value, component, mapping, validate=self.validate)

    def _warn_query_combinations(self, mapping: PK11URIMapping) -> None:
        if self._warn is None:
            return
        if mapping.module_name is not None and mapping.module_path is not None:
            self._warn.warning(
                "pkcs11 warning: using both `module-name` and `module-path` SHOULD be avoided. "
                "Attribute `module-name` is preferred due to its system-independent nature."
            )
        if mapping.pin_source is not None and mapping.pin_value is not None:
            self._warn.warning(
                'pkcs11 warning: a PKCS#11 URI containing both "pin-source" and "pin-value" '
                "query attributes SHOULD be refused as invalid."
            )

    # -- error positioning ---------------------------------------------------

    @staticmethod
    def _positioned_error(
        pk11_uri: str,
        region: str,
        component: Component,
        fragment: Fragment,
        exc: ComponentViolation,
    ) -> PK11URIError:
        """Locate ``fragment`` in the tidied URI and attach the span to ``exc``."""
        tidy_uri = tidy(pk11_uri)
        tidy_region = tidy(region)
        tidy_fragment = tidy(fragment.text)

        code, violation, help_text = exc.code, exc.violation, exc.help
        if tidy_fragment:
            offset = tidy_region.find(tidy_fragment, len(tidy(region[: fragment.start])))
        else:
            # Only a doubled, leading or trailing delimiter leaves an empty fragment.
            code = ViolationCode.MISPLACED_DELIMITER
            violation = f"Misplaced {component} delimiter."
            help_text = f"Remove the misplaced '{component.delimiter}' delimiter."
            offset = nth_delimiter_index(tidy_region, fragment.index, component.delimiter)

        if component is Component.PATH:
            offset += len(PKCS11_SCHEME)
        else:
            offset += tidy_uri.find("?") + 1

        return PK11URIError(
            pk11_uri=tidy_uri,
            span=ErrorSpan(start=offset, end=offset + len(tidy_fragment)),
            violation=violation,
            help=help_text,
            code=code,
        )


def parse(pk11_uri: str, settings: Settings | None = None) -> PK11URIMapping:
    """Parse and validate ``pk11_uri`` per RFC7512.

    Raises :class:`PK11URIError` on the first violation.  Mapping values
    are kept percent-encoded exactly as they appear in the URI.
    """
    return PK11URIParser.from_settings(settings or Settings()).parse(pk11_uri)
