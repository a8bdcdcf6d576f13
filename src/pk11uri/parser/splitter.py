"""Whitespace tidying and path/query component splitting."""

from __future__ import annotations

from dataclasses import dataclass

from pk11uri.models.errors import ComponentViolation, ViolationCode

_FORMATTING = str.maketrans("", "", "\n\t")


def tidy(text: str) -> str:
    """Strip the newline and tab formatting RFC7512 allows for readability."""
    return text.translate(_FORMATTING)


@dataclass(frozen=True)
class Fragment:
    """One ``name=value`` component of a path or query region."""

    index: int
    start: int  # offset within the (untidied) region
    text: str


def split_components(region: str, delimiter: str) -> list[Fragment]:
    """Split a path (``;``) or query (``&``) region, keeping each fragment's position."""
    fragments: list[Fragment] = []
    start = 0
    for index, text in enumerate(region.split(delimiter)):
        fragments.append(Fragment(index, start, text))
        start += len(text) + len(delimiter)
    return fragments


def join_components(fragments: list[Fragment], delimiter: str) -> str:
    return delimiter.join(fragment.text for fragment in fragments)


def split_attribute(text: str) -> tuple[str, str]:
    """Split ``name = value`` on the first ``=``, trimming both halves."""
    name, sep, value = text.partition("=")
    if not sep:
        raise ComponentViolation(
            ViolationCode.MALFORMED_COMPONENT,
            "Malformed component.",
            "Please refer to RFC7512 for acceptable path|query attribute values.",
        )
    return name.strip(), value.strip()


def nth_delimiter_index(tidy_region: str, n: int, delimiter: str) -> int:
    """Index of the ``n``-th (0-based) ``delimiter`` in ``tidy_region``.

    Falls back to the region's last character, which is where a trailing
    delimiter sits (``pkcs11:foo=bar;``).
    """
    position = -1
    for _ in range(n + 1):
        position = tidy_region.find(delimiter, position + 1)
        if position == -1:
            return len(tidy_region) - 1
    return position
