"""
Header validation shared by operation builders and signers.

Headers travel as ordered (name, value) pairs. Any CR or LF in a name or value
would corrupt the canonical string to sign, so it is rejected outright.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Tuple

from .errors import InvalidArgument, InvalidHeaderValue

__all__ = ["HeaderPairs", "normalize_header_pairs", "check_header_text", "OSS_HEADER_PREFIX"]

OSS_HEADER_PREFIX = "x-oss-"

HeaderPairs = Tuple[Tuple[str, str], ...]


def check_header_text(name: str, value: str) -> None:
    """
    Reject header names or values containing line breaks.

    Raises:
        InvalidHeaderValue: If name or value contains CR or LF
    """
    if "\n" in name or "\r" in name:
        raise InvalidHeaderValue(f"Header name contains a line break: {name!r}", header=name)
    if "\n" in value or "\r" in value:
        raise InvalidHeaderValue(f"Header {name!r} value contains a line break", header=name)


def normalize_header_pairs(headers: Any) -> HeaderPairs:
    """
    Validate headers and freeze them into a tuple of (name, value) pairs.

    Order is preserved. Integer values are rendered as decimal strings.

    Args:
        headers: Ordered sequence of (name, value) pairs

    Returns:
        Tuple of (name, value) string pairs

    Raises:
        InvalidArgument: If headers is a mapping, a string, or contains malformed pairs
        InvalidHeaderValue: If a name or value contains CR or LF
    """
    if headers is None:
        return ()

    if isinstance(headers, (str, bytes)) or isinstance(headers, Mapping) or not isinstance(headers, Iterable):
        raise InvalidArgument(
            f"headers must be an ordered sequence of (name, value) pairs, got {type(headers).__name__}"
        )

    pairs = []
    for item in headers:
        if isinstance(item, (str, bytes)) or not isinstance(item, (tuple, list)) or len(item) != 2:
            raise InvalidArgument(f"header entry must be a (name, value) pair, got {item!r}")

        name, value = item
        if not isinstance(name, str) or not name:
            raise InvalidArgument(f"header name must be a non-empty string, got {name!r}")
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise InvalidArgument(f"header {name!r} value must be a string, got {type(value).__name__}")

        value = str(value)
        check_header_text(name, value)
        pairs.append((name, value))

    return tuple(pairs)
