"""link_scout.headers: parsing of the ``-h`` custom header string."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

__all__ = ("HeaderFormatError", "parse_headers", "find_header")

ENTRY_SEPARATOR = ";;"


class HeaderFormatError(ValueError):
    """Raised when a non-empty header string carries no ``:`` at all."""


def parse_headers(raw: str) -> Optional[Dict[str, str]]:
    """Turn ``"Name: value;;Name2: value2"`` into a header mapping.

    Empty input means no custom headers and returns ``None``. Entries
    without a colon are skipped.
    """
    if not raw:
        return None
    if ":" not in raw:
        raise HeaderFormatError(
            "headers flag not formatted properly (no colon to separate header and value)"
        )

    headers: Dict[str, str] = {}
    for entry in raw.split(ENTRY_SEPARATOR):
        if ": " in entry:
            name, _, value = entry.partition(": ")
        elif ":" in entry:
            name, _, value = entry.partition(":")
        else:
            continue
        headers[name.strip()] = value.strip()
    return headers


def find_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """Case-insensitive lookup of *name* in *headers*."""
    if not headers:
        return None
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None
