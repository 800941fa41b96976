# src/validator_explorer/versions.py
# SPDX-License-Identifier: MIT

"""
Client version decoding
=======================

Validators report their software version in one of two encodings:

  • standard   "3.1.8"        → major=3, minor=1, patch=8
  • packed     "0.811.30108"  → major=3, minor=1, patch=8

The packed form starts with "0." and carries the logical version in its
third segment as fixed-width digits: MMMPP → 1 digit major, 2 digits minor,
2 digits patch. The digit widths are a convention observed in the wild, not
a published format; the only guard is the ≥5-digit, all-numeric test below.

Everything that groups, filters or orders versions goes through
parse_version() so both encodings compare on the same (major, minor, patch).
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

UNKNOWN_VERSION = "unknown"

STANDARD = "standard"
PACKED = "packed"
UNKNOWN = "unknown"

_LEADING_INT = re.compile(r"\s*[+-]?\d+", re.ASCII)


@dataclass(frozen=True)
class ParsedVersion:
    original: str
    kind: str
    major: int
    minor: int
    patch: int
    minor_group: str

    @property
    def is_unknown(self) -> bool:
        return self.kind == UNKNOWN


def _int_or_zero(text: Optional[str]) -> int:
    """Lenient integer parse: leading digits count, anything else is 0."""
    if not text:
        return 0
    m = _LEADING_INT.match(text)
    if not m:
        return 0
    return max(int(m.group(0)), 0)


def is_packed_version(raw: str) -> bool:
    if not raw or not raw.startswith("0."):
        return False
    parts = raw.split(".")
    if len(parts) < 3:
        return False
    third = parts[2]
    return len(third) >= 5 and third.isdigit() and third.isascii()


def parse_version(raw: Optional[str]) -> ParsedVersion:
    """
    Decode a raw version string into a comparable ParsedVersion.

    Never raises: empty input, the literal "unknown" and strings without a
    numeric major give the unknown sentinel; an unparsable minor or patch
    segment decodes as 0.
    """
    if not raw or raw == UNKNOWN_VERSION:
        return ParsedVersion(raw or "", UNKNOWN, 0, 0, 0, UNKNOWN_VERSION)

    parts = raw.split(".")

    if is_packed_version(raw):
        digits = parts[2]
        major = _int_or_zero(digits[0:1])
        minor = _int_or_zero(digits[1:3])
        patch = _int_or_zero(digits[3:5])
        return ParsedVersion(raw, PACKED, major, minor, patch, f"{major}.{minor}")

    # no numeric major at all ("garbage", "v1.2") is not a standard version
    if not _LEADING_INT.match(parts[0]):
        return ParsedVersion(raw, UNKNOWN, 0, 0, 0, UNKNOWN_VERSION)

    major = _int_or_zero(parts[0])
    minor = _int_or_zero(parts[1] if len(parts) > 1 else None)
    patch = _int_or_zero(parts[2] if len(parts) > 2 else None)
    return ParsedVersion(raw, STANDARD, major, minor, patch, f"{major}.{minor}")


def minor_version_group(raw: Optional[str]) -> str:
    return parse_version(raw).minor_group


def is_version_in_group(raw: Optional[str], group: str) -> bool:
    return minor_version_group(raw) == group


# ---------------------------
# Ordering
# ---------------------------
# Keys are for an *ascending* sort that yields highest version first and
# "unknown" last.

def version_sort_key(raw: Optional[str]) -> Tuple[int, int, int, int, str]:
    p = parse_version(raw)
    if p.is_unknown:
        return (1, 0, 0, 0, "")
    return (0, -p.major, -p.minor, -p.patch, p.original)


def group_sort_key(group: str) -> Tuple[int, int, int]:
    if not group or group == UNKNOWN_VERSION:
        return (1, 0, 0)
    major, _, minor = group.partition(".")
    return (0, -_int_or_zero(major), -_int_or_zero(minor))
