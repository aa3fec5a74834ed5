"""String normalisation shared by the slash-command and webhook paths.

Both submission paths run player names, times and map codes through these
helpers so an approved entry is stored identically regardless of where the
submission came from.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from urllib.parse import urlparse

MAP_CODE_SIGIL = "@"
USERNAME_SEPARATOR = "#"

_USERNAME_RE = re.compile(r".+#[0-9]{4}")
# Leading numeric prefix, so "45.2s" parses as 45.2.
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def format_time(raw: str) -> Optional[str]:
    """Return ``raw`` as a two-decimal string, or ``None`` when it is not a number."""

    match = _NUMBER_PREFIX_RE.match((raw or "").strip())
    if not match:
        return None
    try:
        value = float(match.group(0))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    # Quantize the exact binary value; ties round away from zero.
    if value == 0:
        value = 0.0
    rounded = Decimal(abs(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{rounded:f}"


def normalize_map_code(raw: str) -> str:
    trimmed = (raw or "").strip()
    return trimmed if trimmed.startswith(MAP_CODE_SIGIL) else f"{MAP_CODE_SIGIL}{trimmed}"


def capitalize_username(raw: str) -> str:
    """Capitalise the name part of ``Name#0000``; anything else is returned as-is."""

    name, _, tag = raw.partition(USERNAME_SEPARATOR)
    if not name or not tag:
        return raw
    return f"{name[0].upper()}{name[1:].lower()}{USERNAME_SEPARATOR}{tag}"


def is_valid_username(raw: str) -> bool:
    return _USERNAME_RE.fullmatch(raw or "") is not None


def is_valid_url(raw: str) -> bool:
    try:
        parsed = urlparse((raw or "").strip())
    except ValueError:
        return False
    if not parsed.scheme or not parsed.netloc:
        return False
    return not any(ch.isspace() for ch in parsed.netloc)


__all__ = [
    "MAP_CODE_SIGIL",
    "capitalize_username",
    "format_time",
    "is_valid_url",
    "is_valid_username",
    "normalize_map_code",
]
