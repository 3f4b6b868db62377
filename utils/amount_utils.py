from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_AMOUNT_CHARS_RE = re.compile(r"[^0-9kmb.]")
_LEADING_NUMBER_RE = re.compile(r"^(\d+\.?\d*|\.\d+)")

# checked in this order; the first suffix present wins
_SUFFIX_MULTIPLIERS = (
    ("m", 1_000_000),
    ("k", 1_000),
    ("b", 1_000_000_000),
)


def round_half_up(x: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(x + 0.5))


def _leading_float(s: str) -> Optional[float]:
    m = _LEADING_NUMBER_RE.match(s)
    if not m:
        return None
    return float(m.group(1))


def parse_funding_amount(raw: Optional[str]) -> float:
    """
    Parse a free-text funding request ("500k", "$2M", "1.5 million") into a number.
    Returns 0 when no amount can be read.
    """
    if not raw:
        return 0
    cleaned = _AMOUNT_CHARS_RE.sub("", raw.lower())

    for suffix, multiplier in _SUFFIX_MULTIPLIERS:
        if suffix in cleaned:
            value = _leading_float(cleaned.replace(suffix, "", 1))
            return value * multiplier if value is not None else 0

    value = _leading_float(cleaned)
    return value if value is not None else 0


def _fixed(x: float, places: int) -> str:
    """Fixed-point text with ties rounded up, on the exact binary value of ``x``."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(x).quantize(quantum, rounding=ROUND_HALF_UP))


def format_potential_funding(total: float) -> str:
    if total >= 1_000_000_000:
        return f"${_fixed(total / 1_000_000_000, 1)}B"
    if total >= 1_000_000:
        return f"${_fixed(total / 1_000_000, 1)}M"
    if total >= 1_000:
        return f"${_fixed(total / 1_000, 0)}K"
    if float(total).is_integer():
        return f"${int(total)}"
    return f"${total}"
