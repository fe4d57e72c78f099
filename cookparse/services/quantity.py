# cookparse/services/quantity.py
from __future__ import annotations

import math
import re
from typing import Any, Optional, Tuple

from cookparse.core import config

MIXED_FRACTION_RE = re.compile(r"^(\d+)\s+(\d+)/(\d+)$")
FRACTION_RE = re.compile(r"^(\d+)/(\d+)$")
DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# numeric run optionally followed by a unit word, e.g. "10min", "1/2 cup"
NUMBER_UNIT_RE = re.compile(r"^([\d/.,]+)\s*([A-Za-z]+)?$")

ISO_DURATION_RE = re.compile(
    r"^P(?:T)?(?:(\d+(?:[.,]\d+)?)H)?(?:(\d+(?:[.,]\d+)?)M)?(?:(\d+(?:[.,]\d+)?)S)?$",
    re.I,
)
HOURS_RE = re.compile(r"(?<![\d.,])(\d+(?:[.,]\d+)?)\s*h(?:ours?|rs?)?(?![a-z])", re.I)
MINUTES_RE = re.compile(r"(?<![\d.,])(\d+(?:[.,]\d+)?)\s*m(?:in(?:ute)?s?)?(?![a-z])", re.I)
CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
LEADING_INT_RE = re.compile(r"^(\d+)")


def _to_float(value: str) -> float:
    return float(value.replace(",", "."))


def _to_int(digits: str) -> Optional[int]:
    try:
        return int(digits)
    except ValueError:
        return None


def _whole(value: float) -> Optional[int]:
    return int(value) if math.isfinite(value) else None


def _ratio(whole: str, num: str, den: str) -> Optional[float]:
    parts = [_to_int(whole), _to_int(num), _to_int(den)]
    if None in parts or parts[2] == 0:
        return None
    try:
        result = parts[0] + parts[1] / parts[2]
    except OverflowError:
        return None
    return result if math.isfinite(result) else None


def normalize_numeric(value: str) -> Optional[float]:
    """
    "1 1/2" -> 1.5, "3/4" -> 0.75, "1,5" -> 1.5.
    Anything that is not a number gives None; a zero denominator or a value
    too large for a float too.
    """
    value = (value or "").strip()
    if not value:
        return None

    m = MIXED_FRACTION_RE.match(value)
    if m:
        return _ratio(*m.groups())

    m = FRACTION_RE.match(value)
    if m:
        return _ratio("0", m.group(1), m.group(2))

    normalized = value.replace(",", ".")
    if DECIMAL_RE.match(normalized):
        result = float(normalized)
        return result if math.isfinite(result) else None

    return None


def split_quantity(raw: Optional[str]) -> Tuple[Optional[float], Optional[str]]:
    if raw is None:
        return None, None

    trimmed = raw.strip()
    if not trimmed:
        return None, None

    if config.QUANTITY_UNIT_SEPARATOR in trimmed:
        quantity, unit = trimmed.split(config.QUANTITY_UNIT_SEPARATOR, 1)
        unit = unit.strip()
        return normalize_numeric(quantity), unit or None

    m = NUMBER_UNIT_RE.match(trimmed)
    if m:
        return normalize_numeric(m.group(1)), m.group(2)

    return normalize_numeric(trimmed), None


def parse_duration_minutes(value: Any) -> Optional[int]:
    """Best-effort conversion of a duration value to whole minutes."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return _whole(value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    m = ISO_DURATION_RE.match(text)
    if m and any(m.groups()):
        hours, minutes, seconds = (_to_float(g) if g else 0.0 for g in m.groups())
        if not math.isfinite(seconds):
            return None
        return _whole(hours * 60 + minutes + math.floor(seconds / 60))

    hours = HOURS_RE.search(text)
    minutes = MINUTES_RE.search(text)
    if hours or minutes:
        total = 0.0
        if hours:
            total += _to_float(hours.group(1)) * 60
        if minutes:
            total += _to_float(minutes.group(1))
        return _whole(total)

    m = CLOCK_RE.match(text)
    if m:
        return int(m.group(1)) * 60 + int(m.group(2))

    m = LEADING_INT_RE.match(text)
    if m:
        return _to_int(m.group(1))

    return None
