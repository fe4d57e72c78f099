# cookparse/services/tokenizer.py
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from cookparse.core import config
from cookparse.core.errors import ParseError
from cookparse.models.tokens import CookwareToken, IngredientToken, TextToken, TimerToken, Token
from cookparse.services.quantity import normalize_numeric, split_quantity

# bare timer segment such as "10min" or "1/2h"
TIMER_SEGMENT_RE = re.compile(r"^([\d/.,]+)([A-Za-z]+)?$")


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


def _is_timer_delimiter(ch: str) -> bool:
    return ch.isspace() or ch in config.TIMER_DELIMITERS


def consume_brace_value(text: str, start: int) -> Tuple[str, int]:
    """
    Read the payload of a `{...}` group opening at `start`.

    Returns the unescaped payload and the index just past the closing brace.
    """
    value: List[str] = []
    index = start + 1
    escaped = False

    while index < len(text):
        ch = text[index]
        if escaped:
            value.append(ch)
            escaped = False
        elif ch == config.ESCAPE_CHAR:
            escaped = True
        elif ch == "}":
            return "".join(value), index + 1
        else:
            value.append(ch)
        index += 1

    raise ParseError(f"Unclosed brace value starting at position {start}.", start)


def parse_ingredient(text: str, start: int) -> Tuple[IngredientToken, int]:
    brace = text.find("{", start + 1)
    if brace == -1:
        raise ParseError(f"Ingredient missing quantity delimiters near position {start}.", start)

    segment = text[start + 1:brace].rstrip()

    # another marker before the brace means this `@` never had its own quantity
    if any(marker in segment for marker in config.MARKERS):
        raise ParseError(f"Ingredient missing quantity delimiters near position {start}.", start)

    optional = False
    if segment.endswith(config.OPTIONAL_SUFFIX):
        optional = True
        segment = segment[:-1]

    name = segment.strip()
    if not name:
        raise ParseError(f"Ingredient missing name at position {start}.", start)

    raw, end = consume_brace_value(text, brace)
    quantity, unit = split_quantity(raw)

    return IngredientToken(name=name, quantity=quantity, unit=unit, optional=optional, raw_quantity=raw), end


def parse_cookware(text: str, start: int) -> Tuple[CookwareToken, int]:
    index = start + 1
    while index < len(text) and _is_name_char(text[index]):
        index += 1

    name = text[start + 1:index]
    if not name:
        raise ParseError(f"Cookware missing name at position {start}.", start)

    return CookwareToken(name=name), index


def parse_timer(text: str, start: int) -> Tuple[TimerToken, int]:
    index = start + 1
    raw: Optional[str] = None
    segment: List[str] = []

    while index < len(text):
        ch = text[index]
        if ch == "{":
            raw, index = consume_brace_value(text, index)
            break
        # the next marker and any delimiter are left for the caller to scan
        if ch in config.MARKERS or _is_timer_delimiter(ch):
            break
        segment.append(ch)
        index += 1

    name = "".join(segment)

    if raw is not None:
        if not name and not raw.strip():
            raise ParseError(f"Timer missing value near position {start}.", start)
        duration, unit = split_quantity(raw)
        return TimerToken(name=name or None, duration=duration, unit=unit, raw_duration=raw), index

    if not name:
        raise ParseError(f"Timer missing value near position {start}.", start)

    m = TIMER_SEGMENT_RE.match(name)
    if m:
        return TimerToken(duration=normalize_numeric(m.group(1)), unit=m.group(2)), index

    return TimerToken(name=name), index


def tokenize_step(text: str) -> List[Token]:
    tokens: List[Token] = []
    buffer: List[str] = []
    parsers = {
        config.INGREDIENT_MARKER: parse_ingredient,
        config.COOKWARE_MARKER: parse_cookware,
        config.TIMER_MARKER: parse_timer,
    }

    def flush() -> None:
        if buffer:
            tokens.append(TextToken(text="".join(buffer)))
            buffer.clear()

    index = 0
    while index < len(text):
        ch = text[index]

        if ch == config.ESCAPE_CHAR:
            if index + 1 < len(text):
                buffer.append(text[index + 1])
                index += 2
            else:
                buffer.append(ch)
                index += 1
            continue

        parser = parsers.get(ch)
        if parser is None:
            buffer.append(ch)
            index += 1
            continue

        flush()
        token, index = parser(text, index)
        tokens.append(token)

    flush()
    return tokens
