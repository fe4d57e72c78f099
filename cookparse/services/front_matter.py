# cookparse/services/front_matter.py
from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional, Tuple

from cookparse.core import config
from cookparse.core.errors import ParseError
from cookparse.core.text import split_lines

KEY_LINE_RE = re.compile(r"^(\s*)([A-Za-z0-9_\-]+):\s*(.*)$")
LIST_ITEM_RE = re.compile(r"^\s*-\s*(.+)$")
NUMERIC_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _is_delimiter(line: str) -> bool:
    return line.strip() == config.FRONT_MATTER_DELIMITER


def cast_metadata_value(value: str) -> Any:
    value = value.strip()

    if value == "":
        return None

    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]

    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [part.strip() for part in inner.split(",")]

    lower = value.lower()
    if lower == "true":
        return True
    if lower == "false":
        return False

    if NUMERIC_RE.match(value):
        number = float(value)
        if math.isfinite(number):
            return int(number)

    return value


def parse_metadata_block(block: str) -> Dict[str, Any]:
    """
    Line-oriented `key: value` parser for the front-matter block.

    An empty `key:` opens a context: following `- item` lines append to a
    list, indented `sub: value` lines build a nested mapping instead.
    """
    result: Dict[str, Any] = {}
    current_key: Optional[str] = None

    for line in split_lines(block):
        m = KEY_LINE_RE.match(line)
        if m:
            indent, key, value = m.group(1), m.group(2), m.group(3)

            if indent and current_key is not None and isinstance(result[current_key], dict):
                result[current_key][key] = cast_metadata_value(value)
                continue

            if indent and current_key is not None and result[current_key] == []:
                result[current_key] = {key: cast_metadata_value(value)}
                continue

            if value.strip() == "":
                result[key] = []
                current_key = key
                continue

            result[key] = cast_metadata_value(value)
            current_key = None
            continue

        if current_key is None:
            continue

        m = LIST_ITEM_RE.match(line)
        if m and isinstance(result[current_key], list):
            item = cast_metadata_value(m.group(1))
            if item is not None:
                result[current_key].append(item)

    return result


def extract_front_matter(source: str) -> Tuple[Dict[str, Any], str]:
    """Split a document into (raw metadata, body)."""
    trimmed = source.lstrip()
    lines = split_lines(trimmed)

    if not lines or not _is_delimiter(lines[0]):
        return {}, source

    closing: Optional[int] = None
    for number, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            closing = number
            break

    if closing is None:
        raise ParseError("Front matter starting delimiter found but no closing delimiter detected.", 0)

    block: List[str] = lines[1:closing]
    body = "\n".join(lines[closing + 1:])

    return parse_metadata_block("\n".join(block)), body.lstrip("\r\n")
