# cookparse/core/text.py
import re
from typing import List

BOM = "\ufeff"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def strip_bom(text: str) -> str:
    if text.startswith(BOM):
        return text[len(BOM):]
    return text


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK_RE.split(text)


def normalize_key(key: str) -> str:
    return _NON_ALNUM_RE.sub("_", (key or "").strip().lower()).strip("_")
