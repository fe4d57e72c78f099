# cookparse/services/body.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from cookparse.core import config
from cookparse.core.text import split_lines
from cookparse.models.recipe import Comment

SECTION_RE = re.compile(r"^==\s*(.+?)\s*==$")
SOURCE_COMMENT_RE = re.compile(r"^Source:\s*(.+)$", re.I)


class StepChunk(BaseModel):
    text: str
    section: Optional[str] = None


class BodySegments(BaseModel):
    steps: List[StepChunk] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    derived_metadata: Dict[str, Any] = Field(default_factory=dict)


def section_name(line: str) -> Optional[str]:
    m = SECTION_RE.match(line)
    if not m:
        return None
    return m.group(1).strip()


def is_comment_line(line: str) -> bool:
    return line.startswith(config.COMMENT_PREFIXES)


def strip_comment_prefix(line: str) -> str:
    if line.startswith("//"):
        return line[2:].strip()
    if line.startswith(">"):
        return line.lstrip(">").strip()
    return line


def metadata_from_comment(text: str) -> Dict[str, Any]:
    m = SOURCE_COMMENT_RE.match(text)
    if m:
        return {"source": m.group(1).strip()}
    return {}


def segment_body(body: str) -> BodySegments:
    """
    Walk body lines, grouping content lines into step chunks.

    Blank lines and section headers end the current step; comments are
    collected separately and never become step text.
    """
    segments = BodySegments()
    buffer: List[str] = []
    current_section: Optional[str] = None

    def flush() -> None:
        if buffer:
            segments.steps.append(StepChunk(text=" ".join(buffer), section=current_section))
            buffer.clear()

    for number, line in enumerate(split_lines(body), start=1):
        trimmed = line.strip()

        name = section_name(trimmed)
        if name is not None:
            flush()
            current_section = name or None
            continue

        if not trimmed:
            flush()
            continue

        if is_comment_line(trimmed):
            text = strip_comment_prefix(trimmed)
            segments.comments.append(Comment(text=text, line_number=number))
            segments.derived_metadata.update(metadata_from_comment(text))
            continue

        buffer.append(line)

    flush()
    return segments
