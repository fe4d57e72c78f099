# cookparse/core/errors.py
from __future__ import annotations

from typing import Optional


class ParseError(ValueError):
    """Raised for syntactic faults in a recipe document; aborts the whole parse."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
