# cookparse/models/tokens.py
from __future__ import annotations

from fractions import Fraction
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from cookparse.core import config


def _escape_text(text: str) -> str:
    out = []
    for ch in text:
        if ch == config.ESCAPE_CHAR or ch in config.MARKERS:
            out.append(config.ESCAPE_CHAR)
        out.append(ch)
    return "".join(out)


def _escape_payload(raw: str) -> str:
    return raw.replace("\\", "\\\\").replace("}", "\\}")


def _format_number(value: float) -> str:
    # a bare timer ends at `.`, so non-integral values render as fractions
    if float(value).is_integer():
        return str(int(value))
    fraction = Fraction(value).limit_denominator()
    if fraction.numerator / fraction.denominator != value:
        fraction = Fraction(value)
    return f"{fraction.numerator}/{fraction.denominator}"


class TextToken(BaseModel):
    kind: Literal["text"] = "text"
    text: str

    model_config = {"frozen": True}

    def to_text(self) -> str:
        return _escape_text(self.text)


class IngredientToken(BaseModel):
    kind: Literal["ingredient"] = "ingredient"
    name: str
    quantity: Optional[float] = None
    unit: Optional[str] = None
    optional: bool = False
    raw_quantity: Optional[str] = None

    model_config = {"frozen": True}

    def to_text(self) -> str:
        suffix = ""
        if self.raw_quantity is not None:
            suffix = "{" + _escape_payload(self.raw_quantity) + "}"
        return "@" + self.name + ("?" if self.optional else "") + suffix


class CookwareToken(BaseModel):
    kind: Literal["cookware"] = "cookware"
    name: str

    model_config = {"frozen": True}

    def to_text(self) -> str:
        return "#" + self.name


class TimerToken(BaseModel):
    kind: Literal["timer"] = "timer"
    name: Optional[str] = None
    duration: Optional[float] = None
    unit: Optional[str] = None
    raw_duration: Optional[str] = None

    model_config = {"frozen": True}

    def to_text(self) -> str:
        if self.raw_duration is not None:
            return "~" + (self.name or "") + "{" + _escape_payload(self.raw_duration) + "}"

        if self.name:
            return "~" + self.name

        suffix = ""
        if self.duration is not None:
            suffix = _format_number(self.duration) + (self.unit or "")
        return "~" + suffix


Token = Annotated[
    Union[TextToken, IngredientToken, CookwareToken, TimerToken],
    Field(discriminator="kind"),
]
