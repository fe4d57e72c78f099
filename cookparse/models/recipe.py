# cookparse/models/recipe.py
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from cookparse.models.metadata import Metadata
from cookparse.models.tokens import CookwareToken, IngredientToken, TimerToken, Token


class Comment(BaseModel):
    text: str
    line_number: int

    model_config = {"frozen": True}


class Step(BaseModel):
    index: int
    tokens: Tuple[Token, ...] = Field(default_factory=tuple)
    section: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def text(self) -> str:
        return "".join(t.to_text() for t in self.tokens).strip()

    @property
    def ingredients(self) -> List[IngredientToken]:
        return [t for t in self.tokens if isinstance(t, IngredientToken)]

    @property
    def cookware(self) -> List[CookwareToken]:
        return [t for t in self.tokens if isinstance(t, CookwareToken)]

    @property
    def timers(self) -> List[TimerToken]:
        return [t for t in self.tokens if isinstance(t, TimerToken)]


class IngredientOccurrence(BaseModel):
    step_index: int
    quantity: Optional[float] = None
    unit: Optional[str] = None
    optional: bool = False
    raw_quantity: Optional[str] = None
    section: Optional[str] = None

    model_config = {"frozen": True}


class Ingredient(BaseModel):
    name: str
    occurrences: Tuple[IngredientOccurrence, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}


class CookwareOccurrence(BaseModel):
    step_index: int
    section: Optional[str] = None

    model_config = {"frozen": True}


class Cookware(BaseModel):
    name: str
    occurrences: Tuple[CookwareOccurrence, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}


class Recipe(BaseModel):
    slug: Optional[str] = None
    metadata: Metadata = Field(default_factory=Metadata)
    steps: Tuple[Step, ...] = Field(default_factory=tuple)
    ingredients: Tuple[Ingredient, ...] = Field(default_factory=tuple)
    cookware: Tuple[Cookware, ...] = Field(default_factory=tuple)
    comments: Tuple[Comment, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get_title()

    @property
    def tags(self) -> List[str]:
        return self.metadata.get_tags()

    @property
    def ingredient_names(self) -> List[str]:
        return [i.name for i in self.ingredients]

    @property
    def cookware_names(self) -> List[str]:
        return [c.name for c in self.cookware]

    @property
    def sections(self) -> List[str]:
        # ordered, distinct, skipping steps outside any section
        out: List[str] = []
        for step in self.steps:
            if step.section is not None and step.section not in out:
                out.append(step.section)
        return out
