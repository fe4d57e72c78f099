# cookparse/services/summary.py
from __future__ import annotations

from typing import Dict, List, Tuple

from cookparse.models.recipe import (
    Cookware,
    CookwareOccurrence,
    Ingredient,
    IngredientOccurrence,
    Step,
)
from cookparse.models.tokens import CookwareToken, IngredientToken


def summarize_tokens(steps: List[Step]) -> Tuple[List[Ingredient], List[Cookware]]:
    """
    Index every ingredient and cookware mention across the steps.

    Entries are keyed by lowercase name; the first spelling seen is the
    display name and dict insertion order gives first-seen order.
    """
    ingredients: Dict[str, Tuple[str, List[IngredientOccurrence]]] = {}
    cookware: Dict[str, Tuple[str, List[CookwareOccurrence]]] = {}

    for step in steps:
        for token in step.tokens:
            if isinstance(token, IngredientToken):
                _, occurrences = ingredients.setdefault(token.name.lower(), (token.name, []))
                occurrences.append(
                    IngredientOccurrence(
                        step_index=step.index,
                        quantity=token.quantity,
                        unit=token.unit,
                        optional=token.optional,
                        raw_quantity=token.raw_quantity,
                        section=step.section,
                    )
                )
            elif isinstance(token, CookwareToken):
                _, occurrences = cookware.setdefault(token.name.lower(), (token.name, []))
                occurrences.append(CookwareOccurrence(step_index=step.index, section=step.section))

    return (
        [Ingredient(name=name, occurrences=occ) for name, occ in ingredients.values()],
        [Cookware(name=name, occurrences=occ) for name, occ in cookware.values()],
    )
