# cookparse/services/parser.py
from __future__ import annotations

import logging
import time
from typing import Optional

from cookparse.core.errors import ParseError
from cookparse.core.parse_context import reset_slug, set_slug
from cookparse.core.text import strip_bom
from cookparse.models.recipe import Recipe, Step
from cookparse.services.body import segment_body
from cookparse.services.front_matter import extract_front_matter
from cookparse.services.metadata import build_metadata
from cookparse.services.summary import summarize_tokens
from cookparse.services.tokenizer import tokenize_step

log = logging.getLogger("cookparse.parser")


def parse(text: str) -> Recipe:
    return parse_with_slug(text, None)


def parse_with_slug(text: str, slug: Optional[str] = None) -> Recipe:
    """
    Parse a complete recipe document.

    `slug` is supplied by whoever read the document (usually the file stem);
    nothing here touches the filesystem. Raises ParseError on syntax faults.
    """
    start = time.perf_counter()
    ctx_token = set_slug(slug)
    try:
        recipe = _build_recipe(strip_bom(text), slug)
    except ParseError as e:
        log.warning(
            "recipe_parse_failed",
            extra={"slug": slug, "position": e.position, "error": e.message},
        )
        raise
    finally:
        reset_slug(ctx_token)

    log.debug(
        "recipe_parsed",
        extra={
            "slug": slug,
            "steps": len(recipe.steps),
            "ingredients": len(recipe.ingredients),
            "cookware": len(recipe.cookware),
            "duration_ms": int((time.perf_counter() - start) * 1000),
        },
    )
    return recipe


def _build_recipe(source: str, slug: Optional[str]) -> Recipe:
    raw_metadata, body = extract_front_matter(source)
    segments = segment_body(body)
    metadata = build_metadata(raw_metadata, segments.derived_metadata)

    steps = []
    for chunk in segments.steps:
        tokens = tokenize_step(chunk.text)
        # a Step always holds at least one token
        if not tokens:
            continue
        steps.append(Step(index=len(steps), tokens=tokens, section=chunk.section))

    ingredients, cookware = summarize_tokens(steps)

    return Recipe(
        slug=slug,
        metadata=metadata,
        steps=steps,
        ingredients=ingredients,
        cookware=cookware,
        comments=segments.comments,
    )
