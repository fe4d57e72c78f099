# cookparse/services/metadata.py
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from cookparse.core.text import normalize_key
from cookparse.models.metadata import Metadata, as_int, as_string, is_scalar
from cookparse.services.quantity import parse_duration_minutes

log = logging.getLogger("cookparse.metadata")

NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)\s*$")
DIGITS_RE = re.compile(r"\d+")

# canonical field -> accepted (normalized) raw keys, in priority order
STRING_FIELDS: Dict[str, Tuple[str, ...]] = {
    "title": ("title", "name", "recipe_name"),
    "source": ("source", "source_name"),
    "author": ("author", "source_author", "chef", "by"),
    "source_url": ("source_url", "url", "link"),
    "course": ("course", "category", "meal"),
    "locale": ("locale", "language", "lang"),
    "difficulty": ("difficulty", "level"),
    "cuisine": ("cuisine",),
    "description": ("description", "summary", "intro", "introduction"),
}
SERVINGS_KEYS: Tuple[str, ...] = ("servings", "serves", "yield", "yields", "portions")
DURATION_FIELDS: Dict[str, Tuple[str, ...]] = {
    "totalTime": ("totaltime", "total_time", "time", "duration"),
    "prepTime": ("preptime", "prep_time", "prep", "preparation_time"),
    "cookTime": ("cooktime", "cook_time", "cook", "cooking_time"),
}
LIST_FIELDS: Dict[str, Tuple[str, ...]] = {
    "diet": ("diet", "diets", "dietary"),
    "tags": ("tags", "tag", "keywords"),
}
IMAGE_KEYS: Tuple[str, ...] = ("image", "images", "picture", "photo", "image_url")

# sub-fields of a `source:` mapping and the lookup key each is lifted to
SOURCE_SUBFIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "source"),
    ("url", "source_url"),
    ("author", "source_author"),
)


def _known_keys() -> set[str]:
    keys = set(SERVINGS_KEYS) | set(IMAGE_KEYS)
    for table in (STRING_FIELDS, DURATION_FIELDS, LIST_FIELDS):
        for synonyms in table.values():
            keys.update(synonyms)
    return keys


KNOWN_KEYS = _known_keys()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def build_lookup(raw: Dict[str, Any]) -> Dict[str, Any]:
    lookup: Dict[str, Any] = {}
    for key, value in raw.items():
        # later raw keys win when two normalize to the same lookup key
        lookup[normalize_key(str(key))] = value

    source = lookup.get("source")
    if isinstance(source, dict):
        nested = {normalize_key(str(k)): v for k, v in source.items()}
        lookup.pop("source")
        for sub_key, target in SOURCE_SUBFIELDS:
            value = nested.get(sub_key)
            if _is_empty(value):
                continue
            if target == "source":
                lookup["source"] = value
            else:
                lookup.setdefault(target, value)

    return lookup


def _first_value(lookup: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = lookup.get(key)
        if not _is_empty(value):
            return value
    return None


def normalize_string(value: Any) -> Optional[str]:
    text = as_string(value)
    if text is None:
        return None
    text = text.strip()
    return text or None


def normalize_servings(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return as_int(value)
    if isinstance(value, str):
        if NUMBER_RE.match(value):
            return as_int(value)
        m = DIGITS_RE.search(value)
        if m:
            return as_int(m.group(0))
    return None


def normalize_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        items = [p.strip() for p in value.split(",")]
    elif isinstance(value, list):
        items = [as_string(v).strip() for v in value if is_scalar(v)]
    else:
        return None
    items = [i for i in items if i]
    return items or None


def _apply_images(lookup: Dict[str, Any], out: Dict[str, Any]) -> None:
    image: Optional[str] = None
    images: Optional[List[str]] = None

    for key in IMAGE_KEYS:
        value = lookup.get(key)
        if _is_empty(value):
            continue
        if isinstance(value, list):
            if images is None:
                images = normalize_list(value)
        elif image is None:
            image = normalize_string(value)

    if images:
        out["images"] = images
        if image is None:
            image = images[0]
    if image is not None:
        out["image"] = image


def _apply(
    out: Dict[str, Any],
    lookup: Dict[str, Any],
    field: str,
    keys: Tuple[str, ...],
    normalizer: Callable[[Any], Any],
) -> None:
    value = _first_value(lookup, keys)
    if value is None:
        return
    normalized = normalizer(value)
    if normalized is None:
        log.debug("metadata_field_dropped", extra={"field": field, "value": repr(value)})
        return
    out[field] = normalized


def canonicalize(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a raw front-matter/comment mapping onto the canonical metadata schema.

    Never raises: a value that cannot be normalized is left out, and keys
    without a synonym rule pass through under their original name.
    """
    lookup = build_lookup(raw)
    out: Dict[str, Any] = {}

    for field, keys in STRING_FIELDS.items():
        _apply(out, lookup, field, keys, normalize_string)

    _apply(out, lookup, "servings", SERVINGS_KEYS, normalize_servings)

    for field, keys in DURATION_FIELDS.items():
        _apply(out, lookup, field, keys, parse_duration_minutes)

    for field, keys in LIST_FIELDS.items():
        _apply(out, lookup, field, keys, normalize_list)

    _apply_images(lookup, out)

    for key, value in raw.items():
        if normalize_key(str(key)) in KNOWN_KEYS or key in out:
            continue
        out[key] = value

    return out


def build_metadata(raw: Dict[str, Any], derived: Optional[Dict[str, Any]] = None) -> Metadata:
    merged = dict(raw)
    # comment-derived values are merged last and win on collision
    merged.update(derived or {})
    return Metadata(attributes=canonicalize(merged))
