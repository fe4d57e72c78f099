# cookparse/models/metadata.py
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator
from typing_extensions import TypeAliasType

MetaValue = TypeAliasType(
    "MetaValue",
    Union[str, bool, int, float, List["MetaValue"], Dict[str, "MetaValue"], None],
)


def freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def as_string(value: Any) -> Optional[str]:
    if value is None or not is_scalar(value):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            try:
                return int(text)
            except ValueError:
                return None
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            return None
    return None


def as_string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [p.strip() for p in value.split(",") if p.strip()]
    if not isinstance(value, (list, tuple)):
        return []
    out: List[str] = []
    for item in value:
        text = as_string(item)
        if text is not None and text.strip():
            out.append(text.strip())
    return out


class Metadata(BaseModel):
    """
    Canonical recipe metadata; see services/metadata.py for how it is built.

    `attributes` is a read-only mapping. Nested lists are stored as tuples
    and nested mappings as read-only mappings.
    """

    attributes: Dict[str, MetaValue] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("attributes", mode="after")
    @classmethod
    def _freeze_attributes(cls, value: Dict[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @field_serializer("attributes")
    def _dump_attributes(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return thaw(value)

    def all(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.attributes.get(key)
        return default if value is None else value

    def __contains__(self, key: str) -> bool:
        return key in self.attributes

    def get_title(self) -> Optional[str]:
        return as_string(self.attributes.get("title"))

    def get_servings(self) -> Optional[int]:
        return as_int(self.attributes.get("servings"))

    def get_source(self) -> Optional[str]:
        return as_string(self.attributes.get("source"))

    def get_author(self) -> Optional[str]:
        return as_string(self.attributes.get("author"))

    def get_source_url(self) -> Optional[str]:
        return as_string(self.attributes.get("source_url"))

    def get_total_time(self) -> Optional[int]:
        return as_int(self.attributes.get("totalTime"))

    def get_prep_time(self) -> Optional[int]:
        return as_int(self.attributes.get("prepTime"))

    def get_cook_time(self) -> Optional[int]:
        return as_int(self.attributes.get("cookTime"))

    def get_course(self) -> Optional[str]:
        return as_string(self.attributes.get("course"))

    def get_locale(self) -> Optional[str]:
        return as_string(self.attributes.get("locale"))

    def get_difficulty(self) -> Optional[str]:
        return as_string(self.attributes.get("difficulty"))

    def get_cuisine(self) -> Optional[str]:
        return as_string(self.attributes.get("cuisine"))

    def get_description(self) -> Optional[str]:
        return as_string(self.attributes.get("description"))

    def get_tags(self) -> List[str]:
        return as_string_list(self.attributes.get("tags"))

    def get_diet(self) -> List[str]:
        return as_string_list(self.attributes.get("diet"))

    def get_image(self) -> Optional[str]:
        return as_string(self.attributes.get("image"))

    def get_images(self) -> List[str]:
        return as_string_list(self.attributes.get("images"))
