from __future__ import annotations

import logging

import pytest

import cookparse.services.metadata as md
from cookparse.models.metadata import Metadata


def test_canonical_keys_from_synonyms():
    out = md.canonicalize(
        {
            "Name": "Shakshuka",
            "Serves": "serves 4-6",
            "prep-time": "PT15M",
            "Cooking Time": "1h 5m",
            "Keywords": "eggs, brunch, ,spicy",
            "Language": "en",
        }
    )

    assert out == {
        "title": "Shakshuka",
        "servings": 4,
        "prepTime": 15,
        "cookTime": 65,
        "tags": ["eggs", "brunch", "spicy"],
        "locale": "en",
    }


def test_first_non_empty_synonym_wins():
    out = md.canonicalize({"servings": "", "serves": 2, "yield": 8})

    assert out["servings"] == 2


def test_unknown_keys_pass_through_unchanged():
    out = md.canonicalize({"title": "Tea", "Oven Temp": "180C", "calories": 120})

    assert out == {"title": "Tea", "Oven Temp": "180C", "calories": 120}


def test_unparseable_fields_are_omitted_not_raised(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger="cookparse.metadata"):
        out = md.canonicalize(
            {"servings": "a few", "totalTime": "a while", "tags": 5, "author": ["x"]}
        )

    assert out == {}
    assert any(r.getMessage() == "metadata_field_dropped" for r in caplog.records)


def test_string_fields_are_trimmed_and_scalars_coerced():
    out = md.canonicalize({"difficulty": 3, "cuisine": "  Thai ", "description": True})

    assert out == {"difficulty": "3", "cuisine": "Thai", "description": "true"}


@pytest.mark.parametrize(
    "raw, expected",
    [(4, 4), (2.7, 2), ("3", 3), ("2.5", 2), ("makes 12 cookies", 12), ("plenty", None), (False, None)],
)
def test_normalize_servings(raw, expected):
    assert md.normalize_servings(raw) == expected


def test_duration_fields_accept_numbers_and_clock_times():
    out = md.canonicalize({"totalTime": 90, "prep_time": "0:20", "cook": "25 minutes"})

    assert out == {"totalTime": 90, "prepTime": 20, "cookTime": 25}


def test_list_fields_from_arrays_drop_non_scalars_and_blanks():
    out = md.canonicalize({"diet": ["vegan", "", {"x": 1}, " gluten-free "]})

    assert out == {"diet": ["vegan", "gluten-free"]}


def test_list_fields_absent_are_not_defaulted():
    out = md.canonicalize({"title": "Toast"})

    assert "tags" not in out
    assert "diet" not in out


def test_image_list_sets_images_and_first_image():
    out = md.canonicalize({"images": ["a.jpg", "b.jpg"]})

    assert out == {"images": ["a.jpg", "b.jpg"], "image": "a.jpg"}


def test_image_scalar_kept_alongside_image_list():
    out = md.canonicalize({"image": "cover.jpg", "images": ["a.jpg", "b.jpg"]})

    assert out["image"] == "cover.jpg"
    assert out["images"] == ["a.jpg", "b.jpg"]


def test_image_scalar_sets_image_only():
    assert md.canonicalize({"photo": "pie.png"}) == {"image": "pie.png"}


def test_source_mapping_is_lifted():
    out = md.canonicalize(
        {"source": {"name": "Grandma's Book", "url": "https://example.test/pie", "author": "Nana"}}
    )

    assert out == {
        "source": "Grandma's Book",
        "source_url": "https://example.test/pie",
        "author": "Nana",
    }


def test_top_level_keys_beat_lifted_source_fields():
    out = md.canonicalize(
        {"source": {"name": "Book", "url": "https://lifted"}, "source_url": "https://top-level"}
    )

    assert out["source_url"] == "https://top-level"


def test_comment_derived_source_overrides_front_matter():
    meta = md.build_metadata({"source": "Cookbook"}, {"source": "https://x/y"})

    assert meta.get_source() == "https://x/y"


def test_comment_derived_source_overrides_differently_cased_key():
    meta = md.build_metadata({"Source": "Cookbook"}, {"source": "https://x/y"})

    assert meta.get_source() == "https://x/y"


def test_metadata_accessors():
    meta = Metadata(
        attributes={
            "title": "Pie",
            "servings": 6,
            "totalTime": 75,
            "tags": ["dessert"],
            "custom": {"nested": [1, 2]},
        }
    )

    assert meta.get_title() == "Pie"
    assert meta.get_servings() == 6
    assert meta.get_total_time() == 75
    assert meta.get_prep_time() is None
    assert meta.get_tags() == ["dessert"]
    assert meta.get_diet() == []
    assert meta.get("custom") == {"nested": (1, 2)}
    assert meta.get("missing", "x") == "x"
    assert "title" in meta


def test_metadata_accessors_never_treat_bool_as_int():
    meta = Metadata(attributes={"servings": True, "cookTime": "soon"})

    assert meta.get_servings() is None
    assert meta.get_cook_time() is None


@pytest.mark.parametrize(
    "raw",
    [
        {"totalTime": "9" * 400 + " hours"},
        {"prep": "PT" + "9" * 400 + "M"},
        {"servings": "serves " + "9" * 5000},
        {"servings": "9" * 5000},
    ],
)
def test_canonicalize_drops_numbers_too_large_to_represent(raw):
    assert md.canonicalize(raw) == {}


def test_metadata_attributes_are_read_only():
    meta = md.build_metadata({"servings": 4, "tags": ["a"], "extra": {"k": [1]}})

    with pytest.raises(TypeError):
        meta.attributes["servings"] = "lots"
    with pytest.raises(AttributeError):
        meta.attributes["tags"].append("b")
    with pytest.raises(TypeError):
        meta.get("extra")["k"] = 2

    assert meta.get_servings() == 4
    assert meta.get_tags() == ["a"]


def test_metadata_dump_gives_plain_containers():
    meta = Metadata(attributes={"tags": ["a", "b"], "extra": {"k": [1]}})

    dumped = meta.model_dump()

    assert dumped == {"attributes": {"tags": ["a", "b"], "extra": {"k": [1]}}}
    assert Metadata.model_validate(dumped) == meta
