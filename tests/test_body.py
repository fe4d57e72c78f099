from __future__ import annotations

from cookparse.services.body import segment_body, strip_comment_prefix


def _texts(segments) -> list[str]:
    return [s.text for s in segments.steps]


def test_blank_lines_separate_steps_and_lines_are_joined():
    segments = segment_body("Chop the onion\nfinely.\n\n\nFry it.\n")

    assert _texts(segments) == ["Chop the onion finely.", "Fry it."]


def test_any_newline_convention():
    segments = segment_body("One.\r\n\r\nTwo.\rThree.")

    assert _texts(segments) == ["One.", "Two. Three."]


def test_sections_tag_following_steps_until_changed():
    body = "Preheat.\n== Dough ==\nKnead.\n\nRest.\n==Filling==\nMix.\n"
    segments = segment_body(body)

    assert [(s.text, s.section) for s in segments.steps] == [
        ("Preheat.", None),
        ("Knead.", "Dough"),
        ("Rest.", "Dough"),
        ("Mix.", "Filling"),
    ]


def test_section_header_flushes_buffer_with_previous_section():
    segments = segment_body("== A ==\nStir\n== B ==\nServe")

    assert [(s.text, s.section) for s in segments.steps] == [("Stir", "A"), ("Serve", "B")]


def test_comments_are_collected_with_line_numbers():
    body = "> Source: https://example.test/recipe\n\n// Prep the dough\nMix ingredients gently."
    segments = segment_body(body)

    assert [(c.text, c.line_number) for c in segments.comments] == [
        ("Source: https://example.test/recipe", 1),
        ("Prep the dough", 3),
    ]
    assert segments.derived_metadata == {"source": "https://example.test/recipe"}
    assert _texts(segments) == ["Mix ingredients gently."]


def test_comment_inside_a_step_does_not_split_it():
    segments = segment_body("Whisk eggs\n// not too long\nuntil pale.")

    assert _texts(segments) == ["Whisk eggs until pale."]


def test_source_comment_is_case_insensitive_and_last_one_wins():
    segments = segment_body("// source: first\n>> SOURCE:   second  ")

    assert segments.derived_metadata == {"source": "second"}


def test_strip_comment_prefix():
    assert strip_comment_prefix("//  note ") == "note"
    assert strip_comment_prefix(">>> quoted") == "quoted"


def test_empty_body_has_no_steps():
    segments = segment_body("\n\n   \n")

    assert segments.steps == []
    assert segments.comments == []
