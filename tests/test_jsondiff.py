import json

import pytest

from armstrong.jsondiff import (
    DiffOptions,
    Difference,
    Tag,
    compare,
    default_console_options,
)

PLAIN = DiffOptions(indent="  ")
DOC = '{"b": [1, "x", true, null, {}], "a": {"c": "d\\n"}, "e": []}'


def test_identical_documents_pinned_layout():
    assert compare('{"a":1}', '{"a":1}', PLAIN) == (Difference.FULL_MATCH, '{\n  "a": 1\n}')


def test_identical_documents_render_as_json():
    difference, text = compare(DOC, DOC, PLAIN)
    assert difference is Difference.FULL_MATCH
    assert json.loads(text) == json.loads(DOC)


def test_removed_key_is_superset_match():
    difference, text = compare(DOC, '{"a": {"c": "d\\n"}}', PLAIN)
    assert difference is Difference.SUPERSET_MATCH
    assert json.loads(text) == json.loads(DOC)


def test_added_key_is_no_match_and_tagged():
    options = DiffOptions(added=Tag("<+>", "</+>"), indent="  ")
    difference, text = compare('{"a": 1}', '{"a": 1, "z": 2}', options)
    assert difference is Difference.NO_MATCH
    assert '<+>"z": 2</+>' in text


def test_changed_value_uses_separator():
    options = DiffOptions(changed=Tag("[", "]"), changed_separator=" => ")
    difference, text = compare('{"a": 1}', '{"a": 2}', options)
    assert difference is Difference.NO_MATCH
    assert "[1 => 2]" in text


def test_changed_containers_are_shortened():
    options = DiffOptions(changed_separator=" => ")
    _, text = compare('{"a": [1, 2]}', '{"a": {"b": 1}}', options)
    assert "[] => {}" in text


def test_array_extra_elements():
    difference, _ = compare("[1, 2, 3]", "[1, 2]", PLAIN)
    assert difference is Difference.SUPERSET_MATCH
    difference, _ = compare("[1]", "[1, 2]", PLAIN)
    assert difference is Difference.NO_MATCH


def test_numbers_compare_by_text():
    difference, _ = compare("1.0", "1", PLAIN)
    assert difference is Difference.NO_MATCH


def test_number_and_string_do_not_match():
    difference, _ = compare('"1"', "1", PLAIN)
    assert difference is Difference.NO_MATCH


def test_trailing_text_is_ignored():
    difference, _ = compare("{} trailing", b"{}", PLAIN)
    assert difference is Difference.FULL_MATCH


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("{", "{}", Difference.FIRST_ARG_IS_INVALID_JSON),
        ("{}", "", Difference.SECOND_ARG_IS_INVALID_JSON),
        ("NaN", "nope", Difference.BOTH_ARGS_ARE_INVALID_JSON),
    ],
)
def test_invalid_json(a, b, expected):
    assert compare(a, b, PLAIN)[0] is expected


def test_console_options_colour_changes():
    _, text = compare('{"a": 1}', '{"a": 2}', default_console_options())
    assert "\033[0;33m1 => 2\033[0m" in text