from armstrong.diffmessage import (
    diff_message_description,
    diff_message_markdown,
    diff_message_readable,
    diff_message_terraform,
)
from armstrong.types import Change


def test_description_equal_bodies():
    assert diff_message_description(Change('{"a": [1, "x"]}', '{"a": [1, "x"]}')) == ""


def test_description_changed_string():
    assert diff_message_description(Change('{"a": "x"}', '{"a": "y"}')) == (
        "- .a: expect y, but got x"
    )


def test_description_case_only_difference():
    assert diff_message_description(Change('{"a": "abc"}', '{"a": "ABC"}')) == (
        "- .a: the values are not equal case-sensitively, expect ABC, but got abc"
    )


def test_description_missing_property():
    assert diff_message_description(Change("{}", '{"a": 1}')) == (
        "- .a = 1: not returned from response"
    )


def test_description_expect_null():
    assert diff_message_description(Change('{"a": 1}', '{"a": null}')) == (
        "- .a: expect null, but got 1"
    )


def test_description_array_length():
    assert diff_message_description(Change('{"a": [1]}', '{"a": [1, 2]}')) == (
        "- .a: expect 2 in length, but got 1"
    )


def test_description_nested_array_element():
    assert diff_message_description(Change('{"a": [true]}', '{"a": [false]}')) == (
        "- .a.0: expect false, but got true"
    )


def test_description_type_mismatch_shows_map():
    assert diff_message_description(Change('{"a": 1}', '{"a": {"b": true}}')) == (
        "- .a: expect map[b:true] which is a map, but got 1"
    )


def test_description_large_number_format():
    assert diff_message_description(Change('{"a": 1000000}', '{"a": 2}')) == (
        "- .a: expect 2, but got 1e+06"
    )


def test_description_one_line_per_difference():
    message = diff_message_description(Change('{"a": 1, "b": 2}', '{"a": 3, "b": 4}'))
    assert sorted(message.split("\n")) == [
        "- .a: expect 3, but got 1",
        "- .b: expect 4, but got 2",
    ]


def test_markdown_changed_and_missing():
    changed = diff_message_markdown(Change('{"a": 1}', '{"a": 2}'))
    assert "Got 1 in response, expect 2" in changed
    missing = diff_message_markdown(Change("{}", '{"a": 1}'))
    assert '"a": 1 is not returned from response' in missing


def test_readable_is_coloured():
    message = diff_message_readable(Change('{"a": 1}', '{"a": 2}'))
    assert "\033[0;33m Got 1 in response, expect 2\033[0m" in message


def test_terraform_uses_arrow_separator():
    message = diff_message_terraform(Change('{"a": 1}', '{"a": 2}'))
    assert "\033[0;33m1 => 2\033[0m" in message