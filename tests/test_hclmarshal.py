import pytest

from armstrong.hclmarshal import marshal_indent


@pytest.mark.parametrize(
    "value,expect",
    [
        (None, "null"),
        ("test", '"test"'),
        (1, "1"),
        (True, "true"),
        (["test", 1, True], '[\n  "test",\n  1,\n  true,\n]'),
        (
            {"test": "test", "test1": {"test2": "test2"}},
            '{\n  test = "test"\n  test1 = {\n    test2 = "test2"\n  }\n}',
        ),
        (
            {"/test": "test", "2test": {"${local.test}": "${local.value}"}},
            '{\n  "/test" = "test"\n  "2test" = {\n    (local.test) = local.value\n  }\n}',
        ),
    ],
)
def test_marshal_indent(value, expect):
    assert marshal_indent(value, "", "  ") == expect


def test_marshal_indent_whole_floats_render_as_integers():
    assert marshal_indent(3.0, "", "  ") == "3"
    assert marshal_indent(False, "", "  ") == "false"


def test_marshal_indent_empty_containers():
    assert marshal_indent({}, "", "  ") == "{\n}"
    assert marshal_indent([], "  ", "  ") == "[\n  ]"