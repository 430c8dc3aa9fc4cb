"""Pruebas de la serialización a texto Simple."""

import pytest

from simple_format import stringify
from simple_format.serializer import render_scalar, structurally_equal


def test_run_length_compression():
    text = stringify({"data": [1, 1, 1, 2, 3, 3, 4, 4, 4, 4, 5]})
    assert text == "data: []\n  0-2: 1\n  3: 2\n  4-5: 3\n  6-9: 4\n  10: 5"


def test_run_length_compression_for_root_sequence():
    text = stringify([1, 1, 1, 2, 3, 3, 4, 4, 4, 4, 5])
    assert text == "[]\n  0-2: 1\n  3: 2\n  4-5: 3\n  6-9: 4\n  10: 5"


def test_root_sequence_children_follow_indent_unit():
    assert stringify([1, 2, 3, 4], indent_size=4, array_format="values") == "[]\n    1\n    2\n    3\n    4"
    assert stringify([1, 2]) == "[1, 2]"


def test_runs_of_equal_mappings_ignore_key_order():
    value = {"rows": [{"a": 1, "b": 2}, {"b": 2, "a": 1}, {"a": 2, "b": 2}]}
    assert stringify(value) == "rows: []\n  0-1: {a: 1, b: 2}\n  2: {a: 2, b: 2}"


def test_inline_threshold_for_sequences():
    assert stringify({"a": [1, 2, 3]}) == "a: [1, 2, 3]"
    assert stringify({"a": [1, 2, 3, 4]}) == "a: []\n  0: 1\n  1: 2\n  2: 3\n  3: 4"


def test_inline_threshold_for_mappings():
    assert stringify({"m": {"a": 1, "b": 2, "c": 3}}) == "m: {a: 1, b: 2, c: 3}"
    assert stringify({"m": {"a": 1, "b": 2, "c": 3, "d": 4}}) == "m: {}\n  a: 1\n  b: 2\n  c: 3\n  d: 4"


def test_empty_containers_may_be_inlined():
    assert stringify({"a": [1, [], {}]}) == "a: [1, [], {}]"


def test_non_empty_nested_container_forces_block():
    assert stringify({"a": [[1]]}) == "a: []\n  0: [1]"


def test_values_format():
    assert stringify({"a": [1, 2, 3, 4]}, array_format="values") == "a: []\n  1\n  2\n  3\n  4"


def test_nested_block_mapping_gets_marker():
    value = {"outer": {"a": 1, "b": 2, "c": 3, "d": [1, 2, 3, 4]}}
    assert stringify(value) == "outer: {}\n  a: 1\n  b: 2\n  c: 3\n  d: []\n    0: 1\n    1: 2\n    2: 3\n    3: 4"


def test_root_mapping_is_always_block():
    assert stringify({"a": 1, "b": "x"}) == "a: 1\nb: x"
    assert stringify({}) == ""


def test_marker_flag_is_reset_on_every_call():
    value = {"a": 1, "b": 2, "c": 3, "d": 4}
    assert stringify(value) == stringify(value) == "a: 1\nb: 2\nc: 3\nd: 4"


def test_root_sequence_keeps_mapping_markers():
    text = stringify([{"a": 1, "b": 2, "c": 3, "d": 4}])
    assert text == "[]\n  0: {}\n    a: 1\n    b: 2\n    c: 3\n    d: 4"


def test_tab_indentation():
    text = stringify({"a": [1, 2, 3, 4]}, indent_char="\t", indent_size=1)
    assert text == "a: []\n\t0: 1\n\t1: 2\n\t2: 3\n\t3: 4"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("21", '"21"'),
        ("hello", "hello"),
        ("a: b", '"a: b"'),
        ("None", '"None"'),
        ("true", '"true"'),
        (" x", '" x"'),
        ("-5", '"-5"'),
        ("", '""'),
        ("x, y", '"x, y"'),
        ("it's", '"it\'s"'),
        ('di "hola"', '"di \\"hola\\""'),
        ("a # b", '"a # b"'),
        ("http://x", '"http://x"'),
        ("uno\ndos", "uno\\ndos"),
        ("a\\b", "a\\\\b"),
    ],
)
def test_string_quoting(value, expected):
    assert render_scalar(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "None"),
        (1.0, "1"),
        (-3, "-3"),
        (2.5, "2.5"),
        (1e-07, "0.0000001"),
        (True, "true"),
        (False, "false"),
    ],
)
def test_scalar_rendering(value, expected):
    assert render_scalar(value) == expected


def test_structural_equality():
    assert structurally_equal({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})
    assert not structurally_equal([1, 2], [2, 1])
    assert not structurally_equal({"a": 1}, {"a": 1, "b": 2})
    assert not structurally_equal(True, 1)
    assert not structurally_equal(None, 0)
    assert structurally_equal(1, 1.0)


def test_unsupported_type():
    with pytest.raises(TypeError):
        stringify({"a": object()})


@pytest.mark.parametrize(
    "options",
    [{"indent_char": "x"}, {"indent_size": 0}, {"array_format": "dense"}],
)
def test_invalid_options(options):
    with pytest.raises(ValueError):
        stringify({"a": 1}, **options)
