"""Pruebas de la carga de opciones desde YAML."""

import pytest

from simple_format.config_loader import (
    INDENT_CHAR_NAMES,
    ConverterOptions,
    ParseOptions,
    StringifyOptions,
    load_options,
    options_from_mapping,
)


def test_load_nested_options(tmp_path):
    path = tmp_path / "opciones.yaml"
    path.write_text(
        "simple_format:\n"
        "  array_format: values\n"
        "  stringify:\n"
        "    indent_size: 4\n"
        "    indent_char: tab\n",
        encoding="utf-8",
    )
    options = load_options(path)
    assert options.parse == ParseOptions(array_format="values")
    assert options.stringify == StringifyOptions(indent_size=4, indent_char="\t", array_format="values")


def test_section_overrides_default_format():
    options = options_from_mapping({"array_format": "values", "parse": {"array_format": "indexed"}})
    assert options.parse.array_format == "indexed"
    assert options.stringify.array_format == "values"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "vacio.yaml"
    path.write_text("", encoding="utf-8")
    assert load_options(path) == ConverterOptions()


def test_root_must_be_mapping(tmp_path):
    path = tmp_path / "lista.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)


@pytest.mark.parametrize(
    "data",
    [
        {"parse": ["indexed"]},
        {"array_format": "dense"},
        {"stringify": {"indent_size": -1}},
        {"stringify": {"indent_size": True}},
        {"stringify": {"indent_char": "-"}},
    ],
)
def test_invalid_options(data):
    with pytest.raises(ValueError):
        options_from_mapping(data)


def test_indent_unit():
    assert StringifyOptions(indent_size=3).indent(2) == " " * 6


def test_indent_char_names_resolve_in_options():
    options = options_from_mapping({"stringify": {"indent_char": "tab"}})
    assert options.stringify.indent_char == INDENT_CHAR_NAMES["tab"] == "\t"
