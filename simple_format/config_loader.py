from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

ARRAY_FORMATS = ("indexed", "values")
INDENT_CHARS = (" ", "\t")


def _check_array_format(value: Any) -> None:
    if value not in ARRAY_FORMATS:
        raise ValueError(f"Formato de arreglo inválido: {value!r}. Valores permitidos: {ARRAY_FORMATS}.")


@dataclass(frozen=True)
class ParseOptions:
    """Opciones de `parse`."""

    array_format: str = "indexed"

    def __post_init__(self) -> None:
        _check_array_format(self.array_format)


@dataclass(frozen=True)
class StringifyOptions:
    """Opciones de `stringify`: unidad de sangría y formato de los arreglos."""

    indent_size: int = 2
    indent_char: str = " "
    array_format: str = "indexed"

    def __post_init__(self) -> None:
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int) or self.indent_size < 1:
            raise ValueError(f"'indent_size' debe ser un entero positivo, no {self.indent_size!r}.")
        if self.indent_char not in INDENT_CHARS:
            raise ValueError(f"'indent_char' debe ser un espacio o un tabulador, no {self.indent_char!r}.")
        _check_array_format(self.array_format)

    def indent(self, level: int) -> str:
        return self.indent_char * (self.indent_size * level)


@dataclass(frozen=True)
class ConverterOptions:
    """Configuración completa del conversor, normalmente leída de un YAML."""

    parse: ParseOptions = field(default_factory=ParseOptions)
    stringify: StringifyOptions = field(default_factory=StringifyOptions)


INDENT_CHAR_NAMES = {"space": " ", "tab": "\t"}


def _normalize_config(data: Dict) -> Dict:
    """Acepta configuraciones con o sin el nodo 'simple_format'."""

    if "simple_format" in data and isinstance(data["simple_format"], dict):
        return data["simple_format"]
    return data


def options_from_mapping(data: Dict) -> ConverterOptions:
    """Construye y valida las opciones a partir de un diccionario ya cargado."""

    config = _normalize_config(data)

    def section(key: str) -> Dict:
        block = config.get(key) or {}
        if not isinstance(block, dict):
            raise ValueError(f"El bloque '{key}' debe ser un objeto.")
        return block

    parse_block = section("parse")
    stringify_block = section("stringify")
    default_format = config.get("array_format", "indexed")

    indent_char = stringify_block.get("indent_char", " ")
    indent_char = INDENT_CHAR_NAMES.get(indent_char, indent_char)

    return ConverterOptions(
        parse=ParseOptions(array_format=parse_block.get("array_format", default_format)),
        stringify=StringifyOptions(
            indent_size=stringify_block.get("indent_size", 2),
            indent_char=indent_char,
            array_format=stringify_block.get("array_format", default_format),
        ),
    )


def load_options(path: str | Path) -> ConverterOptions:
    """Carga y valida el archivo YAML con las opciones del conversor."""

    with Path(path).open("r", encoding="utf-8") as handle:
        raw_data = yaml.safe_load(handle)

    if raw_data is None:
        return ConverterOptions()
    if not isinstance(raw_data, dict):
        raise ValueError("El archivo YAML de opciones debe describir un objeto mapeo.")
    return options_from_mapping(raw_data)
