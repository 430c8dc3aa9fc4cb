from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterator, List, Sequence, Tuple

from .config_loader import StringifyOptions
from .scalars import MAPPING, NULL, NUMBER, NUMBER_PATTERN, SEQUENCE, STRING

BOOLEAN = "boolean"
INLINE_LIMIT = 3

_RESERVED_WORDS = ("None", "true", "false")
_SPECIAL_CHARS = ":,[]{}'\"#"
_COMMENT_MARKERS = ("//", "/*")
_ESCAPES = str.maketrans({"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", '"': '\\"'})


@dataclass
class SerializerContext:
    """Estado de una única llamada a `stringify`."""

    root_mapping_opened: bool = False


def value_kind(value: Any) -> str:
    if value is None:
        return NULL
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, Mapping):
        return MAPPING
    if isinstance(value, (list, tuple)):
        return SEQUENCE
    raise TypeError(f"Tipo no soportado por el formato Simple: {type(value).__name__}")


def structurally_equal(left: Any, right: Any) -> bool:
    """Igualdad profunda; los mapeos se comparan por claves, sin importar el orden."""

    kind = value_kind(left)
    if kind != value_kind(right):
        return False
    if kind == SEQUENCE:
        return len(left) == len(right) and all(
            structurally_equal(a, b) for a, b in zip(left, right)
        )
    if kind == MAPPING:
        return len(left) == len(right) and all(
            key in right and structurally_equal(value, right[key]) for key, value in left.items()
        )
    return left == right


def escape_string(text: str) -> str:
    return text.translate(_ESCAPES)


def needs_quotes(text: str) -> bool:
    """Indica si la cadena debe ir entre comillas para conservar su tipo."""

    if not text or text != text.strip():
        return True
    if text[0] in "0123456789" or NUMBER_PATTERN.fullmatch(text):
        return True
    if text in _RESERVED_WORDS:
        return True
    if any(char in text for char in _SPECIAL_CHARS):
        return True
    return any(marker in text for marker in _COMMENT_MARKERS)


def render_number(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def render_scalar(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        escaped = escape_string(value)
        return f'"{escaped}"' if needs_quotes(value) else escaped
    return render_number(value)


def _is_nested_container(value: Any) -> bool:
    return value_kind(value) in (SEQUENCE, MAPPING) and len(value) > 0


def _should_inline(values: Sequence[Any]) -> bool:
    return len(values) <= INLINE_LIMIT and not any(_is_nested_container(value) for value in values)


def _runs(items: Sequence[Any]) -> Iterator[Tuple[int, int]]:
    """Recorre los tramos máximos de elementos consecutivos iguales."""

    start = 0
    while start < len(items):
        end = start
        while end + 1 < len(items) and structurally_equal(items[start], items[end + 1]):
            end += 1
        yield start, end
        start = end + 1


def _render_sequence(items: Sequence[Any], level: int, options: StringifyOptions, context: SerializerContext) -> str:
    if not items:
        return "[]"
    if _should_inline(items):
        return "[" + ", ".join(render(item, level, options, context) for item in items) + "]"

    indent = options.indent(level)
    lines: List[str] = ["[]"]
    if options.array_format == "values":
        for item in items:
            lines.append(f"{indent}{render(item, level + 1, options, context)}")
    else:
        for start, end in _runs(items):
            label = str(start) if start == end else f"{start}-{end}"
            lines.append(f"{indent}{label}: {render(items[start], level + 1, options, context)}")
    return "\n".join(lines)


def _render_block_mapping(
    mapping: Mapping, level: int, options: StringifyOptions, context: SerializerContext
) -> str:
    lines: List[str] = []
    if context.root_mapping_opened:
        lines.append("{}")
    else:
        context.root_mapping_opened = True

    indent = options.indent(level)
    for key, value in mapping.items():
        lines.append(f"{indent}{key}: {render(value, level + 1, options, context)}")
    return "\n".join(lines)


def _render_mapping(mapping: Mapping, level: int, options: StringifyOptions, context: SerializerContext) -> str:
    if not mapping:
        return "{}"
    if _should_inline(list(mapping.values())):
        pairs = (f"{key}: {render(value, level, options, context)}" for key, value in mapping.items())
        return "{" + ", ".join(pairs) + "}"
    return _render_block_mapping(mapping, level, options, context)


def render(value: Any, level: int, options: StringifyOptions, context: SerializerContext) -> str:
    """Serializa `value`; `level` es la profundidad de sus líneas hijas."""

    kind = value_kind(value)
    if kind == SEQUENCE:
        return _render_sequence(value, level, options, context)
    if kind == MAPPING:
        return _render_mapping(value, level, options, context)
    return render_scalar(value)


def stringify(
    value: Any,
    *,
    indent_size: int = 2,
    indent_char: str = " ",
    array_format: str = "indexed",
) -> str:
    """Convierte un valor en texto Simple.

    El mapeo raíz siempre se escribe en bloque y sin el marcador `{}`; un
    mapeo raíz vacío produce un documento vacío.
    """

    options = StringifyOptions(indent_size=indent_size, indent_char=indent_char, array_format=array_format)
    is_mapping = value_kind(value) == MAPPING
    # Solo el mapeo raíz omite el marcador; bajo otra raíz todos lo llevan.
    context = SerializerContext(root_mapping_opened=not is_mapping)
    if is_mapping:
        return _render_block_mapping(value, 0, options, context) if value else ""
    return render(value, 1, options, context)
