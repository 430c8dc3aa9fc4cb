from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import UnbalancedLiteral

logger = logging.getLogger(__name__)

NULL = "null"
NUMBER = "number"
STRING = "string"
EMPTY_MAPPING = "empty_mapping"
EMPTY_SEQUENCE = "empty_sequence"
SEQUENCE = "sequence"
MAPPING = "mapping"

NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

_QUOTES = ("'", '"')
_OPENERS = "[{"
_CLOSERS = "]}"
_ESCAPES: Dict[str, str] = {"n": "\n", "r": "\r", "t": "\t"}
_ESCAPE_SEQUENCE = re.compile(r"\\(.)", re.DOTALL)


@dataclass(frozen=True)
class Scalar:
    """Resultado de clasificar un token de valor."""

    kind: str
    value: Any

    @property
    def opens_block(self) -> bool:
        return self.kind in (EMPTY_MAPPING, EMPTY_SEQUENCE)


def decode_escapes(text: str) -> str:
    return _ESCAPE_SEQUENCE.sub(lambda match: _ESCAPES.get(match.group(1), match.group(1)), text)


def _to_number(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return 0.0


def _is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] in _QUOTES and token[-1] == token[0]


def classify(token: str) -> Scalar:
    """Determina el tipo de un token ya recortado.

    El orden de las comprobaciones es significativo: `None`, `{}`, `[]`,
    número, cadena entre comillas, arreglo en línea, objeto en línea y,
    por último, cadena sin comillas.
    """

    if token == "None":
        return Scalar(NULL, None)
    if token == "{}":
        return Scalar(EMPTY_MAPPING, {})
    if token == "[]":
        return Scalar(EMPTY_SEQUENCE, [])
    if NUMBER_PATTERN.fullmatch(token):
        return Scalar(NUMBER, _to_number(token))
    if _is_quoted(token):
        return Scalar(STRING, decode_escapes(token[1:-1]))
    if token.startswith("[") and token.endswith("]"):
        return Scalar(SEQUENCE, parse_inline_array(token))
    if token.startswith("{") and token.endswith("}"):
        return Scalar(MAPPING, parse_inline_object(token))
    return Scalar(STRING, decode_escapes(token))


def split_top_level(content: str) -> List[str]:
    """Divide por comas de nivel superior, ignorando las que están dentro de
    cadenas o de corchetes/llaves anidados.

    Lanza `UnbalancedLiteral` si los delimitadores no están equilibrados.
    """

    segments: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    depth = 0
    index = 0
    while index < len(content):
        char = content[index]
        if quote is not None:
            if char == "\\" and index + 1 < len(content):
                current.append(content[index : index + 2])
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth < 0:
                raise UnbalancedLiteral(content, "cierre sin apertura")
        elif char == "," and depth == 0:
            segments.append("".join(current).strip())
            current = []
            index += 1
            continue
        current.append(char)
        index += 1

    if quote is not None:
        raise UnbalancedLiteral(content, "comillas sin cerrar")
    if depth:
        raise UnbalancedLiteral(content, "corchetes sin cerrar")
    tail = "".join(current).strip()
    if tail:
        segments.append(tail)
    return segments


def has_top_level_colon(text: str) -> bool:
    """Indica si hay un ':' fuera de cadenas y de literales en línea."""

    quote: Optional[str] = None
    depth = 0
    index = 0
    while index < len(text):
        char = text[index]
        if quote is not None:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
        elif char == ":" and depth == 0:
            return True
        index += 1
    return False


def parse_inline_array(token: str) -> List[Any]:
    content = token[1:-1].strip()
    if not content:
        return []
    return [classify(segment).value for segment in split_top_level(content)]


def parse_inline_object(token: str) -> Dict[str, Any]:
    content = token[1:-1].strip()
    if not content:
        return {}
    result: Dict[str, Any] = {}
    for segment in split_top_level(content):
        key, separator, value_token = segment.partition(":")
        if not separator:
            logger.debug("Segmento sin ':' ignorado en objeto en línea: %r", segment)
            continue
        result[key.strip()] = classify(value_token.strip()).value
    return result
