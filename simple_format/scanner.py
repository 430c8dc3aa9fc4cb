from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')
_LINE_ESCAPES: Dict[str, str] = {"n": "\n", "t": "\t"}
_LEADING_WHITESPACE = re.compile(r"[ \t]*")


@dataclass(frozen=True)
class IndentStyle:
    """Estilo de sangría detectado para todo el documento."""

    kind: str
    size: int

    def level(self, line: str) -> int:
        """Devuelve la profundidad (no la columna) de la línea."""

        if self.kind == "tab":
            return len(line) - len(line.lstrip("\t"))
        return len(_leading_whitespace(line)) // self.size


@dataclass
class Line:
    number: int
    level: int
    content: str


def _leading_whitespace(line: str) -> str:
    return _LEADING_WHITESPACE.match(line).group(0)


def _escape_follows(text: str, index: int) -> bool:
    return index + 1 < len(text) and text[index + 1] != "\n"


def strip_comments(text: str) -> str:
    """Elimina comentarios `//`, `#` y `/* ... */` respetando las cadenas.

    Las secuencias de escape se copian sin decodificar y los saltos de línea
    se conservan. Un salto de línea real cierra cualquier cadena abierta.
    """

    result: List[str] = []
    quote: Optional[str] = None
    in_block = False
    index = 0
    while index < len(text):
        char = text[index]
        pair = text[index : index + 2]
        if in_block:
            if pair == "*/":
                in_block = False
                index += 2
            else:
                index += 1
            continue
        if quote is not None:
            if char == "\\" and _escape_follows(text, index):
                result.append(pair)
                index += 2
                continue
            if char == quote or char == "\n":
                quote = None
            result.append(char)
            index += 1
            continue
        if char in _QUOTES:
            quote = char
        elif pair == "/*":
            in_block = True
            index += 2
            continue
        elif pair == "//" or char == "#":
            end = text.find("\n", index)
            if end == -1:
                break
            index = end
            continue
        result.append(char)
        index += 1
    return "".join(result)


def split_logical_lines(text: str) -> List[str]:
    """Separa el texto en líneas lógicas no vacías.

    Dentro de una cadena, `\\n` y `\\t` se convierten en un salto de línea y
    un tabulador reales que pertenecen a la línea lógica actual.
    """

    lines: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\n":
            lines.append("".join(current))
            current = []
            quote = None
            index += 1
            continue
        if quote is not None:
            if char == "\\" and _escape_follows(text, index):
                escaped = text[index + 1]
                current.append(_LINE_ESCAPES.get(escaped, char + escaped))
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        current.append(char)
        index += 1
    lines.append("".join(current))
    return [line for line in lines if line.strip()]


def detect_style(lines: Iterable[str]) -> IndentStyle:
    """Decide entre tabuladores o espacios a partir de la primera línea sangrada."""

    for line in lines:
        if not line.strip():
            continue
        leading = _leading_whitespace(line)
        if not leading:
            continue
        if "\t" in leading:
            return IndentStyle(kind="tab", size=1)
        return IndentStyle(kind="space", size=len(leading))
    return IndentStyle(kind="space", size=2)


def prepare_lines(text: str) -> List[Line]:
    """Aplica el preprocesado completo y calcula el nivel de cada línea."""

    raw_lines = split_logical_lines(strip_comments(text))
    style = detect_style(raw_lines)
    logger.debug("Sangría detectada: %s x%d (%d líneas)", style.kind, style.size, len(raw_lines))
    return [
        Line(number=number, level=style.level(raw), content=raw.strip())
        for number, raw in enumerate(raw_lines, start=1)
    ]
