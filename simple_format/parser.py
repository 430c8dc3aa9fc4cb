from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config_loader import ParseOptions
from .errors import InvalidLine
from .scalars import EMPTY_MAPPING, EMPTY_SEQUENCE, MAPPING, SEQUENCE, Scalar, classify, has_top_level_colon
from .scanner import Line, prepare_lines

logger = logging.getLogger(__name__)

SCALAR = "scalar"
PLACEHOLDER = "-"
GAP_FILL = 0.0

_INDEX_KEY = re.compile(r"[0-9]+")
_RANGE_KEY = re.compile(r"([0-9]+)-([0-9]+)")
_NODE_KINDS = {
    EMPTY_MAPPING: MAPPING,
    MAPPING: MAPPING,
    EMPTY_SEQUENCE: SEQUENCE,
    SEQUENCE: SEQUENCE,
}


@dataclass
class ParseNode:
    """Nodo del árbol intermedio.

    `children` solo existe en contenedores abiertos en bloque (valor `{}` o
    `[]`); el resto de nodos llevan su valor ya materializado en
    `inline_value`.
    """

    kind: str
    key: Optional[str] = None
    indent_level: int = -1
    inline_value: Any = None
    children: Optional[List["ParseNode"]] = None


def _make_node(key: str, level: int, scalar: Scalar) -> ParseNode:
    node = ParseNode(
        kind=_NODE_KINDS.get(scalar.kind, SCALAR),
        key=key,
        indent_level=level,
        inline_value=scalar.value,
    )
    if scalar.opens_block:
        node.children = []
    return node


def _split_line(line: Line, parent: ParseNode, array_format: str) -> Tuple[str, str]:
    if array_format == "values" and parent.kind == SEQUENCE and not has_top_level_colon(line.content):
        return PLACEHOLDER, line.content
    key, separator, token = line.content.partition(":")
    if not separator:
        raise InvalidLine(line.number, line.content)
    return key.strip(), token.strip()


def build_tree(lines: List[Line], array_format: str = "indexed") -> ParseNode:
    """Construye el árbol intermedio a partir de las líneas con nivel.

    La pila de marcos guarda pares (nodo, nivel) con niveles estrictamente
    crecientes; el marco raíz tiene nivel -1 y envuelve el mapeo implícito
    del documento.
    """

    root = ParseNode(kind=MAPPING, children=[])
    stack: List[Tuple[ParseNode, int]] = [(root, -1)]

    for line in lines:
        while len(stack) > 1 and stack[-1][1] >= line.level:
            stack.pop()
        parent = stack[-1][0]

        key, token = _split_line(line, parent, array_format)
        node = _make_node(key, line.level, classify(token))
        parent.children.append(node)
        if node.children is not None:
            logger.debug("Contenedor %s abierto en la línea #%d (nivel %d)", node.kind, line.number, line.level)
            stack.append((node, line.level))

    return root


def _reconcile_sequence(children: List[ParseNode]) -> List[Any]:
    slots: Dict[int, Any] = {}
    pending: List[Any] = []

    for child in children:
        key = child.key or ""
        if key == PLACEHOLDER:
            pending.append(materialize(child))
            continue
        match = _RANGE_KEY.fullmatch(key)
        if match is not None:
            value = materialize(child)
            for index in range(int(match.group(1)), int(match.group(2)) + 1):
                slots[index] = copy.deepcopy(value)
            continue
        if _INDEX_KEY.fullmatch(key):
            slots[int(key)] = materialize(child)
            continue
        logger.debug("Clave %r ignorada dentro de una secuencia", key)

    cursor = 0
    for value in pending:
        while cursor in slots:
            cursor += 1
        slots[cursor] = value
        cursor += 1

    if not slots:
        return []
    return [slots.get(index, GAP_FILL) for index in range(max(slots) + 1)]


def materialize(node: ParseNode) -> Any:
    """Convierte el árbol intermedio en el valor final."""

    if node.kind == SCALAR or node.children is None:
        return node.inline_value
    if node.kind == MAPPING:
        return {child.key: materialize(child) for child in node.children}
    return _reconcile_sequence(node.children)


def parse(text: str, *, array_format: str = "indexed") -> Dict[str, Any]:
    """Convierte un documento Simple en un diccionario."""

    options = ParseOptions(array_format=array_format)
    tree = build_tree(prepare_lines(text), options.array_format)
    return materialize(tree)
