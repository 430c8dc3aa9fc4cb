from __future__ import annotations


class SimpleFormatError(ValueError):
    """Error base de todo lo que lanza el conversor."""


class InvalidLine(SimpleFormatError):
    """Línea de bloque sin ':' fuera de una secuencia de valores puros."""

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(f"Línea inválida #{line_number}: {line!r}. Cada entrada debe contener ':'")
        self.line_number = line_number
        self.line = line


class UnbalancedLiteral(SimpleFormatError):
    """Literal en línea con corchetes o comillas sin cerrar."""

    def __init__(self, literal: str, reason: str) -> None:
        super().__init__(f"Literal en línea mal formado ({reason}): {literal!r}")
        self.literal = literal
        self.reason = reason
