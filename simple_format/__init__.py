from .config_loader import ConverterOptions, ParseOptions, StringifyOptions, load_options
from .errors import InvalidLine, SimpleFormatError, UnbalancedLiteral
from .parser import parse
from .serializer import stringify

__all__ = [
    "parse",
    "stringify",
    "ConverterOptions",
    "ParseOptions",
    "StringifyOptions",
    "load_options",
    "SimpleFormatError",
    "InvalidLine",
    "UnbalancedLiteral",
]
