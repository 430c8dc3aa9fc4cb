from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, List

import yaml

from .config_loader import ARRAY_FORMATS, INDENT_CHAR_NAMES, ConverterOptions, load_options
from .parser import parse
from .serializer import stringify

_YAML_SUFFIXES = {".yaml", ".yml"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Conversor entre el formato Simple y JSON",
    )
    parser.add_argument("--config", type=Path, help="Archivo YAML con las opciones del conversor")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Muestra los mensajes de depuración del análisis",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    parse_command = commands.add_parser("parse", help="Convierte un documento Simple en JSON")
    parse_command.add_argument("source", type=Path, help="Ruta al documento Simple")
    parse_command.add_argument("--array-format", choices=ARRAY_FORMATS, help="Formato de los arreglos en bloque")
    parse_command.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Sangría de la salida JSON",
    )

    stringify_command = commands.add_parser("stringify", help="Convierte un archivo JSON o YAML en texto Simple")
    stringify_command.add_argument("source", type=Path, help="Ruta al archivo JSON o YAML")
    stringify_command.add_argument("--array-format", choices=ARRAY_FORMATS, help="Formato de los arreglos en bloque")
    stringify_command.add_argument("--indent-size", type=int, help="Caracteres de sangría por nivel")
    stringify_command.add_argument(
        "--indent-char",
        choices=sorted(INDENT_CHAR_NAMES),
        help="Carácter de sangría",
    )
    return parser


def _load_data(source: Path, text: str) -> Any:
    if source.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def _run(args: argparse.Namespace) -> str:
    options = load_options(args.config) if args.config is not None else ConverterOptions()
    text = args.source.read_text(encoding="utf-8")

    if args.command == "parse":
        value = parse(text, array_format=args.array_format or options.parse.array_format)
        return json.dumps(value, indent=args.indent, ensure_ascii=False)

    settings = options.stringify
    return stringify(
        _load_data(args.source, text),
        indent_size=args.indent_size if args.indent_size is not None else settings.indent_size,
        indent_char=INDENT_CHAR_NAMES[args.indent_char] if args.indent_char else settings.indent_char,
        array_format=args.array_format or settings.array_format,
    )


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        output = _run(args)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as error:
        parser.error(str(error))

    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
