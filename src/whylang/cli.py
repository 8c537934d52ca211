"""Command-line interface for WhyLang."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from whylang.document import Document
from whylang.errors import WhyLangError

log = logging.getLogger(__name__)

FORMATS = ("sexpr", "tree", "tokens")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    indent: bool
    log_level: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="whylang",
        description="Tokenize and parse a WhyLang expression",
    )
    p.add_argument("input", help="Input source file, or - for stdin")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: sexpr)",
    )
    p.add_argument(
        "--indent",
        action="store_true",
        default=None,
        help="Put each nested S-expression on its own line",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover whylang.toml)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="Logging level: DEBUG, INFO, WARNING or ERROR (default: WARNING)",
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "whylang.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_log_level(s: str) -> str:
    """Normalize a logging level name."""
    level = s.upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level (expected one of {', '.join(LOG_LEVELS)}): {s}"
        )
    return level


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Output format and indentation: config < CLI
    fmt = "sexpr"
    indent = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config (expected one of {', '.join(FORMATS)}): "
                    f"{cfg_format}"
                )
            fmt = cfg_format
        cfg_indent = cfg_output.get("indent")
        if isinstance(cfg_indent, bool):
            indent = cfg_indent
    if args.format is not None:
        fmt = args.format
    if args.indent is not None:
        indent = args.indent

    # Logging level: config < CLI
    log_level = "WARNING"
    cfg_logging = config.get("logging")
    if isinstance(cfg_logging, dict):
        cfg_level = cfg_logging.get("level")
        if isinstance(cfg_level, str):
            log_level = parse_log_level(cfg_level)
    if args.log_level is not None:
        log_level = parse_log_level(args.log_level)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        indent=indent,
        log_level=log_level,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def compile_document(document: Document, options: CliOptions) -> str:
    """Tokenize or parse a document and render it in the requested format."""
    from whylang.debug import dump_ast, dump_tokens
    from whylang.lexer import tokenize
    from whylang.parser import parse
    from whylang.sexpr import to_sexpr

    if options.format == "tokens":
        out = io.StringIO()
        dump_tokens(tokenize(document.content), document.content, file=out)
        return out.getvalue()

    expr = parse(document.content)
    log.debug("parsed %s", document.path)

    if options.format == "tree":
        out = io.StringIO()
        dump_ast(expr, file=out)
        return out.getvalue()

    return to_sexpr(expr, indented=options.indent) + "\n"


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    configure_logging(options.log_level)

    try:
        if str(options.input_file) == "-":
            document = Document.read("<stdin>", sys.stdin.buffer)
        else:
            document = Document.load(options.input_file)
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 2

    try:
        result = compile_document(document, options)
    except WhyLangError as exc:
        print(exc.format(document), file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)

    return 0
