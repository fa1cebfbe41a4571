"""Command-line interface for the TAML parser."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from taml.errors import MaxDepthExceededError, TamlParseError
from taml.parser import DEFAULT_MAX_DEPTH, ParseOptions

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Invalid value in a taml.toml config file."""


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    parse_options: ParseOptions
    validate: bool
    tokens: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="taml",
        description="TAML (Terminal ANSI Markup Language) parser",
    )
    p.add_argument("input", help="Input .taml file")
    p.add_argument("-o", "--output", help="Write plain text to this file (default: stdout)")
    p.add_argument(
        "--validate",
        action="store_true",
        help="Report every structural error instead of stopping at the first",
    )
    p.add_argument("--tokens", action="store_true", help="Print the token stream")
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum tag nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument(
        "--no-positions",
        action="store_true",
        help="Zero all node positions in the --debug tree",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover taml.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "taml.toml"

    if not path.is_file():
        return {}

    logger.debug("loading config from %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


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

    max_depth = DEFAULT_MAX_DEPTH
    include_positions = True
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_depth = cfg_parser.get("max_depth")
        if cfg_depth is not None:
            # bool is an int subclass; reject it explicitly
            if not isinstance(cfg_depth, int) or isinstance(cfg_depth, bool) or cfg_depth < 0:
                raise ConfigError(
                    f"parser.max_depth must be a non-negative integer: {cfg_depth!r}"
                )
            max_depth = cfg_depth
        cfg_positions = cfg_parser.get("include_positions")
        if cfg_positions is not None:
            if not isinstance(cfg_positions, bool):
                raise ConfigError(
                    f"parser.include_positions must be a boolean: {cfg_positions!r}"
                )
            include_positions = cfg_positions

    if args.max_depth is not None:
        if args.max_depth < 0:
            raise ConfigError(f"--max-depth must be non-negative: {args.max_depth}")
        max_depth = args.max_depth
    if args.no_positions:
        include_positions = False

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        parse_options=ParseOptions(max_depth=max_depth, include_positions=include_positions),
        validate=args.validate,
        tokens=args.tokens,
        debug=args.debug,
    )


def run(options: CliOptions) -> int:
    """Process one file: print its plain text, its tokens, or its errors."""
    from taml.ast import get_all_text
    from taml.debug import dump_ast, dump_tokens
    from taml.parser import parse
    from taml.tokenizer import tokenize
    from taml.validator import validate_source

    source = options.input_file.read_text(encoding="utf-8")
    filename = str(options.input_file)

    if options.validate:
        result = validate_source(source)
        for err in result.errors:
            print(err.format(filename), file=sys.stderr)
        if not result.valid:
            print(f"{len(result.errors)} error(s) in {filename}", file=sys.stderr)
            return 1
        return 0

    if options.tokens:
        dump_tokens(tokenize(source), file=sys.stdout)
        return 0

    doc = parse(source, options.parse_options)
    if options.debug:
        dump_ast(doc, file=sys.stderr)

    text = get_all_text(doc)
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except (ConfigError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        return run(options)
    except TamlParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except MaxDepthExceededError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
