"""Command-line interface for scenariotree."""

from __future__ import annotations

import argparse
import json
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from scenariotree.errors import LexError, ParseError

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="scenariotree",
        description="Parse a scenario tree and list the modifiers it needs",
    )
    p.add_argument("input", help="Input .tree file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover scenariotree.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-run")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "scenariotree.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    fmt = "text"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config (expected text or json): {cfg_format}"
                )
            fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        watch=args.watch,
        debug=args.debug,
    )


def render_modifiers(file_name: str, modifiers: dict[str, str], fmt: str) -> str:
    """Format discovered modifiers for output."""
    if fmt == "json":
        payload = {"file_name": file_name, "modifiers": modifiers}
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    return "".join(f"{title} -> {name}\n" for title, name in modifiers.items())


def compile_file(options: CliOptions) -> str:
    """Read, lex, parse, and discover modifiers for a scenario tree file."""
    from scenariotree.debug import dump_ast
    from scenariotree.modifiers import ModifierDiscoverer
    from scenariotree.parser import parse

    source = options.input_file.read_text(encoding="utf-8")
    root = parse(source)

    if options.debug:
        dump_ast(root, file=sys.stderr)

    modifiers = ModifierDiscoverer().discover(root)
    return render_modifiers(root.file_name, modifiers, options.format)


def _report(exc: LexError | ParseError, options: CliOptions) -> None:
    print(exc.format(str(options.input_file)), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-run on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    out = compile_file(options)
                    if options.output_file:
                        options.output_file.write_text(out, encoding="utf-8")
                    else:
                        sys.stdout.write(out)
                        sys.stdout.flush()
                    print(f"Parsed {options.input_file}", file=sys.stderr)
                except (LexError, ParseError) as exc:
                    _report(exc, options)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        out = compile_file(options)
    except (LexError, ParseError) as exc:
        _report(exc, options)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(out, encoding="utf-8")
    else:
        sys.stdout.write(out)

    return 0
