"""Command line tool that loads a configuration file and prints its values."""

from __future__ import annotations

import argparse
import sys

from .api import read_config
from .classifier import ValueKind
from .config import ReaderSettings
from .errors import KeyNotFoundError
from .logging_utils import configure_logging


def _parse_lookup(text: str) -> tuple[ValueKind, str]:
    kind, sep, key = text.partition(":")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KIND:KEY, got {text!r}")
    try:
        return ValueKind(kind.lower()), key
    except ValueError:
        choices = ", ".join(member.value for member in ValueKind)
        raise argparse.ArgumentTypeError(f"unknown kind {kind!r} (choose from {choices})") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="parselib", description="Load a configuration file and show its values")
    parser.add_argument("config", help="Path to the configuration file")
    parser.add_argument("--settings", help="Path to a TOML file with reader settings")
    parser.add_argument("--debug", action="store_true", help="Log every accepted line and stored value")
    parser.add_argument("--strict-includes", action="store_true", help="Fail when an included file is missing")
    parser.add_argument(
        "--get",
        action="append",
        type=_parse_lookup,
        default=[],
        metavar="KIND:KEY",
        help="Print one value instead of the full dump (repeatable)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = ReaderSettings.from_toml(args.settings) if args.settings else ReaderSettings()
    if args.strict_includes:
        settings = settings.model_copy(update={"strict_includes": True})
    if args.debug:
        settings.logging.level = "DEBUG"
    configure_logging(settings.logging)

    result = read_config(args.config, debug=args.debug or settings.debug, settings=settings)
    if not result.ok:
        print(f"error: {result.error}", file=sys.stderr)
        return 1

    if not args.get:
        print(result.store.dump())
        return 0
    for kind, key in args.get:
        try:
            print(result.store.get(key, kind))
        except KeyNotFoundError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
