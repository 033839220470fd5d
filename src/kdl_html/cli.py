"""``kdl-html`` command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, Sequence

from .environment import Scope, parse_binding, read_env_file
from .errors import KdlHtmlError, SourceReadError
from .evaluator import render, render_file

log = logging.getLogger(__name__)


def _binding(text: str) -> tuple[str, str]:
    try:
        return parse_binding(text)
    except KdlHtmlError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kdl-html",
        description="Render a KDL document to HTML on standard output.",
    )
    parser.add_argument(
        "-e", "--env", action="store_true",
        help="bind every environment variable",
    )
    parser.add_argument(
        "--env-file", action="append", default=[], type=Path, metavar="PATH",
        help="bind NAME=value lines from PATH (repeatable)",
    )
    parser.add_argument(
        "-b", "--bind", action="append", default=[], type=_binding, metavar="NAME=VALUE",
        help="bind NAME to VALUE (repeatable, applied last)",
    )
    parser.add_argument(
        "-d", "--depfile", type=Path, metavar="PATH",
        help="write a make-style dependency file listing every file read",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.add_argument("file", nargs="?", type=Path, help="input file (default: stdin)")
    return parser


def initial_scope(args: argparse.Namespace) -> Scope:
    """Environment, then env files in order, then explicit bindings."""
    scope = Scope.from_environ() if args.env else Scope()
    for path in args.env_file:
        scope.update(read_env_file(path))
    scope.update(args.bind)
    return scope


def run(args: argparse.Namespace, stdin: IO[str], stdout: IO[str]) -> None:
    scope = initial_scope(args)
    if args.file is not None:
        doc = render_file(args.file, scope)
    else:
        try:
            text = stdin.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError("<stdin>", exc) from exc
        doc = render(text, scope=scope)

    if args.depfile is not None:
        log.debug("writing %d dependencies to %s", len(doc.dependencies), args.depfile)
        try:
            args.depfile.write_text(doc.depfile(), encoding="utf-8")
        except OSError as exc:
            raise SourceReadError(args.depfile, exc) from exc

    stdout.write(doc.text)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    try:
        run(args, sys.stdin, sys.stdout)
    except KdlHtmlError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
