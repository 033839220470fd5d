"""Variable bindings and the helpers that seed them."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from .errors import BindingSyntaxError, UnboundVariableError
from .reader import read_source


@dataclass
class Scope:
    """Bindings visible to interpolation in one document context."""

    bindings: dict[str, str] = field(default_factory=dict)

    # -- Variables ------------------------------------------------------

    def declare(self, name: str, value: str) -> None:
        self.bindings[name] = value

    def lookup(self, name: str) -> str:
        try:
            return self.bindings[name]
        except KeyError:
            raise UnboundVariableError(name) from None

    def update(self, pairs: Iterable[tuple[str, str]]) -> None:
        for name, value in pairs:
            self.declare(name, value)

    # -- Include boundaries ---------------------------------------------

    def fork(self) -> Scope:
        """Return an independent copy; later changes to either side stay local."""
        return Scope(bindings=dict(self.bindings))

    # -- Construction ---------------------------------------------------

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> Scope:
        environ = os.environ if environ is None else environ
        return cls(bindings=dict(environ))


# ---------------------------------------------------------------------------
# Binding sources
# ---------------------------------------------------------------------------

def parse_binding(text: str) -> tuple[str, str]:
    """Split ``name=value`` on the first equals sign."""
    name, sep, value = text.partition("=")
    if not sep:
        raise BindingSyntaxError(f"{text!r}: Binding needs an equals sign")
    return name, value


def parse_env_lines(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Parse dotenv-style ``NAME=value`` lines.

    Blank lines and ``#`` comments are skipped, an ``export `` prefix is
    dropped and one layer of matching quotes around the value is removed.
    """
    pairs: list[tuple[str, str]] = []
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        name, sep, value = line.partition("=")
        if not sep:
            raise BindingSyntaxError(f"line {lineno}: expected NAME=value, got {raw.rstrip()!r}")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        pairs.append((name.strip(), value))
    return pairs


def read_env_file(path: Path) -> list[tuple[str, str]]:
    text = read_source(path)
    try:
        return parse_env_lines(text.splitlines())
    except BindingSyntaxError as exc:
        exc.source = path
        raise
