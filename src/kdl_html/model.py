"""Node kinds and the evaluation context threaded through a render."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from .environment import Scope


# ---------------------------------------------------------------------------
# NodeKind
# ---------------------------------------------------------------------------

class NodeKind(Enum):
    ELEMENT = auto()
    TEXT = auto()
    BINDING = auto()
    DOCTYPE = auto()
    INCLUDE = auto()
    MARKDOWN = auto()
    SHELL = auto()


_KINDS_BY_NAME: dict[str, NodeKind] = {
    "-": NodeKind.TEXT,
    "let": NodeKind.BINDING,
    "markdown": NodeKind.MARKDOWN,
    "@include": NodeKind.INCLUDE,
    "@sh": NodeKind.SHELL,
    "!doctype": NodeKind.DOCTYPE,
}

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "param", "source", "track", "wbr",
})


def classify(node) -> NodeKind:
    """Any name that is not a directive is an HTML element."""
    return _KINDS_BY_NAME.get(node.name, NodeKind.ELEMENT)


# ---------------------------------------------------------------------------
# EvalContext
# ---------------------------------------------------------------------------

@dataclass
class EvalContext:
    """Scope and location of the document currently being evaluated.

    One context lives for the whole of a document; siblings share it, so a
    ``let`` is visible to every later node. Entering a KDL include builds a
    fresh context with a forked scope.
    """

    scope: Scope = field(default_factory=Scope)
    working_directory: Path = field(default_factory=lambda: Path("."))
    source: Path | None = None

    def resolve(self, path: str) -> Path:
        return self.working_directory / path

    def enter_include(self, path: Path, overrides: dict[str, str]) -> EvalContext:
        scope = self.scope.fork()
        scope.update(overrides.items())
        return EvalContext(scope=scope, working_directory=path.parent, source=path)
