"""Document — the output buffer and dependency record of one render."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

INDENT = "\t"


def lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` and the empty tail."""
    out = text.split("\n")
    if out and out[-1] == "":
        out.pop()
    return [line[:-1] if line.endswith("\r") else line for line in out]


@dataclass
class Document:
    """Holds everything a render produces.

    ``chunks`` is the output in traversal order; ``dependencies`` lists every
    file read, in the order first encountered, repeats included.
    """

    chunks: list[str] = field(default_factory=list)
    dependencies: list[Path] = field(default_factory=list)

    # -- Output ---------------------------------------------------------

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    def write(self, text: str) -> None:
        self.chunks.append(text)

    def write_line(self, depth: int, text: str) -> None:
        self.chunks.append(f"{INDENT * depth}{text}\n")

    def write_block(self, depth: int, text: str) -> None:
        for line in lines(text):
            self.write_line(depth, line)

    # -- Dependencies ---------------------------------------------------

    def record(self, path: Path) -> None:
        self.dependencies.append(path)

    def depfile(self, target: str = "stdout") -> str:
        """Render the dependencies as a make rule for *target*."""
        parts = [f"{target}:"]
        for path in self.dependencies:
            parts.append(" \\\n  " + str(path).replace(" ", "\\ "))
        return "".join(parts) + "\n"
