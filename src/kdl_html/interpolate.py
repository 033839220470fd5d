"""``${name}`` substitution."""

from __future__ import annotations

from .environment import Scope
from .errors import UnterminatedInterpolationError

MARKER = "${"


def interpolate(scope: Scope, text: str) -> str:
    """Replace every ``${name}`` in *text* with its binding in *scope*.

    Substituted values are not scanned again, so a value containing
    ``${...}`` is emitted literally.
    """
    head, *rest = text.split(MARKER)
    out = [head]
    for chunk in rest:
        name, sep, remainder = chunk.partition("}")
        if not sep:
            raise UnterminatedInterpolationError(text)
        out.append(scope.lookup(name))
        out.append(remainder)
    return "".join(out)
