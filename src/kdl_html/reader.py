"""Reader: KDL parsing and node entry access."""

from __future__ import annotations

from pathlib import Path

import kdl

from .errors import DocumentParseError, SourceReadError


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_document(text: str, source: Path | None = None) -> list:
    """Parse KDL *text* and return its top-level nodes."""
    try:
        doc = kdl.parse(text)
    except kdl.ParseError as exc:
        raise DocumentParseError(str(exc), source) from exc
    return list(doc.nodes)


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, exc) from exc


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

def _as_string(value) -> str | None:
    """Unwrap a string entry; tagged values keep their text in ``.value``."""
    if isinstance(value, str):
        return value
    inner = getattr(value, "value", None)
    if isinstance(inner, str):
        return inner
    return None


def _number_to_string(number: int | float) -> str:
    """``42.0`` prints as ``42``; the parser hands back floats for integers."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def _decimal_to_number(value: kdl.Decimal) -> int | float:
    if value.exponent < 0:
        return value.mantissa / 10 ** -value.exponent
    return value.mantissa * 10 ** value.exponent


def value_to_string(value) -> str:
    """Strings pass through verbatim, other values use their KDL spelling."""
    text = _as_string(value)
    if text is not None:
        return text
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return _number_to_string(value)
    if isinstance(value, kdl.Decimal):
        return _number_to_string(_decimal_to_number(value))
    inner = getattr(value, "value", value)
    if inner is not value:
        return value_to_string(inner)
    return str(value)


def text_arg(node) -> str | None:
    """First positional string entry of *node*, if any."""
    for arg in node.args:
        text = _as_string(arg)
        if text is not None:
            return text
    return None


def named_entries(node) -> list[tuple[str, str]]:
    return [(name, value_to_string(value)) for name, value in node.props.items()]


def children(node) -> list:
    return list(node.nodes or [])
