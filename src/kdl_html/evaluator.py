"""Evaluator: depth-first walk of a KDL node tree → HTML text."""

from __future__ import annotations

import logging
from pathlib import Path

from .document import Document
from .environment import Scope
from .errors import (
    KdlHtmlError,
    MisplacedDoctypeError,
    MissingArgumentError,
    MissingExtensionError,
    UnsupportedExtensionError,
)
from .external import render_markdown, run_shell
from .interpolate import interpolate
from .model import VOID_ELEMENTS, EvalContext, NodeKind, classify
from .reader import children, named_entries, parse_document, read_source, text_arg

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def render(
    text: str,
    *,
    path: Path | None = None,
    scope: Scope | None = None,
    doc: Document | None = None,
) -> Document:
    """Parse and evaluate KDL *text*, returning the filled Document.

    *path* is where the text came from; relative includes resolve against
    its directory (the current directory when it is ``None``).
    """
    doc = Document() if doc is None else doc
    ctx = EvalContext(
        scope=Scope() if scope is None else scope,
        working_directory=path.parent if path is not None else Path("."),
        source=path,
    )
    nodes = parse_document(text, path)
    evaluate(nodes, 0, ctx, doc)
    return doc


def render_file(path: Path, scope: Scope | None = None) -> Document:
    """Render the KDL file at *path*; it becomes the first dependency."""
    doc = Document()
    doc.record(path)
    return render(read_source(path), path=path, scope=scope, doc=doc)


def evaluate(nodes, depth: int, ctx: EvalContext, doc: Document) -> None:
    """Evaluate *nodes* in order at *depth*, appending to *doc*."""
    for node in nodes:
        try:
            _eval_node(node, depth, ctx, doc)
        except KdlHtmlError as exc:
            if exc.source is None:
                exc.source = ctx.source
            raise


# ---------------------------------------------------------------------------
# Per-node evaluation
# ---------------------------------------------------------------------------

def _eval_node(node, depth: int, ctx: EvalContext, doc: Document) -> None:
    kind = classify(node)
    if kind is NodeKind.TEXT:
        doc.write_line(depth, interpolate(ctx.scope, _require_text(node)))
    elif kind is NodeKind.BINDING:
        _eval_binding(node, ctx)
    elif kind is NodeKind.DOCTYPE:
        _eval_doctype(node, depth, doc)
    elif kind is NodeKind.INCLUDE:
        _eval_include(node, depth, ctx, doc)
    elif kind is NodeKind.MARKDOWN:
        _eval_markdown(node, depth, ctx, doc)
    elif kind is NodeKind.SHELL:
        command = interpolate(ctx.scope, _require_text(node))
        doc.write_block(depth, run_shell(command))
    else:
        _eval_element(node, depth, ctx, doc)


def _require_text(node) -> str:
    text = text_arg(node)
    if text is None:
        raise MissingArgumentError(node.name)
    return text


def _eval_binding(node, ctx: EvalContext) -> None:
    """let a="x" b=2  →  declare every named entry; positional ones are ignored"""
    for name, value in named_entries(node):
        log.debug("bound %s = %r", name, value)
        ctx.scope.declare(name, value)


def _eval_doctype(node, depth: int, doc: Document) -> None:
    if depth != 0:
        raise MisplacedDoctypeError(depth)
    doc.write(f"<!DOCTYPE {_require_text(node)}>\n")


def _eval_element(node, depth: int, ctx: EvalContext, doc: Document) -> None:
    name = node.name
    attrs = "".join(
        f' {key}="{interpolate(ctx.scope, value)}"'
        for key, value in named_entries(node)
    )
    opening = f"<{name}{attrs}"

    text = text_arg(node)
    if text is not None:
        doc.write_line(depth, f"{opening}>{interpolate(ctx.scope, text)}</{name}>")
        return

    kids = children(node)
    if kids:
        doc.write_line(depth, f"{opening}>")
        evaluate(kids, depth + 1, ctx, doc)
        doc.write_line(depth, f"</{name}>")
    elif name in VOID_ELEMENTS:
        doc.write_line(depth, f"{opening} />")
    else:
        doc.write_line(depth, f"{opening}></{name}>")


def _eval_markdown(node, depth: int, ctx: EvalContext, doc: Document) -> None:
    """Source is the string argument, or each child's name as one line."""
    source = text_arg(node)
    if source is None:
        source = "".join(f"{child.name}\n" for child in children(node))
    source = interpolate(ctx.scope, source)
    doc.write_block(depth, render_markdown(source))


# ---------------------------------------------------------------------------
# Includes
# ---------------------------------------------------------------------------

def _eval_include(node, depth: int, ctx: EvalContext, doc: Document) -> None:
    path = ctx.resolve(interpolate(ctx.scope, _require_text(node)))
    doc.record(path)
    source = read_source(path)
    log.debug("including %s at depth %d", path, depth)

    ext = path.suffix[1:]
    if ext == "html":
        doc.write_block(depth, source)
    elif ext in ("md", "markdown"):
        doc.write_block(depth, render_markdown(source))
    elif ext == "kdl":
        nodes = parse_document(source, path)
        inner = ctx.enter_include(path, dict(named_entries(node)))
        evaluate(nodes, depth, inner, doc)
    elif ext:
        raise UnsupportedExtensionError(ext, path)
    else:
        raise MissingExtensionError(path)
