"""kdl-html — render KDL documents to HTML."""

from .document import Document
from .environment import Scope
from .evaluator import evaluate, render, render_file
from .interpolate import interpolate
from .model import EvalContext, NodeKind, classify
from .errors import (
    KdlHtmlError,
    BindingSyntaxError,
    DocumentParseError,
    MisplacedDoctypeError,
    MissingArgumentError,
    MissingExtensionError,
    ShellDecodeError,
    ShellSpawnError,
    SourceReadError,
    UnboundVariableError,
    UnsupportedExtensionError,
    UnterminatedInterpolationError,
)

__all__ = [
    "evaluate",
    "render",
    "render_file",
    "interpolate",
    "classify",
    "Document",
    "Scope",
    "EvalContext",
    "NodeKind",
    "KdlHtmlError",
    "BindingSyntaxError",
    "DocumentParseError",
    "MisplacedDoctypeError",
    "MissingArgumentError",
    "MissingExtensionError",
    "ShellDecodeError",
    "ShellSpawnError",
    "SourceReadError",
    "UnboundVariableError",
    "UnsupportedExtensionError",
    "UnterminatedInterpolationError",
]
