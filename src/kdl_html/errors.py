"""Exceptions raised while rendering a KDL document."""

from __future__ import annotations

from pathlib import Path


class KdlHtmlError(Exception):
    """Base class for every fatal rendering error.

    ``source`` is the document being evaluated when the error happened.
    The evaluator fills it in on the way out if the raise site did not.
    """

    def __init__(self, message: str, source: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.source}: {self.message}"


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------

class UnboundVariableError(KdlHtmlError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name}: Variable not found")
        self.name = name


class UnterminatedInterpolationError(KdlHtmlError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Unclosed interpolation in {text!r}")
        self.text = text


# ---------------------------------------------------------------------------
# Node shape
# ---------------------------------------------------------------------------

class MissingArgumentError(KdlHtmlError):
    def __init__(self, node_name: str) -> None:
        super().__init__(f"{node_name}: expected a string argument")
        self.node_name = node_name


class MisplacedDoctypeError(KdlHtmlError):
    def __init__(self, depth: int) -> None:
        super().__init__(
            f"doctype is only valid at the document root (found at depth {depth})"
        )
        self.depth = depth


# ---------------------------------------------------------------------------
# Includes and sources
# ---------------------------------------------------------------------------

class UnsupportedExtensionError(KdlHtmlError):
    def __init__(self, extension: str, path: Path) -> None:
        super().__init__(f"{extension}: Extension not recognised ({path})")
        self.extension = extension
        self.path = path


class MissingExtensionError(KdlHtmlError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"No file extension ({path})")
        self.path = path


class DocumentParseError(KdlHtmlError):
    """The KDL parser rejected a document."""


class SourceReadError(KdlHtmlError):
    """A source could not be read or is not valid UTF-8."""

    def __init__(self, path: Path | str, cause: OSError | ValueError) -> None:
        super().__init__(f"{path}: {getattr(cause, 'strerror', None) or cause}")
        self.path = path
        self.cause = cause


# ---------------------------------------------------------------------------
# Shell capture
# ---------------------------------------------------------------------------

class ShellSpawnError(KdlHtmlError):
    def __init__(self, command: str, cause: OSError) -> None:
        super().__init__(f"could not run {command!r}: {cause}")
        self.command = command
        self.cause = cause


class ShellDecodeError(KdlHtmlError):
    def __init__(self, command: str) -> None:
        super().__init__(f"output of {command!r} is not valid UTF-8")
        self.command = command


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

class BindingSyntaxError(KdlHtmlError):
    """A ``name=value`` binding is missing its equals sign."""
