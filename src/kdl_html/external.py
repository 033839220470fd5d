"""Markdown conversion and shell capture."""

from __future__ import annotations

import logging
import subprocess

from markdown_it import MarkdownIt

from .errors import ShellDecodeError, ShellSpawnError

log = logging.getLogger(__name__)

SHELL = "/bin/sh"

_markdown = MarkdownIt("commonmark").enable("table")


def render_markdown(text: str) -> str:
    return _markdown.render(text)


def run_shell(command: str) -> str:
    """Run *command* through ``/bin/sh -c`` and return its decoded stdout.

    Standard error is inherited. A non-zero exit status is reported but the
    captured output is still returned.
    """
    log.debug("running %s -c %r", SHELL, command)
    try:
        proc = subprocess.run([SHELL, "-c", command], stdout=subprocess.PIPE)
    except OSError as exc:
        raise ShellSpawnError(command, exc) from exc
    if proc.returncode != 0:
        log.warning("%r exited with status %d", command, proc.returncode)
    try:
        return proc.stdout.decode("utf-8")
    except UnicodeDecodeError:
        raise ShellDecodeError(command) from None
