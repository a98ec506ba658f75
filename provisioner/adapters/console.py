"""
Console adapter — color-coded operator messages.

Four severities, each rendered as a colored tag in front of the
message: ``[INFO]`` blue, ``[SUCCESS]`` green, ``[WARNING]`` yellow,
``[ERROR]`` red. Messages are mirrored to the logging tree at
DEBUG so a log file carries the same story.
"""

from __future__ import annotations

import logging

import click

from provisioner.core.observability.logging_config import CONSOLE_MIRROR

logger = logging.getLogger(CONSOLE_MIRROR)

_TAGS: dict[str, tuple[str, str]] = {
    "info": ("[INFO]", "blue"),
    "success": ("[SUCCESS]", "green"),
    "warning": ("[WARNING]", "yellow"),
    "error": ("[ERROR]", "red"),
}


class Console:
    """Operator-facing output."""

    def info(self, message: str) -> None:
        self._tagged("info", message)

    def success(self, message: str) -> None:
        self._tagged("success", message)

    def warning(self, message: str) -> None:
        self._tagged("warning", message)

    def error(self, message: str) -> None:
        self._tagged("error", message)

    def echo(self, line: str = "", **style) -> None:
        """Plain (optionally styled) line, no tag."""
        if style:
            click.secho(line, **style)
        else:
            click.echo(line)

    def _tagged(self, level: str, message: str) -> None:
        tag, color = _TAGS[level]
        logger.debug("%s %s", tag, message)
        click.secho(tag, fg=color, nl=False)
        click.echo(f" {message}")


class RecordingConsole(Console):
    """Console that records instead of printing (tests, JSON output)."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.lines: list[str] = []

    def echo(self, line: str = "", **style) -> None:
        self.lines.append(line)

    def _tagged(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def of(self, level: str) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]
