"""Adapters — bindings to the host: commands, prompts, console output.

Public re-exports for convenient access.
"""

from provisioner.adapters.base import Runner
from provisioner.adapters.console import Console, RecordingConsole
from provisioner.adapters.mock import MockRunner
from provisioner.adapters.prompt.base import Prompter
from provisioner.adapters.shell.command import CommandRunner

__all__ = [
    "CommandRunner",
    "Console",
    "MockRunner",
    "Prompter",
    "RecordingConsole",
    "Runner",
]
