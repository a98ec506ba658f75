"""Prompt adapters — where operator answers come from."""

from provisioner.adapters.prompt.console import ConsolePrompter
from provisioner.adapters.prompt.scripted import ScriptedPrompter

__all__ = ["ConsolePrompter", "ScriptedPrompter"]
