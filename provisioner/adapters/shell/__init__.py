"""Shell adapters — subprocess execution and PATH lookup."""

from provisioner.adapters.shell.command import CommandRunner

__all__ = ["CommandRunner"]
