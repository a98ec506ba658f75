"""
Host model — what the prober found on this machine.

The HostProfile is built once per run and never mutated. Everything
OS-specific downstream (strategy selection, warnings) branches on
``os_family``.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OsFamily(str, Enum):
    """Operating system families with dedicated install strategies."""

    MACOS = "macos"
    DEBIAN = "debian"
    REDHAT = "redhat"
    UNKNOWN = "unknown"


class Tool(str, Enum):
    """Roles a host tool plays in the application stack."""

    RUNTIME = "runtime"
    PACKAGE_MANAGER = "package_manager"
    DATABASE = "database"
    ARCHIVE_TOOL = "archive_tool"
    DOWNLOAD_TOOL = "download_tool"
    SUPERVISOR = "supervisor"


class ToolStatus(BaseModel):
    """Probe result for a single tool role."""

    model_config = ConfigDict(frozen=True)

    tool: Tool
    binary: str | None = None     # first candidate binary found on PATH
    path: str | None = None
    version: str | None = None

    @property
    def present(self) -> bool:
        return self.binary is not None

    @property
    def major(self) -> int | None:
        """Leading integer of ``version``, or None if unparseable."""
        return major_version(self.version)


class HostProfile(BaseModel):
    """Read-only snapshot of the host, produced by the prober."""

    model_config = ConfigDict(frozen=True)

    os_family: OsFamily = OsFamily.UNKNOWN
    system: str = ""
    is_root: bool = False
    tools: dict[Tool, ToolStatus] = Field(default_factory=dict)

    @property
    def available_tools(self) -> set[Tool]:
        return {t for t, status in self.tools.items() if status.present}

    def status(self, tool: Tool) -> ToolStatus:
        """Status for ``tool``; an absent entry means the tool was not found."""
        return self.tools.get(tool) or ToolStatus(tool=tool)

    def has(self, tool: Tool) -> bool:
        return self.status(tool).present

    def to_dict(self) -> dict:
        return {
            "os_family": self.os_family.value,
            "system": self.system,
            "is_root": self.is_root,
            "tools": {
                t.value: {
                    "present": s.present,
                    "binary": s.binary,
                    "path": s.path,
                    "version": s.version,
                }
                for t, s in self.tools.items()
            },
        }


_MAJOR_RE = re.compile(r"v?(\d+)")


def major_version(version: str | None) -> int | None:
    """Extract the major component from ``"v14.21.3"`` / ``"4.4.18"``."""
    if not version:
        return None
    match = _MAJOR_RE.match(version.strip())
    return int(match.group(1)) if match else None
