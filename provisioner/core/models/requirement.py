"""
Dependency models — requirements, install strategies, ensure outcomes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from provisioner.core.models.action import Receipt
from provisioner.core.models.host import Tool, ToolStatus


class DependencyRequirement(BaseModel):
    """A named external tool the application stack needs.

    ``install_as`` lets a requirement borrow another tool's strategy:
    npm ships with Node.js, so a missing npm installs the runtime.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    tool: Tool
    min_major: int | None = None        # None → presence is enough
    install_as: Tool | None = None
    confirm_install: bool = True
    question: str | None = None         # confirmation question key
    external_question: str | None = None

    @property
    def strategy_tool(self) -> Tool:
        return self.install_as or self.tool


class InstallStrategy(BaseModel):
    """One OS-specific way of installing a tool.

    Commands are shell templates; ``{sudo}`` renders to ``"sudo "`` and
    ``{sudo_e}`` to ``"sudo -E "``, both empty when already running as root.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    commands: list[str]
    requires: list[Tool] = Field(default_factory=list)
    bootstrap: dict[str, str] = Field(default_factory=dict)   # binary → install cmd
    path_probe: str | None = None   # prints a binary path whose dir joins PATH

    def render(self, root: bool = False) -> list[str]:
        sudo, sudo_e = ("", "") if root else ("sudo ", "sudo -E ")
        return [cmd.format(sudo=sudo, sudo_e=sudo_e) for cmd in self.commands]


class EnsureOutcome(str, Enum):
    SATISFIED = "satisfied"
    ABORTED_BY_USER = "aborted_by_user"
    FATAL = "fatal"


class EnsureResult(BaseModel):
    """What ``ensure()`` did for one requirement."""

    requirement: str
    outcome: EnsureOutcome
    installed: bool = False
    strategy: str | None = None
    status: ToolStatus | None = None
    message: str = ""
    receipts: list[Receipt] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome == EnsureOutcome.SATISFIED
