"""
Mock runner — test double for every host interaction.

Simulates the search path (which binaries exist and what their
``--version`` prints), records every command, and lets tests script
failures and side effects per command fragment. A scripted command can
"install" binaries so that re-probing after an install strategy sees
the new tool.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass, field

from provisioner.adapters.base import Runner
from provisioner.core.models.action import Receipt

_VERSION_FLAGS = {"--version", "-v", "-V", "version"}


@dataclass
class _Response:
    fragment: str
    fail: bool = False
    error: str = "Mock failure"
    output: str = ""
    installs: dict[str, str] = field(default_factory=dict)
    effect: Callable[[str | None], None] | None = None


class MockRunner(Runner):
    """Universal mock runner for testing.

    Args:
        binaries: ``{binary: version output}`` for tools on the fake PATH.
        root: Whether to pretend commands run as root.
    """

    def __init__(self, binaries: dict[str, str] | None = None, root: bool = False):
        self.binaries: dict[str, str] = dict(binaries or {})
        self._root = root
        self._responses: list[_Response] = []
        self.call_log: list[str] = []
        self.cwd_log: list[str | None] = []
        self.probe_log: list[str] = []
        self.path_entries: list[str] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def is_root(self) -> bool:
        return self._root

    @property
    def call_count(self) -> int:
        """Number of non-probe commands run."""
        return len(self.call_log)

    def which(self, binary: str) -> str | None:
        return f"/usr/bin/{binary}" if binary in self.binaries else None

    def add_to_path(self, directory: str) -> None:
        self.path_entries.append(directory)

    def on(
        self,
        fragment: str,
        *,
        fail: bool = False,
        error: str = "Mock failure",
        output: str = "",
        installs: dict[str, str] | None = None,
        effect: Callable[[str | None], None] | None = None,
    ) -> None:
        """Script the response for commands containing ``fragment``.

        ``effect`` is called with the command's cwd before the receipt is
        returned (used to create files a real tool would produce).
        """
        self._responses.append(_Response(
            fragment=fragment,
            fail=fail,
            error=error,
            output=output,
            installs=dict(installs or {}),
            effect=effect,
        ))

    def commands_matching(self, fragment: str) -> list[str]:
        return [c for c in self.call_log if fragment in c]

    def run(
        self,
        command: list[str] | str,
        *,
        cwd: str | None = None,
        echo: bool | None = None,
    ) -> Receipt:
        display = command if isinstance(command, str) else shlex.join(command)

        if self._is_version_probe(command):
            self.probe_log.append(display)
            binary = command[0]
            if binary not in self.binaries:
                return Receipt.failure(command=display, error=f"{binary}: not found")
            return Receipt.success(command=display, output=self.binaries[binary])

        self.call_log.append(display)
        self.cwd_log.append(cwd)

        for response in self._responses:
            if response.fragment not in display:
                continue
            if response.effect is not None:
                response.effect(cwd)
            if response.fail:
                return Receipt.failure(command=display, cwd=cwd, error=response.error, return_code=1)
            self.binaries.update(response.installs)
            return Receipt.success(command=display, cwd=cwd, output=response.output)

        return Receipt.success(command=display, cwd=cwd, output="[mock] executed")

    def reset(self) -> None:
        """Clear logs and scripted responses."""
        self._responses.clear()
        self.call_log.clear()
        self.cwd_log.clear()
        self.probe_log.clear()

    @staticmethod
    def _is_version_probe(command: list[str] | str) -> bool:
        return (
            isinstance(command, list)
            and len(command) == 2
            and command[1] in _VERSION_FLAGS
        )
