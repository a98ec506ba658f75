"""
Runner base — the contract between services and the host's tools.

Services never call ``subprocess`` or ``shutil.which`` directly; they
ask a Runner. That single seam is what lets the whole workflow run
against a MockRunner in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from provisioner.core.models.action import Receipt


class Runner(ABC):
    """Abstract command runner.

    Runners perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g. 'shell', 'mock')."""

    @property
    @abstractmethod
    def is_root(self) -> bool:
        """Whether commands already run with root privileges."""

    @abstractmethod
    def which(self, binary: str) -> str | None:
        """Resolve ``binary`` on the search path, or None."""

    @abstractmethod
    def run(
        self,
        command: list[str] | str,
        *,
        cwd: str | None = None,
        echo: bool | None = None,
    ) -> Receipt:
        """Run a command and return its receipt.

        A ``str`` command goes through the shell (install scripts are
        pipelines); a ``list`` is executed directly. ``echo`` overrides
        the runner's default for streaming output to the operator.
        """

    @abstractmethod
    def add_to_path(self, directory: str) -> None:
        """Prepend ``directory`` to the search path for later lookups."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
