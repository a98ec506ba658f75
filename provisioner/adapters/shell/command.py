"""
Shell command runner — executes installer, download and build commands.

This is the only place the installer spawns processes. Output is
streamed to the operator line by line (npm installs and distro package
managers are long-running) and the tail is kept on the receipt.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import time

import click

from provisioner.adapters.base import Runner
from provisioner.core.models.action import Receipt

logger = logging.getLogger(__name__)

_TAIL_CHARS = 2000


class CommandRunner(Runner):
    """Run commands on the real host.

    Args:
        echo: Stream command output to the terminal by default.
    """

    def __init__(self, echo: bool = True):
        self._echo = echo

    @property
    def name(self) -> str:
        return "shell"

    @property
    def is_root(self) -> bool:
        return hasattr(os, "geteuid") and os.geteuid() == 0

    def which(self, binary: str) -> str | None:
        return shutil.which(binary)

    def add_to_path(self, directory: str) -> None:
        current = os.environ.get("PATH", "")
        if directory in current.split(os.pathsep):
            return
        os.environ["PATH"] = directory + (os.pathsep + current if current else "")
        logger.debug("PATH += %s", directory)

    def run(
        self,
        command: list[str] | str,
        *,
        cwd: str | None = None,
        echo: bool | None = None,
    ) -> Receipt:
        use_shell = isinstance(command, str)
        display = command if use_shell else shlex.join(command)
        stream = self._echo if echo is None else echo

        logger.debug("Executing: %s (cwd=%s)", display, cwd)
        start = time.monotonic()

        try:
            proc = subprocess.Popen(
                command,
                shell=use_shell,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except Exception as e:
            logger.debug("Command could not start: %s", e)
            return Receipt.failure(
                command=display,
                cwd=cwd,
                error=f"Command execution error: {e}",
            )

        lines: list[str] = []
        try:
            for line in proc.stdout or ():
                lines.append(line)
                if stream:
                    click.echo(line.rstrip("\n"))
        except Exception as e:
            _stop(proc)
            logger.debug("Lost output of %s: %s", display, e)
            return Receipt.failure(
                command=display,
                cwd=cwd,
                error=f"Command output error: {e}",
                output="".join(lines)[-_TAIL_CHARS:].strip(),
            )
        except KeyboardInterrupt:
            _stop(proc)
            raise
        proc.wait()

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = "".join(lines)[-_TAIL_CHARS:].strip()

        if proc.returncode == 0:
            return Receipt.success(
                command=display,
                cwd=cwd,
                output=output,
                duration_ms=elapsed_ms,
            )

        logger.warning("Command failed (exit %s): %s", proc.returncode, display)
        return Receipt.failure(
            command=display,
            cwd=cwd,
            error=f"Command exited with code {proc.returncode}",
            return_code=proc.returncode,
            output=output,
            duration_ms=elapsed_ms,
        )


def _stop(proc: subprocess.Popen) -> None:
    """Kill and reap a child whose output could not be read."""
    if proc.poll() is None:
        proc.kill()
    proc.wait()
