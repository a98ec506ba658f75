"""
Receipt model — what running one external command produced.

Every installer, downloader, extractor, npm and pm2 invocation goes
through a runner that hands back a Receipt. Runners never raise;
the calling service decides whether a failed receipt ends the run.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Outcome of one command.

    ``output`` holds the tail of combined stdout/stderr; ``error`` is
    the runner's one-line reason for a failure.
    """

    command: str                    # as displayed (shell-quoted for argv commands)
    cwd: str | None = None
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = None

    output: str = ""
    error: str | None = None

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def detail(self) -> str:
        """Failure reason plus the last output line, for operator messages."""
        lines = self.output.strip().splitlines()
        last = lines[-1].strip() if lines else ""
        if self.error and last and last not in self.error:
            return f"{self.error} ({last})"
        return self.error or last

    @classmethod
    def success(cls, command: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(command=command, status="ok", return_code=0, output=output, **kwargs)

    @classmethod
    def failure(cls, command: str, error: str, **kwargs: Any) -> Receipt:
        return cls(command=command, status="failed", error=error, **kwargs)
