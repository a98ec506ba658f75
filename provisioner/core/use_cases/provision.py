"""
Provision use case — the fixed installer pipeline.

    probe → ensure each dependency → fetch bundle → configure
    → build → supervisor (optional) → report

Fail-fast: the first ProvisionError propagates to the caller and no
later stage runs. ``cleanup_created`` is the opt-in, best-effort undo
for paths the run itself created.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from provisioner.core.context import ProvisionContext
from provisioner.core.errors import AbortedByUser, BundleStructureError, DependencyError
from provisioner.core.models.host import HostProfile, OsFamily
from provisioner.core.models.requirement import EnsureOutcome
from provisioner.core.services.build_ops import run_build
from provisioner.core.services.bundle_ops import fetch_bundle
from provisioner.core.services.completion_report import CompletionReport, build_report, render_report
from provisioner.core.services.runtime_config import collect_runtime_config
from provisioner.core.services.supervisor_ops import setup_supervisor
from provisioner.core.services.tool_install import REQUIREMENTS, ensure, probe_host

logger = logging.getLogger(__name__)


@dataclass
class ProvisionResult:
    """Result of a completed provisioning run."""

    profile: HostProfile
    report: CompletionReport
    installed: list[str]

    def to_dict(self) -> dict:
        return {
            "os_family": self.profile.os_family.value,
            "installed": self.installed,
            "install_dir": str(self.report.install_dir),
            "port": self.report.port,
            "url": self.report.url,
            "supervised": self.report.supervised,
        }


def check_requirements(
    ctx: ProvisionContext,
    *,
    system: str | None = None,
    fs_root: Path = Path("/"),
) -> HostProfile:
    """Probe the host and ensure every required tool, in order.

    Raises:
        AbortedByUser: The operator declined a required install.
        DependencyError: An install could not be done or did not take.
    """
    console = ctx.console
    console.info("Checking system requirements...")

    profile = probe_host(ctx.runner, system=system, root=fs_root)
    ctx.profile = profile
    if profile.os_family == OsFamily.UNKNOWN:
        console.warning(
            "Unrecognized operating system; automatic installs may be unavailable."
        )
    else:
        console.info(f"Detected operating system: {profile.os_family.value}")

    for requirement in REQUIREMENTS:
        result = ensure(
            requirement, profile,
            runner=ctx.runner, prompter=ctx.prompter, console=console,
        )
        ctx.dependencies.append(result)
        if result.outcome == EnsureOutcome.ABORTED_BY_USER:
            raise AbortedByUser(result.message)
        if result.outcome == EnsureOutcome.FATAL:
            raise DependencyError(result.message)

    console.success("System requirements check passed.")
    return profile


def run_provision(
    ctx: ProvisionContext,
    *,
    system: str | None = None,
    fs_root: Path = Path("/"),
) -> ProvisionResult:
    """Run the whole installer against ``ctx``.

    Args:
        ctx: Run context (runner, prompter, console, source URL).
        system: Kernel name override for OS detection (tests).
        fs_root: Filesystem root holding the OS marker files (tests).

    Raises:
        ProvisionError: Any fatal condition; nothing after it runs.
    """
    profile = check_requirements(ctx, system=system, fs_root=fs_root)

    ctx.target = fetch_bundle(ctx)

    _require_populated(ctx)
    ctx.runtime_config = collect_runtime_config(ctx)

    _require_populated(ctx)
    run_build(ctx)

    _require_populated(ctx)
    ctx.supervisor = setup_supervisor(ctx)

    report = build_report(ctx.target.directory_path, ctx.supervisor.enabled)
    render_report(report, ctx.console)

    return ProvisionResult(
        profile=profile,
        report=report,
        installed=[r.requirement for r in ctx.dependencies if r.installed],
    )


def cleanup_created(ctx: ProvisionContext) -> list[Path]:
    """Remove paths this run created, newest first. Best effort.

    Returns:
        The paths actually removed.
    """
    removed: list[Path] = []
    for path in reversed(ctx.created_paths):
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
            else:
                continue
        except OSError as e:
            logger.warning("Cleanup could not remove %s: %s", path, e)
            continue
        removed.append(path)
    return removed


def _require_populated(ctx: ProvisionContext) -> None:
    if ctx.target is None or not ctx.target.is_populated():
        raise BundleStructureError("The install directory is missing or empty.")
