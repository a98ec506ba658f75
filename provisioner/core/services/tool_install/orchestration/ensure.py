"""
L5 Orchestration — ensure(): make one requirement true, or say why not.

    unmet → ask to install → select strategy → run it → re-probe

Each call selects at most one strategy for its own requirement. A
strategy that needs a download tool triggers a nested ensure() for
that prerequisite first.
"""

from __future__ import annotations

import logging

from provisioner.adapters.base import Runner
from provisioner.adapters.console import Console
from provisioner.adapters.prompt.base import Prompter
from provisioner.core.models.host import HostProfile, Tool
from provisioner.core.models.requirement import (
    DependencyRequirement,
    EnsureOutcome,
    EnsureResult,
)
from provisioner.core.services.tool_install.data.recipes import REQUIREMENTS
from provisioner.core.services.tool_install.detection.tool_version import probe_tool
from provisioner.core.services.tool_install.execution.strategy_runner import execute_strategy
from provisioner.core.services.tool_install.resolver.strategy_selection import (
    Assessment,
    assess,
    describe_shortfall,
    select_strategy,
)

logger = logging.getLogger(__name__)

_REQUIREMENT_BY_TOOL: dict[Tool, DependencyRequirement] = {r.tool: r for r in REQUIREMENTS}


def ensure(
    requirement: DependencyRequirement,
    profile: HostProfile,
    *,
    runner: Runner,
    prompter: Prompter,
    console: Console,
) -> EnsureResult:
    """Satisfy ``requirement`` on the host described by ``profile``.

    Returns:
        EnsureResult with outcome SATISFIED, ABORTED_BY_USER or FATAL.
        Never raises for host-level failures; the caller decides how
        to abort.
    """
    name = requirement.name
    status = profile.status(requirement.tool)
    verdict = assess(requirement, status)

    if verdict != Assessment.SATISFIED:
        # An earlier step may have brought this tool along (npm with node).
        live = probe_tool(requirement.tool, runner)
        if assess(requirement, live) == Assessment.SATISFIED:
            status, verdict = live, Assessment.SATISFIED

    if verdict == Assessment.SATISFIED:
        logger.debug("%s satisfied (%s %s)", name, status.binary, status.version)
        return EnsureResult(requirement=name, outcome=EnsureOutcome.SATISFIED, status=status)

    console.warning(describe_shortfall(requirement, status, verdict))

    # ── Permission ──────────────────────────────────────────────
    if requirement.confirm_install and not prompter.ask(requirement.question):
        if requirement.external_question and prompter.ask(requirement.external_question):
            console.info(f"Using the existing {name} installation.")
            return EnsureResult(
                requirement=name,
                outcome=EnsureOutcome.SATISFIED,
                status=status,
                message="confirmed by operator",
            )
        return EnsureResult(
            requirement=name,
            outcome=EnsureOutcome.ABORTED_BY_USER,
            status=status,
            message=f"{name} is required. Install it manually and re-run the installer.",
        )

    # ── Strategy ────────────────────────────────────────────────
    strategy = select_strategy(requirement.strategy_tool, profile.os_family)
    if strategy is None:
        return EnsureResult(
            requirement=name,
            outcome=EnsureOutcome.FATAL,
            status=status,
            message=(
                f"Cannot install {name} automatically on this system "
                f"({profile.os_family.value}). Install it manually and re-run the installer."
            ),
        )

    for tool in strategy.requires:
        if tool == requirement.tool:
            continue
        prerequisite = _REQUIREMENT_BY_TOOL[tool]
        pre = ensure(prerequisite, profile, runner=runner, prompter=prompter, console=console)
        if not pre.ok:
            return EnsureResult(
                requirement=name,
                outcome=EnsureOutcome.FATAL,
                status=status,
                message=f"{name} needs {prerequisite.name}: {pre.message}",
                receipts=pre.receipts,
            )

    console.info(f"Installing {name} ({strategy.label})...")
    receipts = execute_strategy(strategy, runner, root=profile.is_root)

    if receipts and receipts[-1].failed:
        failed = receipts[-1]
        return EnsureResult(
            requirement=name,
            outcome=EnsureOutcome.FATAL,
            strategy=strategy.label,
            status=status,
            message=f"{name} installation failed at '{failed.command}': {failed.detail}",
            receipts=receipts,
        )

    # ── Re-verify ───────────────────────────────────────────────
    installed = probe_tool(requirement.tool, runner)
    if assess(requirement, installed) != Assessment.SATISFIED:
        return EnsureResult(
            requirement=name,
            outcome=EnsureOutcome.FATAL,
            strategy=strategy.label,
            status=installed,
            message=f"{name} installation failed, please install it manually.",
            receipts=receipts,
        )

    version = f", version: {installed.version}" if installed.version else ""
    console.success(f"{name} installed successfully{version}")
    return EnsureResult(
        requirement=name,
        outcome=EnsureOutcome.SATISFIED,
        installed=True,
        strategy=strategy.label,
        status=installed,
        receipts=receipts,
    )
