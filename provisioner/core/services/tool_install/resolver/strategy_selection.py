"""
L2 Resolver — Requirement assessment and strategy selection.

Pure functions: no probing, no prompting, no subprocesses.
"""

from __future__ import annotations

from enum import Enum

from provisioner.core.models.host import OsFamily, Tool, ToolStatus
from provisioner.core.models.requirement import DependencyRequirement, InstallStrategy
from provisioner.core.services.tool_install.data.recipes import DEFAULT_STRATEGIES, STRATEGIES


class Assessment(str, Enum):
    SATISFIED = "satisfied"
    MISSING = "missing"
    OUTDATED = "outdated"


def assess(requirement: DependencyRequirement, status: ToolStatus) -> Assessment:
    """Compare a probed tool against its requirement.

    A present tool whose version can't be parsed is accepted: the
    threshold only rejects versions it can read.
    """
    if not status.present:
        return Assessment.MISSING
    if requirement.min_major is None:
        return Assessment.SATISFIED
    major = status.major
    if major is not None and major < requirement.min_major:
        return Assessment.OUTDATED
    return Assessment.SATISFIED


def select_strategy(tool: Tool, os_family: OsFamily) -> InstallStrategy | None:
    """Exactly one strategy for ``(tool, os_family)``, or None."""
    return STRATEGIES.get((tool, os_family)) or DEFAULT_STRATEGIES.get(tool)


def describe_shortfall(
    requirement: DependencyRequirement,
    status: ToolStatus,
    assessment: Assessment,
) -> str:
    """Operator-facing explanation of why a requirement is unmet."""
    wanted = f"v{requirement.min_major}.x or later" if requirement.min_major else None
    if assessment == Assessment.OUTDATED:
        return (
            f"{requirement.name} version is too old. "
            f"Current: {status.version}, required: {wanted}."
        )
    if wanted:
        return f"{requirement.name} is not installed. {requirement.name} {wanted} is required."
    return f"{requirement.name} is not installed."
