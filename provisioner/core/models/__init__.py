"""
Domain models — Pydantic types for the provisioner.

All models are re-exported here for convenient access:

    from provisioner.core.models import HostProfile, Tool, RuntimeConfig
"""

from provisioner.core.models.action import Receipt
from provisioner.core.models.host import HostProfile, OsFamily, Tool, ToolStatus
from provisioner.core.models.install import InstallTarget, RuntimeConfig, SupervisorChoice
from provisioner.core.models.question import Question
from provisioner.core.models.requirement import (
    DependencyRequirement,
    EnsureOutcome,
    EnsureResult,
    InstallStrategy,
)

__all__ = [
    "DependencyRequirement",
    "EnsureOutcome",
    "EnsureResult",
    "HostProfile",
    "InstallStrategy",
    "InstallTarget",
    "OsFamily",
    "Question",
    "Receipt",
    "RuntimeConfig",
    "SupervisorChoice",
    "Tool",
    "ToolStatus",
]
