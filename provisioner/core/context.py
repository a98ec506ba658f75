"""
Provision context — everything one installer run knows and decides.

There is no module-level state: the CLI builds one ProvisionContext
and hands it to every stage, and each stage records its outputs on it
(profile, target, runtime config, supervisor choice). Tests build the
same context around a MockRunner and a ScriptedPrompter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from provisioner.adapters.base import Runner
from provisioner.adapters.console import Console
from provisioner.adapters.prompt.base import Prompter
from provisioner.core.config.defaults import DEFAULT_SOURCE_URL
from provisioner.core.models.host import HostProfile
from provisioner.core.models.install import InstallTarget, RuntimeConfig, SupervisorChoice
from provisioner.core.models.requirement import EnsureResult


@dataclass
class ProvisionContext:
    runner: Runner
    prompter: Prompter
    console: Console
    source_url: str = DEFAULT_SOURCE_URL
    base_dir: Path = field(default_factory=Path.cwd)  # relative install dirs resolve here

    # ── Filled in by the stages, in pipeline order ──
    profile: HostProfile | None = None
    dependencies: list[EnsureResult] = field(default_factory=list)
    target: InstallTarget | None = None
    runtime_config: RuntimeConfig | None = None
    supervisor: SupervisorChoice = field(default_factory=SupervisorChoice)

    # Paths this run created, newest last (for the optional cleanup hook).
    created_paths: list[Path] = field(default_factory=list)

    def record_created(self, path: Path) -> None:
        if path not in self.created_paths:
            self.created_paths.append(path)
