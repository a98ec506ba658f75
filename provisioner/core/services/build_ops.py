"""
Dependency & build driver — backend install, frontend install + build.

Fixed sequence, run in the install directory. No retries: the first
non-zero exit aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from provisioner.core.context import ProvisionContext
from provisioner.core.errors import ExternalToolError
from provisioner.core.models.action import Receipt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildStep:
    name: str
    commands: tuple[tuple[str, ...], ...]


BUILD_STEPS: tuple[BuildStep, ...] = (
    BuildStep("backend", (("npm", "install"),)),
    BuildStep("frontend", (("npm", "run", "client-install"), ("npm", "run", "build"))),
)


def run_build(ctx: ProvisionContext) -> list[Receipt]:
    """Install backend dependencies, then install and build the frontend.

    Raises:
        ExternalToolError: Any build command exited non-zero.
    """
    console, runner = ctx.console, ctx.runner
    cwd = str(ctx.target.directory_path)
    receipts: list[Receipt] = []

    for step in BUILD_STEPS:
        console.info(f"Installing and building the {step.name}...")
        for command in step.commands:
            receipt = runner.run(list(command), cwd=cwd)
            receipts.append(receipt)
            if receipt.failed:
                raise ExternalToolError(
                    f"{step.name.capitalize()} build failed at '{receipt.command}': "
                    f"{receipt.detail}",
                    receipt,
                )
        logger.debug("Build step %s finished", step.name)

    console.success("Dependencies installed and frontend built.")
    return receipts
