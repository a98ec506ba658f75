"""
Supervisor installer — optional PM2 registration.

    use PM2? ──no──→ nothing happens; report shows `npm start`
        │yes
        ▼
    ensure pm2 (npm install -g pm2, no version check)
    pm2 start server.js --name qid-oauth      (in the install dir)
    start on boot? ──yes──→ pm2 startup, pm2 save
"""

from __future__ import annotations

import logging

from provisioner.core.config.defaults import ENTRY_SCRIPT, SERVICE_NAME
from provisioner.core.context import ProvisionContext
from provisioner.core.errors import DependencyError, ExternalToolError
from provisioner.core.models.install import SupervisorChoice
from provisioner.core.services.tool_install import SUPERVISOR_REQUIREMENT, ensure

logger = logging.getLogger(__name__)

START_COMMAND = ["pm2", "start", ENTRY_SCRIPT, "--name", SERVICE_NAME]
BOOT_COMMANDS = (["pm2", "startup"], ["pm2", "save"])


def setup_supervisor(ctx: ProvisionContext) -> SupervisorChoice:
    """Register the application with PM2 if the operator wants it.

    Raises:
        DependencyError: PM2 could not be installed.
        ExternalToolError: A pm2 command failed.
    """
    console, runner, prompter = ctx.console, ctx.runner, ctx.prompter

    console.info("Setting up PM2 process management...")
    if not prompter.ask("use_supervisor"):
        console.info("Skipping PM2 setup. Start the application manually with 'npm start'.")
        return SupervisorChoice(enabled=False)

    result = ensure(
        SUPERVISOR_REQUIREMENT, ctx.profile,
        runner=runner, prompter=prompter, console=console,
    )
    ctx.dependencies.append(result)
    if not result.ok:
        raise DependencyError(result.message)

    cwd = str(ctx.target.directory_path)
    _run(ctx, START_COMMAND, cwd)

    auto_start = bool(prompter.ask("supervisor_startup"))
    if auto_start:
        for command in BOOT_COMMANDS:
            _run(ctx, command, cwd)

    console.success("PM2 setup complete. The application is running.")
    return SupervisorChoice(enabled=True, auto_start_on_boot=auto_start)


def _run(ctx: ProvisionContext, command: list[str], cwd: str) -> None:
    receipt = ctx.runner.run(command, cwd=cwd)
    if receipt.failed:
        raise ExternalToolError(f"PM2 command failed: {receipt.command}: {receipt.detail}", receipt)
