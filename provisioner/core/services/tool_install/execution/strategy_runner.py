"""
L4 Execution — Run one install strategy.

Bootstrap commands run first (only when their binary is absent), then
the strategy's commands in order. The first failing command stops the
strategy; nothing already run is undone.
"""

from __future__ import annotations

import logging
import os

from provisioner.adapters.base import Runner
from provisioner.core.models.action import Receipt
from provisioner.core.models.requirement import InstallStrategy

logger = logging.getLogger(__name__)


def execute_strategy(
    strategy: InstallStrategy,
    runner: Runner,
    *,
    root: bool = False,
) -> list[Receipt]:
    """Execute ``strategy`` and return the receipts of every command run.

    The last receipt is failed if and only if the strategy failed.
    """
    receipts: list[Receipt] = []

    for binary, install_cmd in strategy.bootstrap.items():
        if runner.which(binary):
            continue
        logger.info("Bootstrapping %s for %s", binary, strategy.label)
        receipt = runner.run(install_cmd)
        receipts.append(receipt)
        if receipt.failed:
            return receipts

    for cmd in strategy.render(root=root):
        receipt = runner.run(cmd)
        receipts.append(receipt)
        if receipt.failed:
            logger.warning("Strategy '%s' failed at: %s", strategy.label, cmd)
            return receipts

    if strategy.path_probe:
        probe = runner.run(strategy.path_probe, echo=False)
        if probe.ok and probe.output:
            binary_dir = os.path.dirname(probe.output.strip().splitlines()[-1].strip())
            if binary_dir:
                runner.add_to_path(binary_dir)

    return receipts
