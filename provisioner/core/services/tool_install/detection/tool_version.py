"""
L3 Detection — Tool presence and version probing.

Read-only probes: PATH lookup plus the tool's own ``--version`` output.
"""

from __future__ import annotations

import logging
import re

from provisioner.adapters.base import Runner
from provisioner.core.models.host import Tool, ToolStatus
from provisioner.core.services.tool_install.data.recipes import TOOL_BINARIES

logger = logging.getLogger(__name__)

VERSION_COMMANDS: dict[str, tuple[list[str], str]] = {
    "node":   (["node", "--version"],   r"v(\d+\.\d+\.\d+)"),
    "npm":    (["npm", "--version"],    r"(\d+\.\d+\.\d+)"),
    "mongod": (["mongod", "--version"], r"db version v?(\d+\.\d+\.\d+)"),
    "unzip":  (["unzip", "-v"],         r"UnZip\s+(\d+\.\d+)"),
    "curl":   (["curl", "--version"],   r"curl\s+(\d+\.\d+\.\d+)"),
    "wget":   (["wget", "--version"],   r"Wget\s+(\d+\.\d+(?:\.\d+)?)"),
    "pm2":    (["pm2", "--version"],    r"(\d+\.\d+\.\d+)"),
}


def get_tool_version(binary: str, runner: Runner) -> str | None:
    """Installed version of ``binary``, or None if it can't be determined."""
    entry = VERSION_COMMANDS.get(binary)
    if not entry:
        return None

    cmd, pattern = entry
    receipt = runner.run(cmd, echo=False)
    if not receipt.ok:
        logger.debug("Version probe failed for %s: %s", binary, receipt.error)
        return None

    match = re.search(pattern, receipt.output)
    return match.group(1) if match else None


def probe_tool(tool: Tool, runner: Runner) -> ToolStatus:
    """Find the first available binary for ``tool`` and read its version.

    For roles with several candidates (curl, wget) the first one on PATH
    wins, which is also the download tool the bundle fetcher prefers.
    """
    for binary in TOOL_BINARIES[tool]:
        path = runner.which(binary)
        if path is None:
            continue
        version = get_tool_version(binary, runner)
        logger.debug("Probed %s: %s at %s (version %s)", tool.value, binary, path, version)
        return ToolStatus(tool=tool, binary=binary, path=path, version=version)

    logger.debug("Probed %s: not found", tool.value)
    return ToolStatus(tool=tool)
