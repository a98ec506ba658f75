"""
L3 Detection — Host environment (Environment Prober).

Builds the HostProfile that drives every later decision. Probing has
no side effects beyond running version queries.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from provisioner.adapters.base import Runner
from provisioner.core.models.host import HostProfile, OsFamily, Tool
from provisioner.core.services.tool_install.detection.tool_version import probe_tool

logger = logging.getLogger(__name__)

DEBIAN_MARKER = "etc/debian_version"
REDHAT_MARKER = "etc/redhat-release"


def detect_os_family(system: str | None = None, root: Path = Path("/")) -> OsFamily:
    """Classify the host by fixed signatures, checked in order.

    Darwin kernel → macos; Debian version marker → debian; RedHat
    release marker → redhat; anything else → unknown.

    Args:
        system: Kernel name as ``uname`` reports it (default: this host).
        root: Filesystem root holding the marker files.
    """
    if system is None:
        system = platform.system()

    if system == "Darwin":
        return OsFamily.MACOS
    if (root / DEBIAN_MARKER).is_file():
        return OsFamily.DEBIAN
    if (root / REDHAT_MARKER).is_file():
        return OsFamily.REDHAT
    return OsFamily.UNKNOWN


def probe_host(
    runner: Runner,
    *,
    system: str | None = None,
    root: Path = Path("/"),
    tools: tuple[Tool, ...] = tuple(Tool),
) -> HostProfile:
    """Probe the OS family and every tool role.

    An unknown OS family is not an error; callers warn about it
    because it disables OS-specific install strategies.
    """
    if system is None:
        system = platform.system()
    os_family = detect_os_family(system, root)
    logger.info("Detected OS family: %s (%s)", os_family.value, system)

    return HostProfile(
        os_family=os_family,
        system=system,
        is_root=runner.is_root,
        tools={tool: probe_tool(tool, runner) for tool in tools},
    )
