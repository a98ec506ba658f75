"""
Dependency installation — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → resolver → detection → execution →
orchestration)::

    from provisioner.core.services.tool_install import ensure, probe_host
"""

# ── L0: Data ──
from provisioner.core.services.tool_install.data.recipes import (  # noqa: F401
    DEFAULT_STRATEGIES,
    DOWNLOAD_REQUIREMENT,
    REQUIREMENTS,
    STRATEGIES,
    SUPERVISOR_REQUIREMENT,
    TOOL_BINARIES,
)

# ── L2: Resolver ──
from provisioner.core.services.tool_install.resolver.strategy_selection import (  # noqa: F401
    Assessment,
    assess,
    select_strategy,
)

# ── L3: Detection ──
from provisioner.core.services.tool_install.detection.environment import (  # noqa: F401
    detect_os_family,
    probe_host,
)
from provisioner.core.services.tool_install.detection.tool_version import (  # noqa: F401
    get_tool_version,
    probe_tool,
)

# ── L4: Execution ──
from provisioner.core.services.tool_install.execution.strategy_runner import (  # noqa: F401
    execute_strategy,
)

# ── L5: Orchestration ──
from provisioner.core.services.tool_install.orchestration.ensure import (  # noqa: F401
    ensure,
)
