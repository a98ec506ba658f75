"""
L0 Data — Requirements and the install strategy table.

Pure data, plus the shell fragment helper it is built from. Adding an OS
family or a dependency is an edit to ``STRATEGIES``, never to the
control flow in ``ensure``.

Strategy lookup is ``(tool, os_family)`` first, then the tool's
OS-agnostic ``DEFAULT_STRATEGIES`` entry. A missing entry means
"cannot auto-install here".
"""

from __future__ import annotations

from provisioner.core.config.defaults import MONGO_MIN_MAJOR, NODE_MIN_MAJOR, NPM_MIN_MAJOR
from provisioner.core.models.host import OsFamily, Tool
from provisioner.core.models.requirement import DependencyRequirement, InstallStrategy

# ── Binaries per tool role (preference order) ───────────────────

TOOL_BINARIES: dict[Tool, tuple[str, ...]] = {
    Tool.RUNTIME: ("node",),
    Tool.PACKAGE_MANAGER: ("npm",),
    Tool.DATABASE: ("mongod",),
    Tool.ARCHIVE_TOOL: ("unzip",),
    Tool.DOWNLOAD_TOOL: ("curl", "wget"),
    Tool.SUPERVISOR: ("pm2",),
}


# ── Requirements (checked in this order) ────────────────────────

REQUIREMENTS: tuple[DependencyRequirement, ...] = (
    DependencyRequirement(
        name="Node.js", tool=Tool.RUNTIME, min_major=NODE_MIN_MAJOR,
        question="install_runtime",
    ),
    DependencyRequirement(
        name="npm", tool=Tool.PACKAGE_MANAGER, min_major=NPM_MIN_MAJOR,
        install_as=Tool.RUNTIME, question="install_package_manager",
    ),
    DependencyRequirement(
        name="MongoDB", tool=Tool.DATABASE, min_major=MONGO_MIN_MAJOR,
        question="install_database", external_question="database_running",
    ),
    DependencyRequirement(
        name="unzip", tool=Tool.ARCHIVE_TOOL,
        question="install_archive_tool",
    ),
    DependencyRequirement(
        name="curl or wget", tool=Tool.DOWNLOAD_TOOL,
        confirm_install=False,
    ),
)

DOWNLOAD_REQUIREMENT = REQUIREMENTS[-1]

SUPERVISOR_REQUIREMENT = DependencyRequirement(
    name="PM2", tool=Tool.SUPERVISOR, confirm_install=False,
)


# ── Shared command fragments ────────────────────────────────────


def fetch_to_stdout(url: str, curl_flags: str = "-fsSL") -> str:
    """Shell fragment printing ``url`` with curl, or wget when curl is absent."""
    return f"(curl {curl_flags} {url} || wget -qO- {url})"


HOMEBREW_INSTALL = (
    '/bin/bash -c "$'
    + fetch_to_stdout("https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh")
    + '"'
)

_NVM_INSTALL = (
    fetch_to_stdout("https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.1/install.sh", "-fsS")
    + " | bash"
)
_NVM_ENV = 'export NVM_DIR="$HOME/.nvm"; . "$NVM_DIR/nvm.sh"'

_MONGO_KEY_URL = "https://www.mongodb.org/static/pgp/server-4.4.asc"
_MONGO_YUM_REPO = (
    "printf '%s\\n' "
    "'[mongodb-org-4.4]' "
    "'name=MongoDB Repository' "
    "'baseurl=https://repo.mongodb.org/yum/redhat/$releasever/mongodb-org/4.4/x86_64/' "
    "'gpgcheck=1' "
    "'enabled=1' "
    f"'gpgkey={_MONGO_KEY_URL}' "
    "| {sudo}tee /etc/yum.repos.d/mongodb-org-4.4.repo > /dev/null"
)

_BREW = {"brew": HOMEBREW_INSTALL}


# ── Strategy table ──────────────────────────────────────────────

STRATEGIES: dict[tuple[Tool, OsFamily], InstallStrategy] = {

    # ── Node.js (npm ships with it) ─────────────────────────────

    (Tool.RUNTIME, OsFamily.MACOS): InstallStrategy(
        label="Homebrew node@14",
        commands=[
            "brew install node@14",
            "brew link --force node@14",
        ],
        requires=[Tool.DOWNLOAD_TOOL],
        bootstrap=_BREW,
    ),
    (Tool.RUNTIME, OsFamily.DEBIAN): InstallStrategy(
        label="NodeSource + apt",
        commands=[
            fetch_to_stdout("https://deb.nodesource.com/setup_14.x") + " | {sudo_e}bash -",
            "{sudo}apt-get install -y nodejs",
        ],
        requires=[Tool.DOWNLOAD_TOOL],
    ),
    (Tool.RUNTIME, OsFamily.REDHAT): InstallStrategy(
        label="NodeSource + yum",
        commands=[
            fetch_to_stdout("https://rpm.nodesource.com/setup_14.x") + " | {sudo}bash -",
            "{sudo}yum install -y nodejs",
        ],
        requires=[Tool.DOWNLOAD_TOOL],
    ),
    (Tool.RUNTIME, OsFamily.UNKNOWN): InstallStrategy(
        label="nvm",
        commands=[
            _NVM_INSTALL,
            f"bash -c '{_NVM_ENV} && nvm install 14 && nvm alias default 14'",
        ],
        requires=[Tool.DOWNLOAD_TOOL],
        path_probe=f"bash -c '{_NVM_ENV} && nvm which 14'",
    ),

    # ── MongoDB 4.4 ─────────────────────────────────────────────

    (Tool.DATABASE, OsFamily.MACOS): InstallStrategy(
        label="Homebrew mongodb-community@4.4",
        commands=[
            "brew tap mongodb/brew",
            "brew install mongodb-community@4.4",
            "brew services start mongodb-community@4.4",
        ],
        requires=[Tool.DOWNLOAD_TOOL],
        bootstrap=_BREW,
    ),
    (Tool.DATABASE, OsFamily.DEBIAN): InstallStrategy(
        label="MongoDB apt repository",
        commands=[
            fetch_to_stdout(_MONGO_KEY_URL) + " | {sudo}apt-key add -",
            'echo "deb [ arch=amd64,arm64 ] https://repo.mongodb.org/apt/ubuntu '
            '$(lsb_release -cs)/mongodb-org/4.4 multiverse" '
            "| {sudo}tee /etc/apt/sources.list.d/mongodb-org-4.4.list",
            "{sudo}apt-get update",
            "{sudo}apt-get install -y mongodb-org",
            "{sudo}systemctl start mongod",
            "{sudo}systemctl enable mongod",
        ],
        requires=[Tool.DOWNLOAD_TOOL],
    ),
    (Tool.DATABASE, OsFamily.REDHAT): InstallStrategy(
        label="MongoDB yum repository",
        commands=[
            _MONGO_YUM_REPO,
            "{sudo}yum install -y mongodb-org",
            "{sudo}systemctl start mongod",
            "{sudo}systemctl enable mongod",
        ],
    ),

    # ── unzip ───────────────────────────────────────────────────

    (Tool.ARCHIVE_TOOL, OsFamily.MACOS): InstallStrategy(
        label="Homebrew unzip",
        commands=["brew install unzip"],
        requires=[Tool.DOWNLOAD_TOOL],
        bootstrap=_BREW,
    ),
    (Tool.ARCHIVE_TOOL, OsFamily.DEBIAN): InstallStrategy(
        label="apt unzip",
        commands=["{sudo}apt-get update && {sudo}apt-get install -y unzip"],
    ),
    (Tool.ARCHIVE_TOOL, OsFamily.REDHAT): InstallStrategy(
        label="yum unzip",
        commands=["{sudo}yum install -y unzip"],
    ),

    # ── curl (either curl or wget satisfies the requirement) ────

    (Tool.DOWNLOAD_TOOL, OsFamily.MACOS): InstallStrategy(
        label="Homebrew curl",
        commands=["brew install curl"],
    ),
    (Tool.DOWNLOAD_TOOL, OsFamily.DEBIAN): InstallStrategy(
        label="apt curl",
        commands=["{sudo}apt-get update && {sudo}apt-get install -y curl"],
    ),
    (Tool.DOWNLOAD_TOOL, OsFamily.REDHAT): InstallStrategy(
        label="yum curl",
        commands=["{sudo}yum install -y curl"],
    ),
}


DEFAULT_STRATEGIES: dict[Tool, InstallStrategy] = {
    Tool.SUPERVISOR: InstallStrategy(
        label="npm global pm2",
        commands=["npm install -g pm2"],
    ),
}
