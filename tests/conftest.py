"""
Shared test fixtures and configuration.

Nothing here touches the real host: commands go to a MockRunner,
answers come from a ScriptedPrompter, console output is recorded.
"""

import zipfile
from pathlib import Path

import pytest

from provisioner.adapters.console import RecordingConsole
from provisioner.adapters.mock import MockRunner
from provisioner.adapters.prompt.scripted import ScriptedPrompter
from provisioner.core.config.defaults import ARCHIVE_NAME, SCRATCH_DIR
from provisioner.core.context import ProvisionContext

# Version output as the real tools print it.
ALL_TOOLS = {
    "node": "v16.20.2",
    "npm": "8.19.4",
    "mongod": "db version v4.4.18\nBuild Info: {}",
    "unzip": "UnZip 6.00 of 20 April 2009, by Debian.",
    "curl": "curl 7.81.0 (x86_64-pc-linux-gnu) libcurl/7.81.0",
    "pm2": "5.3.0",
}

BUNDLE = {
    "qid-oauth-v1/server.js": "require('./app');\n",
    "qid-oauth-v1/package.json": '{"name": "qid-oauth"}\n',
    "qid-oauth-v1/.env.example": "PORT=5000\n",
    "qid-oauth-v1/client/package.json": '{"name": "client"}\n',
}


@pytest.fixture
def all_tools() -> dict[str, str]:
    return dict(ALL_TOOLS)


@pytest.fixture
def runner() -> MockRunner:
    """Host with every required tool present and recent enough."""
    return MockRunner(dict(ALL_TOOLS))


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def fs_root(tmp_path: Path):
    """Factory: a fake filesystem root carrying an OS marker file."""

    def _make(family: str) -> Path:
        root = tmp_path / f"root-{family}"
        (root / "etc").mkdir(parents=True, exist_ok=True)
        if family == "debian":
            (root / "etc" / "debian_version").write_text("12.5\n")
        elif family == "redhat":
            (root / "etc" / "redhat-release").write_text("Rocky Linux release 9.3\n")
        return root

    return _make


@pytest.fixture
def make_ctx(tmp_path: Path, console: RecordingConsole):
    """Factory: a ProvisionContext rooted in ``tmp_path``."""

    def _make(runner: MockRunner, answers: dict | None = None, **kwargs) -> ProvisionContext:
        return ProvisionContext(
            runner=runner,
            prompter=ScriptedPrompter(answers),
            console=console,
            base_dir=tmp_path,
            **kwargs,
        )

    return _make


@pytest.fixture
def script_bundle():
    """Factory: make the mock download write a real zip and unzip extract it.

    ``entries`` maps archive member names to contents; a name ending in
    ``/`` is a bare directory entry.
    """

    def _script(runner: MockRunner, install_dir: Path, entries: dict[str, str] | None = None) -> None:
        entries = BUNDLE if entries is None else entries
        archive = install_dir / ARCHIVE_NAME

        def download(_cwd):
            with zipfile.ZipFile(archive, "w") as zf:
                for name, content in entries.items():
                    zf.writestr(name, content)

        def extract(_cwd):
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(install_dir / SCRATCH_DIR)

        runner.on("curl -fL", effect=download)
        runner.on("wget -O", effect=download)
        runner.on("unzip -q", effect=extract)

    return _script
