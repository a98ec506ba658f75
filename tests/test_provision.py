"""
End-to-end tests for the provisioning pipeline (MockRunner host).
"""

from pathlib import Path

import pytest

from provisioner.adapters.mock import MockRunner
from provisioner.core.errors import AbortedByUser, BundleStructureError, DependencyError, ExternalToolError
from provisioner.core.models.install import InstallTarget
from provisioner.core.use_cases import provision
from provisioner.core.use_cases.provision import check_requirements, cleanup_created, run_provision

DECLINE_OPTIONAL = {"use_supervisor": False, "custom_port": False}

APPROVE_INSTALLS = {
    "install_runtime": True,
    "install_package_manager": True,
    "install_database": True,
    "install_archive_tool": True,
}


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    return tmp_path / "qid-oauth"


class TestCheckRequirements:
    def test_satisfied_host(self, runner, make_ctx, fs_root):
        ctx = make_ctx(runner)
        profile = check_requirements(ctx, system="Linux", fs_root=fs_root("debian"))
        assert ctx.profile is profile
        assert len(ctx.dependencies) == 5
        assert runner.call_count == 0

    def test_unknown_os_warns(self, runner, make_ctx, fs_root):
        ctx = make_ctx(runner)
        check_requirements(ctx, system="Linux", fs_root=fs_root("none"))
        assert any("Unrecognized operating system" in w for w in ctx.console.of("warning"))

    def test_decline_raises_abort(self, make_ctx, fs_root):
        ctx = make_ctx(MockRunner())
        with pytest.raises(AbortedByUser, match="Node.js is required"):
            check_requirements(ctx, system="Linux", fs_root=fs_root("debian"))

    def test_fatal_raises_dependency_error(self, all_tools, make_ctx, fs_root):
        del all_tools["mongod"]
        ctx = make_ctx(MockRunner(all_tools), {"install_database": True})
        with pytest.raises(DependencyError, match="Cannot install MongoDB"):
            check_requirements(ctx, system="Linux", fs_root=fs_root("none"))


class TestRunProvision:
    def test_optional_prompts_declined(self, runner, make_ctx, script_bundle, fs_root, install_dir):
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner, DECLINE_OPTIONAL)

        result = run_provision(ctx, system="Linux", fs_root=fs_root("debian"))

        assert result.installed == []
        assert not result.report.supervised
        assert result.report.url == "http://localhost:5000"
        assert (install_dir / "server.js").is_file()
        assert (install_dir / "config" / "production.json").is_file()
        assert (install_dir / ".env").is_file()
        assert [c.split()[0] for c in runner.call_log] == ["curl", "unzip", "npm", "npm", "npm"]
        assert runner.commands_matching("pm2") == []

    def test_fresh_debian_host(self, make_ctx, script_bundle, fs_root, install_dir):
        runner = MockRunner({"curl": "curl 7.81.0 (x86_64-pc-linux-gnu)"})
        runner.on("apt-get install -y nodejs", installs={"node": "v14.21.3", "npm": "6.14.18"})
        runner.on("apt-get install -y mongodb-org", installs={"mongod": "db version v4.4.18"})
        runner.on("apt-get install -y unzip", installs={"unzip": "UnZip 6.00"})
        runner.on("npm install -g pm2", installs={"pm2": "5.3.0"})
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner, {**APPROVE_INSTALLS, "custom_port": True, "port": "8080"})

        result = run_provision(ctx, system="Linux", fs_root=fs_root("debian"))

        assert result.installed == ["Node.js", "MongoDB", "unzip", "PM2"]
        assert result.report.port == 8080
        assert result.report.supervised
        assert runner.call_log[-3:] == [
            "pm2 start server.js --name qid-oauth", "pm2 startup", "pm2 save",
        ]
        assert "install_package_manager" not in ctx.prompter.asked

    def test_report_printed(self, runner, make_ctx, script_bundle, fs_root, install_dir):
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)
        run_provision(ctx, system="Darwin", fs_root=fs_root("none"))
        assert any("pm2 logs qid-oauth" in line for line in ctx.console.lines)

    def test_declined_install_stops_before_bundle(self, all_tools, make_ctx, fs_root, install_dir):
        del all_tools["unzip"]
        runner = MockRunner(all_tools)
        with pytest.raises(AbortedByUser):
            run_provision(make_ctx(runner), system="Linux", fs_root=fs_root("debian"))
        assert not install_dir.exists()
        assert runner.call_count == 0

    def test_build_failure_stops_pipeline(self, runner, make_ctx, script_bundle, fs_root, install_dir):
        runner.on("npm run build", fail=True)
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)
        with pytest.raises(ExternalToolError):
            run_provision(ctx, system="Linux", fs_root=fs_root("debian"))
        assert runner.commands_matching("pm2") == []
        assert ctx.supervisor.enabled is False

    def test_empty_bundle_dir_blocks_later_stages(self, runner, make_ctx, fs_root, tmp_path, monkeypatch):
        empty = tmp_path / "empty"
        empty.mkdir()
        monkeypatch.setattr(
            provision, "fetch_bundle",
            lambda ctx: InstallTarget(directory_path=empty, source_archive_url="https://x/a.zip"),
        )
        ctx = make_ctx(runner)
        with pytest.raises(BundleStructureError):
            run_provision(ctx, system="Linux", fs_root=fs_root("debian"))
        assert ctx.runtime_config is None
        assert runner.call_count == 0


class TestCleanup:
    def test_removes_created_install_dir(self, runner, make_ctx, script_bundle, fs_root, install_dir):
        runner.on("npm install", fail=True)
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)
        with pytest.raises(ExternalToolError):
            run_provision(ctx, system="Linux", fs_root=fs_root("debian"))
        assert install_dir.exists()

        removed = cleanup_created(ctx)

        assert install_dir in removed
        assert not install_dir.exists()

    def test_keeps_preexisting_dir(self, runner, make_ctx, script_bundle, fs_root, install_dir):
        install_dir.mkdir()
        (install_dir / "keep.txt").write_text("mine")
        script_bundle(runner, install_dir, {"only-a-file.txt": "x"})
        ctx = make_ctx(runner)
        with pytest.raises(BundleStructureError):
            run_provision(ctx, system="Linux", fs_root=fs_root("debian"))

        cleanup_created(ctx)

        assert (install_dir / "keep.txt").read_text() == "mine"
        assert not (install_dir / "qid-oauth.zip").exists()
        assert not (install_dir / "temp").exists()

    def test_nothing_created_nothing_removed(self, runner, make_ctx):
        assert cleanup_created(make_ctx(runner)) == []
