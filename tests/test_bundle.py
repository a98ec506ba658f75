"""
Tests for the bundle fetcher — download, extract, flatten.
"""

from pathlib import Path

import pytest

from provisioner.adapters.mock import MockRunner
from provisioner.core.config.defaults import ARCHIVE_NAME, SCRATCH_DIR
from provisioner.core.errors import BundleStructureError, DependencyError, ExternalToolError, InputError
from provisioner.core.services.bundle_ops import (
    download_command,
    fetch_bundle,
    find_bundle_root,
    flatten_into,
    resolve_install_dir,
)


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    return tmp_path / "qid-oauth"


class TestHelpers:
    def test_default_dir_is_relative_to_base(self, tmp_path):
        assert resolve_install_dir("", tmp_path) == tmp_path / "qid-oauth"

    def test_absolute_answer_kept(self, tmp_path):
        assert resolve_install_dir("/opt/qid", tmp_path) == Path("/opt/qid")

    def test_download_commands(self, tmp_path):
        dest = tmp_path / "a.zip"
        assert download_command("curl", "http://x/a.zip", dest) == [
            "curl", "-fL", "http://x/a.zip", "-o", str(dest),
        ]
        assert download_command("wget", "http://x/a.zip", dest) == [
            "wget", "-O", str(dest), "http://x/a.zip",
        ]

    def test_download_command_unknown_tool(self, tmp_path):
        with pytest.raises(ValueError):
            download_command("aria2c", "http://x", tmp_path / "a.zip")

    def test_bundle_root_missing_scratch(self, tmp_path):
        assert find_bundle_root(tmp_path / "nope") is None

    def test_bundle_root_first_by_name(self, tmp_path):
        for name in ("zeta", "alpha", "mid"):
            (tmp_path / name).mkdir()
        (tmp_path / "aaa.txt").write_text("file, not a directory")
        assert find_bundle_root(tmp_path) == tmp_path / "alpha"

    def test_flatten_moves_dotfiles_and_replaces(self, tmp_path):
        source = tmp_path / "scratch" / "bundle"
        (source / "lib").mkdir(parents=True)
        (source / ".env.example").write_text("new")
        (source / "lib" / "a.js").write_text("new")
        target = tmp_path
        (target / "lib").mkdir()
        (target / "lib" / "stale.js").write_text("old")

        moved = flatten_into(source, target)

        assert sorted(moved) == [".env.example", "lib"]
        assert (target / ".env.example").read_text() == "new"
        assert not (target / "lib" / "stale.js").exists()
        assert list(source.iterdir()) == []


class TestFetchBundle:
    def test_flattens_bundle(self, runner, make_ctx, script_bundle, install_dir):
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)

        target = fetch_bundle(ctx)

        assert target.directory_path == install_dir
        assert (install_dir / "server.js").is_file()
        assert (install_dir / ".env.example").is_file()
        assert (install_dir / "client" / "package.json").is_file()
        assert not (install_dir / "qid-oauth-v1").exists()
        assert not (install_dir / SCRATCH_DIR).exists()
        assert not (install_dir / ARCHIVE_NAME).exists()
        assert target.is_populated()

    def test_download_then_extract(self, runner, make_ctx, script_bundle, install_dir):
        script_bundle(runner, install_dir)
        fetch_bundle(make_ctx(runner, source_url="https://example.com/app.zip"))
        assert runner.call_log[0].startswith("curl -fL https://example.com/app.zip -o ")
        assert runner.call_log[1].startswith("unzip -q ")
        assert runner.call_log[1].endswith(str(install_dir / SCRATCH_DIR))

    def test_wget_when_curl_missing(self, all_tools, make_ctx, script_bundle, install_dir):
        del all_tools["curl"]
        all_tools["wget"] = "GNU Wget 1.21.4"
        runner = MockRunner(all_tools)
        script_bundle(runner, install_dir)
        fetch_bundle(make_ctx(runner))
        assert runner.call_log[0].startswith("wget -O ")

    def test_custom_directory(self, runner, make_ctx, script_bundle, tmp_path):
        custom = tmp_path / "srv" / "qid"
        script_bundle(runner, custom)
        target = fetch_bundle(make_ctx(runner, {"install_dir": str(custom)}))
        assert target.directory_path == custom
        assert (custom / "server.js").is_file()

    def test_existing_entries_overwritten(self, runner, make_ctx, script_bundle, install_dir):
        install_dir.mkdir()
        (install_dir / "server.js").write_text("old")
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)
        fetch_bundle(ctx)
        assert (install_dir / "server.js").read_text() == "require('./app');\n"
        assert install_dir not in ctx.created_paths

    def test_records_created_paths(self, runner, make_ctx, script_bundle, install_dir):
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)
        fetch_bundle(ctx)
        assert ctx.created_paths[0] == install_dir

    def test_leftovers_from_earlier_run(self, runner, make_ctx, script_bundle, install_dir):
        stale = install_dir / SCRATCH_DIR / "aaa-stale"
        stale.mkdir(parents=True)
        (stale / "old.txt").write_text("old")
        (install_dir / ARCHIVE_NAME).write_bytes(b"partial")
        script_bundle(runner, install_dir)
        ctx = make_ctx(runner)

        fetch_bundle(ctx)

        assert (install_dir / "server.js").is_file()
        assert not (install_dir / "old.txt").exists()
        assert install_dir / ARCHIVE_NAME not in ctx.created_paths

    def test_multiple_top_level_dirs_first_wins(self, runner, make_ctx, script_bundle, install_dir):
        script_bundle(runner, install_dir, {
            "second/only-in-second.txt": "2",
            "first/only-in-first.txt": "1",
        })
        fetch_bundle(make_ctx(runner))
        assert (install_dir / "only-in-first.txt").is_file()
        assert not (install_dir / "only-in-second.txt").exists()


class TestFetchBundleFailures:
    @pytest.mark.parametrize("url", ["", "   "])
    def test_empty_url_aborts_before_mkdir(self, runner, make_ctx, install_dir, url):
        ctx = make_ctx(runner, source_url=url)
        with pytest.raises(InputError):
            fetch_bundle(ctx)
        assert not install_dir.exists()
        assert ctx.prompter.asked == []
        assert runner.call_count == 0

    def test_no_directory_in_archive(self, runner, make_ctx, script_bundle, install_dir):
        script_bundle(runner, install_dir, {"server.js": "x", "README.md": "y"})
        with pytest.raises(BundleStructureError):
            fetch_bundle(make_ctx(runner))
        assert not (install_dir / "server.js").exists()
        assert not (install_dir / "README.md").exists()

    def test_no_download_tool(self, make_ctx, install_dir):
        with pytest.raises(DependencyError):
            fetch_bundle(make_ctx(MockRunner({"unzip": "UnZip 6.00"})))

    def test_download_failure(self, runner, make_ctx):
        runner.on("curl -fL", fail=True, error="curl: (22) 404")
        with pytest.raises(ExternalToolError) as exc:
            fetch_bundle(make_ctx(runner))
        assert "404" in str(exc.value)
        assert exc.value.receipt.failed
        assert runner.commands_matching("unzip") == []

    def test_extract_failure(self, runner, make_ctx):
        runner.on("unzip -q", fail=True, error="End-of-central-directory signature not found")
        with pytest.raises(ExternalToolError, match="Extraction failed"):
            fetch_bundle(make_ctx(runner))

    def test_install_path_is_a_file(self, runner, make_ctx, install_dir):
        install_dir.write_text("not a dir")
        with pytest.raises(InputError):
            fetch_bundle(make_ctx(runner))
