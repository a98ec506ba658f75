"""
Bundle fetcher — download the application archive and unpack it.

    validate URL → choose directory → download → unzip into temp/
    → take the first top-level directory → move its contents up
    → remove temp/ and the archive

Any failure aborts with whatever was already written left in place;
the optional cleanup hook in the use case is the only undo.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from provisioner.core.config.defaults import ARCHIVE_NAME, DEFAULT_INSTALL_DIR, SCRATCH_DIR
from provisioner.core.context import ProvisionContext
from provisioner.core.errors import BundleStructureError, DependencyError, ExternalToolError, InputError
from provisioner.core.models.host import Tool
from provisioner.core.models.install import InstallTarget
from provisioner.core.services.tool_install.data.recipes import TOOL_BINARIES

logger = logging.getLogger(__name__)


# ── Pure helpers ────────────────────────────────────────────────


def resolve_install_dir(answer: str, base_dir: Path) -> Path:
    """Operator answer (or the default) as an absolute path."""
    raw = Path(answer or DEFAULT_INSTALL_DIR).expanduser()
    return raw if raw.is_absolute() else (base_dir / raw)


def download_command(binary: str, url: str, dest: Path) -> list[str]:
    """Command that fetches ``url`` into ``dest`` with curl or wget."""
    if binary == "curl":
        return ["curl", "-fL", url, "-o", str(dest)]
    if binary == "wget":
        return ["wget", "-O", str(dest), url]
    raise ValueError(f"Unsupported download tool: {binary}")


def find_bundle_root(scratch: Path) -> Path | None:
    """First top-level directory of the extracted archive, by name.

    Archives with several top-level directories are not rejected: the
    first one wins.
    """
    if not scratch.is_dir():
        return None
    dirs = sorted(p for p in scratch.iterdir() if p.is_dir())
    if len(dirs) > 1:
        logger.warning(
            "Archive has %d top-level directories, using %s", len(dirs), dirs[0].name,
        )
    return dirs[0] if dirs else None


def flatten_into(source: Path, target: Path) -> list[str]:
    """Move every entry of ``source`` (dotfiles included) into ``target``.

    Existing entries with the same name are replaced.

    Returns:
        Names of the moved entries.
    """
    moved: list[str] = []
    for child in sorted(source.iterdir()):
        dest = target / child.name
        if dest == source or dest in source.parents:
            raise BundleStructureError(
                f"Bundle entry '{child.name}' collides with the extraction directory."
            )
        if dest.is_dir() and not dest.is_symlink():
            shutil.rmtree(dest)
        elif dest.exists() or dest.is_symlink():
            dest.unlink()
        shutil.move(str(child), str(dest))
        moved.append(child.name)
    return moved


# ── Stage ───────────────────────────────────────────────────────


def fetch_bundle(ctx: ProvisionContext) -> InstallTarget:
    """Populate the install directory with the application source tree.

    Raises:
        InputError: Empty source URL (checked before anything is created).
        DependencyError: Neither curl nor wget is available.
        ExternalToolError: Download or extraction failed.
        BundleStructureError: The archive has no top-level directory.
    """
    console, runner = ctx.console, ctx.runner

    url = (ctx.source_url or "").strip()
    if not url:
        raise InputError("The download URL must not be empty.")

    console.info("Preparing to download the project...")
    directory = resolve_install_dir(str(ctx.prompter.ask("install_dir")), ctx.base_dir)

    if not directory.exists():
        directory.mkdir(parents=True)
        ctx.record_created(directory)
    elif not directory.is_dir():
        raise InputError(f"Installation path exists and is not a directory: {directory}")

    archive = directory / ARCHIVE_NAME
    scratch = directory / SCRATCH_DIR

    # ── Download ────────────────────────────────────────────────
    downloader = next((b for b in TOOL_BINARIES[Tool.DOWNLOAD_TOOL] if runner.which(b)), None)
    if downloader is None:
        raise DependencyError("curl or wget is not installed. Install one of them and re-run.")

    console.info(f"Downloading project from {url} ...")
    if not archive.exists():
        ctx.record_created(archive)
    receipt = runner.run(download_command(downloader, url, archive))
    if receipt.failed:
        raise ExternalToolError(f"Download failed: {receipt.detail}", receipt)

    # ── Extract ─────────────────────────────────────────────────
    console.info("Extracting project...")
    if scratch.exists():
        logger.warning("Removing leftover extraction directory %s", scratch)
        shutil.rmtree(scratch)
    ctx.record_created(scratch)
    receipt = runner.run(["unzip", "-q", str(archive), "-d", str(scratch)])
    if receipt.failed:
        raise ExternalToolError(f"Extraction failed: {receipt.detail}", receipt)

    bundle_root = find_bundle_root(scratch)
    if bundle_root is None:
        raise BundleStructureError("Extraction failed or the ZIP file structure is incorrect.")

    moved = flatten_into(bundle_root, directory)
    logger.debug("Moved %d entries from %s into %s", len(moved), bundle_root, directory)

    shutil.rmtree(scratch, ignore_errors=True)
    archive.unlink(missing_ok=True)

    target = InstallTarget(directory_path=directory, source_archive_url=url)
    if not target.is_populated():
        raise BundleStructureError(f"The bundle left {directory} empty.")

    console.success("Project downloaded and extracted.")
    return target
