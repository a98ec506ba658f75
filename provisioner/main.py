"""
QID OAuth provisioner — CLI entrypoint.

Usage:
    qid-provision --help
    qid-provision install
    qid-provision install --answers answers.yml
    qid-provision probe --json
    qid-provision report --dir ./qid-oauth
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from provisioner import __version__
from provisioner.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


def _make_runner():
    """Command runner for the real host."""
    from provisioner.adapters.shell.command import CommandRunner

    return CommandRunner()


def _make_console():
    from provisioner.adapters.console import Console

    return Console()


@click.group()
@click.version_option(version=__version__, prog_name="qid-provision")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """QID OAuth provisioner — prepare a host and install the application."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
@click.option(
    "--source-url",
    envvar="QID_SOURCE_URL",
    default=None,
    help="Application archive URL (default: the published release).",
)
@click.option(
    "--answers",
    "answers_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML answers file for unattended runs (env: QID_ANSWERS_FILE).",
)
@click.option("--defaults", "use_defaults", is_flag=True, help="Accept every default, no prompts.")
@click.option(
    "--cleanup-on-failure",
    is_flag=True,
    help="On a fatal error, remove the files and directories this run created.",
)
def install(
    source_url: str | None,
    answers_path: str | None,
    use_defaults: bool,
    cleanup_on_failure: bool,
) -> None:
    """Check requirements, fetch, configure, build and start the application."""
    from provisioner.adapters.prompt import ConsolePrompter, ScriptedPrompter
    from provisioner.core.config.defaults import APP_NAME, DEFAULT_SOURCE_URL
    from provisioner.core.config.loader import ConfigError, load_answers, resolve_answers_path
    from provisioner.core.context import ProvisionContext
    from provisioner.core.errors import ProvisionError
    from provisioner.core.use_cases.provision import cleanup_created, run_provision

    console = _make_console()

    # ── Answer source ───────────────────────────────────────────
    try:
        path = resolve_answers_path(Path(answers_path) if answers_path else None)
        if path is not None:
            prompter = ScriptedPrompter(load_answers(path).values)
        elif use_defaults:
            prompter = ScriptedPrompter()
        else:
            prompter = ConsolePrompter()
    except ConfigError as e:
        console.error(str(e))
        sys.exit(1)

    ctx = ProvisionContext(
        runner=_make_runner(),
        prompter=prompter,
        console=console,
        source_url=DEFAULT_SOURCE_URL if source_url is None else source_url,
    )

    console.echo()
    console.echo("=" * 53)
    console.echo(f"{APP_NAME} installer", fg="blue", bold=True)
    console.echo("=" * 53)
    console.echo()

    try:
        run_provision(ctx)
    except ProvisionError as e:
        console.error(str(e))
        if cleanup_on_failure:
            for removed in cleanup_created(ctx):
                console.info(f"Removed {removed}")
        sys.exit(e.exit_code)
    except OSError as e:
        console.error(f"File system error: {e}")
        sys.exit(1)
    except (KeyboardInterrupt, click.Abort):
        # click turns Ctrl-C / EOF at a prompt into Abort
        console.error("Installation interrupted.")
        sys.exit(130)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def probe(as_json: bool) -> None:
    """Show the detected OS family and required tools."""
    from provisioner.core.services.tool_install import probe_host

    profile = probe_host(_make_runner())

    if as_json:
        click.echo(json.dumps(profile.to_dict(), indent=2))
        return

    click.secho(f"\n🖥  OS family: {profile.os_family.value} ({profile.system})", fg="cyan", bold=True)
    if profile.is_root:
        click.echo("   running as root")
    click.echo()
    for tool, status in profile.tools.items():
        if status.present:
            version = status.version or "unknown version"
            click.echo(f"   ✓ {tool.value:<16} {status.binary} {version}  → {status.path}")
        else:
            click.secho(f"   ✗ {tool.value:<16} not found", fg="yellow")
    click.echo()


@cli.command()
@click.option(
    "--dir",
    "install_dir",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Install directory of an existing installation.",
)
@click.option(
    "--supervisor/--no-supervisor",
    default=True,
    help="Show PM2 management commands (default) or the manual start command.",
)
def report(install_dir: str, supervisor: bool) -> None:
    """Re-print the completion summary for an existing installation."""
    from provisioner.core.services.completion_report import build_report, render_report

    render_report(build_report(Path(install_dir).resolve(), supervisor), _make_console())


if __name__ == "__main__":
    cli()
