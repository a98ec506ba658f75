"""
Completion reporter — where the app lives and how to manage it.

The port is read back from ``.env`` on disk rather than taken from the
run's RuntimeConfig, so the report reflects what the application will
actually load (and ``qid-provision report`` works on an old install).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from provisioner.core.config.defaults import APP_NAME, DEFAULT_PORT, ENV_FILE, SERVICE_NAME
from provisioner.adapters.console import Console

_RULE = "=" * 53


class CompletionReport(BaseModel):
    install_dir: Path
    port: int
    url: str
    supervised: bool
    commands: list[tuple[str, str]]     # (description, command)


def read_port(env_path: Path, default: int = DEFAULT_PORT) -> int:
    """``PORT`` value from an env file; ``default`` if absent or unparseable."""
    if not env_path.is_file():
        return default
    for line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip() == "PORT":
            value = value.strip()
            return int(value) if value.isascii() and value.isdigit() else default
    return default


def build_report(install_dir: Path, supervised: bool) -> CompletionReport:
    port = read_port(install_dir / ENV_FILE)
    if supervised:
        commands = [
            ("Show application status", "pm2 status"),
            ("Show application logs", f"pm2 logs {SERVICE_NAME}"),
            ("Restart the application", f"pm2 restart {SERVICE_NAME}"),
            ("Stop the application", f"pm2 stop {SERVICE_NAME}"),
        ]
    else:
        commands = [("Start the application", f"cd {install_dir} && npm start")]
    return CompletionReport(
        install_dir=install_dir,
        port=port,
        url=f"http://localhost:{port}",
        supervised=supervised,
        commands=commands,
    )


def render_report(report: CompletionReport, console: Console) -> None:
    console.echo()
    console.echo(_RULE)
    console.echo(f"{APP_NAME} installation complete!", fg="green", bold=True)
    console.echo(_RULE)
    console.echo()
    console.echo(f"Install directory: {report.install_dir}")
    console.echo(f"Application port:  {report.port}")
    console.echo()
    console.echo(f"URL: {report.url}")
    console.echo()
    console.echo("Management commands:")
    for description, command in report.commands:
        console.echo(f"  - {description}: {command}")
    console.echo()
    console.echo("For an Nginx reverse proxy or SSL, see the deployment guide.")
    console.echo(_RULE)
