"""
Configuration generator — connection string, secrets, port.

Writes two artifacts into the install directory:

    config/production.json   {"mongoURI", "jwtSecret", "oauthTokenSecret"}
    .env                     NODE_ENV=production / PORT=5000

The ``.env`` default is written first; a custom port is applied
afterwards as a textual ``PORT=5000`` → ``PORT=<n>`` substitution.
Nothing is read back (the reporter reads the port from ``.env``).
"""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path

from provisioner.core.config.defaults import (
    DEFAULT_MONGO_URI,
    DEFAULT_PORT,
    ENV_FILE,
    ENVIRONMENT_MODE,
    SECRET_BYTES,
    SETTINGS_FILE,
)
from provisioner.core.context import ProvisionContext
from provisioner.core.errors import InputError
from provisioner.core.models.install import RuntimeConfig

logger = logging.getLogger(__name__)

_MAX_PORT = 65535


# ── Pure helpers ────────────────────────────────────────────────


def resolve_secret(answer: str | None) -> str:
    """Operator-supplied secret, or a fresh 256-bit hex value."""
    answer = (answer or "").strip()
    return answer if answer else secrets.token_hex(SECRET_BYTES)


def parse_port(answer: str | None, default: int = DEFAULT_PORT) -> int:
    """Port number from operator text; blank keeps ``default``.

    Raises:
        InputError: Not a whole number in 1..65535.
    """
    answer = (answer or "").strip()
    if not answer:
        return default
    if not (answer.isascii() and answer.isdigit()) or not 0 < int(answer) <= _MAX_PORT:
        raise InputError(f"Invalid port number: {answer!r} (expected 1-{_MAX_PORT}).")
    return int(answer)


def render_env(port: int = DEFAULT_PORT, mode: str = ENVIRONMENT_MODE) -> str:
    return f"NODE_ENV={mode}\nPORT={port}\n"


# ── Artifact writers ────────────────────────────────────────────


def write_settings(install_dir: Path, config: RuntimeConfig) -> Path:
    """Write (overwrite) ``config/production.json``."""
    path = install_dir / SETTINGS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_settings(), indent=2) + "\n", encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path


def write_env_file(install_dir: Path) -> Path:
    """Write the default ``.env`` (port 5000)."""
    path = install_dir / ENV_FILE
    path.write_text(render_env(), encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path


def apply_port_override(env_path: Path, port: int) -> None:
    """Replace the default ``PORT=5000`` line text with ``PORT=<port>``."""
    text = env_path.read_text(encoding="utf-8")
    env_path.write_text(
        text.replace(f"PORT={DEFAULT_PORT}", f"PORT={port}"), encoding="utf-8",
    )


# ── Stage ───────────────────────────────────────────────────────


def collect_runtime_config(ctx: ProvisionContext) -> RuntimeConfig:
    """Ask for every runtime value and write both artifacts.

    Idempotent within a run: a context that already carries a
    RuntimeConfig is returned as is, so secrets are generated once.
    """
    if ctx.runtime_config is not None:
        return ctx.runtime_config

    console, prompter = ctx.console, ctx.prompter
    install_dir = ctx.target.directory_path

    console.info("Configuring project...")
    database_uri = str(prompter.ask("mongo_uri")) or DEFAULT_MONGO_URI
    jwt_secret = resolve_secret(str(prompter.ask("jwt_secret")))
    oauth_secret = resolve_secret(str(prompter.ask("oauth_secret")))

    config = RuntimeConfig(
        database_uri=database_uri,
        jwt_secret=jwt_secret,
        oauth_secret=oauth_secret,
    )
    write_settings(install_dir, config)
    console.success("Project configuration written.")

    console.info("Setting up environment variables...")
    env_path = write_env_file(install_dir)

    if prompter.ask("custom_port"):
        port = parse_port(str(prompter.ask("port")))
        if port != DEFAULT_PORT:
            apply_port_override(env_path, port)
        config = config.model_copy(update={"port": port})

    console.success("Environment variables set.")
    return config
