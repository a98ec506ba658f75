"""
Answers loader — reads a YAML answers file for unattended runs.

An answers file maps question keys (see ``core.data.questions``) to
values. Keys not present fall back to the question's default, so an
empty file is equivalent to ``--defaults``.

Example::

    install_runtime: true
    install_dir: /opt/qid-oauth
    mongo_uri: mongodb://db.internal:27017/qid
    custom_port: true
    port: 8080
    use_supervisor: false
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from provisioner.core.data.questions import QUESTIONS

logger = logging.getLogger(__name__)

ANSWERS_FILE_ENV = "QID_ANSWERS_FILE"


class ConfigError(Exception):
    """Raised when an answers file is invalid or missing."""


class Answers(BaseModel):
    """Validated answers, keyed by question key."""

    values: dict[str, bool | str] = Field(default_factory=dict)

    @field_validator("values", mode="before")
    @classmethod
    def _coerce(cls, raw: Any) -> dict[str, bool | str]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError(f"expected a mapping, got {type(raw).__name__}")

        unknown = sorted(str(k) for k in raw if k not in QUESTIONS)
        if unknown:
            raise ValueError(f"unknown question key(s): {', '.join(unknown)}")

        coerced: dict[str, bool | str] = {}
        for key, value in raw.items():
            question = QUESTIONS[key]
            if question.kind == "confirm":
                coerced[key] = _to_bool(key, value)
            else:
                coerced[key] = "" if value is None else str(value)
        return coerced


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("y", "yes", "true", "1"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("n", "no", "false", "0", ""):
        return False
    raise ValueError(f"'{key}' expects yes/no, got {value!r}")


def resolve_answers_path(path: Path | None = None) -> Path | None:
    """Explicit path first, then the ``QID_ANSWERS_FILE`` env var."""
    if path is not None:
        return path
    env_value = os.environ.get(ANSWERS_FILE_ENV)
    return Path(env_value) if env_value else None


def load_answers(path: Path) -> Answers:
    """Load and validate an answers file.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Answers file not found: {path}")

    logger.debug("Loading answers from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        answers = Answers.model_validate({"values": data})
    except Exception as e:
        raise ConfigError(f"Invalid answers in {path}: {e}") from e

    logger.info("Loaded %d answer(s) from %s", len(answers.values), path)
    return answers
