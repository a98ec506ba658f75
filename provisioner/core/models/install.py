"""
Install models — target directory, runtime configuration, supervisor choice.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class InstallTarget(BaseModel):
    """Where the application bundle goes and where it comes from."""

    directory_path: Path
    source_archive_url: str

    def is_populated(self) -> bool:
        """True when the directory exists and holds at least one entry."""
        path = self.directory_path
        return path.is_dir() and any(path.iterdir())


class RuntimeConfig(BaseModel):
    """Secrets, connection string and port handed to the application."""

    model_config = ConfigDict(frozen=True)

    database_uri: str
    jwt_secret: str
    oauth_secret: str
    port: int = 5000
    environment_mode: str = "production"

    def to_settings(self) -> dict[str, str]:
        """The ``config/production.json`` payload."""
        return {
            "mongoURI": self.database_uri,
            "jwtSecret": self.jwt_secret,
            "oauthTokenSecret": self.oauth_secret,
        }


class SupervisorChoice(BaseModel):
    enabled: bool = False
    auto_start_on_boot: bool = False
