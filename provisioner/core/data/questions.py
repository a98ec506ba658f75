"""
Question catalog — every decision point the installer can ask about.

Keys are stable: answers files refer to them, and the scripted prompt
adapter looks answers up by key.
"""

from __future__ import annotations

from provisioner.core.config.defaults import DEFAULT_INSTALL_DIR, DEFAULT_MONGO_URI, DEFAULT_PORT
from provisioner.core.models.question import Question

QUESTIONS: dict[str, Question] = {
    q.key: q
    for q in (
        # ── Dependencies ────────────────────────────────────────
        Question(key="install_runtime", kind="confirm", default=False,
                 text="Install Node.js automatically?"),
        Question(key="install_package_manager", kind="confirm", default=False,
                 text="Install npm automatically (via Node.js)?"),
        Question(key="install_database", kind="confirm", default=False,
                 text="Install MongoDB automatically?"),
        Question(key="database_running", kind="confirm", default=False,
                 text="Is MongoDB already installed and running?"),
        Question(key="install_archive_tool", kind="confirm", default=False,
                 text="Install unzip automatically?"),
        # ── Bundle ──────────────────────────────────────────────
        Question(key="install_dir", text="Installation directory",
                 default=DEFAULT_INSTALL_DIR),
        # ── Runtime config ──────────────────────────────────────
        Question(key="mongo_uri", text="MongoDB connection URI",
                 default=DEFAULT_MONGO_URI),
        Question(key="jwt_secret", text="JWT secret", secret=True,
                 default_label="auto-generate"),
        Question(key="oauth_secret", text="OAuth token secret", secret=True,
                 default_label="auto-generate"),
        Question(key="custom_port", kind="confirm", default=False,
                 text=f"Use a custom port? (default: {DEFAULT_PORT})"),
        Question(key="port", text="Port number", default=str(DEFAULT_PORT)),
        # ── Supervisor ──────────────────────────────────────────
        Question(key="use_supervisor", kind="confirm", default=True,
                 text="Manage the application with PM2?"),
        Question(key="supervisor_startup", kind="confirm", default=True,
                 text="Start PM2 on boot?"),
    )
}


def get_question(key: str) -> Question:
    """Look up a question; unknown keys are a programming error."""
    return QUESTIONS[key]
