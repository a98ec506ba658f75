"""
Installer defaults — fixed locations, names and thresholds.
"""

from __future__ import annotations

APP_NAME = "QID OAuth"

DEFAULT_SOURCE_URL = "https://github.com/qingqiu66/Qid-oauth/releases/download/Qid/Qid.zip"
SOURCE_URL_ENV = "QID_SOURCE_URL"

DEFAULT_INSTALL_DIR = "./qid-oauth"
ARCHIVE_NAME = "qid-oauth.zip"
SCRATCH_DIR = "temp"

DEFAULT_MONGO_URI = "mongodb://localhost:27017/qid-oauth-prod"
SECRET_BYTES = 32

DEFAULT_PORT = 5000
ENVIRONMENT_MODE = "production"
SETTINGS_FILE = "config/production.json"
ENV_FILE = ".env"

SERVICE_NAME = "qid-oauth"
ENTRY_SCRIPT = "server.js"

NODE_MIN_MAJOR = 14
NPM_MIN_MAJOR = 6
MONGO_MIN_MAJOR = 4
