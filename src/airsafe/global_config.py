"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.
"""

import os
from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent

# Core Names
PROJECT_NAME = "airsafe"
PACKAGE_NAME = "airsafe"

# Database file
# Relative on purpose: the database lives next to wherever the CLI is run.
DB_FILENAME = "airline_database.db"
DB_PATH_ENV_VAR = "AIRSAFE_DB_PATH"


def default_db_path() -> Path:
    """Return the database path used when no explicit path is given.

    Honours the AIRSAFE_DB_PATH environment variable, otherwise falls back
    to DB_FILENAME relative to the current working directory.
    """
    override = os.getenv(DB_PATH_ENV_VAR)
    if override:
        return Path(override)
    return Path(DB_FILENAME)
