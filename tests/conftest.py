from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from airsafe.database import get_connection
from airsafe.incidents import create_table


@pytest.fixture(autouse=True)
def app_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Forces test mode and clears any database override from the environment.
    Automatically applied to all tests.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("AIRSAFE_DB_PATH", raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "in").mkdir(parents=True)
    (root / "data" / "out").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures the default relative database path lands in the temp directory.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root (more realistic than :memory:).
    """
    return project_root / "data" / "out" / "test.sqlite"


@pytest.fixture
def db_conn(sqlite_path: Path, project_root: Path) -> Iterator[sqlite3.Connection]:
    """
    A project-configured SQLite connection that is always closed after each test.

    Path assertion: DB must be under project_root (prevents touching real DBs).
    """
    try:
        sqlite_path.resolve().relative_to(project_root.resolve())
    except ValueError:
        raise AssertionError(
            f"SQLite path {sqlite_path} is not under project_root {project_root}. "
            "This prevents accidental writes to real databases."
        )

    conn = get_connection(sqlite_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def flights_table(db_conn: sqlite3.Connection) -> str:
    """An empty incident table named 'flights'."""
    create_table(db_conn, "flights")
    return "flights"


@pytest.fixture
def write_csv(project_root: Path) -> Callable[[str, str], Path]:
    """Write CSV text under data/in/ and return its path."""

    def _write(name: str, text: str) -> Path:
        path = project_root / "data" / "in" / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
