"""Database schema initialization and migrations."""

import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path

from costmgr.errors import StoreOpenError

logger = logging.getLogger(__name__)

DB_VERSION = 1

# Upgrade steps keyed by the schema version that introduces them
MIGRATIONS: dict[int, list[str]] = {
    1: [
        """
        CREATE TABLE IF NOT EXISTS costs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            sum REAL NOT NULL,
            currency TEXT NOT NULL,
            category TEXT NOT NULL,
            description TEXT NOT NULL,
            year INTEGER NOT NULL,
            month INTEGER NOT NULL,
            day INTEGER NOT NULL
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_costs_year_month ON costs(year, month)",
    ],
}


@dataclass(frozen=True)
class StoreHandle:
    """An opened cost database.

    Handles are owned by the caller and passed to every store operation.
    Each operation opens its own short-lived connection to ``path``.
    """

    path: Path
    version: int


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "costmgr" / "costs.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the schema version stamped in the database header."""
    return int(conn.execute("PRAGMA user_version").fetchone()[0])


def upgrade_schema(conn: sqlite3.Connection, current: int, target: int) -> None:
    """Run every migration step between current and target in one transaction.

    Args:
        conn: Connection in autocommit mode (isolation_level=None).
        current: Version found in the database.
        target: Version requested by the caller.

    Raises:
        sqlite3.Error: If any step fails. Nothing is applied in that case.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        for version in sorted(MIGRATIONS):
            if current < version <= target:
                logger.debug("Applying schema migration %d", version)
                for statement in MIGRATIONS[version]:
                    conn.execute(statement)
        # PRAGMA does not accept bound parameters
        conn.execute(f"PRAGMA user_version = {int(target)}")
        conn.execute("COMMIT")
    except sqlite3.Error:
        conn.execute("ROLLBACK")
        raise


def open_store(db_path: Path | None = None, version: int = DB_VERSION) -> StoreHandle:
    """Open the cost database, creating or upgrading its schema if needed.

    Opening an up-to-date database leaves it untouched, so this is safe to
    call on every start.

    Args:
        db_path: Path to the database file. If None, uses default location.
        version: Schema version the caller expects.

    Returns:
        StoreHandle for the opened database.

    Raises:
        ValueError: If version is not a positive integer.
        StoreOpenError: If the database cannot be opened or upgraded, or it
            was written by a newer schema version.
    """
    if version < 1:
        raise ValueError("Database version must be a positive integer")

    if db_path is None:
        db_path = get_db_path()

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(db_path, isolation_level=None)
    except (OSError, sqlite3.Error) as e:
        raise StoreOpenError(f"Cannot open database at {db_path}: {e}") from e

    try:
        current = get_schema_version(conn)
        if current > version:
            raise StoreOpenError(f"Database at {db_path} has schema version {current}, newer than {version}")
        if current < version:
            logger.info("Upgrading cost database %s from version %d to %d", db_path, current, version)
            upgrade_schema(conn, current, version)
    except sqlite3.Error as e:
        raise StoreOpenError(f"Cannot initialize database at {db_path}: {e}") from e
    finally:
        conn.close()

    return StoreHandle(path=db_path, version=version)
