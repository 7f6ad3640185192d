"""
The database module locates osu!lazer's client database and opens it.

We never read the live database directly: the game may be running and holding it. Instead we keep a
snapshot copy in our config directory and refresh it on request. The snapshot is opened read-only;
the schema belongs to osu!lazer and we do not write to it.
"""

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from osu_play.common import OsuPlayExpectedError
from osu_play.config import Config

logger = logging.getLogger(__name__)


class DatabaseNotFoundError(OsuPlayExpectedError):
    pass


class UnsupportedDatabaseError(DatabaseNotFoundError):
    pass


class DatabaseReadError(OsuPlayExpectedError):
    pass


# The tables we read from. A database missing any of them is not one of osu!lazer's.
REQUIRED_TABLES = [
    "BeatmapSetInfo",
    "BeatmapInfo",
    "BeatmapMetadata",
    "BeatmapSetFileInfo",
    "FileInfo",
]


def resolve_database_path(c: Config, *, reload: bool = False) -> Path:
    """
    Return the path of the database snapshot, creating it from the osu!lazer data directory if it
    does not exist yet, or if a reload is requested.
    """
    snapshot = c.database_snapshot_path
    if snapshot.is_file() and not reload:
        logger.debug(f"Using existing database snapshot at {snapshot}")
        return snapshot

    source = c.source_database_path
    if not source.is_file():
        realm = c.osu_data_dir / "client.realm"
        if realm.is_file():
            raise UnsupportedDatabaseError(
                f"Found a Realm database at {realm}, which is not supported: only the SQLite database (client.db) can be read"
            )
        raise DatabaseNotFoundError(
            f"osu!lazer database not found at {source}: pass --osuDataDir to point at your osu! data directory"
        )

    logger.info(f"Copying osu!lazer database {source} to {snapshot}")
    # Copy into a temporary file and swap it in once complete, so that a failed copy leaves the
    # previous snapshot intact.
    tmp = snapshot.with_name(snapshot.name + ".tmp")
    try:
        # The backup API gives us a consistent copy even while the game has the database open in WAL
        # mode, which a plain file copy does not.
        src = sqlite3.connect(_readonly_uri(source), uri=True)
        try:
            dst = sqlite3.connect(tmp)
            try:
                src.backup(dst)
                missing = _missing_tables(dst)
            finally:
                dst.close()
        finally:
            src.close()
        if missing:
            raise DatabaseReadError(
                f"{source} is not an osu!lazer database: missing tables {', '.join(missing)}"
            )
        os.replace(tmp, snapshot)
    except sqlite3.DatabaseError as e:
        raise DatabaseReadError(f"Failed to copy osu!lazer database {source}: {e}") from e
    finally:
        tmp.unlink(missing_ok=True)
    return snapshot


@contextmanager
def connect(c: Config) -> Iterator[sqlite3.Connection]:
    conn = connect_fn(c)
    try:
        yield conn
    finally:
        conn.close()


def connect_fn(c: Config) -> sqlite3.Connection:
    """Non-context manager version of connect. Fails if the snapshot is not osu!lazer's database."""
    path = c.database_snapshot_path
    conn = sqlite3.connect(_readonly_uri(path), uri=True, timeout=15.0)
    conn.row_factory = sqlite3.Row
    try:
        missing = _missing_tables(conn)
    except sqlite3.DatabaseError as e:
        conn.close()
        raise DatabaseReadError(
            f"Failed to read database snapshot {path}: {e}. Run with --reload to copy it again"
        ) from e
    if missing:
        conn.close()
        raise DatabaseReadError(
            f"Database snapshot {path} is not an osu!lazer database: missing tables {', '.join(missing)}. "
            "Check --osuDataDir and run with --reload"
        )
    return conn


def schema_version(conn: sqlite3.Connection) -> str | None:
    """
    Return the latest migration applied to the database by osu!lazer, or None if the database does
    not track its migrations.
    """
    if not _table_exists(conn, "__EFMigrationsHistory"):
        return None
    cursor = conn.execute(
        "SELECT MigrationId FROM __EFMigrationsHistory ORDER BY MigrationId DESC LIMIT 1"
    )
    row = cursor.fetchone()
    return row[0] if row else None


def _missing_tables(conn: sqlite3.Connection) -> list[str]:
    return [t for t in REQUIRED_TABLES if not _table_exists(conn, t)]


def _table_exists(conn: sqlite3.Connection, name: str) -> bool:
    cursor = conn.execute(
        """
        SELECT EXISTS(
            SELECT * FROM sqlite_master
            WHERE type = 'table' AND name = ?
        )
        """,
        (name,),
    )
    return bool(cursor.fetchone()[0])


def _readonly_uri(path: Path) -> str:
    return path.resolve().as_uri() + "?mode=ro"
