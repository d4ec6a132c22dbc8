"""
database/backup.py

Consistent snapshots of the live database.

Public API
----------
- checkpoint(conn) -> tuple[int, int, int]
- create_backup(conn, dest_path, progress_step=None) -> Path
- quick_check(db_path) -> bool

Notes
-----
- Uses the SQLite Online Backup API on the app's own connection, so the copy is
  consistent even in WAL mode. Never copies -wal/-shm files.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Callable, Optional

__all__ = ["checkpoint", "create_backup", "quick_check"]

_log = logging.getLogger(__name__)


def checkpoint(conn: sqlite3.Connection) -> tuple[int, int, int]:
    """Force a full WAL checkpoint; returns (busy, log_frames, checkpointed_frames)."""
    row = conn.execute("PRAGMA wal_checkpoint(FULL);").fetchone()
    return (int(row[0]), int(row[1]), int(row[2])) if row else (0, 0, 0)


def create_backup(
    conn: sqlite3.Connection,
    dest_path: str | Path,
    progress_step: Optional[Callable[[int], None]] = None,
) -> Path:
    """
    Copy the database behind `conn` into `dest_path` (a standalone SQLite file).
    An existing file at `dest_path` is replaced.
    """
    dest = Path(dest_path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.exists():
        dest.unlink()

    def _progress(status: int, remaining: int, total: int) -> None:
        if progress_step and total > 0:
            progress_step(int(((total - remaining) / total) * 100))

    with closing(sqlite3.connect(dest)) as dst:
        conn.backup(dst, pages=1024, progress=_progress)

    if progress_step:
        progress_step(100)
    _log.info("backup written to %s", dest)
    return dest


def quick_check(db_path: str | Path) -> bool:
    """PRAGMA quick_check on a read-only connection."""
    uri = f"file:{Path(db_path).as_posix()}?mode=ro"
    with closing(sqlite3.connect(uri, uri=True)) as con:
        row = con.execute("PRAGMA quick_check;").fetchone()
    return bool(row) and str(row[0]).lower() == "ok"
