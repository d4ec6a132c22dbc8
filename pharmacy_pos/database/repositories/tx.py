from __future__ import annotations

import sqlite3
from contextlib import contextmanager


@contextmanager
def immediate_tx(conn: sqlite3.Connection):
    """
    Start an IMMEDIATE transaction (write lock taken up front),
    commit on success, rollback on error.

    When the connection is already inside a transaction the block joins it
    through a SAVEPOINT, so repository calls can be composed.
    """
    if conn.in_transaction:
        conn.execute("SAVEPOINT repo_tx")
        try:
            yield
        except BaseException:
            conn.execute("ROLLBACK TO repo_tx")
            conn.execute("RELEASE repo_tx")
            raise
        conn.execute("RELEASE repo_tx")
        return

    cur = conn.cursor()
    try:
        cur.execute("BEGIN IMMEDIATE")
        yield
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        cur.close()
