"""Document id counters kept in the store database.

URL documents get ``U001``, ``U002``, ... and notes ``N001``, ... from
per-kind counters in the ``id_counters`` table. Counters only move
forward, so the id of a deleted document is never handed out again and
a saved canvas cannot end up pointing at a different document.
"""

from __future__ import annotations

import sqlite3

# Document kinds and their id prefixes
CATEGORIES = {"url": "U", "note": "N"}


class IDAllocatorError(Exception):
    """Raised on invalid allocation requests."""


def init_counters(conn: sqlite3.Connection) -> None:
    """Create the ``id_counters`` table on *conn* with every counter at 1.

    Existing counters are left untouched. The caller commits.
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS id_counters (
            category TEXT PRIMARY KEY,
            next_id  INTEGER NOT NULL DEFAULT 1
        )
        """
    )
    conn.executemany(
        "INSERT OR IGNORE INTO id_counters (category, next_id) VALUES (?, 1)",
        [(cat,) for cat in CATEGORIES],
    )


def allocate_on_conn(conn: sqlite3.Connection, category: str) -> str:
    """Take the next id for *category* inside the caller's transaction.

    The store inserts the document in the same transaction, so a rolled
    back insert also gives the number back.
    """
    if category not in CATEGORIES:
        raise IDAllocatorError(
            f"Invalid category '{category}'. Must be one of: {sorted(CATEGORIES)}"
        )
    row = conn.execute(
        "SELECT next_id FROM id_counters WHERE category = ?",
        (category,),
    ).fetchone()
    number = row[0] if row else 1
    conn.execute(
        "INSERT OR REPLACE INTO id_counters (category, next_id) VALUES (?, ?)",
        (category, number + 1),
    )
    return f"{CATEGORIES[category]}{number:03d}"
