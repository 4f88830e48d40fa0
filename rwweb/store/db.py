"""SQLite document/link graph store.

Manages two tables in ``.rwweb/rwweb.db``:

- ``docs``: URL and note documents, deduplicated by normalised URL
  (``url_key``) and by exact note text
- ``links``: directed links, at most one per unordered document pair

The ``id_counters`` table is created and advanced through
:mod:`rwweb.store.ids`; ids are allocated in the same transaction that
inserts the document.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rwweb.parse import html_to_label, normalize_url
from rwweb.ports import Friends, GraphPort
from rwweb.store.ids import allocate_on_conn, init_counters

log = logging.getLogger(__name__)

DOC_KINDS = ("url", "note")
DEFAULT_SUGGEST_LIMIT = 10


class DocumentStore(GraphPort):
    """SQLite-backed :class:`~rwweb.ports.GraphPort`.

    Opens or creates the database and initialises the ``docs`` and
    ``links`` tables. Every call uses its own connection, so the store
    object itself holds no data.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    suggest_limit:
        Maximum number of suggestions returned by :meth:`auto_suggest_search`.
    """

    def __init__(self, db_path: Path, suggest_limit: int = DEFAULT_SUGGEST_LIMIT) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._suggest_limit = suggest_limit
        self._init_tables()

    # ------------------------------------------------------------------
    # Connection helpers
    # ------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.row_factory = sqlite3.Row
        return conn

    def _init_tables(self) -> None:
        conn = self._connect()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS docs (
                    id          TEXT PRIMARY KEY,
                    kind        TEXT NOT NULL,
                    url         TEXT,
                    url_key     TEXT UNIQUE,
                    text        TEXT,
                    created_at  TEXT NOT NULL,
                    updated_at  TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS docs_text_idx ON docs (text);

                CREATE TABLE IF NOT EXISTS links (
                    id          INTEGER PRIMARY KEY AUTOINCREMENT,
                    source      TEXT NOT NULL,
                    target      TEXT NOT NULL,
                    pair_lo     TEXT NOT NULL,
                    pair_hi     TEXT NOT NULL,
                    created_at  TEXT NOT NULL,
                    UNIQUE (pair_lo, pair_hi)
                );

                CREATE INDEX IF NOT EXISTS links_source_idx ON links (source);
                CREATE INDEX IF NOT EXISTS links_target_idx ON links (target);
            """)
            init_counters(conn)
            conn.commit()
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def find_or_add_url(self, url: str) -> str:
        """Return the document for *url*, deduplicated by normalised URL."""
        url_key = normalize_url(url)
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute(
                "SELECT id FROM docs WHERE url_key = ?", (url_key,)
            ).fetchone()
            if row:
                conn.commit()
                return row["id"]
            doc_id = allocate_on_conn(conn, "url")
            now = _now_iso()
            conn.execute(
                """INSERT INTO docs (id, kind, url, url_key, text, created_at, updated_at)
                   VALUES (?, 'url', ?, ?, NULL, ?, ?)""",
                (doc_id, url.strip(), url_key, now, now),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        log.info("Added URL document %s: %s", doc_id, url_key)
        return doc_id

    def find_or_add_note(self, text: str) -> str:
        """Return the note whose text is exactly *text*, creating it if needed."""
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            doc_id = _note_with_text(conn, text)
            if doc_id is None:
                doc_id = _insert_note(conn, text, None)
                log.info("Added note %s (%d chars)", doc_id, len(text))
            conn.commit()
            return doc_id
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def add_note(self, text: str, doc_id: str | None = None) -> str:
        """Store a new note and return its id.

        Without *doc_id* a fresh ``N###`` id is generated. With *doc_id*
        the note replaces any older document stored under that id.
        """
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            new_id = _insert_note(conn, text, doc_id)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        log.info("Stored note %s (%d chars)", new_id, len(text))
        return new_id

    def get_doc(self, doc_id: str) -> dict[str, Any] | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, kind, url, text, created_at, updated_at FROM docs WHERE id = ?",
                (doc_id,),
            ).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def get_doc_with_text(self, text: str) -> str | None:
        conn = self._connect()
        try:
            return _note_with_text(conn, text)
        finally:
            conn.close()

    def delete_doc(self, doc_id: str) -> None:
        """Delete a document and any links still touching it."""
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            conn.execute(
                "DELETE FROM links WHERE source = ? OR target = ?", (doc_id, doc_id)
            )
            deleted = conn.execute("DELETE FROM docs WHERE id = ?", (doc_id,)).rowcount
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        if deleted:
            log.info("Deleted document %s", doc_id)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def find_or_add_link(self, source: str, target: str) -> bool:
        """Store a link unless the pair is already linked (either direction).

        Self-links are refused. Returns True if a new link was stored.
        """
        if source == target:
            log.debug("Refusing self-link on %s", source)
            return False
        lo, hi = sorted((source, target))
        conn = self._connect()
        try:
            cur = conn.execute(
                """INSERT OR IGNORE INTO links (source, target, pair_lo, pair_hi, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (source, target, lo, hi, _now_iso()),
            )
            conn.commit()
            created = cur.rowcount > 0
        finally:
            conn.close()
        if created:
            log.info("Linked %s -> %s", source, target)
        return created

    def delete_link(self, doc1: str, doc2: str) -> int:
        lo, hi = sorted((doc1, doc2))
        conn = self._connect()
        try:
            cur = conn.execute(
                "DELETE FROM links WHERE pair_lo = ? AND pair_hi = ?", (lo, hi)
            )
            conn.commit()
            count = cur.rowcount
        finally:
            conn.close()
        if count:
            log.info("Unlinked %s and %s", doc1, doc2)
        return count

    def get_friends(self, doc_id: str) -> Friends:
        """Return link targets and sources of *doc_id* in link creation order."""
        conn = self._connect()
        try:
            targets = conn.execute(
                "SELECT target FROM links WHERE source = ? ORDER BY id", (doc_id,)
            ).fetchall()
            sources = conn.execute(
                "SELECT source FROM links WHERE target = ? ORDER BY id", (doc_id,)
            ).fetchall()
        finally:
            conn.close()
        return Friends(
            target_doc_ids=[r["target"] for r in targets],
            source_doc_ids=[r["source"] for r in sources],
        )

    def has_friends(self, doc_id: str) -> bool:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT 1 FROM links WHERE source = ? OR target = ? LIMIT 1",
                (doc_id, doc_id),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def get_links(self) -> list[dict[str, Any]]:
        """Return all links as ``{"source", "target"}`` dicts, oldest first."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT source, target FROM links ORDER BY id"
            ).fetchall()
            return [dict(r) for r in rows]
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def auto_suggest_search(self, input_value: str) -> list[dict[str, Any]]:
        """Return documents whose URL or note text contains *input_value*.

        Matching is case-insensitive and ignores HTML markup in notes.
        Newest documents come first. Blank input yields no suggestions.
        """
        needle = (input_value or "").strip()
        if not needle:
            return []
        pattern = "%" + _escape_like(needle) + "%"
        conn = self._connect()
        try:
            rows = conn.execute(
                r"""SELECT id, kind, url, text FROM docs
                    WHERE url LIKE ? ESCAPE '\' OR text LIKE ? ESCAPE '\'
                    ORDER BY rowid DESC""",
                (pattern, pattern),
            ).fetchall()
        finally:
            conn.close()

        folded = needle.casefold()
        suggestions: list[dict[str, Any]] = []
        for row in rows:
            if row["kind"] == "url":
                label = haystack = row["url"]
            else:
                haystack = html_to_label(row["text"] or "", max_chars=None)
                label = html_to_label(row["text"] or "")
            if folded not in (haystack or "").casefold():
                continue
            suggestions.append({"doc_id": row["id"], "kind": row["kind"], "label": label})
            if len(suggestions) >= self._suggest_limit:
                break
        return suggestions

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, int]:
        """Return document and link counts for status display."""
        conn = self._connect()
        try:
            counts = {
                kind: conn.execute(
                    "SELECT COUNT(*) FROM docs WHERE kind = ?", (kind,)
                ).fetchone()[0]
                for kind in DOC_KINDS
            }
            counts["links"] = conn.execute("SELECT COUNT(*) FROM links").fetchone()[0]
            return counts
        finally:
            conn.close()


def _note_with_text(conn: sqlite3.Connection, text: str) -> str | None:
    row = conn.execute(
        "SELECT id FROM docs WHERE kind = 'note' AND text = ? ORDER BY rowid LIMIT 1",
        (text,),
    ).fetchone()
    return row["id"] if row else None


def _insert_note(conn: sqlite3.Connection, text: str, doc_id: str | None) -> str:
    """Insert (or, with an explicit id, overwrite) a note on *conn*."""
    now = _now_iso()
    if doc_id is None:
        doc_id = allocate_on_conn(conn, "note")
    conn.execute(
        """INSERT INTO docs (id, kind, url, url_key, text, created_at, updated_at)
           VALUES (?, 'note', NULL, NULL, ?, ?, ?)
           ON CONFLICT(id) DO UPDATE SET
               kind = 'note', url = NULL, url_key = NULL,
               text = excluded.text, updated_at = excluded.updated_at""",
        (doc_id, text, now, now),
    )
    return doc_id


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(timezone.utc).isoformat()
