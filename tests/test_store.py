"""Tests for rwweb.store.db — the SQLite document/link graph."""

from __future__ import annotations

from pathlib import Path

import pytest

from rwweb.ports import Friends
from rwweb.store import DocumentStore


@pytest.fixture
def store(tmp_path: Path) -> DocumentStore:
    return DocumentStore(tmp_path / ".rwweb" / "rwweb.db")


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------

class TestUrls:
    def test_creates_url_doc(self, store: DocumentStore) -> None:
        doc_id = store.find_or_add_url("https://example.com")
        assert doc_id == "U001"
        doc = store.get_doc(doc_id)
        assert doc is not None
        assert doc["kind"] == "url"
        assert doc["url"] == "https://example.com"
        assert doc["text"] is None

    def test_same_url_same_doc(self, store: DocumentStore) -> None:
        first = store.find_or_add_url("https://example.com")
        assert store.find_or_add_url("https://example.com") == first
        assert store.stats()["url"] == 1

    def test_equivalent_urls_deduplicated(self, store: DocumentStore) -> None:
        first = store.find_or_add_url("https://Example.com")
        assert store.find_or_add_url("https://example.com:443/#intro") == first

    def test_different_urls_different_docs(self, store: DocumentStore) -> None:
        a = store.find_or_add_url("https://example.com/a")
        b = store.find_or_add_url("https://example.com/b")
        assert a != b


class TestNotes:
    def test_add_note_generates_id(self, store: DocumentStore) -> None:
        assert store.add_note("first") == "N001"
        assert store.add_note("second") == "N002"

    def test_add_note_always_creates(self, store: DocumentStore) -> None:
        a = store.add_note("same")
        b = store.add_note("same")
        assert a != b

    def test_add_note_with_explicit_id_overwrites(self, store: DocumentStore) -> None:
        assert store.add_note("v1", doc_id="welcomeMessage") == "welcomeMessage"
        store.add_note("v2", doc_id="welcomeMessage")
        doc = store.get_doc("welcomeMessage")
        assert doc is not None
        assert doc["text"] == "v2"
        assert store.stats()["note"] == 1

    def test_explicit_id_does_not_consume_counter(self, store: DocumentStore) -> None:
        store.add_note("welcome", doc_id="welcomeMessage")
        assert store.add_note("next") == "N001"

    def test_find_or_add_note_reuses_exact_text(self, store: DocumentStore) -> None:
        first = store.find_or_add_note("<p>Hi</p>")
        assert store.find_or_add_note("<p>Hi</p>") == first
        assert store.find_or_add_note("<p>hi</p>") != first

    def test_get_doc_with_text(self, store: DocumentStore) -> None:
        doc_id = store.add_note("remember the milk")
        assert store.get_doc_with_text("remember the milk") == doc_id
        assert store.get_doc_with_text("remember") is None

    def test_get_doc_with_text_ignores_urls(self, store: DocumentStore) -> None:
        store.find_or_add_url("https://example.com")
        assert store.get_doc_with_text("https://example.com") is None

    def test_get_missing_doc(self, store: DocumentStore) -> None:
        assert store.get_doc("N999") is None


class TestDeleteDoc:
    def test_deletes_doc_and_links(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        b = store.add_note("b")
        store.find_or_add_link(a, b)
        store.delete_doc(a)
        assert store.get_doc(a) is None
        assert not store.has_friends(b)

    def test_deleted_id_never_reused(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        store.delete_doc(a)
        assert store.add_note("b") != a

    def test_missing_doc_is_noop(self, store: DocumentStore) -> None:
        store.delete_doc("N404")


# ------------------------------------------------------------------
# Links
# ------------------------------------------------------------------

class TestLinks:
    def test_link_creates_friends(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        b = store.add_note("b")
        assert store.find_or_add_link(a, b) is True
        assert store.get_friends(a) == Friends(target_doc_ids=[b], source_doc_ids=[])
        assert store.get_friends(b) == Friends(target_doc_ids=[], source_doc_ids=[a])

    def test_repeat_link_is_deduplicated(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        b = store.add_note("b")
        store.find_or_add_link(a, b)
        assert store.find_or_add_link(a, b) is False
        assert len(store.get_links()) == 1

    def test_reverse_link_keeps_first_direction(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        b = store.add_note("b")
        store.find_or_add_link(a, b)
        assert store.find_or_add_link(b, a) is False
        assert store.get_links() == [{"source": a, "target": b}]

    def test_self_link_refused(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        assert store.find_or_add_link(a, a) is False
        assert not store.has_friends(a)

    def test_delete_link_either_direction(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        b = store.add_note("b")
        store.find_or_add_link(a, b)
        assert store.delete_link(b, a) == 1
        assert not store.has_friends(a)
        assert store.delete_link(a, b) == 0

    def test_friends_in_link_order(self, store: DocumentStore) -> None:
        hub = store.add_note("hub")
        ids = [store.add_note(f"n{i}") for i in range(3)]
        for doc_id in reversed(ids):
            store.find_or_add_link(hub, doc_id)
        assert store.get_friends(hub).target_doc_ids == list(reversed(ids))

    def test_has_friends(self, store: DocumentStore) -> None:
        a = store.add_note("a")
        b = store.add_note("b")
        assert not store.has_friends(a)
        store.find_or_add_link(b, a)
        assert store.has_friends(a)
        assert store.has_friends(b)


# ------------------------------------------------------------------
# Search
# ------------------------------------------------------------------

class TestAutoSuggest:
    def test_blank_input_gives_nothing(self, store: DocumentStore) -> None:
        store.add_note("anything")
        assert store.auto_suggest_search("") == []
        assert store.auto_suggest_search("   ") == []

    def test_matches_urls_and_notes(self, store: DocumentStore) -> None:
        url = store.find_or_add_url("https://python.org")
        note = store.add_note("<p>Python tips</p>")
        store.add_note("unrelated")
        results = store.auto_suggest_search("python")
        assert [r["doc_id"] for r in results] == [note, url]
        assert results[0] == {"doc_id": note, "kind": "note", "label": "Python tips"}

    def test_case_insensitive(self, store: DocumentStore) -> None:
        note = store.add_note("Hello World")
        assert [r["doc_id"] for r in store.auto_suggest_search("hello")] == [note]

    def test_ignores_markup(self, store: DocumentStore) -> None:
        store.add_note("<b>bold</b> move")
        assert store.auto_suggest_search("b>") == []

    def test_like_wildcards_are_literal(self, store: DocumentStore) -> None:
        store.add_note("100 percent")
        hit = store.add_note("100% sure")
        assert [r["doc_id"] for r in store.auto_suggest_search("100%")] == [hit]

    def test_respects_limit(self, tmp_path: Path) -> None:
        store = DocumentStore(tmp_path / "db.sqlite", suggest_limit=2)
        for i in range(5):
            store.add_note(f"match {i}")
        results = store.auto_suggest_search("match")
        assert [r["label"] for r in results] == ["match 4", "match 3"]


class TestStats:
    def test_counts(self, store: DocumentStore) -> None:
        a = store.find_or_add_url("https://example.com")
        b = store.add_note("note")
        store.find_or_add_link(a, b)
        assert store.stats() == {"url": 1, "note": 1, "links": 1}
