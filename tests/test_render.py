"""Tests for rwweb.render — Jinja2 note and canvas rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from rwweb.canvas import Canvas
from rwweb.ports import EMPTY_ITEM
from rwweb.render import EMPTY_ITEM_LABEL, doc_label, render_canvas, text_to_html
from rwweb.store import DocumentStore


@pytest.fixture
def store(tmp_path: Path) -> DocumentStore:
    return DocumentStore(tmp_path / "rwweb.db")


class TestTextToHtml:
    def test_paragraphs_and_line_breaks(self) -> None:
        assert text_to_html("Hello\nworld\n\nBye") == "<p>Hello<br>world</p><p>Bye</p>"

    def test_single_line(self) -> None:
        assert text_to_html("just this") == "<p>just this</p>"

    def test_escapes_markup(self) -> None:
        assert text_to_html("a < b & c") == "<p>a &lt; b &amp; c</p>"

    def test_windows_newlines(self) -> None:
        assert text_to_html("one\r\ntwo") == "<p>one<br>two</p>"

    def test_blank_text(self) -> None:
        assert text_to_html("") == ""
        assert text_to_html(" \n\n  ") == ""


class TestDocLabel:
    def test_empty_item(self, store: DocumentStore) -> None:
        assert doc_label(store, EMPTY_ITEM) == EMPTY_ITEM_LABEL

    def test_missing_doc(self, store: DocumentStore) -> None:
        assert doc_label(store, "N404") == "(missing)"

    def test_url_doc(self, store: DocumentStore) -> None:
        doc_id = store.find_or_add_url("https://example.com")
        assert doc_label(store, doc_id) == "https://example.com"

    def test_note_doc(self, store: DocumentStore) -> None:
        doc_id = store.add_note("<p>Hello<br>there</p>")
        assert doc_label(store, doc_id) == "Hello there"


class TestRenderCanvas:
    def test_empty_canvas(self, store: DocumentStore) -> None:
        out = render_canvas(Canvas(), store)
        assert out.startswith("# Canvas (0 visible items)")
        assert "(empty)" in out

    def test_lists_visible_items(self, store: DocumentStore) -> None:
        canvas = Canvas()
        note = store.add_note("a note")
        a = canvas.create_item(note, {"x": 0, "y": 0, "width": 100, "height": 50})
        b = canvas.create_item(EMPTY_ITEM, {"x": 200, "y": 0, "width": 100, "height": 50})
        hidden = canvas.create_item(note, {"x": 0, "y": 0})
        canvas.hide_item(hidden)
        canvas.connect_items(a, b)
        canvas.focus_item(a)

        out = render_canvas(canvas, store)
        assert out.startswith("# Canvas (2 visible items)")
        assert f"- {a} *: a note [{note}]" in out
        assert f"- {b}: {EMPTY_ITEM_LABEL} [{EMPTY_ITEM}]" in out
        assert "at (200, 0) 100x50" in out
        assert f"connected: {b}" in out
        assert hidden not in out

    def test_flags_shown(self, store: DocumentStore) -> None:
        canvas = Canvas()
        item_id = canvas.create_item(EMPTY_ITEM, {"x": 0, "y": 0})
        canvas.center_item(item_id)
        assert "centered" in render_canvas(canvas, store)
