"""Jinja2 template rendering for notes and canvas snapshots."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from rwweb.parse import html_to_label
from rwweb.ports import EMPTY_ITEM, GraphPort

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")

# Label shown for the empty item in listings
EMPTY_ITEM_LABEL = "(navigate...)"


def _get_env() -> Environment:
    """Create a Jinja2 environment loading from rwweb/templates/.

    HTML templates are autoescaped; markdown ones are not.
    """
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def text_to_html(text: str) -> str:
    """Convert plain text to a minimal HTML fragment.

    Blank lines separate ``<p>`` paragraphs, single newlines become
    ``<br>``. Markup in *text* is escaped. Blank text gives ``""``.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    paragraphs = []
    for block in _PARAGRAPH_BREAK_RE.split(normalized):
        lines = [line.strip() for line in block.split("\n")]
        lines = [line for line in lines if line]
        if lines:
            paragraphs.append(lines)
    if not paragraphs:
        return ""
    template = _get_env().get_template("note.html")
    return template.render(paragraphs=paragraphs)


def doc_label(store: GraphPort, doc_id: str) -> str:
    """Human readable label for a document id."""
    if doc_id == EMPTY_ITEM:
        return EMPTY_ITEM_LABEL
    doc = store.get_doc(doc_id)
    if doc is None:
        return "(missing)"
    if doc.get("url"):
        return doc["url"]
    return html_to_label(doc.get("text") or "")


def render_canvas(canvas: Any, store: GraphPort) -> str:
    """Render the visible items of a :class:`~rwweb.canvas.Canvas` as markdown."""
    rows = []
    for item in canvas.visible_items():
        flags = [name for name in ("centered", "expanded") if getattr(item, name)]
        rows.append({
            "item_id": item.item_id,
            "doc_id": item.doc_id,
            "label": doc_label(store, item.doc_id),
            "x": item.x,
            "y": item.y,
            "width": item.width,
            "height": item.height,
            "flags": flags,
            "focused": canvas.focused_item_id == item.item_id,
            "connected": canvas.get_connected_item_ids(item.item_id),
        })
    template = _get_env().get_template("canvas.md")
    return template.render(rows=rows)
