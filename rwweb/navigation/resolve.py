"""Resolve user input and drop payloads to canonical document ids.

Every branch goes through a find-or-add call on the store, so resolving
the same input twice yields the same document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from rwweb.navigation.workspace import Workspace
from rwweb.parse import as_url, strip_nul
from rwweb.render import text_to_html

log = logging.getLogger(__name__)


@dataclass
class DropPayload:
    """What a drag-and-drop carried: a URL, an HTML fragment and/or plain text."""

    url: str | None = None
    html: str | None = None
    text: str | None = None

    @classmethod
    def from_data(cls, data: Mapping[str, str | None]) -> DropPayload:
        """Build from MIME-keyed drag data (``URL``, ``text/html``, ``text/plain``)."""
        return cls(
            url=data.get("URL") or data.get("text/uri-list") or None,
            html=data.get("text/html") or None,
            text=data.get("text/plain") or data.get("text") or None,
        )


def find_or_create_doc(ws: Workspace, user_input: str | None) -> str | None:
    """Resolve typed input to a document id.

    URLs are found or added by normalised URL. Other text reuses a note
    with exactly that text or creates a new one. Blank input returns None.
    """
    if user_input is None or not user_input.strip():
        return None

    url = as_url(user_input)
    if url:
        return ws.store.find_or_add_url(url)

    doc_id = ws.store.get_doc_with_text(user_input)
    if doc_id is None:
        doc_id = ws.store.add_note(user_input)
    return doc_id


def resolve_drop(ws: Workspace, payload: DropPayload) -> str | None:
    """Resolve a drop payload: URL first, then HTML, then plain text."""
    url = payload.url or as_url(payload.text)
    if url:
        return ws.store.find_or_add_url(url)

    html = strip_nul(payload.html or "")
    if html.strip():
        return ws.store.find_or_add_note(html)

    if payload.text:
        note = text_to_html(payload.text)
        if note:
            return ws.store.find_or_add_note(note)

    log.debug("Ignoring drop with nothing usable")
    return None
