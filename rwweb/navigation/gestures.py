"""Gesture handlers: one function per user gesture.

Each handler runs to completion as a plain sequence of store and canvas
calls on the given :class:`~rwweb.navigation.workspace.Workspace`.
"""

from __future__ import annotations

import logging
from typing import Any

from rwweb.navigation.links import link_to_connected_items, unlink_connected_items
from rwweb.navigation.resolve import DropPayload, find_or_create_doc, resolve_drop
from rwweb.navigation.star import draw_star
from rwweb.navigation.workspace import Workspace
from rwweb.ports import EMPTY_ITEM, SIDES

log = logging.getLogger(__name__)

WELCOME_DOC_ID = "welcomeMessage"

WELCOME_MESSAGE = (
    "Hi! This is a read/write web browser. "
    "It lets you <i>create</i> notes and links, to organise the web your way. "
    "It is far from finished, but click this note to browse more info, "
    "or enter a URL or note in the bar below."
)

# Demo graph shown next to the welcome note: (source, target) by URL,
# with None standing for the welcome note itself.
WELCOME_LINKS: list[tuple[str | None, str]] = [
    (None, "https://rwweb.org"),
    ("https://rwweb.org", "https://www.w3.org/People/Berners-Lee/WorldWideWeb.html"),
    ("https://rwweb.org", "https://www.w3.org/History/1989/proposal.html"),
    ("https://rwweb.org", "http://www.theatlantic.com/magazine/archive/1945/07/as-we-may-think/303881/"),
    (None, "https://www.youtube.com/embed/vKzYmDUydTw"),
    ("https://www.youtube.com/embed/vKzYmDUydTw", "http://iannotate.org"),
]


def init_canvas(ws: Workspace) -> str:
    """Clean the canvas and show an empty item. Returns the empty item's id."""
    ws.canvas.remove_all_items()
    ws.suggestions.clear()

    welcome = ws.config["welcome"]
    if welcome["enabled"]:
        _seed_welcome(ws, welcome["geometry"])

    item_id = ws.canvas.create_item(EMPTY_ITEM, dict(ws.config["canvas"]["empty_item"]))
    ws.canvas.center_item(item_id)
    ws.canvas.focus_item(item_id)
    log.info("Canvas initialised (empty item %s)", item_id)
    return item_id


def _seed_welcome(ws: Workspace, geometry: dict[str, float]) -> None:
    """Store and show the welcome note, plus some documents linked from it."""
    # Stored under a fixed id so a reset overwrites the older copy
    ws.store.add_note(WELCOME_MESSAGE, doc_id=WELCOME_DOC_ID)
    ws.canvas.create_item(WELCOME_DOC_ID, dict(geometry))

    for source_url, target_url in WELCOME_LINKS:
        source = WELCOME_DOC_ID if source_url is None else ws.store.find_or_add_url(source_url)
        target = ws.store.find_or_add_url(target_url)
        ws.store.find_or_add_link(source, target)


def navigate_to(
    ws: Workspace,
    item_id: str,
    doc_id: str | None = None,
    user_input: str | None = None,
) -> str | None:
    """Show a document in *item_id* and draw its star around it.

    Pass either *doc_id* or *user_input*. Links to the item's current
    connections are inferred before the star moves anything. Blank input
    without a *doc_id* changes nothing and returns None.
    """
    if doc_id is None:
        doc_id = find_or_create_doc(ws, user_input)
        if doc_id is None:
            log.debug("Ignoring blank navigation input for %s", item_id)
            return None

    ws.canvas.change_doc(item_id, doc_id)
    link_to_connected_items(ws, item_id, doc_id)
    draw_star(ws, item_id=item_id)
    ws.canvas.focus_item(item_id)
    log.info("Navigated %s to %s", item_id, doc_id)
    return doc_id


def handle_drop(ws: Workspace, x: float, y: float, payload: DropPayload) -> str | None:
    """Create an item for whatever was dropped at (x, y). Returns its id, if any."""
    doc_id = resolve_drop(ws, payload)
    if doc_id is None:
        return None

    size = ws.config["canvas"]["drop_item"]
    width, height = size["width"], size["height"]
    geometry = {"x": x - width / 2, "y": y - height / 2, "width": width, "height": height}
    item_id = ws.canvas.create_item(doc_id, geometry)
    log.info("Dropped %s at (%s, %s) as %s", doc_id, x, y, item_id)
    return item_id


def handle_tap(ws: Workspace, item_id: str) -> None:
    """Focus the item; then star it, or expand it if it is a centered web page."""
    ws.canvas.focus_item(item_id)

    item = ws.canvas.get_item(item_id)
    if item.doc_id == EMPTY_ITEM:
        return
    if item.centered:
        # Only web pages have an embedded view to expand
        doc = ws.store.get_doc(item.doc_id)
        if doc is not None and doc.get("url"):
            ws.canvas.expand_item(item_id, animate=True)
    else:
        draw_star(ws, item_id=item_id)


def handle_dragged_out(ws: Workspace, item_id: str, direction: str) -> None:
    """Remove an item dragged off the canvas edge.

    Its visible links are deleted and the item hidden. The document is
    deleted too once nothing in the whole graph links to or from it.
    Both directions behave the same; any other direction is ignored.
    """
    if direction not in SIDES:
        log.warning("Ignoring drag-out of %s towards unknown direction %r", item_id, direction)
        return

    doc_id = ws.canvas.get_item(item_id).doc_id
    if doc_id != EMPTY_ITEM:
        unlink_connected_items(ws, item_id)

    ws.canvas.hide_item(item_id)

    if doc_id != EMPTY_ITEM and not ws.store.has_friends(doc_id):
        ws.store.delete_doc(doc_id)
        log.info("Deleted jettisoned document %s", doc_id)


def set_empty_item_value(ws: Workspace, item_id: str, value: str) -> None:
    """Record what the user typed into an empty item."""
    ws.suggestions.set_input_value(item_id, value)


def update_auto_suggest(ws: Workspace, item_id: str) -> list[dict[str, Any]]:
    """Show staged suggestions for the item, then refresh them from the store."""
    ws.suggestions.request_render(item_id)
    input_value = ws.suggestions.input_value(item_id)
    suggestions = ws.store.auto_suggest_search(input_value)
    ws.suggestions.stage(input_value, suggestions)
    return suggestions
