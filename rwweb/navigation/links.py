"""Spatial link inference: the canvas layout decides link direction.

There is no explicit "draw an edge" gesture. When a document lands in an
item that is already connected to others, each connection becomes a
stored link pointing left to right.
"""

from __future__ import annotations

import logging

from rwweb.navigation.workspace import Workspace
from rwweb.ports import EMPTY_ITEM, Item

log = logging.getLogger(__name__)


def is_left_of(item: Item, other: Item) -> bool:
    """True if *item*'s horizontal centre is strictly left of *other*'s.

    Equal centres are "not left", so the other item becomes the source.
    """
    return item.center_x < other.center_x


def link_to_connected_items(ws: Workspace, item_id: str, doc_id: str) -> list[tuple[str, str]]:
    """Store a link between *doc_id* and the document of every connected item.

    The leftmost of each pair is the source. Connected empty items are
    skipped. Returns the ``(source, target)`` pairs that were requested.
    """
    pairs: list[tuple[str, str]] = []
    for connected_id in ws.canvas.get_connected_item_ids(item_id):
        item = ws.canvas.get_item(item_id)
        connected = ws.canvas.get_item(connected_id)
        if connected.doc_id == EMPTY_ITEM:
            continue

        if is_left_of(item, connected):
            source, target = doc_id, connected.doc_id
        else:
            source, target = connected.doc_id, doc_id

        ws.store.find_or_add_link(source, target)
        pairs.append((source, target))
    log.debug("Inferred %d link(s) for %s in %s", len(pairs), doc_id, item_id)
    return pairs


def unlink_connected_items(ws: Workspace, item_id: str) -> list[str]:
    """Delete the stored links shown as connections of *item_id*.

    Only links implied by the current connections are removed, never
    other links of the document. Returns the documents unlinked from.
    """
    doc_id = ws.canvas.get_item(item_id).doc_id
    unlinked = []
    for connected_id in ws.canvas.get_connected_item_ids(item_id):
        connected_doc_id = ws.canvas.get_item(connected_id).doc_id
        ws.store.delete_link(connected_doc_id, doc_id)
        unlinked.append(connected_doc_id)
    return unlinked
