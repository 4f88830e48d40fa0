"""Navigation orchestrator: gestures over a document store and a canvas.

Resolves input to documents, infers links from item positions, draws
stars of linked documents and cleans up after drag-outs. All state lives
in the :class:`Workspace` passed to each operation.
"""

from rwweb.navigation.gestures import (
    WELCOME_DOC_ID,
    handle_dragged_out,
    handle_drop,
    handle_tap,
    init_canvas,
    navigate_to,
    set_empty_item_value,
    update_auto_suggest,
)
from rwweb.navigation.links import is_left_of, link_to_connected_items, unlink_connected_items
from rwweb.navigation.resolve import DropPayload, find_or_create_doc, resolve_drop
from rwweb.navigation.star import StarReveal, draw_star
from rwweb.navigation.workspace import Workspace

__all__ = [
    "DropPayload",
    "StarReveal",
    "WELCOME_DOC_ID",
    "Workspace",
    "draw_star",
    "find_or_create_doc",
    "handle_dragged_out",
    "handle_drop",
    "handle_tap",
    "init_canvas",
    "is_left_of",
    "link_to_connected_items",
    "navigate_to",
    "resolve_drop",
    "set_empty_item_value",
    "unlink_connected_items",
    "update_auto_suggest",
]
