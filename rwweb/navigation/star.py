"""Star reveal: center a document with two levels of friends around it.

First level: the document's targets (plus the empty item) on the right,
its sources on the left. Second level: the targets of each target further
right, the sources of each source further left. Nothing deeper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rwweb.navigation.workspace import Workspace
from rwweb.ports import EMPTY_ITEM

log = logging.getLogger(__name__)


@dataclass
class StarReveal:
    """What a star reveal showed, for callers that want to inspect it."""

    doc_id: str
    item_id: str | None
    target_doc_ids: list[str]
    source_doc_ids: list[str]
    second_level: dict[str, list[str]] = field(default_factory=dict)


def draw_star(ws: Workspace, doc_id: str | None = None, item_id: str | None = None) -> StarReveal:
    """Put a document in the center of view, with its linked docs around it.

    Accepts either a *doc_id* or the *item_id* showing it (or both).
    """
    if doc_id is None:
        doc_id = ws.canvas.get_item(item_id).doc_id  # type: ignore[arg-type]

    friends = ws.store.get_friends(doc_id)
    target_doc_ids = [*friends.target_doc_ids, EMPTY_ITEM]
    source_doc_ids = list(friends.source_doc_ids)
    ws.canvas.center_doc_with_friends(
        doc_id, item_id, target_doc_ids, source_doc_ids, animate=True,
    )

    reveal = StarReveal(doc_id, item_id, target_doc_ids, source_doc_ids)

    # Second level friends
    for target_id in target_doc_ids:
        friend_item_id = ws.canvas.get_item_id_for_doc_id(target_id)
        further = ws.store.get_friends(target_id).target_doc_ids
        ws.canvas.show_item_friends(friend_item_id, further, "right", animate=True)  # type: ignore[arg-type]
        reveal.second_level[target_id] = further
    for source_id in source_doc_ids:
        friend_item_id = ws.canvas.get_item_id_for_doc_id(source_id)
        further = ws.store.get_friends(source_id).source_doc_ids
        ws.canvas.show_item_friends(friend_item_id, further, "left", animate=True)  # type: ignore[arg-type]
        reveal.second_level[source_id] = further

    log.info(
        "Star on %s: %d target(s), %d source(s)",
        doc_id, len(target_doc_ids) - 1, len(source_doc_ids),
    )
    return reveal
