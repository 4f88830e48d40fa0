"""In-memory canvas layout engine.

Holds the items on the canvas, their geometry and the connections drawn
between them. Placement is deterministic: a star puts the focal item in
the middle of the viewport with its targets in a column to the right and
its sources in a column to the left; friend reveals add further columns.

Items are never removed by layout operations, only hidden, so an item id
handed out once stays resolvable until :meth:`Canvas.remove_all_items`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Iterable

from rwweb.config import DEFAULTS
from rwweb.ports import SIDES, Item, SpatialPort

log = logging.getLogger(__name__)


class UnknownItemError(KeyError):
    """Raised when an item id is not on the canvas."""


class Canvas(SpatialPort):
    """:class:`~rwweb.ports.SpatialPort` keeping items in a dict.

    Parameters
    ----------
    geometry:
        The ``canvas`` block of the config (viewport, friend_item,
        column_gap, row_gap). Defaults to :data:`rwweb.config.DEFAULTS`.
    """

    def __init__(self, geometry: dict[str, Any] | None = None) -> None:
        geometry = geometry or DEFAULTS["canvas"]
        self._viewport = dict(geometry["viewport"])
        self._friend_size = dict(geometry["friend_item"])
        self._column_gap = geometry["column_gap"]
        self._row_gap = geometry["row_gap"]
        self._items: dict[str, Item] = {}
        self._connections: set[tuple[str, str]] = set()
        self._next_number = 1
        self.focused_item_id: str | None = None

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _require(self, item_id: str | None) -> Item:
        try:
            return self._items[item_id]  # type: ignore[index]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def get_item(self, item_id: str) -> Item:
        return self._require(item_id)

    def get_item_id_for_doc_id(self, doc_id: str) -> str | None:
        for item in self._items.values():
            if not item.hidden and item.doc_id == doc_id:
                return item.item_id
        return None

    def get_connected_item_ids(self, item_id: str) -> list[str]:
        """Return visible items connected to *item_id*, oldest item first."""
        self._require(item_id)
        connected = set()
        for a, b in self._connections:
            if a == item_id:
                connected.add(b)
            elif b == item_id:
                connected.add(a)
        return [
            other_id for other_id, item in self._items.items()
            if other_id in connected and not item.hidden
        ]

    def visible_items(self) -> list[Item]:
        return [item for item in self._items.values() if not item.hidden]

    # ------------------------------------------------------------------
    # Item primitives
    # ------------------------------------------------------------------

    def remove_all_items(self) -> None:
        self._items.clear()
        self._connections.clear()
        self.focused_item_id = None

    def create_item(self, doc_id: str, geometry: dict[str, float]) -> str:
        """Create a visible item. *geometry* needs x and y; size defaults to a friend item."""
        item_id = f"item{self._next_number}"
        self._next_number += 1
        self._items[item_id] = Item(
            item_id=item_id,
            doc_id=doc_id,
            x=geometry["x"],
            y=geometry["y"],
            width=geometry.get("width", self._friend_size["width"]),
            height=geometry.get("height", self._friend_size["height"]),
        )
        log.debug("Created %s for %s", item_id, doc_id)
        return item_id

    def center_item(self, item_id: str) -> None:
        item = self._require(item_id)
        for other in self._items.values():
            other.centered = False
        item.hidden = False
        item.centered = True
        item.x = self._viewport["width"] / 2 - item.width / 2
        item.y = self._viewport["height"] / 2 - item.height / 2

    def focus_item(self, item_id: str) -> None:
        self._require(item_id)
        self.focused_item_id = item_id

    def change_doc(self, item_id: str, doc_id: str) -> None:
        item = self._require(item_id)
        item.doc_id = doc_id
        item.expanded = False

    def expand_item(self, item_id: str, animate: bool = False) -> None:
        item = self._require(item_id)
        item.expanded = True
        log.debug("Expanded %s (animate=%s)", item_id, animate)

    def hide_item(self, item_id: str) -> None:
        item = self._require(item_id)
        item.hidden = True
        item.centered = False
        item.expanded = False
        self._connections = {
            pair for pair in self._connections if item_id not in pair
        }
        if self.focused_item_id == item_id:
            self.focused_item_id = None

    def connect_items(self, item_id: str, other_id: str) -> None:
        """Draw a connection between two items."""
        self._require(item_id)
        self._require(other_id)
        if item_id != other_id:
            self._connections.add(_pair(item_id, other_id))

    # ------------------------------------------------------------------
    # Star layout
    # ------------------------------------------------------------------

    def center_doc_with_friends(
        self,
        doc_id: str,
        item_id: str | None,
        target_doc_ids: list[str],
        source_doc_ids: list[str],
        animate: bool = False,
    ) -> None:
        """Center *doc_id* with its targets on the right and sources on the left.

        The focal item is *item_id* when given, else an item already
        showing *doc_id*, else a new one. Every visible item that is not
        part of the new star is hidden and all old connections are
        replaced by focal-to-friend connections.
        """
        if item_id is not None:
            focal = self._require(item_id)
            focal.doc_id = doc_id
        else:
            focal = self._claim(doc_id, claimed=set())
        focal.hidden = False

        claimed = {focal.item_id}
        targets = self._claim_all(target_doc_ids, claimed)
        sources = self._claim_all(source_doc_ids, claimed)

        for item in self._items.values():
            if item.item_id not in claimed and not item.hidden:
                item.hidden = True
                item.centered = False
        for item in targets + sources:
            item.expanded = False

        self._connections = {_pair(focal.item_id, f.item_id) for f in targets + sources}
        self.center_item(focal.item_id)
        self._stack(targets, focal, "right")
        self._stack(sources, focal, "left")
        log.debug(
            "Star on %s (%s): %d target(s), %d source(s), animate=%s",
            focal.item_id, doc_id, len(targets), len(sources), animate,
        )

    def show_item_friends(
        self,
        item_id: str,
        friend_doc_ids: list[str],
        side: str,
        animate: bool = False,
    ) -> None:
        """Reveal *friend_doc_ids* in a column on *side* of the item.

        Documents already visible are connected where they are; the rest
        get new (or previously hidden) items.
        """
        if side not in SIDES:
            raise ValueError(f"Invalid side '{side}'. Must be one of {SIDES}")
        anchor = self._require(item_id)

        placed: list[Item] = []
        for doc_id in friend_doc_ids:
            existing = self.get_item_id_for_doc_id(doc_id)
            if existing == anchor.item_id:
                continue
            if existing is None:
                friend = self._claim(doc_id, claimed={anchor.item_id})
                friend.hidden = False
                placed.append(friend)
                existing = friend.item_id
            self._connections.add(_pair(anchor.item_id, existing))

        self._stack(placed, anchor, side)
        log.debug(
            "Revealed %d friend(s) of %s on the %s (animate=%s)",
            len(friend_doc_ids), item_id, side, animate,
        )

    def _claim_all(self, doc_ids: Iterable[str], claimed: set[str]) -> list[Item]:
        items = []
        claimed_docs = {self._items[i].doc_id for i in claimed}
        for doc_id in doc_ids:
            if doc_id in claimed_docs:
                continue
            item = self._claim(doc_id, claimed)
            item.hidden = False
            claimed.add(item.item_id)
            claimed_docs.add(doc_id)
            items.append(item)
        return items

    def _claim(self, doc_id: str, claimed: set[str]) -> Item:
        """Find an unclaimed item for *doc_id*, visible first, then hidden; else create one."""
        candidates = [
            item for item in self._items.values()
            if item.doc_id == doc_id and item.item_id not in claimed
        ]
        candidates.sort(key=lambda item: item.hidden)
        if candidates:
            return candidates[0]
        item_id = self.create_item(doc_id, {"x": 0, "y": 0})
        return self._items[item_id]

    def _stack(self, items: list[Item], anchor: Item, side: str) -> None:
        """Stack *items* in a column beside *anchor*, vertically centred on it."""
        if not items:
            return
        total = sum(item.height for item in items) + self._row_gap * (len(items) - 1)
        y = anchor.center_y - total / 2
        for item in items:
            if side == "right":
                item.x = anchor.x + anchor.width + self._column_gap
            else:
                item.x = anchor.x - self._column_gap - item.width
            item.y = y
            item.centered = False
            y += item.height + self._row_gap

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "next_item_number": self._next_number,
            "focused_item_id": self.focused_item_id,
            "items": [asdict(item) for item in self._items.values()],
            "connections": sorted([a, b] for a, b in self._connections),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        geometry: dict[str, Any] | None = None,
    ) -> Canvas:
        canvas = cls(geometry)
        for raw in data.get("items", []):
            item = Item(**raw)
            canvas._items[item.item_id] = item
        canvas._connections = {
            _pair(a, b) for a, b in data.get("connections", [])
            if a in canvas._items and b in canvas._items
        }
        canvas._next_number = int(data.get("next_item_number", len(canvas._items) + 1))
        focused = data.get("focused_item_id")
        canvas.focused_item_id = focused if focused in canvas._items else None
        return canvas


def _pair(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a <= b else (b, a)
