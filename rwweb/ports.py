"""Collaborator ports for the navigation orchestrator.

Two pluggable interfaces:
- ``GraphPort``: content-addressable store of documents and links.
- ``SpatialPort``: the canvas layout engine holding visible items.

The orchestrator only talks to these; :mod:`rwweb.store` and
:mod:`rwweb.canvas` provide the built-in adapters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

# Doc id of the sentinel item that holds the navigation input
EMPTY_ITEM = "emptyItem"

# Sides a friend column can be revealed on
SIDES = ("left", "right")


@dataclass
class Friends:
    """Documents linked from (targets) and to (sources) a document."""

    target_doc_ids: list[str] = field(default_factory=list)
    source_doc_ids: list[str] = field(default_factory=list)


@dataclass
class Item:
    """A visual placement of one document on the canvas."""

    item_id: str
    doc_id: str
    x: float
    y: float
    width: float
    height: float
    centered: bool = False
    expanded: bool = False
    hidden: bool = False

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def is_empty(self) -> bool:
        return self.doc_id == EMPTY_ITEM


class GraphPort(ABC):
    """Document/link graph store.

    All writes are find-or-add unless stated otherwise, so repeating a
    call never duplicates a document or a link.
    """

    @abstractmethod
    def find_or_add_url(self, url: str) -> str:
        """Return the id of the URL document for *url*, creating it if needed."""

    @abstractmethod
    def find_or_add_note(self, text: str) -> str:
        """Return the id of the note with exactly *text*, creating it if needed."""

    @abstractmethod
    def add_note(self, text: str, doc_id: str | None = None) -> str:
        """Store a new note and return its id.

        With *doc_id*, the note is stored under that id, replacing any
        older document with the same id.
        """

    @abstractmethod
    def find_or_add_link(self, source: str, target: str) -> bool:
        """Link *source* to *target*. Returns True if a new link was stored."""

    @abstractmethod
    def delete_link(self, doc1: str, doc2: str) -> int:
        """Delete the link between two documents, whatever its direction."""

    @abstractmethod
    def delete_doc(self, doc_id: str) -> None:
        """Delete a document entirely."""

    @abstractmethod
    def get_doc(self, doc_id: str) -> dict[str, Any] | None:
        """Return ``{"id", "kind", "url", "text", ...}`` or None."""

    @abstractmethod
    def get_doc_with_text(self, text: str) -> str | None:
        """Return the id of a note whose text equals *text*, or None."""

    @abstractmethod
    def get_friends(self, doc_id: str) -> Friends:
        """Return the outgoing and incoming neighbours of *doc_id*."""

    @abstractmethod
    def has_friends(self, doc_id: str) -> bool:
        """True if any link, in either direction, touches *doc_id*."""

    @abstractmethod
    def auto_suggest_search(self, input_value: str) -> list[dict[str, Any]]:
        """Return suggestions for a partially typed input."""


class SpatialPort(ABC):
    """Canvas layout engine.

    Methods taking an ``item_id`` raise when the id is unknown; callers
    are expected to pass ids they obtained from the engine.
    """

    @abstractmethod
    def remove_all_items(self) -> None:
        """Clear the canvas."""

    @abstractmethod
    def create_item(self, doc_id: str, geometry: dict[str, float]) -> str:
        """Place *doc_id* at ``geometry`` (x, y, width, height) and return the item id."""

    @abstractmethod
    def center_item(self, item_id: str) -> None:
        """Move the item to the middle of the view and mark it centered."""

    @abstractmethod
    def focus_item(self, item_id: str) -> None:
        """Give the item input focus."""

    @abstractmethod
    def change_doc(self, item_id: str, doc_id: str) -> None:
        """Show another document in an existing item."""

    @abstractmethod
    def expand_item(self, item_id: str, animate: bool = False) -> None:
        """Expand the item to show its embedded view."""

    @abstractmethod
    def hide_item(self, item_id: str) -> None:
        """Remove the item from view, dropping its connections."""

    @abstractmethod
    def center_doc_with_friends(
        self,
        doc_id: str,
        item_id: str | None,
        target_doc_ids: list[str],
        source_doc_ids: list[str],
        animate: bool = False,
    ) -> None:
        """Center *doc_id* and arrange its first-level friends around it."""

    @abstractmethod
    def show_item_friends(
        self,
        item_id: str,
        friend_doc_ids: list[str],
        side: str,
        animate: bool = False,
    ) -> None:
        """Reveal *friend_doc_ids* on one side of an item, connected to it."""

    @abstractmethod
    def get_item(self, item_id: str) -> Item:
        """Return the item with *item_id*."""

    @abstractmethod
    def get_item_id_for_doc_id(self, doc_id: str) -> str | None:
        """Return the visible item showing *doc_id*, or None."""

    @abstractmethod
    def get_connected_item_ids(self, item_id: str) -> list[str]:
        """Return the visible items connected to *item_id*."""
