"""Auto-suggest state of empty items.

The panel remembers what the user typed into each empty item and the
suggestion lists the store returned, keyed by the input value that
produced them. Rendering reads whatever is staged for the current value,
so a panel can be shown before a fresh search has run.
"""

from __future__ import annotations

from typing import Any


class SuggestionPanel:
    """Input values and staged suggestion lists for empty items."""

    def __init__(self) -> None:
        self._input_values: dict[str, str] = {}
        self._staged: dict[str, list[dict[str, Any]]] = {}
        self._visible: set[str] = set()

    def set_input_value(self, item_id: str, value: str) -> None:
        self._input_values[item_id] = value

    def input_value(self, item_id: str) -> str:
        return self._input_values.get(item_id, "")

    def request_render(self, item_id: str) -> list[dict[str, Any]]:
        """Mark the item's panel visible and return what is staged for its input.

        The list may be stale or empty; a later :meth:`stage` refreshes it.
        """
        self._visible.add(item_id)
        return self.suggestions_for(item_id)

    def is_visible(self, item_id: str) -> bool:
        return item_id in self._visible

    def stage(self, input_value: str, suggestions: list[dict[str, Any]]) -> None:
        """Store the suggestions produced for *input_value*.

        Lists staged for values no item holds any more are dropped.
        """
        live = set(self._input_values.values())
        live.add(input_value)
        self._staged = {value: items for value, items in self._staged.items() if value in live}
        self._staged[input_value] = list(suggestions)

    def suggestions_for(self, item_id: str) -> list[dict[str, Any]]:
        return list(self._staged.get(self.input_value(item_id), []))

    def clear(self) -> None:
        self._input_values.clear()
        self._staged.clear()
        self._visible.clear()

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "input_values": dict(self._input_values),
            "staged": {value: list(items) for value, items in self._staged.items()},
            "visible": sorted(self._visible),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SuggestionPanel:
        panel = cls()
        panel._input_values = {str(k): str(v) for k, v in (data.get("input_values") or {}).items()}
        panel._staged = {str(k): list(v) for k, v in (data.get("staged") or {}).items()}
        panel._visible = set(data.get("visible") or [])
        return panel
