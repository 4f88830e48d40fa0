"""Tests for rwweb.suggest — empty item input and staged suggestions."""

from __future__ import annotations

from rwweb.suggest import SuggestionPanel

HIT = {"doc_id": "N001", "kind": "note", "label": "hello"}


class TestSuggestionPanel:
    def test_input_defaults_to_blank(self) -> None:
        assert SuggestionPanel().input_value("item1") == ""

    def test_render_before_stage_is_empty(self) -> None:
        panel = SuggestionPanel()
        panel.set_input_value("item1", "hel")
        assert panel.request_render("item1") == []
        assert panel.is_visible("item1")

    def test_staged_list_follows_input_value(self) -> None:
        panel = SuggestionPanel()
        panel.stage("hel", [HIT])
        panel.set_input_value("item1", "hel")
        assert panel.request_render("item1") == [HIT]
        panel.set_input_value("item1", "help")
        assert panel.suggestions_for("item1") == []

    def test_clear(self) -> None:
        panel = SuggestionPanel()
        panel.set_input_value("item1", "x")
        panel.stage("x", [HIT])
        panel.request_render("item1")
        panel.clear()
        assert panel.input_value("item1") == ""
        assert not panel.is_visible("item1")

    def test_dict_round_trip(self) -> None:
        panel = SuggestionPanel()
        panel.set_input_value("item2", "hel")
        panel.stage("hel", [HIT])
        panel.request_render("item2")
        restored = SuggestionPanel.from_dict(panel.to_dict())
        assert restored.suggestions_for("item2") == [HIT]
        assert restored.is_visible("item2")

    def test_stage_drops_stale_prefixes(self) -> None:
        panel = SuggestionPanel()
        for value in ("p", "py", "pyt", "pyth"):
            panel.set_input_value("item1", value)
            panel.stage(value, [HIT])
        assert set(panel.to_dict()["staged"]) == {"pyth"}

    def test_stage_keeps_values_of_other_items(self) -> None:
        panel = SuggestionPanel()
        panel.set_input_value("item1", "hel")
        panel.stage("hel", [HIT])
        panel.set_input_value("item2", "wor")
        panel.stage("wor", [])
        assert panel.suggestions_for("item1") == [HIT]
