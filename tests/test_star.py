"""Tests for rwweb.navigation.star — two-level star reveal."""

from __future__ import annotations

from pathlib import Path

import pytest

from rwweb.canvas import Canvas
from rwweb.navigation import Workspace, draw_star
from rwweb.ports import EMPTY_ITEM
from rwweb.store import DocumentStore


@pytest.fixture
def ws(tmp_path: Path) -> Workspace:
    return Workspace(store=DocumentStore(tmp_path / "rwweb.db"), canvas=Canvas())


def _item_for(ws: Workspace, doc_id: str):
    item_id = ws.canvas.get_item_id_for_doc_id(doc_id)
    assert item_id is not None, f"{doc_id} not visible"
    return ws.canvas.get_item(item_id)


class TestDrawStar:
    def test_right_side_has_targets_plus_empty_item(self, ws: Workspace) -> None:
        hub = ws.store.add_note("hub")
        targets = [ws.store.add_note(f"t{i}") for i in range(3)]
        for t in targets:
            ws.store.find_or_add_link(hub, t)
        item_id = ws.canvas.create_item(hub, {"x": 0, "y": 0})

        reveal = draw_star(ws, item_id=item_id)

        assert reveal.target_doc_ids == [*targets, EMPTY_ITEM]
        centre = ws.canvas.get_item(item_id)
        right = [i for i in ws.canvas.visible_items() if i.x > centre.x]
        assert len(right) == len(targets) + 1
        assert centre.centered

    def test_sources_on_the_left(self, ws: Workspace) -> None:
        hub = ws.store.add_note("hub")
        src = ws.store.add_note("src")
        ws.store.find_or_add_link(src, hub)
        item_id = ws.canvas.create_item(hub, {"x": 0, "y": 0})

        draw_star(ws, item_id=item_id)

        assert _item_for(ws, src).x < ws.canvas.get_item(item_id).x
        assert _item_for(ws, EMPTY_ITEM).x > ws.canvas.get_item(item_id).x

    def test_second_level(self, ws: Workspace) -> None:
        hub = ws.store.add_note("hub")
        target = ws.store.add_note("target")
        target_of_target = ws.store.add_note("further right")
        source = ws.store.add_note("source")
        source_of_source = ws.store.add_note("further left")
        ws.store.find_or_add_link(hub, target)
        ws.store.find_or_add_link(target, target_of_target)
        ws.store.find_or_add_link(source, hub)
        ws.store.find_or_add_link(source_of_source, source)
        item_id = ws.canvas.create_item(hub, {"x": 0, "y": 0})

        reveal = draw_star(ws, item_id=item_id)

        assert reveal.second_level[target] == [target_of_target]
        assert reveal.second_level[source] == [source_of_source]
        assert _item_for(ws, target_of_target).x > _item_for(ws, target).x
        assert _item_for(ws, source_of_source).x < _item_for(ws, source).x
        target_item_id = ws.canvas.get_item_id_for_doc_id(target)
        assert _item_for(ws, target_of_target).item_id in ws.canvas.get_connected_item_ids(target_item_id)

    def test_no_third_level(self, ws: Workspace) -> None:
        docs = [ws.store.add_note(f"d{i}") for i in range(4)]
        for a, b in zip(docs, docs[1:]):
            ws.store.find_or_add_link(a, b)
        item_id = ws.canvas.create_item(docs[0], {"x": 0, "y": 0})

        draw_star(ws, item_id=item_id)

        assert ws.canvas.get_item_id_for_doc_id(docs[2]) is not None
        assert ws.canvas.get_item_id_for_doc_id(docs[3]) is None

    def test_by_doc_id_only(self, ws: Workspace) -> None:
        hub = ws.store.add_note("hub")
        reveal = draw_star(ws, doc_id=hub)
        assert reveal.item_id is None
        assert _item_for(ws, hub).centered

    def test_hides_previous_star(self, ws: Workspace) -> None:
        a = ws.store.add_note("a")
        b = ws.store.add_note("b")
        unrelated = ws.store.add_note("unrelated")
        ws.store.find_or_add_link(a, b)
        ws.canvas.create_item(unrelated, {"x": 0, "y": 0})
        item_id = ws.canvas.create_item(a, {"x": 0, "y": 0})

        draw_star(ws, item_id=item_id)

        assert ws.canvas.get_item_id_for_doc_id(unrelated) is None
        assert {i.doc_id for i in ws.canvas.visible_items()} == {a, b, EMPTY_ITEM}
