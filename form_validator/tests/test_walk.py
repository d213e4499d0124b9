"""Tests for child-slot normalisation and the generic walk."""

from __future__ import annotations

import pytest

from form_validator.engine.walk import flatten_children, slot_children, walk
from form_validator.errors import StructuralMismatch
from form_validator.nodes import Container, Element, Input

SLOTS = ("form", "content", "items")


def _visit_all(root, slots=SLOTS, **kwargs):
    seen = []

    def visitor(node, parent):
        seen.append(node.node_id)
        return True

    walk(root, visitor, slots, **kwargs)
    return seen


def test_slot_children_shapes() -> None:
    single = Input("one")
    node = Element("e", form=single, content=[Input("a"), Input("b")], items=None)
    assert slot_children(node, "form") == [single]
    assert [c.node_id for c in slot_children(node, "content")] == ["a", "b"]
    assert slot_children(node, "items") == []
    assert slot_children(node, "missing") == []


def test_slot_children_tuple_is_a_sequence() -> None:
    node = Element("e", content=(Input("a"),))
    assert [c.node_id for c in slot_children(node, "content")] == ["a"]


def test_slot_children_mismatch() -> None:
    node = Element("e", content="not a node")
    with pytest.raises(StructuralMismatch):
        slot_children(node, "content")


def test_walk_order_follows_slot_order_then_sequence_order() -> None:
    root = Element(
        "root",
        items=[Input("i1")],
        content=[Container(Input("c1a"), node_id="c1"), Input("c2")],
        form=Input("f"),
    )
    assert _visit_all(root) == ["root", "f", "c1", "c1a", "c2", "i1"]


def test_walk_skips_invisible_subtree() -> None:
    hidden = Container(Input("inner"), node_id="hidden", visible=False)
    root = Container(hidden, Input("shown"), node_id="root")
    skipped = []
    seen = _visit_all(root, on_skip=lambda node, reason: skipped.append((node.node_id, reason)))
    assert seen == ["root", "shown"]
    assert skipped == [("hidden", "invisible")]


def test_walk_include_invisible() -> None:
    hidden = Container(Input("inner"), node_id="hidden", visible=False)
    root = Container(hidden, node_id="root")
    assert _visit_all(root, include_invisible=True) == ["root", "hidden", "inner"]


def test_walk_skips_unrecognized_objects() -> None:
    root = Container(object(), Input("a"), node_id="root")
    reasons = []
    seen = _visit_all(root, on_skip=lambda node, reason: reasons.append(reason))
    assert seen == ["root", "a"]
    assert reasons == ["unrecognized"]


def test_walk_reports_mismatch_and_continues() -> None:
    root = Element("root", form=42, content=[Input("a")])
    mismatches = []
    seen = _visit_all(root, on_mismatch=lambda node, slot, exc: mismatches.append(slot))
    assert seen == ["root", "a"]
    assert mismatches == ["form"]


def test_visitor_false_stops_descent() -> None:
    root = Container(Container(Input("deep"), node_id="mid"), node_id="root")
    seen = []

    def visitor(node, parent):
        seen.append(node.node_id)
        return node.node_id != "mid"

    walk(root, visitor, SLOTS)
    assert seen == ["root", "mid"]


def test_visitor_receives_parent() -> None:
    child = Input("a")
    root = Container(child, node_id="root")
    parents = {}

    def visitor(node, parent):
        parents[node.node_id] = parent
        return True

    walk(root, visitor, SLOTS)
    assert parents["root"] is None
    assert parents["a"] is root


def test_flatten_children_ignores_mismatch() -> None:
    node = Element("e", form=3, content=[Input("a")], items=[Input("b")])
    assert [c.node_id for c in flatten_children(node, SLOTS)] == ["a", "b"]
