"""Depth-first walk over named child slots.

Every slot access goes through :func:`slot_children`, which normalises the
three legal shapes (absent, single node, sequence of nodes) to a list, so the
walk itself has no single/sequence branch.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from form_validator.engine.probe import aggregation_of, is_node, is_visible, node_id_of
from form_validator.errors import StructuralMismatch

# visitor(node, parent) -> True to descend into the node's child slots
Visitor = Callable[[Any, Optional[Any]], bool]
SkipHook = Callable[[Any, str], None]
MismatchHook = Callable[[Any, str, StructuralMismatch], None]


def slot_children(node: Any, slot: str) -> List[Any]:
    """Return the children held in ``slot`` as a list (possibly empty).

    Raises
    ------
    StructuralMismatch
        If the slot holds neither a node nor a list/tuple.
    """
    value = aggregation_of(node, slot)
    if value is None:
        return []
    if is_node(value):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise StructuralMismatch(node_id_of(node), slot, value)


def walk(
    root: Any,
    visitor: Visitor,
    slots: Sequence[str],
    *,
    include_invisible: bool = False,
    on_skip: Optional[SkipHook] = None,
    on_mismatch: Optional[MismatchHook] = None,
) -> None:
    """Visit ``root`` and, where the visitor asks for it, its slot children in order.

    Unrecognised objects (not ``Visible``) are never visited. Invisible nodes
    are skipped together with their subtree unless ``include_invisible``.
    A slot of unexpected shape is reported to ``on_mismatch`` and skipped.
    """

    def _visit(node: Any, parent: Optional[Any]) -> None:
        if not is_node(node):
            if on_skip is not None:
                on_skip(node, "unrecognized")
            return
        if not include_invisible and not is_visible(node):
            if on_skip is not None:
                on_skip(node, "invisible")
            return
        if not visitor(node, parent):
            return
        for slot in slots:
            try:
                children = slot_children(node, slot)
            except StructuralMismatch as exc:
                if on_mismatch is not None:
                    on_mismatch(node, slot, exc)
                continue
            for child in children:
                _visit(child, node)

    _visit(root, None)


def flatten_children(node: Any, slots: Sequence[str]) -> List[Any]:
    """All direct children of ``node`` across ``slots``, mismatching slots ignored."""
    out: List[Any] = []
    for slot in slots:
        try:
            out.extend(slot_children(node, slot))
        except StructuralMismatch:
            continue
    return out
