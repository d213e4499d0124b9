"""Capability probing at the node boundary.

Each helper answers one question about a node and folds "not applicable"
into a default, so the classifier and the executors never handle
``ApplicabilityMiss`` themselves.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from form_validator.errors import ApplicabilityMiss
from form_validator.models.state import ValueState
from form_validator.nodes.capabilities import (
    Bindable,
    Binding,
    Containerish,
    Enableable,
    ErrorStateful,
    LabelHinted,
    MultiToken,
    PropertyHolder,
    Requireable,
    Visible,
)

# Errors that mean "this node does not carry that property/capability".
MISSES: Tuple[type, ...] = (ApplicabilityMiss, AttributeError, KeyError)


def node_id_of(node: Any) -> str:
    return str(getattr(node, "node_id", "") or "")


def state_key(node: Any) -> str:
    """Key of per-node validator bookkeeping; nodes without an id fall back to object identity."""
    return node_id_of(node) or f"#{id(node)}"


def is_visible(node: Any) -> bool:
    try:
        return bool(node.is_visible())
    except MISSES:
        return True


def is_enabled(node: Any) -> bool:
    if not isinstance(node, Enableable):
        return True
    try:
        return bool(node.is_enabled())
    except MISSES:
        return True


def is_required(node: Any) -> bool:
    if not isinstance(node, Requireable):
        return False
    try:
        return node.is_required() is True
    except MISSES:
        return False


def read_property(node: Any, name: str) -> Any:
    """Read a property; raises ``ApplicabilityMiss`` when the node has none."""
    if not isinstance(node, PropertyHolder):
        raise ApplicabilityMiss(node_id_of(node), name)
    return node.get_property(name)


def binding_of(node: Any, name: str) -> Optional[Binding]:
    if not isinstance(node, Bindable):
        return None
    try:
        return node.get_binding(name)
    except MISSES:
        return None


def typed_binding(node: Any, name: str) -> Optional[Binding]:
    """Binding of ``name`` if it declares a data type."""
    binding = binding_of(node, name)
    if binding is None or getattr(binding, "data_type", None) is None:
        return None
    return binding


def first_typed_property(node: Any, properties: Sequence[str]) -> Optional[str]:
    for name in properties:
        if typed_binding(node, name) is not None:
            return name
    return None


def value_state(node: Any) -> Optional[ValueState]:
    """Current value state, or None when the node has no error indicator."""
    if not isinstance(node, ErrorStateful):
        return None
    try:
        return ValueState(node.get_value_state())
    except MISSES:
        return None


def value_state_text(node: Any) -> str:
    if not isinstance(node, ErrorStateful):
        return ""
    try:
        return node.get_value_state_text() or ""
    except MISSES:
        return ""


def set_value_state(node: Any, state: ValueState, text: Optional[str] = None) -> None:
    if not isinstance(node, ErrorStateful):
        return
    try:
        node.set_value_state(state, text)
    except MISSES:
        pass


def aggregation_of(node: Any, name: str) -> Any:
    if not isinstance(node, Containerish):
        return None
    try:
        return node.get_aggregation(name)
    except MISSES:
        return None


def is_picker(node: Any) -> bool:
    return aggregation_of(node, "picker") is not None


def tokens_of(node: Any) -> Optional[Sequence[Any]]:
    """Tokens of a multi-token control, None for any other node."""
    if not isinstance(node, MultiToken):
        return None
    try:
        tokens = node.get_tokens()
    except MISSES:
        return None
    return () if tokens is None else tokens


def label_hint_of(node: Any) -> Optional[str]:
    if not isinstance(node, LabelHinted):
        return None
    try:
        hint = node.get_label_hint()
    except MISSES:
        return None
    return hint or None


def is_empty(value: Any) -> bool:
    """Emptiness used by the required check.

    None, ``""``, ``False`` and empty sequences are empty. Numbers, including
    0, are values.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def is_node(value: Any) -> bool:
    return isinstance(value, Visible)
