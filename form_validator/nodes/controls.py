"""Plain in-memory control tree.

These classes implement the capability protocols without any UI toolkit.
They are the node model for callers that describe a form as data, and the
reference shapes for adapters of real toolkits (see
:mod:`form_validator.gui.widget_nodes`).

Properties are only applicable when present in the node's property mapping;
reading any other property raises ``ApplicabilityMiss``. The same holds for
the required flag, which is absent unless given.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, Iterable, List, Optional, Sequence

from form_validator.errors import ApplicabilityMiss
from form_validator.models.state import ValueState
from form_validator.nodes.capabilities import Binding

_ids = itertools.count(1)


class Element:
    """A visible tree element with named child slots (aggregations)."""

    kind = "element"

    def __init__(self, node_id: Optional[str] = None, *, visible: bool = True, **aggregations: Any) -> None:
        self.node_id = node_id or f"{self.kind}-{next(_ids)}"
        self.visible = visible
        self._aggregations: Dict[str, Any] = dict(aggregations)

    def is_visible(self) -> bool:
        return bool(self.visible)

    def get_aggregation(self, name: str) -> Any:
        return self._aggregations.get(name)

    def set_aggregation(self, name: str, value: Any) -> None:
        self._aggregations[name] = value

    def add(self, child: Any, slot: str = "content") -> Any:
        """Append ``child`` to a multi-child slot and return it."""
        current = self._aggregations.get(slot)
        if current is None:
            self._aggregations[slot] = [child]
        elif isinstance(current, list):
            current.append(child)
        else:
            raise TypeError(f"slot '{slot}' of '{self.node_id}' holds a single child.")
        return child

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.node_id!r})"


class Container(Element):
    """Layout element: holds children in one slot, validates nothing itself."""

    kind = "container"

    def __init__(
        self,
        *children: Any,
        node_id: Optional[str] = None,
        slot: str = "content",
        visible: bool = True,
        **aggregations: Any,
    ) -> None:
        if children:
            aggregations[slot] = list(children)
        super().__init__(node_id, visible=visible, **aggregations)


class Control(Element):
    """A form control with properties, bindings and a value state."""

    kind = "control"

    def __init__(
        self,
        node_id: Optional[str] = None,
        *,
        properties: Optional[Dict[str, Any]] = None,
        bindings: Optional[Dict[str, Binding]] = None,
        required: Optional[bool] = None,
        enabled: bool = True,
        visible: bool = True,
        label_hint: Optional[str] = None,
        value_state: ValueState = ValueState.NONE,
        value_state_text: str = "",
        **aggregations: Any,
    ) -> None:
        super().__init__(node_id, visible=visible, **aggregations)
        self.properties: Dict[str, Any] = dict(properties or {})
        self.bindings: Dict[str, Binding] = dict(bindings or {})
        self.required = required
        self.enabled = enabled
        self.label_hint = label_hint
        self.value_state = ValueState(value_state)
        self.value_state_text = value_state_text

    # Requireable / Enableable
    def is_required(self) -> bool:
        if self.required is None:
            raise ApplicabilityMiss(self.node_id, "required")
        return bool(self.required)

    def is_enabled(self) -> bool:
        return bool(self.enabled)

    # PropertyHolder
    def get_property(self, name: str) -> Any:
        if name not in self.properties:
            raise ApplicabilityMiss(self.node_id, name)
        return self.properties[name]

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value

    # Bindable
    def get_binding(self, name: str) -> Optional[Binding]:
        return self.bindings.get(name)

    def bind(self, name: str, binding: Binding) -> "Control":
        self.bindings[name] = binding
        return self

    # ErrorStateful
    def get_value_state(self) -> ValueState:
        return self.value_state

    def set_value_state(self, state: ValueState, text: Optional[str] = None) -> None:
        self.value_state = ValueState(state)
        if text is not None:
            self.value_state_text = text

    def get_value_state_text(self) -> str:
        return self.value_state_text

    # LabelHinted
    def get_label_hint(self) -> Optional[str]:
        return self.label_hint


class Input(Control):
    """Single-line input with a ``value`` and an optional ``placeholder``."""

    kind = "input"

    def __init__(
        self,
        node_id: Optional[str] = None,
        *,
        value: Any = "",
        placeholder: Optional[str] = None,
        editable: Optional[bool] = None,
        **kwargs: Any,
    ) -> None:
        props: Dict[str, Any] = dict(kwargs.pop("properties", None) or {})
        props.setdefault("value", value)
        if placeholder is not None:
            props.setdefault("placeholder", placeholder)
        if editable is not None:
            props.setdefault("editable", editable)
        super().__init__(node_id, properties=props, **kwargs)

    @property
    def value(self) -> Any:
        return self.properties.get("value")

    @value.setter
    def value(self, v: Any) -> None:
        self.properties["value"] = v


class Label(Control):
    """Static text, optionally pointing at the control it labels."""

    kind = "label"

    def __init__(self, node_id: Optional[str] = None, *, text: str = "", label_for: Optional[str] = None, **kwargs: Any) -> None:
        props: Dict[str, Any] = dict(kwargs.pop("properties", None) or {})
        props.setdefault("text", text)
        super().__init__(node_id, properties=props, **kwargs)
        self.label_for = label_for


class Select(Control):
    """Picker: a selectable ``items`` list, a ``selected_key`` and its display ``value``."""

    kind = "select"

    def __init__(
        self,
        node_id: Optional[str] = None,
        *,
        items: Iterable[Any] = (),
        selected_key: str = "",
        value: str = "",
        **kwargs: Any,
    ) -> None:
        props: Dict[str, Any] = dict(kwargs.pop("properties", None) or {})
        props.setdefault("selected_key", selected_key)
        props.setdefault("value", value)
        super().__init__(node_id, properties=props, **kwargs)
        self.set_aggregation("picker", list(items))


class MultiInput(Control):
    """Multi-token input: "no selection" is zero tokens."""

    kind = "multi_input"

    def __init__(
        self,
        node_id: Optional[str] = None,
        *,
        tokens: Sequence[Any] = (),
        value: str = "",
        **kwargs: Any,
    ) -> None:
        props: Dict[str, Any] = dict(kwargs.pop("properties", None) or {})
        props.setdefault("value", value)
        super().__init__(node_id, properties=props, **kwargs)
        self.tokens: List[Any] = list(tokens)

    def get_tokens(self) -> Sequence[Any]:
        return tuple(self.tokens)
