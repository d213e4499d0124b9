"""ipywidgets adapter: exposes a widget tree through the node capability protocols.

ipywidgets has no notion of "required", data types or value states, so those
live in a :class:`WidgetForm` registry keyed by widget, next to the tree:

    name = w.Text(description="Name", placeholder="Your name")
    age = w.Text(description="Age")
    form_box = w.VBox([name, age])

    form = WidgetForm(form_box)
    form.field(name, required=True, path="name")
    form.field(age, data_type=IntegerType(min=0), path="age", context_path="/person")

    FormValidator(ValidatorProfile.for_widgets()).validate(form.node())

Wrapping is shallow and repeated on every access; node identity is the
widget's model id.

Mapping
-------
- Box subclasses (VBox, HBox, GridBox, Tab, Accordion, ...) -> container with ``children``
- Dropdown / Select / RadioButtons / ToggleButtons -> picker
  (``selected_key`` is the widget value, ``value`` its label)
- TagsInput / SelectMultiple -> multi-token control
- Label / HTML / HTMLMath -> label (``text``)
- everything else -> control whose ``value`` is the widget value
- visibility from ``layout.display``/``layout.visibility``, enabled from ``disabled``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import ipywidgets as w

from form_validator.errors import ApplicabilityMiss
from form_validator.models.state import ValueState
from form_validator.nodes.capabilities import Binding, DataType


# Border colours per value state (same palette as the message view).
STATE_COLORS: Dict[ValueState, str] = {
    ValueState.ERROR: "#b00020",        # red
    ValueState.WARNING: "#b26a00",      # orange
    ValueState.SUCCESS: "#1b7f3b",      # green
    ValueState.INFORMATION: "#1f5fa8",  # blue
}

CSS_PREFIX = "fv-"

_ZERO_WIDTH_SPACE = "\u200b"

_PICKERS = (w.Dropdown, w.Select, w.RadioButtons, w.ToggleButtons)
_TOKEN_INPUTS = (w.TagsInput, w.SelectMultiple)
_LABELS = (w.Label, w.HTML, w.HTMLMath)


@dataclass
class FieldSpec:
    """Validation metadata of one widget.

    required:
        None means the widget has no required flag at all.
    data_type, path, context_path, internal_type:
        Binding of ``prop`` to the model; a binding without a data type is
        only used for the message data path.
    placeholder:
        Overrides the widget placeholder in required-field messages.
    label_for:
        On label widgets: the widget this label describes.
    """

    required: Optional[bool] = None
    data_type: Optional[DataType] = None
    path: Optional[str] = None
    context_path: Optional[str] = None
    internal_type: Optional[str] = None
    prop: str = "value"
    placeholder: Optional[str] = None
    label_for: Optional[w.Widget] = None

    def binding(self) -> Optional[Binding]:
        if self.path is None and self.data_type is None:
            return None
        return Binding(
            path=self.path or "",
            data_type=self.data_type,
            context_path=self.context_path,
            internal_type=self.internal_type,
        )


def widget_id(widget: w.Widget) -> str:
    try:
        model_id = widget.model_id
    except AttributeError:
        model_id = None
    return str(model_id) if model_id else f"widget-{id(widget)}"


class WidgetForm:
    """Registry of field specs and value states for one widget tree."""

    def __init__(self, root: w.Widget) -> None:
        if not isinstance(root, w.Widget):
            raise TypeError(f"root must be an ipywidgets.Widget, got {type(root).__name__}.")
        self.root = root
        self._specs: Dict[int, Tuple[w.Widget, FieldSpec]] = {}
        self._states: Dict[int, Tuple[ValueState, str]] = {}
        self._borders: Dict[int, Optional[str]] = {}

    # -------------------------
    # Registration
    # -------------------------
    def field(self, widget: w.Widget, **spec: Any) -> w.Widget:
        """Attach (or update) the :class:`FieldSpec` of ``widget``; returns the widget."""
        current = self.spec_for(widget)
        if current is None:
            current = FieldSpec()
        for key, value in spec.items():
            if not hasattr(current, key):
                raise TypeError(f"Unknown field spec attribute: {key}")
            setattr(current, key, value)
        self._specs[id(widget)] = (widget, current)
        return widget

    def label(self, label_widget: w.Widget, target: w.Widget) -> w.Widget:
        """Declare ``label_widget`` as the label of ``target``."""
        return self.field(label_widget, label_for=target)

    def spec_for(self, widget: w.Widget) -> Optional[FieldSpec]:
        entry = self._specs.get(id(widget))
        return entry[1] if entry is not None else None

    # -------------------------
    # Value state
    # -------------------------
    def state_of(self, widget: w.Widget) -> Tuple[ValueState, str]:
        return self._states.get(id(widget), (ValueState.NONE, ""))

    def set_state(self, widget: w.Widget, state: ValueState, text: Optional[str] = None) -> None:
        state = ValueState(state)
        _, old_text = self.state_of(widget)
        new_text = old_text if text is None else text
        self._states[id(widget)] = (state, new_text)
        self._reflect(widget, state, new_text)

    def set_error(self, widget: w.Widget, text: str) -> None:
        """Mark ``widget`` as invalid from application code (an external error)."""
        self.set_state(widget, ValueState.ERROR, text)

    def _reflect(self, widget: w.Widget, state: ValueState, text: str) -> None:
        if not isinstance(widget, w.DOMWidget):
            return
        for s in ValueState:
            widget.remove_class(CSS_PREFIX + s.value)
        if state != ValueState.NONE:
            widget.add_class(CSS_PREFIX + state.value)

        layout = getattr(widget, "layout", None)
        if layout is not None:
            key = id(widget)
            if key not in self._borders:
                self._borders[key] = layout.border
            color = STATE_COLORS.get(state)
            layout.border = f"1px solid {color}" if color else self._borders[key]

        if widget.has_trait("tooltip"):
            widget.tooltip = text or None

    # -------------------------
    # Wrapping
    # -------------------------
    def node(self, widget: Optional[w.Widget] = None) -> "WidgetNode":
        """Wrap ``widget`` (default: the form root) into a capability node."""
        widget = self.root if widget is None else widget
        if isinstance(widget, w.Box):
            return BoxNode(widget, self)
        if isinstance(widget, _PICKERS):
            return PickerNode(widget, self)
        if isinstance(widget, _TOKEN_INPUTS):
            return TokenNode(widget, self)
        if isinstance(widget, _LABELS):
            return LabelNode(widget, self)
        return WidgetNode(widget, self)


class WidgetNode:
    """A single widget seen as a form control."""

    kind = "control"

    def __init__(self, widget: w.Widget, form: WidgetForm) -> None:
        self.widget = widget
        self.form = form
        self.node_id = widget_id(widget)

    @property
    def spec(self) -> Optional[FieldSpec]:
        return self.form.spec_for(self.widget)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.widget).__name__}, {self.node_id!r})"

    # Visible / Enableable / Requireable
    def is_visible(self) -> bool:
        layout = getattr(self.widget, "layout", None)
        if layout is None:
            return True
        return layout.display != "none" and layout.visibility != "hidden"

    def is_enabled(self) -> bool:
        return not bool(getattr(self.widget, "disabled", False))

    def is_required(self) -> bool:
        spec = self.spec
        if spec is None or spec.required is None:
            raise ApplicabilityMiss(self.node_id, "required")
        return bool(spec.required)

    # PropertyHolder
    def _trait(self, name: str) -> str:
        if name == "value" and self.widget.has_trait("value"):
            return "value"
        if name == "placeholder" and self.widget.has_trait("placeholder"):
            return "placeholder"
        raise ApplicabilityMiss(self.node_id, name)

    def get_property(self, name: str) -> Any:
        if name == "placeholder":
            spec = self.spec
            if spec is not None and spec.placeholder:
                return spec.placeholder
            # ipywidgets fills an unset placeholder with a zero-width space
            placeholder = getattr(self.widget, self._trait(name))
            if not (placeholder or "").replace(_ZERO_WIDTH_SPACE, "").strip():
                raise ApplicabilityMiss(self.node_id, name)
            return placeholder
        return getattr(self.widget, self._trait(name))

    def set_property(self, name: str, value: Any) -> None:
        setattr(self.widget, self._trait(name), value)

    # Bindable
    def get_binding(self, name: str) -> Optional[Binding]:
        spec = self.spec
        if spec is None or spec.prop != name:
            return None
        return spec.binding()

    # ErrorStateful
    def get_value_state(self) -> ValueState:
        return self.form.state_of(self.widget)[0]

    def set_value_state(self, state: ValueState, text: Optional[str] = None) -> None:
        self.form.set_state(self.widget, state, text)

    def get_value_state_text(self) -> str:
        return self.form.state_of(self.widget)[1]

    # Containerish
    def get_aggregation(self, name: str) -> Any:
        return None

    # LabelHinted
    def get_label_hint(self) -> Optional[str]:
        description = getattr(self.widget, "description", None)
        return description or None


class BoxNode(WidgetNode):
    kind = "container"

    def get_aggregation(self, name: str) -> Any:
        if name != "children":
            return None
        return tuple(self.form.node(child) for child in self.widget.children)


class PickerNode(WidgetNode):
    kind = "picker"

    def get_property(self, name: str) -> Any:
        if name == "selected_key":
            value = self.widget.value
            return "" if value is None else value
        if name == "value":
            return self.widget.label or ""
        return super().get_property(name)

    def set_property(self, name: str, value: Any) -> None:
        if name == "selected_key":
            self.widget.value = value
            return
        super().set_property(name, value)

    def get_aggregation(self, name: str) -> Any:
        if name == "picker":
            return tuple(self.widget.options)
        return None


class TokenNode(WidgetNode):
    kind = "multi_input"

    def get_tokens(self) -> Sequence[Any]:
        return tuple(self.widget.value or ())

    def get_property(self, name: str) -> Any:
        if name == "value":
            return ", ".join(str(t) for t in self.get_tokens())
        return super().get_property(name)


class LabelNode(WidgetNode):
    kind = "label"

    @property
    def label_for(self) -> Optional[str]:
        spec = self.spec
        if spec is None or spec.label_for is None:
            return None
        return widget_id(spec.label_for)

    def _trait(self, name: str) -> str:
        if name == "text":
            return "value"
        raise ApplicabilityMiss(self.node_id, name)

    def get_label_hint(self) -> Optional[str]:
        return None
