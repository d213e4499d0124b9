"""Validator profile -- bundles every setting that affects a validation pass.

A ValidatorProfile groups the property order, the container slot order and
the message texts into one frozen dataclass. It can be:

- Used as-is (defaults match the plain in-memory control tree)
- Built for ipywidgets trees with :meth:`ValidatorProfile.for_widgets`
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


DEFAULT_VALIDATE_PROPERTIES: Tuple[str, ...] = ("value", "selected_key", "text")

DEFAULT_CONTAINER_SLOTS: Tuple[str, ...] = (
    "items",
    "content",
    "form",
    "form_containers",
    "form_elements",
    "fields",
    "sections",
    "sub_sections",
    "grid",
    "cells",
    "page",
    "children",
)

_TUPLE_FIELDS = ("validate_properties", "container_slots")


@dataclass(frozen=True)
class ValidatorProfile:
    """Frozen configuration for :class:`~form_validator.engine.validator.FormValidator`.

    Fields
    ------
    validate_properties : tuple of str
        Properties inspected by the classifier and the required check, in
        priority order.
    container_slots : tuple of str
        Child slots expanded when a node is not itself validatable, in order.
    required_message : str
        Fallback text of a failed required check when the node has no placeholder.
    picker_message : str
        Text of a failed required check on a picker with an empty selected key.
    external_error_message : str
        Fallback text for an externally-set error state without its own text.
    constraint_message : str
        Fallback text when a data type failure carries no description.
    """

    validate_properties: Tuple[str, ...] = DEFAULT_VALIDATE_PROPERTIES
    container_slots: Tuple[str, ...] = DEFAULT_CONTAINER_SLOTS

    required_message: str = "Please fill this mandatory field!"
    picker_message: str = "Please choose an entry!"
    external_error_message: str = "Wrong input"
    constraint_message: str = "Invalid value"

    def __post_init__(self) -> None:
        if not self.validate_properties:
            raise ValueError("validate_properties must name at least one property.")

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def for_widgets(cls, **overrides: Any) -> ValidatorProfile:
        """Profile for trees wrapped by :class:`~form_validator.gui.widget_nodes.WidgetForm`.

        ipywidgets containers only expose ``children``, so the slot list is
        reduced to it unless overridden.
        """
        base: Dict[str, Any] = dict(container_slots=("children",))
        base.update(overrides)
        return cls.from_dict(base)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (tuples become lists)."""
        d = asdict(self)
        for name in _TUPLE_FIELDS:
            d[name] = list(d[name])
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ValidatorProfile:
        """Reconstruct from a dict (e.g. loaded from JSON)."""
        d = dict(d)  # shallow copy
        for name in _TUPLE_FIELDS:
            if name in d and not isinstance(d[name], tuple):
                d[name] = tuple(d[name])
        return cls(**d)
