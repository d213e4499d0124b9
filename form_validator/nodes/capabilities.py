"""Capability protocols consumed by the classifier, the executors and the walk.

A node is anything implementing ``Visible``; every other facet is optional and
probed with ``isinstance`` against the runtime-checkable protocols below. A
facet method may still raise :class:`~form_validator.errors.ApplicabilityMiss`
(or ``AttributeError``/``KeyError``) for a property the concrete node does not
carry; callers treat that as "rule does not apply".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from form_validator.models.state import ValueState


@runtime_checkable
class DataType(Protocol):
    """External type of a binding: parse the displayed value, then validate it.

    Failures are signalled with ``ParseError``/``ConstraintError`` (any
    ``ValueError`` or ``TypeError`` is accepted).
    """

    def parse_value(self, value: Any, internal_type: Optional[str] = None) -> Any: ...

    def validate_value(self, value: Any) -> None: ...


@dataclass(frozen=True)
class Binding:
    """Association between a displayed property and a model value."""

    path: str
    data_type: Optional[DataType] = None
    context_path: Optional[str] = None
    internal_type: Optional[str] = None

    @property
    def full_path(self) -> str:
        if self.context_path:
            return f"{self.context_path.rstrip('/')}/{self.path}"
        return self.path


@runtime_checkable
class Visible(Protocol):
    node_id: str
    kind: str

    def is_visible(self) -> bool: ...


@runtime_checkable
class Requireable(Protocol):
    def is_required(self) -> bool: ...


@runtime_checkable
class Enableable(Protocol):
    def is_enabled(self) -> bool: ...


@runtime_checkable
class PropertyHolder(Protocol):
    def get_property(self, name: str) -> Any: ...

    def set_property(self, name: str, value: Any) -> None: ...


@runtime_checkable
class Bindable(Protocol):
    def get_binding(self, name: str) -> Optional[Binding]: ...


@runtime_checkable
class ErrorStateful(Protocol):
    def get_value_state(self) -> ValueState: ...

    def set_value_state(self, state: ValueState, text: Optional[str] = None) -> None: ...

    def get_value_state_text(self) -> str: ...


@runtime_checkable
class Containerish(Protocol):
    def get_aggregation(self, name: str) -> Any: ...


@runtime_checkable
class MultiToken(Protocol):
    def get_tokens(self) -> Sequence[Any]: ...


@runtime_checkable
class LabelHinted(Protocol):
    def get_label_hint(self) -> Optional[str]: ...
