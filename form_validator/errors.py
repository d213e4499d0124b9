"""Exception types shared by the engine, the node models and external data types.

``ApplicabilityMiss`` marks an optional property or capability that a given
node does not have, ``StructuralMismatch`` a child slot of unexpected shape;
both are resolved inside the engine by skipping. ``ParseError`` and
``ConstraintError`` are raised by external data types and are always
recovered into an error value state plus a message record.
"""

from __future__ import annotations


class FormValidatorError(Exception):
    """Base class for errors raised by this package."""


class ApplicabilityMiss(FormValidatorError, LookupError):
    """A property, binding or aggregation is not applicable to this node."""

    def __init__(self, node_id: str, name: str) -> None:
        super().__init__(f"'{name}' is not applicable to node '{node_id}'.")
        self.node_id = node_id
        self.name = name


class ParseError(FormValidatorError, ValueError):
    """The displayed value could not be converted to the internal value."""


class ConstraintError(FormValidatorError, ValueError):
    """The internal value violates a constraint of its declared type."""


class StructuralMismatch(FormValidatorError, TypeError):
    """A child slot holds something that is neither a node nor a sequence of nodes."""

    def __init__(self, node_id: str, slot: str, value: object) -> None:
        super().__init__(
            f"slot '{slot}' of node '{node_id}' holds {type(value).__name__}, expected a node or a sequence."
        )
        self.node_id = node_id
        self.slot = slot
