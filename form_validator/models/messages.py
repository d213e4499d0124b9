from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from form_validator.models.state import MessageType, Origin


@dataclass
class MessageRecord:
    """One user-visible validation message.

    Attributes
    ----------
    target:
        Stable key ``"<control id>/<property>"``. Empty when the failing
        node is not bindable; empty-target records are never merged.
    text:
        Human-readable message.
    severity:
        Maps 1:1 from the control's value state.
    origin:
        ``Origin.ENGINE`` for records produced by the validator, anything else
        is foreign and left untouched by it.
    context_label:
        Optional human label of the field (sibling label or label hint).
    data_path:
        Optional model path of the binding, ``"<context path>/<binding path>"``.
    control_id:
        Id of the control the record belongs to.
    """

    target: str
    text: str
    severity: MessageType = MessageType.ERROR
    origin: Origin = Origin.ENGINE
    context_label: Optional[str] = None
    data_path: Optional[str] = None
    control_id: Optional[str] = None

    @property
    def is_engine_owned(self) -> bool:
        return self.origin == Origin.ENGINE

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (enums become their values)."""
        return {
            "target": self.target,
            "text": self.text,
            "severity": self.severity.value,
            "origin": self.origin.value,
            "context_label": self.context_label,
            "data_path": self.data_path,
            "control_id": self.control_id,
        }


def make_target(control_id: Optional[str], prop: Optional[str]) -> str:
    """Build the ledger key for a control property, or ``""`` if unbindable."""
    if not control_id or not prop:
        return ""
    return f"{control_id}/{prop}"
