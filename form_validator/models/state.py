from __future__ import annotations

from enum import Enum


class ValueState(str, Enum):
    """Visual validation indicator carried by a control."""

    NONE = "none"
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFORMATION = "information"


class MessageType(str, Enum):
    """Severity of a message record; one member per ValueState."""

    NONE = "none"
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFORMATION = "information"

    @classmethod
    def from_value_state(cls, state: ValueState) -> "MessageType":
        return cls(ValueState(state).value)


class Strategy(str, Enum):
    """Validation strategy selected for one node by the classifier."""

    REQUIRED = "required"
    CONSTRAINT = "constraint"
    EXTERNAL_ERROR = "external_error"
    NONE = "none"


class Origin(str, Enum):
    """Who produced a message record.

    The engine only ever creates, updates or removes ENGINE records.
    """

    ENGINE = "engine"
    FOREIGN = "foreign"
