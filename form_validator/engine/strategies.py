"""Strategy executors.

Each check returns a :class:`CheckOutcome` and, except for the external-error
pass-through, sets the node's value state: ERROR with the message text on
failure, NONE on success. A check that finds nothing it can read is skipped
and counts as valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from form_validator.engine.probe import (
    is_empty,
    is_picker,
    read_property,
    set_value_state,
    tokens_of,
    typed_binding,
    value_state_text,
)
from form_validator.models.profile import ValidatorProfile
from form_validator.models.state import ValueState

# Target property of messages about the value state itself.
VALUE_STATE_PROPERTY = "value_state"
TOKENS_PROPERTY = "tokens"

_ABSENT = object()


@dataclass(frozen=True)
class CheckOutcome:
    valid: bool
    prop: Optional[str] = None
    message: Optional[str] = None
    skipped: bool = False


def _fail(node: Any, prop: Optional[str], message: str) -> CheckOutcome:
    set_value_state(node, ValueState.ERROR, message)
    return CheckOutcome(valid=False, prop=prop, message=message)


def _pass(node: Any, prop: Optional[str]) -> CheckOutcome:
    set_value_state(node, ValueState.NONE, "")
    return CheckOutcome(valid=True, prop=prop)


def _optional(node: Any, name: str) -> Any:
    """Read an optional property; any failure to read it means "no value" (``_ABSENT``)."""
    try:
        return read_property(node, name)
    except Exception:
        return _ABSENT


def _required_text(node: Any, profile: ValidatorProfile) -> str:
    placeholder = _optional(node, "placeholder")
    if placeholder is _ABSENT or placeholder is None:
        return profile.required_message
    text = str(placeholder).replace("\u200b", "").strip()
    return text or profile.required_message


def check_required(node: Any, profile: ValidatorProfile) -> CheckOutcome:
    """Mandatory-field check.

    Multi-token controls pass with at least one token and fail with none.
    Otherwise the profile's properties are read in order and the first
    non-empty one satisfies the check, unless the node is a picker whose
    ``selected_key`` is empty. A property that cannot be read is ignored.
    """
    tokens = tokens_of(node)
    if tokens is not None:
        if len(tokens) >= 1:
            return _pass(node, TOKENS_PROPERTY)
        return _fail(node, TOKENS_PROPERTY, _required_text(node, profile))

    primary: Optional[str] = None
    for prop in profile.validate_properties:
        value = _optional(node, prop)
        if value is _ABSENT:
            continue
        if primary is None:
            primary = prop
        if is_empty(value):
            continue

        if is_picker(node):
            selected_key = _optional(node, "selected_key")
            if selected_key is _ABSENT or is_empty(selected_key):
                return _fail(node, "selected_key", profile.picker_message)
        return _pass(node, prop)

    if primary is None:
        return CheckOutcome(valid=True, skipped=True)
    return _fail(node, primary, _required_text(node, profile))


def check_constraint(node: Any, prop: str, profile: ValidatorProfile) -> CheckOutcome:
    """Run the bound data type's parse-then-validate pipeline on ``prop``.

    Non-editable nodes are skipped, not failed. Any exception raised by the
    data type is a failure whose text becomes the message.
    """
    editable = _optional(node, "editable")
    if editable is not _ABSENT and editable is not None and not editable:
        return CheckOutcome(valid=True, prop=prop, skipped=True)

    binding = typed_binding(node, prop)
    if binding is None:
        return CheckOutcome(valid=True, prop=prop, skipped=True)
    external = _optional(node, prop)
    if external is _ABSENT:
        return CheckOutcome(valid=True, prop=prop, skipped=True)

    data_type = binding.data_type
    try:
        internal = data_type.parse_value(external, binding.internal_type)
        data_type.validate_value(internal)
    except Exception as exc:
        return _fail(node, prop, str(exc) or profile.constraint_message)
    return _pass(node, prop)


def check_external_error(node: Any, profile: ValidatorProfile) -> CheckOutcome:
    """Report an externally-set ERROR as is; the state is left untouched."""
    text = value_state_text(node) or profile.external_error_message
    return CheckOutcome(valid=False, prop=VALUE_STATE_PROPERTY, message=text)
