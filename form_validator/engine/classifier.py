from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Any, Optional

from form_validator.engine.probe import (
    first_typed_property,
    is_enabled,
    is_required,
    state_key,
    value_state,
)
from form_validator.models.profile import ValidatorProfile
from form_validator.models.state import Strategy, ValueState


@dataclass(frozen=True)
class Classification:
    """Strategy chosen for a node.

    ``constraint_property`` is the first typed property; for ``REQUIRED`` it
    names the constraint check layered on top once the required check passed.
    """

    strategy: Strategy
    constraint_property: Optional[str] = None


def has_external_error(node: Any, engine_states: AbstractSet[str] = frozenset()) -> bool:
    """True if the node is in ERROR and the error was not set by the validator."""
    return value_state(node) == ValueState.ERROR and state_key(node) not in engine_states


def classify(
    node: Any,
    profile: Optional[ValidatorProfile] = None,
    *,
    engine_states: AbstractSet[str] = frozenset(),
) -> Classification:
    """Pick the validation strategy of one node; first match wins.

    1. required flag set and node enabled -> REQUIRED
    2. a typed binding on one of the profile's properties, node enabled -> CONSTRAINT
    3. an externally-set ERROR value state -> EXTERNAL_ERROR
    4. otherwise NONE (the caller recurses into the children)
    """
    profile = profile or ValidatorProfile()
    enabled = is_enabled(node)
    typed = first_typed_property(node, profile.validate_properties) if enabled else None

    if enabled and is_required(node):
        return Classification(Strategy.REQUIRED, constraint_property=typed)
    if typed is not None:
        return Classification(Strategy.CONSTRAINT, constraint_property=typed)
    if has_external_error(node, engine_states):
        return Classification(Strategy.EXTERNAL_ERROR)
    return Classification(Strategy.NONE)
