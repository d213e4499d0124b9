"""Form Validator -- recursive validation of UI control trees.

Given the root of a form, the validator walks the visible control subtree and
checks each control with one strategy:
- Required: a mandatory field must carry a value (tokens, picker selection)
- Constraint: a bound value must parse and validate against its data type
- External error: an error state set by application code is reported as is

Controls that are none of these are containers: their child slots are
expanded in a fixed order. Failures set the control's value state and are
recorded in a message ledger keyed by control and property, so repeated
passes update messages in place instead of piling them up.

Main subpackages:
- models: value states, message records, sessions, ValidatorProfile
- nodes: capability protocols and a plain in-memory control tree
- engine: classifier, checks, tree walk, ledger, FormValidator
- gui: ipywidgets adapter, message view and form panel
"""

from .engine.ledger import MessageLedger
from .engine.validator import FormValidator
from .models import MessageRecord, MessageType, Origin, Strategy, ValidatorProfile, ValueState

__all__ = [
    "FormValidator",
    "MessageLedger",
    "MessageRecord",
    "MessageType",
    "Origin",
    "Strategy",
    "ValidatorProfile",
    "ValueState",
]
