"""Engine package - classification, checks, traversal and the message ledger.

Flow of one pass:
  - FormValidator.validate(root) opens a ValidationSession and a ledger pass
  - walk() visits visible nodes depth-first over the profile's child slots
  - classify() picks REQUIRED / CONSTRAINT / EXTERNAL_ERROR / NONE per node
  - the executors set value states and failing checks are upserted into the ledger
  - nodes classified NONE are expanded into their children
"""

from .classifier import Classification, classify, has_external_error
from .ledger import MessageLedger
from .strategies import CheckOutcome, check_constraint, check_external_error, check_required
from .validator import FormValidator
from .walk import flatten_children, slot_children, walk

__all__ = [
    "Classification",
    "classify",
    "has_external_error",
    "MessageLedger",
    "CheckOutcome",
    "check_constraint",
    "check_external_error",
    "check_required",
    "FormValidator",
    "flatten_children",
    "slot_children",
    "walk",
]
