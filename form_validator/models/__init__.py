from .messages import MessageRecord, make_target
from .profile import ValidatorProfile
from .session import ValidationSession
from .state import MessageType, Origin, Strategy, ValueState

__all__ = [
    "MessageRecord",
    "make_target",
    "ValidatorProfile",
    "ValidationSession",
    "MessageType",
    "Origin",
    "Strategy",
    "ValueState",
]
