"""Protocol module for kvhttp."""

from .commands import Operation, OperationType, Outcome, OutcomeKind
from .dispatcher import Dispatcher
from .parser import MalformedRequestError, ProtocolParser

__all__ = [
    "Operation",
    "OperationType",
    "Outcome",
    "OutcomeKind",
    "Dispatcher",
    "MalformedRequestError",
    "ProtocolParser",
]
