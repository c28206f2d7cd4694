"""
Protocol Operation and Outcome Definitions

This module defines the data structures that cross the boundary between
the wire format and the store: the decoded request (``Operation``) and
the result of applying it (``Outcome``).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

# Wire status codes
STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_SERVER_ERROR = 500

KEY_NOT_FOUND_MESSAGE = "this value doesn't exist"


class OperationType(Enum):
    """Enumeration of supported operation types."""
    GET = auto()
    SET = auto()
    UNKNOWN = auto()


class OutcomeKind(Enum):
    """Tags for the variants of an Outcome."""
    FOUND = auto()
    STORED = auto()
    NOT_FOUND = auto()
    FAULT = auto()
    MALFORMED = auto()


@dataclass(frozen=True)
class Operation:
    """
    Represents a decoded request.

    Attributes:
        type: GET, SET, or UNKNOWN
        key: The key for the operation
        value: The value for SET operations (empty otherwise)
        op: The op string as it appeared on the wire
    """
    type: OperationType
    key: str = ""
    value: str = ""
    op: str = ""

    @classmethod
    def from_op(cls, op: str, key: str = "", value: str = "") -> "Operation":
        """Build an Operation from the raw op name (case-sensitive)."""
        try:
            op_type = OperationType[op]
        except KeyError:
            op_type = OperationType.UNKNOWN
        return cls(type=op_type, key=key, value=value, op=op)


@dataclass(frozen=True)
class Outcome:
    """
    Represents the result of applying an Operation.

    Attributes:
        kind: Which variant this outcome is
        status: HTTP-style status code reported to the client
        value: The value found (FOUND only)
        error: Error description (NOT_FOUND, FAULT, MALFORMED only)
    """
    kind: OutcomeKind
    status: int
    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.FOUND, OutcomeKind.STORED)

    @classmethod
    def found(cls, value: str) -> "Outcome":
        """Create a successful GET outcome carrying the value."""
        return cls(kind=OutcomeKind.FOUND, status=STATUS_OK, value=value)

    @classmethod
    def stored(cls) -> "Outcome":
        """Create a successful SET outcome."""
        return cls(kind=OutcomeKind.STORED, status=STATUS_OK)

    @classmethod
    def not_found(cls, status: int = STATUS_SERVER_ERROR) -> "Outcome":
        """Create a 'key not found' outcome."""
        return cls(kind=OutcomeKind.NOT_FOUND, status=status, error=KEY_NOT_FOUND_MESSAGE)

    @classmethod
    def unrecognized(cls, op: str) -> "Outcome":
        """Create an outcome for an operation name nobody handles."""
        return cls(
            kind=OutcomeKind.FAULT,
            status=STATUS_SERVER_ERROR,
            error=f"Unrecognised op: {op}",
        )

    @classmethod
    def malformed(cls, detail: str) -> "Outcome":
        """Create an outcome for an undecodable request body."""
        return cls(
            kind=OutcomeKind.MALFORMED,
            status=STATUS_BAD_REQUEST,
            error=f"malformed request body: {detail}",
        )
