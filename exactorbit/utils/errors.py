"""
Error type raised when a simulation invariant does not hold.

The body hierarchy handed to a simulation is closed and fully controlled by
the caller, so a missing body, an orbiting body without a registered parent or
a zero-length direction all point at a construction bug rather than a runtime
condition worth recovering from. They share one exception type and are told
apart by ``kind``.
"""

from enum import Enum


class ViolationKind(Enum):
    LOOKUP_MISS = "lookup-miss"
    UNREACHABLE_PARENT = "unreachable-parent"
    DEGENERATE_NORMALIZE = "degenerate-normalize"


class InvariantViolation(ValueError):
    """
    Raised when a simulation invariant is violated.

    Parameters
    ----------
    kind : ViolationKind
        Which invariant failed.
    message : str
        Human readable description.
    """

    def __init__(self, kind, message):
        super().__init__(f"[{kind.value}] {message}")
        self.kind = kind
