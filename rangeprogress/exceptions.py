"""
Range Progress - Exceptions

Centralized exception hierarchy for all progress tracking errors.
"""


class ProgressError(Exception):
    """Base exception for all progress tracking operations."""
    pass


class InvalidArgumentError(ProgressError, ValueError):
    """Exception for arguments that violate a precondition.

    Raised when:
    - Range bounds fall outside [0, 1]
    - Lower bound is greater than or equal to the upper bound
    - Bar width leaves no room for the bracket characters
    - Tolerance exceeds the configured sanity guard
    """
    pass


class RangeUnderflowError(ProgressError, IndexError):
    """Exception for popping more ranges than were pushed.

    Raised when pop_range() is called while only the base frame
    (0.0, 1.0) remains on the frame stack.
    """
    pass
