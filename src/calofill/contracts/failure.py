"""Centralized failure types.

Contracts fail fast, loud, and once. Fatal input errors end the whole run:
a caller that sees one must stop processing events, not skip the event.
"""

from enum import Enum


class RunStatus(str, Enum):
    """Completion status of a run step.

    OK: the step completed (possibly with zero recovered towers)
    ABORT: a fatal error occurred; no further events are processed
    """
    OK = "ok"
    ABORT = "abort"


class ContractViolation(RuntimeError):
    """Raised when a stage contract is violated.

    This indicates a bug in pipeline logic, not bad user input.

    Key distinction:
    - ValueError: User/config error (handled by Pydantic)
    - ContractViolation: Pipeline bug (programmer error)
    - FatalInputError: Input data that cannot be processed at all
    """
    pass


class FatalInputError(RuntimeError):
    """Input data error that makes the whole run invalid."""
    pass


class MissingInputError(FatalInputError):
    """A required input (tower geometry, tower container) is unavailable at setup."""
    pass


class UnresolvedTowerError(FatalInputError):
    """A dead tower key has no entry in the tower geometry."""

    def __init__(self, key: int, detector: str = ""):
        self.key = key
        self.detector = detector
        prefix = f"{detector}: " if detector else ""
        super().__init__(f"{prefix}invalid dead tower ID {key}")
