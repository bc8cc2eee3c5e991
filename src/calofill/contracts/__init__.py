"""Stage contracts - fail-fast enforcement of invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Fatal input errors end the run
"""

from calofill.contracts.failure import (
    ContractViolation,
    FatalInputError,
    MissingInputError,
    RunStatus,
    UnresolvedTowerError,
)
from calofill.contracts.base import require
from calofill.contracts.geometry import assert_geometry
from calofill.contracts.towers import assert_tower_bins

__all__ = [
    "ContractViolation",
    "FatalInputError",
    "MissingInputError",
    "RunStatus",
    "UnresolvedTowerError",
    "require",
    "assert_geometry",
    "assert_tower_bins",
]
