"""Tower bin contract.

Bin indices are checked against an inclusive upper bound equal to the
bin count. A bin equal to the count passes here and is folded back to 0
by the neighbor wrap; keep the inclusive bound.
"""

from calofill.contracts.base import require


def assert_tower_bins(bineta: int, binphi: int, eta_bins: int, phi_bins: int) -> None:
    """Enforce tower bin contract for one (bineta, binphi) pair.

    Raises
    ------
    ContractViolation
        If either index is negative or above its bin count
    """
    require(
        0 <= bineta <= eta_bins,
        f"Tower contract violated: bineta={bineta} outside [0, {eta_bins}]"
    )
    require(
        0 <= binphi <= phi_bins,
        f"Tower contract violated: binphi={binphi} outside [0, {phi_bins}]"
    )
