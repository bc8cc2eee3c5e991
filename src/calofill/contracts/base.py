"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from calofill.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a stage contract.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(geometry.get_etabins() > 0, "Geometry contract: no eta bins")
    """
    if not condition:
        raise ContractViolation(message)
