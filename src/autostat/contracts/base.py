"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from autostat.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a pipeline contract.

    Called at stage boundaries to verify the preceding stage produced the
    guaranteed invariants.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation.

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require("HP_Tier" in df.columns, "Tier contract: missing 'HP_Tier'")
    >>> require(len(df) > 0, "Summary contract: at least one group expected")
    """
    if not condition:
        raise ContractViolation(message)
