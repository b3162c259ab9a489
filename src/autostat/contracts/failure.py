"""Centralized failure policy for the analysis pipeline.

Contracts fail fast, loud, and once. All violations raise the same
exception type, allowing the caller to handle pipeline bugs uniformly.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """How a failure in a pipeline step is handled.

    FAIL_FAST: Raise immediately. Used for contract violations and
    structural errors (missing source, missing columns).

    REPORT: Log the failure, record it in the results and continue with the
    next step. Used for statistical preconditions (group cardinality,
    zero variance) so one analysis cannot sink the whole report.
    """
    FAIL_FAST = "fail_fast"
    REPORT = "report"


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad user input or a
    statistical edge case. It means a pipeline stage did not produce the
    invariants it promised.

    Key distinction:
    - ValidationError: User/config error (handled by Pydantic)
    - AutostatError: Data or statistical problem (see autostat.exceptions)
    - ContractViolation: Pipeline bug (programmer error)
    """
    pass
