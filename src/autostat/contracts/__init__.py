"""Pipeline contracts: fail-fast enforcement of stage invariants.

This package enforces semantic guarantees between pipeline stages.
Contracts fail immediately and loudly when a stage doesn't produce
its promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Analysis functions handle statistical edge cases
"""

from autostat.contracts.failure import ContractViolation, FailurePolicy
from autostat.contracts.base import require
from autostat.contracts.table import assert_cars_table
from autostat.contracts.derivation import (
    assert_us_filtered,
    assert_tiered,
    assert_origin_labelled,
)
from autostat.contracts.aggregation import assert_summary_output

__all__ = [
    "ContractViolation",
    "FailurePolicy",
    "require",
    "assert_cars_table",
    "assert_us_filtered",
    "assert_tiered",
    "assert_origin_labelled",
    "assert_summary_output",
]
