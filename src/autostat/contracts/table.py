"""Loaded table contract.

Enforces that the loader produced a DataFrame carrying every schema column.
"""

import pandas as pd

from autostat.contracts.base import require
from autostat.data.schema import CARS_SCHEMA


def assert_cars_table(df: pd.DataFrame) -> None:
    """Enforce load stage contract.

    Raises
    ------
    ContractViolation
        If the output is not a DataFrame or a schema column is missing.
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Load contract violated: output is {type(df)}, expected DataFrame"
    )
    for col in CARS_SCHEMA:
        require(
            col in df.columns,
            f"Load contract violated: missing required column '{col}'"
        )
