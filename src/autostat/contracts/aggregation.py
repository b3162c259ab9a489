"""Aggregation stage contract.

Enforces that the per-group summary partitions its input exhaustively:
every group has at least one row and the group sizes add up to the
input row count.
"""

import pandas as pd

from autostat.contracts.base import require


def assert_summary_output(df: pd.DataFrame, input_rows: int, count_column: str = "Num_Cars") -> None:
    """Enforce aggregation stage contract.

    Parameters
    ----------
    df : pd.DataFrame
        Output of group_aggregate().
    input_rows : int
        Row count of the table that was aggregated.
    count_column : str, optional
        Name of the ``count`` metric column (default "Num_Cars").

    Raises
    ------
    ContractViolation
        If a group is empty or group sizes do not sum to ``input_rows``.
    """
    require(
        count_column in df.columns,
        f"Summary contract violated: missing count column '{count_column}'"
    )
    if len(df) > 0:
        require(
            (df[count_column] >= 1).all(),
            f"Summary contract violated: every group needs {count_column} >= 1"
        )
    require(
        int(df[count_column].sum()) == input_rows,
        f"Summary contract violated: {count_column} sums to {int(df[count_column].sum())}, "
        f"expected {input_rows}"
    )
