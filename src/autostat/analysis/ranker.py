"""Sorting and top-N selection."""

import pandas as pd

from autostat.data.schema import ensure_columns

__all__ = ['sort_by', 'top_n']


def sort_by(df: pd.DataFrame, column: str, descending: bool = True) -> pd.DataFrame:
    """Stable sort on ``column``; ties keep their relative order, NaN sorts last.

    Raises
    ------
    ColumnNotFound
        If ``column`` is absent.
    """
    ensure_columns(df, [column])
    return df.sort_values(
        column,
        ascending=not descending,
        kind="mergesort",
        na_position="last",
    ).reset_index(drop=True)


def top_n(df: pd.DataFrame, n: int) -> pd.DataFrame:
    """First ``n`` rows; all rows if ``n`` exceeds the row count.

    Raises
    ------
    ValueError
        If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return df.head(n).reset_index(drop=True)
