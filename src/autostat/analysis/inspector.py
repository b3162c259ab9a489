"""Structural inspection of a table: schema report and row sample."""

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from autostat.data.schema import semantic_type

__all__ = ['ColumnInfo', 'SchemaReport', 'describe_schema', 'sample']


@dataclass(frozen=True)
class ColumnInfo:
    """One column of a SchemaReport."""
    name: str
    dtype: str
    semantic_type: str
    n_missing: int


@dataclass(frozen=True)
class SchemaReport:
    """Column names and types plus the row count of a table."""
    columns: List[ColumnInfo] = field(default_factory=list)
    row_count: int = 0

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def to_frame(self) -> pd.DataFrame:
        """One row per column, ready for tabular rendering."""
        return pd.DataFrame(
            [
                {
                    "#": i + 1,
                    "Column": c.name,
                    "Type": c.semantic_type,
                    "Dtype": c.dtype,
                    "Missing": c.n_missing,
                }
                for i, c in enumerate(self.columns)
            ],
            columns=["#", "Column", "Type", "Dtype", "Missing"],
        )


def describe_schema(df: pd.DataFrame) -> SchemaReport:
    """Report column names, dtypes, semantic types and the row count."""
    columns = [
        ColumnInfo(
            name=str(col),
            dtype=str(df[col].dtype),
            semantic_type=semantic_type(df, col),
            n_missing=int(df[col].isna().sum()),
        )
        for col in df.columns
    ]
    return SchemaReport(columns=columns, row_count=len(df))


def sample(df: pd.DataFrame, n: int) -> pd.DataFrame:
    """First ``n`` rows of ``df`` as a new table.

    ``n`` larger than the row count returns every row.

    Raises
    ------
    ValueError
        If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"sample size must be >= 0, got {n}")
    return df.head(n).copy()
