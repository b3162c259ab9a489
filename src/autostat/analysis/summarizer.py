"""Descriptive statistics for numeric and categorical columns.

Numeric columns get count/mean/median/std/min/max (std is the sample
standard deviation, ddof=1). Categorical columns get frequency tables.

Category order in frequency tables is lexical on the category values, with
missing values counted last under the key ``None`` so that the counts of
every column add up to the row count. ``frequency_table`` shows that row as
``MISSING_LABEL``.
"""

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from autostat.data.schema import ensure_columns

__all__ = [
    'MISSING_LABEL',
    'numeric_summary',
    'numeric_summary_frame',
    'frequency',
    'frequency_table',
]

logger = logging.getLogger(__name__)

MISSING_LABEL = "(missing)"

_STATS = ["count", "n_missing", "mean", "median", "std", "min", "max"]


def _ordered(columns: Iterable[str]) -> List[str]:
    """Keep caller order for sequences; sort sets so output is deterministic."""
    if isinstance(columns, (set, frozenset)):
        return sorted(columns)
    return list(columns)


def numeric_summary(df: pd.DataFrame, columns: Iterable[str]) -> Dict[str, Dict[str, float]]:
    """Per-column count, n_missing, mean, median, std, min and max.

    Raises
    ------
    ColumnNotFound
        If a requested column is absent or not numeric.
    """
    columns = _ordered(columns)
    ensure_columns(df, columns, numeric=True)

    summary = {}
    for col in columns:
        values = df[col]
        valid = values.dropna()
        if valid.empty:
            stats = dict.fromkeys(_STATS[2:], np.nan)
        else:
            stats = {
                "mean": float(valid.mean()),
                "median": float(valid.median()),
                "std": float(valid.std(ddof=1)) if len(valid) > 1 else np.nan,
                "min": float(valid.min()),
                "max": float(valid.max()),
            }
        summary[col] = {
            "count": int(valid.size),
            "n_missing": int(values.size - valid.size),
            **stats,
        }
    return summary


def numeric_summary_frame(summary: Dict[str, Dict[str, float]]) -> pd.DataFrame:
    """Render numeric_summary() output as one row per variable."""
    frame = pd.DataFrame.from_dict(summary, orient="index", columns=_STATS)
    frame.index.name = "Variable"
    return frame.rename(columns={
        "count": "N",
        "n_missing": "N Miss",
        "mean": "Mean",
        "median": "Median",
        "std": "Std Dev",
        "min": "Minimum",
        "max": "Maximum",
    }).reset_index()


def _category_counts(series: pd.Series) -> Dict[Optional[str], int]:
    counts = series.dropna().astype(str).value_counts()
    ordered = {cat: int(counts[cat]) for cat in sorted(counts.index)}
    n_missing = int(series.isna().sum())
    if n_missing:
        ordered[None] = n_missing
    return ordered


def frequency(df: pd.DataFrame, columns: Iterable[str]) -> Dict[str, Dict[Optional[str], int]]:
    """Category -> count per column; counts of each column sum to ``len(df)``.

    Missing values are counted under the key ``None``, after every category.

    Raises
    ------
    ColumnNotFound
        If a requested column is absent.
    """
    columns = _ordered(columns)
    ensure_columns(df, columns)
    return {col: _category_counts(df[col]) for col in columns}


def frequency_table(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Frequency, percent and cumulative columns for one categorical column."""
    counts = frequency(df, [column])[column]
    labels = [MISSING_LABEL if cat is None else cat for cat in counts]
    table = pd.DataFrame({column: labels, "Frequency": list(counts.values())})
    total = table["Frequency"].sum()
    if total:
        table["Percent"] = 100.0 * table["Frequency"] / total
    else:
        table["Percent"] = np.nan
    table["Cumulative Frequency"] = table["Frequency"].cumsum()
    table["Cumulative Percent"] = table["Percent"].cumsum()
    return table
