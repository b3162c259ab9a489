"""Grouped aggregation of the derived table.

``group_aggregate`` builds one output row per distinct group value present
in the input. Groups appear in order of first appearance; rows with a
missing group value form their own group so that the groups always
partition the input.
"""

import logging
from typing import Mapping, Tuple

import pandas as pd

from autostat.data.schema import ensure_columns

__all__ = ['AGGREGATE_FUNCTIONS', 'SUMMARY_METRICS', 'group_aggregate', 'summarize_by_type']

logger = logging.getLogger(__name__)

AGGREGATE_FUNCTIONS = ("count", "mean")

SUMMARY_METRICS = {
    "Num_Cars": ("Model", "count"),
    "Avg_HP": ("Horsepower", "mean"),
    "Avg_Weight": ("Weight", "mean"),
    "Avg_Efficiency": ("Efficiency_Rating", "mean"),
}


def group_aggregate(df: pd.DataFrame, group_column: str,
                    metrics: Mapping[str, Tuple[str, str]]) -> pd.DataFrame:
    """Aggregate ``df`` per distinct value of ``group_column``.

    Parameters
    ----------
    df : pd.DataFrame
        Input table.
    group_column : str
        Column to group by.
    metrics : mapping
        ``output_name -> (source_column, fn)``, ``fn`` in AGGREGATE_FUNCTIONS.
        ``count`` counts rows per group; ``mean`` averages the non-missing
        values and gives NaN when a group has none.

    Returns
    -------
    pd.DataFrame
        ``group_column`` followed by one column per metric, in metric order.

    Raises
    ------
    ColumnNotFound
        If the group column or a source column is absent, or a ``mean``
        source is not numeric.
    ValueError
        If a metric names an unknown aggregate function.
    """
    unknown = {name: fn for name, (_, fn) in metrics.items() if fn not in AGGREGATE_FUNCTIONS}
    if unknown:
        raise ValueError(f"Unknown aggregate function(s) {unknown}; expected one of {AGGREGATE_FUNCTIONS}")

    ensure_columns(df, [group_column] + [src for src, _ in metrics.values()])
    ensure_columns(df, [src for src, fn in metrics.values() if fn == "mean"], numeric=True)

    grouped = df.groupby(group_column, sort=False, dropna=False)

    out = pd.DataFrame(index=grouped.size().index)
    for name, (src, fn) in metrics.items():
        if fn == "count":
            out[name] = grouped.size().to_numpy()
        else:
            out[name] = grouped[src].mean().to_numpy()

    out = out.reset_index()
    logger.info("Aggregated %d rows into %d '%s' groups", len(df), len(out), group_column)
    return out


def summarize_by_type(df: pd.DataFrame) -> pd.DataFrame:
    """Num_Cars, Avg_HP, Avg_Weight and Avg_Efficiency per car ``Type``."""
    return group_aggregate(df, "Type", SUMMARY_METRICS)
