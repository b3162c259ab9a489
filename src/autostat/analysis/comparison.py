"""US vs non-US comparison: binary origin label, t-tests, correlations.

``binary_origin_label`` runs on the full (unfiltered) table, since comparing
US with non-US cars needs both. ``two_sample_test`` requires exactly two
groups and raises InvalidGroupCardinality otherwise. ``correlation_matrix``
raises InsufficientVariance for a constant column.
"""

import logging
from typing import Dict, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from autostat.data.schema import ensure_columns
from autostat.exceptions import InvalidGroupCardinality, InsufficientVariance

__all__ = [
    'binary_origin_label',
    'two_sample_test',
    'ttest_frame',
    'correlation_matrix',
    'correlation_pvalues',
]

logger = logging.getLogger(__name__)


def binary_origin_label(df: pd.DataFrame, origin: str = "USA") -> pd.DataFrame:
    """Add ``Origin_US``: ``"USA"`` where ``Origin == origin``, else ``"Non-USA"``.

    Every row gets exactly one label, including rows with a missing Origin.
    """
    ensure_columns(df, ["Origin"])
    label = np.where(df["Origin"] == origin, "USA", "Non-USA")
    return df.assign(Origin_US=pd.Series(label, index=df.index, dtype=object))


def _welch_df(v1: float, n1: int, v2: float, n2: int) -> float:
    """Satterthwaite approximation of the degrees of freedom."""
    a = v1 / n1
    b = v2 / n2
    denom = a ** 2 / (n1 - 1) + b ** 2 / (n2 - 1)
    if denom == 0:
        return np.nan
    return (a + b) ** 2 / denom


def two_sample_test(df: pd.DataFrame, group_column: str, value_columns: Sequence[str],
                    equal_var: bool = False) -> Dict[str, dict]:
    """Two-sample t-test of each value column between the two groups.

    Parameters
    ----------
    df : pd.DataFrame
        Table holding the group column and the value columns.
    group_column : str
        Column with exactly two distinct non-missing values.
    value_columns : sequence of str
        Numeric columns to compare, reported in the given order.
    equal_var : bool, optional
        Pooled-variance test if True, Welch (Satterthwaite) if False (default).

    Returns
    -------
    dict
        ``column -> {group_means, group_counts, mean_difference, t_statistic,
        degrees_of_freedom, p_value}``. Groups are sorted by their string form and
        ``mean_difference`` is first minus second. A column with fewer than
        two observations in a group gets NaN statistics.

    Raises
    ------
    ColumnNotFound
        If a column is absent or a value column is not numeric.
    InvalidGroupCardinality
        If ``group_column`` does not hold exactly two distinct values.
    """
    value_columns = list(value_columns)
    ensure_columns(df, [group_column])
    ensure_columns(df, value_columns, numeric=True)

    groups = sorted(df[group_column].dropna().unique().tolist(), key=str)
    if len(groups) != 2:
        raise InvalidGroupCardinality(
            f"'{group_column}' has {len(groups)} distinct value(s) {groups}; "
            f"a two-sample test needs exactly 2"
        )
    first, second = groups

    results = {}
    for col in value_columns:
        a = df.loc[df[group_column] == first, col].dropna().to_numpy(dtype=float)
        b = df.loc[df[group_column] == second, col].dropna().to_numpy(dtype=float)

        means = {
            first: float(a.mean()) if a.size else np.nan,
            second: float(b.mean()) if b.size else np.nan,
        }
        entry = {
            "group_means": means,
            "group_counts": {first: int(a.size), second: int(b.size)},
            "mean_difference": means[first] - means[second],
            "t_statistic": np.nan,
            "degrees_of_freedom": np.nan,
            "p_value": np.nan,
        }

        if a.size < 2 or b.size < 2:
            logger.warning("t-test for %s skipped: needs >= 2 values per group (got %d, %d)",
                           col, a.size, b.size)
            results[col] = entry
            continue

        res = stats.ttest_ind(a, b, equal_var=equal_var)
        if equal_var:
            dof = float(a.size + b.size - 2)
        else:
            dof = float(_welch_df(a.var(ddof=1), a.size, b.var(ddof=1), b.size))

        entry.update(
            t_statistic=float(res.statistic),
            degrees_of_freedom=dof,
            p_value=float(res.pvalue),
        )
        results[col] = entry
        logger.debug("t-test %s: t=%.3f df=%.1f p=%.4g", col, entry["t_statistic"], dof, entry["p_value"])

    return results


def ttest_frame(results: Dict[str, dict]) -> pd.DataFrame:
    """Flatten two_sample_test() output to one row per variable."""
    rows = []
    for col, r in results.items():
        (g1, m1), (g2, m2) = r["group_means"].items()
        rows.append({
            "Variable": col,
            f"Mean ({g1})": m1,
            f"Mean ({g2})": m2,
            "Difference": r["mean_difference"],
            "t Value": r["t_statistic"],
            "DF": r["degrees_of_freedom"],
            "Pr > |t|": r["p_value"],
        })
    return pd.DataFrame(rows)


def _check_variance(df: pd.DataFrame, columns: Sequence[str]) -> None:
    constant = [c for c in columns if df[c].dropna().nunique() < 2]
    if constant:
        raise InsufficientVariance(f"Column(s) {constant} have zero variance; correlation undefined")


def correlation_matrix(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Symmetric matrix of Pearson coefficients, diagonal exactly 1.0.

    Pairs use pairwise-complete observations.

    Raises
    ------
    ColumnNotFound
        If a column is absent or not numeric.
    InsufficientVariance
        If any column is constant within the table.
    """
    columns = list(columns)
    ensure_columns(df, columns, numeric=True)
    _check_variance(df, columns)

    corr = df[columns].astype(float).corr(method="pearson")
    values = corr.to_numpy(copy=True)
    np.fill_diagonal(values, 1.0)
    values = (values + values.T) / 2
    return pd.DataFrame(values, index=columns, columns=columns)


def correlation_pvalues(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Two-sided p-values for H0: rho = 0, same layout as correlation_matrix()."""
    columns = list(columns)
    ensure_columns(df, columns, numeric=True)
    _check_variance(df, columns)

    pvalues = pd.DataFrame(0.0, index=columns, columns=columns)
    for i, x in enumerate(columns):
        for y in columns[i + 1:]:
            pair = df[[x, y]].dropna()
            if len(pair) < 3 or pair[x].nunique() < 2 or pair[y].nunique() < 2:
                p = np.nan
            else:
                p = float(stats.pearsonr(pair[x], pair[y])[1])
            pvalues.loc[x, y] = p
            pvalues.loc[y, x] = p
    return pvalues
