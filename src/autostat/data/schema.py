"""Column schema of the automobile table.

The raw table carries ``CARS_SCHEMA``; the pipeline adds ``DERIVED_SCHEMA``
columns. Semantic types are one of ``string``, ``categorical`` or ``numeric``.
"""

from typing import Iterable

import pandas as pd

from autostat.exceptions import ColumnNotFound

__all__ = ['CARS_SCHEMA', 'DERIVED_SCHEMA', 'NUMERIC_COLUMNS', 'semantic_type', 'ensure_columns']

CARS_SCHEMA = {
    "Make": "string",
    "Model": "string",
    "Type": "categorical",
    "Origin": "categorical",
    "Horsepower": "numeric",
    "Weight": "numeric",
    "MPG_City": "numeric",
    "MPG_Highway": "numeric",
}

DERIVED_SCHEMA = {
    "Power_to_Weight": "numeric",
    "Efficiency_Rating": "numeric",
    "HP_Tier": "categorical",
    "Origin_US": "categorical",
}

NUMERIC_COLUMNS = [name for name, kind in CARS_SCHEMA.items() if kind == "numeric"]


def semantic_type(df: pd.DataFrame, column: str) -> str:
    """Semantic type of ``column``: from the schemas, else inferred from dtype."""
    if column in CARS_SCHEMA:
        return CARS_SCHEMA[column]
    if column in DERIVED_SCHEMA:
        return DERIVED_SCHEMA[column]
    if pd.api.types.is_bool_dtype(df[column]):
        return "categorical"
    if pd.api.types.is_numeric_dtype(df[column]):
        return "numeric"
    return "string"


def ensure_columns(df: pd.DataFrame, columns: Iterable[str], numeric: bool = False) -> None:
    """Raise ColumnNotFound unless every column is present (and numeric, if asked).

    Parameters
    ----------
    df : pd.DataFrame
        Table to check.
    columns : iterable of str
        Required column names.
    numeric : bool, optional
        Also require a numeric (non-boolean) dtype.

    Raises
    ------
    ColumnNotFound
        Naming every offending column.
    """
    columns = list(columns)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ColumnNotFound(missing)

    if numeric:
        non_numeric = [
            c for c in columns
            if not pd.api.types.is_numeric_dtype(df[c]) or pd.api.types.is_bool_dtype(df[c])
        ]
        if non_numeric:
            raise ColumnNotFound(non_numeric, reason="not numeric")
