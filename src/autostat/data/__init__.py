"""Dataset schema and loading.

- schema: Column names and semantic types
- loader: Resolve a source identifier and read the raw table
"""

from autostat.data.schema import CARS_SCHEMA, DERIVED_SCHEMA, ensure_columns
from autostat.data.loader import CarsDataLoader, load

__all__ = [
    "CARS_SCHEMA",
    "DERIVED_SCHEMA",
    "ensure_columns",
    "CarsDataLoader",
    "load",
]
