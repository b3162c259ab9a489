"""Load the raw automobile table into memory.

A source identifier is either the name of a dataset bundled with the package
(``cars_sample``) or a path to a delimited text file. The loader returns a
DataFrame with every schema column, one row per source record, in source
order.

Key behaviors:
- Unresolvable or unreadable sources raise SourceUnavailable
- Missing schema columns raise ColumnNotFound
- Numeric columns are coerced; unparseable cells become NaN
"""

from importlib import resources
from pathlib import Path
from typing import Optional, TYPE_CHECKING
import logging

import pandas as pd

from autostat.data.schema import CARS_SCHEMA, NUMERIC_COLUMNS, ensure_columns
from autostat.exceptions import SourceUnavailable

if TYPE_CHECKING:
    from autostat.schemas import InternalConfig

__all__ = ['CarsDataLoader', 'load', 'BUNDLED_DATASETS']

logger = logging.getLogger(__name__)

# Dataset name -> file under autostat/data/datasets
BUNDLED_DATASETS = {
    "cars_sample": "cars_sample.csv",
}

_SEPARATORS = {
    ".csv": ",",
    ".tsv": "\t",
    ".txt": None,  # sniffed
}


class CarsDataLoader:
    """Resolve a source identifier and read it into a DataFrame.

    Examples
    --------
    >>> loader = CarsDataLoader(config)
    >>> df = loader.load()               # config.dataset.source
    >>> df = loader.load("data/cars.csv")
    """

    def __init__(self, config: Optional["InternalConfig"] = None):
        self.default_source = config.dataset.source if config is not None else "cars_sample"

    def resolve(self, source: str) -> Path:
        """Map a source identifier to a readable file path.

        Raises
        ------
        SourceUnavailable
            If the identifier is neither a bundled dataset nor an existing file.
        """
        if source in BUNDLED_DATASETS:
            resource = resources.files("autostat.data").joinpath("datasets").joinpath(BUNDLED_DATASETS[source])
            path = Path(str(resource))
            if not path.is_file():
                raise SourceUnavailable(f"Bundled dataset '{source}' is missing from the installation")
            return path

        path = Path(source).expanduser()
        if not path.is_file():
            raise SourceUnavailable(f"Cannot resolve data source '{source}'")
        if path.suffix.lower() not in _SEPARATORS:
            raise SourceUnavailable(
                f"Unsupported file type '{path.suffix}' for '{source}' "
                f"(expected one of {sorted(_SEPARATORS)})"
            )
        return path

    def read(self, path: Path) -> pd.DataFrame:
        """Read a delimited file; read failures become SourceUnavailable."""
        sep = _SEPARATORS[path.suffix.lower()]
        try:
            if sep is None:
                df = pd.read_csv(path, sep=None, engine="python")
            else:
                df = pd.read_csv(path, sep=sep)
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise SourceUnavailable(f"Failed to read '{path}': {e}") from e

        return df

    def load(self, source: Optional[str] = None) -> pd.DataFrame:
        """Load the raw table.

        Parameters
        ----------
        source : str, optional
            Bundled dataset name or file path. Defaults to the configured source.

        Returns
        -------
        pd.DataFrame
            Schema columns first (in schema order), any extra source columns
            after them, fresh RangeIndex.

        Raises
        ------
        SourceUnavailable
            Source cannot be resolved or read.
        ColumnNotFound
            A schema column is missing from the source.
        """
        source = source or self.default_source
        path = self.resolve(source)
        df = self.read(path)

        df.columns = [str(c).strip() for c in df.columns]
        ensure_columns(df, CARS_SCHEMA)

        extra = [c for c in df.columns if c not in CARS_SCHEMA]
        df = df[list(CARS_SCHEMA) + extra].copy()

        for col in NUMERIC_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
        for col, kind in CARS_SCHEMA.items():
            if kind != "numeric":
                df[col] = df[col].where(df[col].isna(), df[col].astype(str).str.strip())

        df = df.reset_index(drop=True)
        logger.info("Loaded %d rows x %d columns from %s", len(df), df.shape[1], source)

        n_missing = int(df[NUMERIC_COLUMNS].isna().sum().sum())
        if n_missing:
            logger.debug("%d missing numeric values after coercion", n_missing)

        return df


def load(source_identifier: str) -> pd.DataFrame:
    """Load ``source_identifier`` with a default loader. See CarsDataLoader.load."""
    return CarsDataLoader().load(source_identifier)
