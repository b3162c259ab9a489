"""Filter and derivation stage contracts.

Each function checks one invariant of the derived tables: the US filter
predicate, the tier partition and the binary origin partition.
"""

import pandas as pd

from autostat.contracts.base import require


def assert_us_filtered(df: pd.DataFrame, origin: str, min_horsepower: float) -> None:
    """Every row satisfies ``Origin == origin AND Horsepower > min_horsepower``."""
    require(
        "Origin" in df.columns and "Horsepower" in df.columns,
        "Filter contract violated: missing 'Origin' or 'Horsepower'"
    )
    if len(df) == 0:
        return

    require(
        (df["Origin"] == origin).all(),
        f"Filter contract violated: rows with Origin != '{origin}' survived the filter"
    )
    require(
        (df["Horsepower"] > min_horsepower).all(),
        f"Filter contract violated: rows with Horsepower <= {min_horsepower} survived the filter"
    )


def assert_tiered(df: pd.DataFrame, high_min: float, medium_min: float) -> None:
    """HP_Tier is a total, disjoint partition consistent with the thresholds.

    Rows without a Horsepower value carry no tier; every other row carries
    exactly the tier its Horsepower falls into.
    """
    require(
        "HP_Tier" in df.columns,
        "Tier contract violated: missing 'HP_Tier' column"
    )

    known = df["Horsepower"].notna()
    hp = df.loc[known, "Horsepower"]
    tier = df.loc[known, "HP_Tier"]

    require(
        tier.isin(["High", "Medium", "Low"]).all(),
        "Tier contract violated: tier outside {High, Medium, Low}"
    )
    require(
        ((tier == "High") == (hp >= high_min)).all(),
        f"Tier contract violated: 'High' must be exactly Horsepower >= {high_min}"
    )
    require(
        ((tier == "Medium") == ((hp >= medium_min) & (hp < high_min))).all(),
        f"Tier contract violated: 'Medium' must be exactly {medium_min} <= Horsepower < {high_min}"
    )
    require(
        df.loc[~known, "HP_Tier"].isna().all(),
        "Tier contract violated: rows without Horsepower must not carry a tier"
    )


def assert_origin_labelled(df: pd.DataFrame, expected_rows: int) -> None:
    """Origin_US labels every row of the full table with USA or Non-USA."""
    require(
        "Origin_US" in df.columns,
        "Origin contract violated: missing 'Origin_US' column"
    )
    require(
        len(df) == expected_rows,
        f"Origin contract violated: got {len(df)} rows, expected {expected_rows}"
    )
    counts = df["Origin_US"].value_counts(dropna=False)
    require(
        set(counts.index) <= {"USA", "Non-USA"},
        f"Origin contract violated: unexpected labels {sorted(map(str, counts.index))}"
    )
    require(
        int(counts.sum()) == expected_rows,
        "Origin contract violated: USA + Non-USA must equal the row count"
    )
