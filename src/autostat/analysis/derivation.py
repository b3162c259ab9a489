"""Filter and derivation steps that build the analysis-ready US table.

The steps run in a fixed order; each returns a new DataFrame and leaves its
input untouched:

1. ``filter_us_high_hp``: keep ``Origin == "USA" and Horsepower > 200``
2. ``add_power_to_weight``: ``Horsepower / Weight``
3. ``add_efficiency_rating``: ``(MPG_City + MPG_Highway) / 2``
4. ``add_hp_tier``: High / Medium / Low by Horsepower thresholds

Missing values propagate: a zero or missing Weight gives a NaN ratio, a
missing MPG gives a NaN rating, a missing Horsepower gives no tier.
"""

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np
import pandas as pd

from autostat.data.schema import ensure_columns

if TYPE_CHECKING:
    from autostat.schemas.internal import InternalFilterConfig, InternalTierConfig

__all__ = [
    'TIER_LABELS',
    'filter_us_high_hp',
    'add_power_to_weight',
    'add_efficiency_rating',
    'add_hp_tier',
    'derive_us_cars',
]

logger = logging.getLogger(__name__)

TIER_LABELS = ("High", "Medium", "Low")


def filter_us_high_hp(df: pd.DataFrame, origin: str = "USA",
                      min_horsepower: float = 200) -> pd.DataFrame:
    """Rows with ``Origin == origin`` and ``Horsepower > min_horsepower``.

    Rows failing either predicate (including a missing Horsepower) are dropped.
    """
    ensure_columns(df, ["Origin", "Horsepower"])
    mask = (df["Origin"] == origin) & (df["Horsepower"] > min_horsepower)
    out = df.loc[mask].reset_index(drop=True)
    logger.info("Filter Origin == %r and Horsepower > %s: kept %d of %d rows",
                origin, min_horsepower, len(out), len(df))
    return out


def add_power_to_weight(df: pd.DataFrame) -> pd.DataFrame:
    """Add ``Power_to_Weight = Horsepower / Weight``; NaN where Weight is 0 or missing."""
    ensure_columns(df, ["Horsepower", "Weight"], numeric=True)
    weight = df["Weight"].where(df["Weight"] != 0)
    ratio = (df["Horsepower"] / weight).replace([np.inf, -np.inf], np.nan)

    n_undefined = int((df["Weight"] == 0).sum())
    if n_undefined:
        logger.warning("Power_to_Weight undefined for %d row(s) with Weight == 0", n_undefined)

    return df.assign(Power_to_Weight=ratio)


def add_efficiency_rating(df: pd.DataFrame) -> pd.DataFrame:
    """Add ``Efficiency_Rating = (MPG_City + MPG_Highway) / 2``; NaN if either is missing."""
    ensure_columns(df, ["MPG_City", "MPG_Highway"], numeric=True)
    return df.assign(Efficiency_Rating=(df["MPG_City"] + df["MPG_Highway"]) / 2)


def add_hp_tier(df: pd.DataFrame, high_min: float = 400,
                medium_min: float = 300) -> pd.DataFrame:
    """Add ``HP_Tier``.

    Tested high-to-low, first match wins: ``>= high_min`` High,
    ``>= medium_min`` Medium, anything else Low. Rows without a Horsepower
    value get no tier.
    """
    ensure_columns(df, ["Horsepower"], numeric=True)
    hp = df["Horsepower"]
    tier = np.select(
        [hp >= high_min, hp >= medium_min, hp.notna()],
        list(TIER_LABELS),
        default=None,
    )
    return df.assign(HP_Tier=pd.Series(tier, index=df.index, dtype=object))


def derive_us_cars(df: pd.DataFrame,
                   filter_cfg: Optional["InternalFilterConfig"] = None,
                   tier_cfg: Optional["InternalTierConfig"] = None) -> pd.DataFrame:
    """Run the four steps in order and return the derived US table."""
    origin = filter_cfg.origin if filter_cfg is not None else "USA"
    min_hp = filter_cfg.min_horsepower if filter_cfg is not None else 200
    high_min = tier_cfg.high_min if tier_cfg is not None else 400
    medium_min = tier_cfg.medium_min if tier_cfg is not None else 300

    us_cars = filter_us_high_hp(df, origin=origin, min_horsepower=min_hp)
    us_cars = add_power_to_weight(us_cars)
    us_cars = add_efficiency_rating(us_cars)
    us_cars = add_hp_tier(us_cars, high_min=high_min, medium_min=medium_min)

    logger.debug("Tier counts: %s", us_cars["HP_Tier"].value_counts(dropna=False).to_dict())
    return us_cars
