"""Tests for the US filter and derived columns."""

import pytest
import numpy as np
import pandas as pd

from autostat.analysis.derivation import (
    TIER_LABELS,
    filter_us_high_hp,
    add_power_to_weight,
    add_efficiency_rating,
    add_hp_tier,
    derive_us_cars,
)
from autostat.exceptions import ColumnNotFound
from tests.helpers.fake_cars import make_cars

pytestmark = pytest.mark.unit


class TestFilter:

    def test_filter_predicate_holds(self, cars_df):
        us = filter_us_high_hp(cars_df)

        assert (us["Origin"] == "USA").all()
        assert (us["Horsepower"] > 200).all()

    def test_boundary_is_excluded(self, cars_df):
        us = filter_us_high_hp(cars_df)
        assert "Taurus" not in us["Model"].tolist()

    def test_filter_keeps_source_order(self, cars_df):
        us = filter_us_high_hp(cars_df)
        assert us["Model"].tolist() == ["Corvette", "Viper", "Mustang", "CTS", "Tahoe", "Yukon"]

    def test_missing_horsepower_dropped(self, cars_df):
        df = cars_df.copy()
        df.loc[0, "Horsepower"] = np.nan
        assert "Corvette" not in filter_us_high_hp(df)["Model"].tolist()

    def test_no_matching_rows_gives_empty_table(self, cars_df):
        us = filter_us_high_hp(cars_df, min_horsepower=1000)

        assert us.empty
        assert list(us.columns) == list(cars_df.columns)

    def test_configurable_origin(self, cars_df):
        german = filter_us_high_hp(cars_df, origin="Germany", min_horsepower=300)
        assert german["Model"].tolist() == ["911", "M3"]

    def test_input_not_modified(self, cars_df):
        before = cars_df.copy()
        filter_us_high_hp(cars_df)
        pd.testing.assert_frame_equal(cars_df, before)


class TestDerivedColumns:

    def test_power_to_weight(self, cars_df):
        out = add_power_to_weight(cars_df)
        assert out["Power_to_Weight"].iloc[0] == pytest.approx(350 / 3500)

    def test_zero_weight_gives_nan(self):
        df = make_cars([("X", "Y", "Sedan", "USA", 300, 0, 20, 30)])
        out = add_power_to_weight(df)
        assert np.isnan(out["Power_to_Weight"].iloc[0])

    def test_missing_weight_gives_nan(self):
        df = make_cars([("X", "Y", "Sedan", "USA", 300, np.nan, 20, 30)])
        assert np.isnan(add_power_to_weight(df)["Power_to_Weight"].iloc[0])

    def test_efficiency_rating(self, cars_df):
        out = add_efficiency_rating(cars_df)
        assert out["Efficiency_Rating"].iloc[0] == pytest.approx(22.0)

    def test_missing_mpg_propagates(self, cars_df):
        out = add_efficiency_rating(cars_df)
        tahoe = out[out["Model"] == "Tahoe"].iloc[0]
        assert np.isnan(tahoe["Efficiency_Rating"])

    def test_missing_source_column_raises(self, cars_df):
        with pytest.raises(ColumnNotFound):
            add_power_to_weight(cars_df.drop(columns=["Weight"]))


class TestTiers:

    @pytest.mark.parametrize("hp, tier", [
        (500, "High"),
        (400, "High"),
        (399.9, "Medium"),
        (300, "Medium"),
        (299.9, "Low"),
        (201, "Low"),
    ])
    def test_tier_boundaries(self, hp, tier):
        df = make_cars([("X", "Y", "Sports", "USA", hp, 3000, 20, 30)])
        assert add_hp_tier(df)["HP_Tier"].iloc[0] == tier

    def test_tiers_partition_rows(self, cars_df):
        tiers = add_hp_tier(cars_df)["HP_Tier"]
        assert tiers.isin(TIER_LABELS).all()

    def test_missing_horsepower_has_no_tier(self, cars_df):
        df = cars_df.copy()
        df.loc[0, "Horsepower"] = np.nan
        assert pd.isna(add_hp_tier(df)["HP_Tier"].iloc[0])

    def test_custom_thresholds(self, cars_df):
        tiers = add_hp_tier(cars_df, high_min=500, medium_min=350)["HP_Tier"]
        assert tiers.iloc[0] == "Medium"
        assert tiers.iloc[1] == "High"


class TestDeriveUsCars:

    def test_scenario_medium_tier_us_car(self):
        """USA, HP 350, Weight 3500, MPG 18/26."""
        df = make_cars([("Chevrolet", "Corvette", "Sports", "USA", 350, 3500, 18, 26)])
        us = derive_us_cars(df)

        assert len(us) == 1
        row = us.iloc[0]
        assert row["Power_to_Weight"] == pytest.approx(0.1)
        assert row["Efficiency_Rating"] == pytest.approx(22.0)
        assert row["HP_Tier"] == "Medium"

    def test_scenario_foreign_car_excluded(self):
        """Germany, HP 500 is dropped by the US filter."""
        df = make_cars([("Porsche", "911", "Sports", "Germany", 500, 3100, 17, 24)])
        assert derive_us_cars(df).empty

    def test_derived_columns_present(self, cars_df):
        us = derive_us_cars(cars_df)
        for col in ["Power_to_Weight", "Efficiency_Rating", "HP_Tier"]:
            assert col in us.columns

    def test_config_sections_are_used(self, cars_df, make_config):
        config = make_config(min_horsepower=300, high_tier_min=450, medium_tier_min=350)
        us = derive_us_cars(cars_df, config.filter, config.tiers)

        assert us["Model"].tolist() == ["Corvette", "Viper", "Yukon"]
        assert us["HP_Tier"].tolist() == ["Medium", "High", "Medium"]
