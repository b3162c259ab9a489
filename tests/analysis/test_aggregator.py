"""Tests for grouped aggregation."""

import pytest
import numpy as np
import pandas as pd

from autostat.analysis import derive_us_cars
from autostat.analysis.aggregator import SUMMARY_METRICS, group_aggregate, summarize_by_type
from autostat.exceptions import ColumnNotFound
from tests.helpers.fake_cars import make_cars

pytestmark = pytest.mark.unit


class TestGroupAggregate:

    def test_scenario_three_sedans(self):
        """Three Sedans with HP 200/300/400 give Num_Cars 3 and Avg_HP 300."""
        df = make_cars([
            ("A", "One", "Sedan", "USA", 200, 3000, 20, 30),
            ("B", "Two", "Sedan", "USA", 300, 3200, 19, 28),
            ("C", "Three", "Sedan", "USA", 400, 3400, 18, 26),
        ])
        derived = df.assign(Efficiency_Rating=(df["MPG_City"] + df["MPG_Highway"]) / 2)
        summary = summarize_by_type(derived)

        assert len(summary) == 1
        row = summary.iloc[0]
        assert row["Type"] == "Sedan"
        assert row["Num_Cars"] == 3
        assert row["Avg_HP"] == pytest.approx(300.0)
        assert row["Avg_Weight"] == pytest.approx(3200.0)

    def test_groups_partition_input(self, cars_df):
        us = derive_us_cars(cars_df)
        summary = summarize_by_type(us)

        assert summary["Num_Cars"].sum() == len(us)
        assert (summary["Num_Cars"] >= 1).all()
        assert set(summary["Type"]) == set(us["Type"])

    def test_first_appearance_order(self, cars_df):
        summary = summarize_by_type(derive_us_cars(cars_df))
        assert summary["Type"].tolist() == ["Sports", "Sedan", "SUV"]

    def test_output_columns(self, cars_df):
        summary = summarize_by_type(derive_us_cars(cars_df))
        assert list(summary.columns) == ["Type"] + list(SUMMARY_METRICS)

    def test_mean_skips_missing_values(self, cars_df):
        summary = summarize_by_type(derive_us_cars(cars_df))
        suv = summary[summary["Type"] == "SUV"].iloc[0]

        # Tahoe has no MPG_Highway, so only the Yukon contributes
        assert suv["Num_Cars"] == 2
        assert suv["Avg_Efficiency"] == pytest.approx(15.0)

    def test_all_missing_group_mean_is_nan(self):
        df = pd.DataFrame({"g": ["a", "a"], "v": [np.nan, np.nan]})
        out = group_aggregate(df, "g", {"n": ("v", "count"), "avg": ("v", "mean")})

        assert out.loc[0, "n"] == 2
        assert np.isnan(out.loc[0, "avg"])

    def test_missing_group_value_forms_own_group(self):
        df = pd.DataFrame({"g": ["a", None, "a"], "v": [1.0, 2.0, 3.0]})
        out = group_aggregate(df, "g", {"n": ("v", "count")})

        assert out["n"].sum() == 3
        assert len(out) == 2

    def test_empty_input(self, cars_df):
        summary = summarize_by_type(derive_us_cars(cars_df.iloc[0:0]))
        assert summary.empty

    def test_unknown_function_raises(self, cars_df):
        with pytest.raises(ValueError, match="Unknown aggregate"):
            group_aggregate(cars_df, "Type", {"x": ("Horsepower", "median")})

    def test_absent_column_raises(self, cars_df):
        with pytest.raises(ColumnNotFound):
            group_aggregate(cars_df, "Color", {"n": ("Model", "count")})
