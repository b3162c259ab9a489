"""Tests for the binary origin label, t-tests and correlations."""

import pytest
import numpy as np
import pandas as pd
from scipy import stats

from autostat.analysis.comparison import (
    binary_origin_label,
    two_sample_test,
    ttest_frame,
    correlation_matrix,
    correlation_pvalues,
)
from autostat.exceptions import (
    ColumnNotFound,
    InsufficientVariance,
    InvalidGroupCardinality,
    StatisticalPreconditionError,
)

pytestmark = pytest.mark.unit


class TestOriginLabel:

    def test_labels_partition_full_table(self, cars_df):
        labelled = binary_origin_label(cars_df)

        assert len(labelled) == len(cars_df)
        assert set(labelled["Origin_US"]) == {"USA", "Non-USA"}
        assert (labelled["Origin_US"] == "USA").sum() == (cars_df["Origin"] == "USA").sum()

    def test_scenario_foreign_car_labelled_non_usa(self, cars_df):
        labelled = binary_origin_label(cars_df)
        porsche = labelled[labelled["Model"] == "911"].iloc[0]
        assert porsche["Origin_US"] == "Non-USA"

    def test_missing_origin_is_non_usa(self, cars_df):
        df = cars_df.copy()
        df.loc[0, "Origin"] = None
        assert binary_origin_label(df).loc[0, "Origin_US"] == "Non-USA"

    def test_input_not_modified(self, cars_df):
        binary_origin_label(cars_df)
        assert "Origin_US" not in cars_df.columns


class TestTwoSampleTest:

    def test_matches_scipy_welch(self, cars_df):
        labelled = binary_origin_label(cars_df)
        result = two_sample_test(labelled, "Origin_US", ["Horsepower"])["Horsepower"]

        non_us = labelled.loc[labelled["Origin_US"] == "Non-USA", "Horsepower"]
        us = labelled.loc[labelled["Origin_US"] == "USA", "Horsepower"]
        expected = stats.ttest_ind(non_us, us, equal_var=False)

        assert result["t_statistic"] == pytest.approx(expected.statistic)
        assert result["p_value"] == pytest.approx(expected.pvalue)
        assert result["mean_difference"] == pytest.approx(non_us.mean() - us.mean())
        assert result["group_counts"] == {"Non-USA": 5, "USA": 7}

    def test_welch_degrees_of_freedom(self, cars_df):
        labelled = binary_origin_label(cars_df)
        dof = two_sample_test(labelled, "Origin_US", ["Weight"])["Weight"]["degrees_of_freedom"]

        a = labelled.loc[labelled["Origin_US"] == "Non-USA", "Weight"]
        b = labelled.loc[labelled["Origin_US"] == "USA", "Weight"]
        va, vb = a.var() / len(a), b.var() / len(b)
        expected = (va + vb) ** 2 / (va ** 2 / (len(a) - 1) + vb ** 2 / (len(b) - 1))
        assert dof == pytest.approx(expected)

    def test_pooled_variance(self, cars_df):
        labelled = binary_origin_label(cars_df)
        result = two_sample_test(labelled, "Origin_US", ["Weight"], equal_var=True)["Weight"]

        assert result["degrees_of_freedom"] == len(labelled) - 2

    def test_missing_values_excluded_per_column(self, cars_df):
        labelled = binary_origin_label(cars_df)
        result = two_sample_test(labelled, "Origin_US", ["MPG_Highway"])["MPG_Highway"]

        assert result["group_counts"]["USA"] == 6
        assert np.isfinite(result["p_value"])

    def test_p_value_in_unit_interval(self, cars_df):
        labelled = binary_origin_label(cars_df)
        for r in two_sample_test(labelled, "Origin_US", ["MPG_City", "Horsepower"]).values():
            assert 0.0 <= r["p_value"] <= 1.0

    def test_scenario_three_groups_rejected(self, cars_df):
        """Origin has USA, Germany and Japan."""
        with pytest.raises(InvalidGroupCardinality):
            two_sample_test(cars_df, "Origin", ["MPG_Highway"])

    def test_single_group_rejected(self, cars_df):
        usa = binary_origin_label(cars_df[cars_df["Origin"] == "USA"])
        with pytest.raises(StatisticalPreconditionError):
            two_sample_test(usa, "Origin_US", ["Horsepower"])

    def test_tiny_group_gives_nan(self, cars_df):
        df = binary_origin_label(cars_df.iloc[:8])  # a single non-US car
        result = two_sample_test(df, "Origin_US", ["Horsepower"])["Horsepower"]

        assert np.isnan(result["t_statistic"])
        assert np.isnan(result["p_value"])

    def test_mixed_type_group_values(self):
        df = pd.DataFrame({"g": [1, 1, "x", "x"], "v": [1.0, 2.0, 3.0, 4.0]})
        result = two_sample_test(df, "g", ["v"])["v"]

        assert list(result["group_counts"]) == [1, "x"]
        assert result["group_counts"] == {1: 2, "x": 2}
        assert result["mean_difference"] == pytest.approx(-2.0)

    def test_absent_value_column_raises(self, cars_df):
        labelled = binary_origin_label(cars_df)
        with pytest.raises(ColumnNotFound):
            two_sample_test(labelled, "Origin_US", ["Torque"])

    def test_ttest_frame_layout(self, cars_df):
        labelled = binary_origin_label(cars_df)
        frame = ttest_frame(two_sample_test(labelled, "Origin_US", ["Horsepower", "Weight"]))

        assert frame["Variable"].tolist() == ["Horsepower", "Weight"]
        assert list(frame.columns) == ["Variable", "Mean (Non-USA)", "Mean (USA)", "Difference",
                                       "t Value", "DF", "Pr > |t|"]


class TestCorrelation:

    COLUMNS = ["Horsepower", "Weight", "MPG_City", "MPG_Highway"]

    def test_symmetric_with_unit_diagonal(self, cars_df):
        corr = correlation_matrix(cars_df, self.COLUMNS)

        values = corr.to_numpy()
        assert np.array_equal(values, values.T)
        assert (np.diag(values) == 1.0).all()

    def test_coefficients_in_range(self, cars_df):
        values = correlation_matrix(cars_df, self.COLUMNS).to_numpy()
        assert ((values >= -1.0 - 1e-12) & (values <= 1.0 + 1e-12)).all()

    def test_matches_pandas_pearson(self, cars_df):
        corr = correlation_matrix(cars_df, ["Horsepower", "Weight"])
        expected = cars_df["Horsepower"].corr(cars_df["Weight"])
        assert corr.loc["Horsepower", "Weight"] == pytest.approx(expected)

    def test_perfect_linear_relation(self):
        df = pd.DataFrame({"x": [1.0, 2.0, 3.0], "y": [2.0, 4.0, 6.0]})
        assert correlation_matrix(df, ["x", "y"]).loc["x", "y"] == pytest.approx(1.0)

    def test_constant_column_raises(self, cars_df):
        df = cars_df.assign(Weight=3000.0)
        with pytest.raises(InsufficientVariance):
            correlation_matrix(df, self.COLUMNS)

    def test_non_numeric_column_raises(self, cars_df):
        with pytest.raises(ColumnNotFound):
            correlation_matrix(cars_df, ["Horsepower", "Make"])

    def test_pvalues_layout(self, cars_df):
        pvalues = correlation_pvalues(cars_df, self.COLUMNS)

        assert list(pvalues.columns) == self.COLUMNS
        assert pvalues.loc["Horsepower", "Weight"] == pvalues.loc["Weight", "Horsepower"]
        assert 0.0 <= pvalues.loc["Horsepower", "Weight"] <= 1.0
