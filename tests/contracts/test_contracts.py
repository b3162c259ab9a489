"""Tests for pipeline contracts.

These tests verify that contracts are enforced at stage boundaries.
They test contract violations directly, without defensive logic downstream.
"""

import pytest
import numpy as np
import pandas as pd

from autostat.contracts import (
    ContractViolation,
    FailurePolicy,
    require,
    assert_cars_table,
    assert_us_filtered,
    assert_tiered,
    assert_origin_labelled,
    assert_summary_output,
)
from autostat.analysis import derive_us_cars, binary_origin_label, summarize_by_type

pytestmark = pytest.mark.unit


class TestRequire:
    """Test the base require() helper."""

    def test_require_passes(self):
        require(True, "never raised")

    def test_require_raises_contract_violation(self):
        with pytest.raises(ContractViolation, match="boom"):
            require(False, "boom")

    def test_contract_violation_is_runtime_error(self):
        assert issubclass(ContractViolation, RuntimeError)

    def test_failure_policies(self):
        assert FailurePolicy("fail_fast") is FailurePolicy.FAIL_FAST
        assert FailurePolicy("report") is FailurePolicy.REPORT


class TestLoadContract:
    """Test load stage contract."""

    def test_load_contract_passes_with_valid_table(self, cars_df):
        # Should not raise
        assert_cars_table(cars_df)

    def test_load_contract_fails_without_column(self, cars_df):
        with pytest.raises(ContractViolation, match="missing required column 'Weight'"):
            assert_cars_table(cars_df.drop(columns=["Weight"]))

    def test_load_contract_fails_for_non_dataframe(self):
        with pytest.raises(ContractViolation, match="expected DataFrame"):
            assert_cars_table({"Make": []})


class TestFilterContract:
    """Test US filter stage contract."""

    def test_filter_contract_passes_on_derived_table(self, cars_df):
        us = derive_us_cars(cars_df)
        assert_us_filtered(us, "USA", 200)

    def test_filter_contract_passes_on_empty_table(self, cars_df):
        assert_us_filtered(cars_df.iloc[0:0], "USA", 200)

    def test_filter_contract_fails_on_foreign_row(self, cars_df):
        with pytest.raises(ContractViolation, match="Origin != 'USA'"):
            assert_us_filtered(cars_df[cars_df["Horsepower"] > 200], "USA", 200)

    def test_filter_contract_fails_on_boundary_row(self, cars_df):
        usa = cars_df[cars_df["Origin"] == "USA"]
        with pytest.raises(ContractViolation, match="Horsepower <= 200"):
            assert_us_filtered(usa[usa["Horsepower"] >= 200], "USA", 200)


class TestTierContract:
    """Test HP_Tier partition contract."""

    def test_tier_contract_passes_on_derived_table(self, cars_df):
        us = derive_us_cars(cars_df)
        assert_tiered(us, 400, 300)

    def test_tier_contract_fails_on_wrong_tier(self, cars_df):
        us = derive_us_cars(cars_df)
        us.loc[us["Horsepower"] == 500, "HP_Tier"] = "Medium"
        with pytest.raises(ContractViolation, match="'High' must be exactly"):
            assert_tiered(us, 400, 300)

    def test_tier_contract_fails_on_unknown_label(self, cars_df):
        us = derive_us_cars(cars_df)
        us.loc[0, "HP_Tier"] = "Extreme"
        with pytest.raises(ContractViolation, match="outside"):
            assert_tiered(us, 400, 300)

    def test_tier_contract_fails_without_column(self, cars_df):
        with pytest.raises(ContractViolation, match="missing 'HP_Tier'"):
            assert_tiered(cars_df, 400, 300)

    def test_missing_horsepower_must_not_carry_tier(self):
        df = pd.DataFrame({"Horsepower": [np.nan, 350.0], "HP_Tier": ["Low", "Medium"]})
        with pytest.raises(ContractViolation, match="without Horsepower"):
            assert_tiered(df, 400, 300)


class TestOriginContract:
    """Test binary origin label contract."""

    def test_origin_contract_passes(self, cars_df):
        labelled = binary_origin_label(cars_df)
        assert_origin_labelled(labelled, expected_rows=len(cars_df))

    def test_origin_contract_fails_on_row_count(self, cars_df):
        labelled = binary_origin_label(cars_df)
        with pytest.raises(ContractViolation, match="expected"):
            assert_origin_labelled(labelled.iloc[1:], expected_rows=len(cars_df))

    def test_origin_contract_fails_on_third_label(self, cars_df):
        labelled = binary_origin_label(cars_df)
        labelled.loc[0, "Origin_US"] = "Mars"
        with pytest.raises(ContractViolation, match="unexpected labels"):
            assert_origin_labelled(labelled, expected_rows=len(cars_df))


class TestSummaryContract:
    """Test aggregation stage contract."""

    def test_summary_contract_passes(self, cars_df):
        us = derive_us_cars(cars_df)
        assert_summary_output(summarize_by_type(us), input_rows=len(us))

    def test_summary_contract_fails_on_wrong_total(self, cars_df):
        us = derive_us_cars(cars_df)
        with pytest.raises(ContractViolation, match="expected"):
            assert_summary_output(summarize_by_type(us), input_rows=len(us) + 1)

    def test_summary_contract_fails_without_count_column(self):
        with pytest.raises(ContractViolation, match="missing count column"):
            assert_summary_output(pd.DataFrame({"Type": ["SUV"]}), input_rows=1)
