"""
Unit tests for the analysis module.

Tests for summary statistics, reference points, scenario
comparison, stability diagnostics and data export.
"""

from unittest.mock import MagicMock

import numpy as np
import pandas as pd
import pytest

from pyfishery.core.analysis import (
    FisherySummary,
    ReferencePoints,
    check_fishery_stability,
    compare_scenarios,
    export_fishery_to_dataframe,
    reference_points,
    summarize_fishery_output,
)
from pyfishery.core.params import EffortBased, QuotaBased, create_fishery_params
from pyfishery.core.simulation import Fishery, fishery_run


@pytest.fixture
def base_params():
    return create_fishery_params(
        intrinsic_growth_rate=0.4,
        carrying_capacity=1000.0,
        initial_stock=500.0,
        fishing_policy=EffortBased(effort=10.0),
        max_steps=50,
        catchability_coefficient=0.01,
    )


@pytest.fixture
def collapse_params():
    return create_fishery_params(
        intrinsic_growth_rate=0.1,
        carrying_capacity=1000.0,
        initial_stock=10.0,
        fishing_policy=QuotaBased(quota=1000.0),
        max_steps=3,
    )


class TestSummarizeFisheryOutput:
    """Tests for summarize_fishery_output."""

    def test_returns_summary(self, base_params):
        summary = summarize_fishery_output(fishery_run(base_params))

        assert isinstance(summary, FisherySummary)
        assert summary.steps == 50
        assert summary.collapsed is False
        assert summary.collapse_step == -1
        assert summary.stock_start == 500.0

    def test_statistics_match_records(self, base_params):
        output = fishery_run(base_params)
        summary = summarize_fishery_output(output)
        stock_after = [rec.stock_after for rec in output.records]
        catch = [rec.catch for rec in output.records]

        assert summary.stock_end == stock_after[-1]
        assert summary.stock_min == pytest.approx(min(stock_after))
        assert summary.stock_max == pytest.approx(max(stock_after))
        assert summary.stock_mean == pytest.approx(np.mean(stock_after))
        assert summary.total_catch == pytest.approx(sum(catch))
        assert summary.mean_catch == pytest.approx(np.mean(catch))

    def test_equilibrium_under_constant_effort(self, base_params):
        """Deterministic effort fishing settles where growth replaces the catch."""
        output = fishery_run(base_params.replace(max_steps=400))
        summary = summarize_fishery_output(output)

        # (1 + r(1 - B/K))(1 - qE) = 1
        expected = 1000.0 * (1 - (1 / 0.9 - 1) / 0.4)
        assert summary.stock_end == pytest.approx(expected, rel=1e-3)

    def test_collapsed_run(self, collapse_params):
        summary = summarize_fishery_output(fishery_run(collapse_params))

        assert summary.collapsed is True
        assert summary.collapse_step == 0
        assert summary.stock_end == 0.0
        assert summary.stock_change == pytest.approx(-1.0)

    def test_zero_steps(self, base_params):
        output = Fishery(base_params).output()
        summary = summarize_fishery_output(output)

        assert summary.steps == 0
        assert summary.stock_end == 500.0
        assert summary.total_catch == 0.0

    def test_to_dict(self, base_params):
        data = summarize_fishery_output(fishery_run(base_params)).to_dict()
        assert data["steps"] == 50
        assert "catch_cv" in data


class TestReferencePoints:
    """Tests for logistic reference points."""

    def test_values(self, base_params):
        refs = reference_points(base_params)

        assert isinstance(refs, ReferencePoints)
        assert refs.msy == pytest.approx(100.0)
        assert refs.b_msy == pytest.approx(500.0)
        assert refs.f_msy == pytest.approx(0.2)
        assert refs.effort_msy == pytest.approx(20.0)

    def test_zero_catchability(self, collapse_params):
        refs = reference_points(collapse_params)
        assert np.isnan(refs.effort_msy)

    def test_msy_quota_holds_stock_at_bmsy(self, base_params):
        refs = reference_points(base_params)
        params = base_params.replace(
            initial_stock=refs.b_msy, fishing_policy=QuotaBased(quota=refs.msy)
        )
        output = fishery_run(params)

        assert output.final_stock == pytest.approx(refs.b_msy)
        assert output.total_catch == pytest.approx(refs.msy * params.max_steps)


class TestCompareScenarios:
    """Tests for compare_scenarios."""

    def test_returns_dataframe(self, base_params, collapse_params):
        outputs = [fishery_run(base_params), fishery_run(collapse_params)]
        df = compare_scenarios(outputs, ["effort", "quota"])

        assert isinstance(df, pd.DataFrame)
        assert list(df.index) == ["effort", "quota"]
        assert df.loc["effort", "policy"] == "effort"
        assert df.loc["quota", "policy_value"] == 1000.0
        assert bool(df.loc["quota", "collapsed"]) is True
        assert df.loc["quota", "collapse_step"] == 0

    def test_mismatched_lengths(self, base_params):
        with pytest.raises(ValueError):
            compare_scenarios([fishery_run(base_params)], ["a", "b"])

    def test_no_scenarios(self):
        df = compare_scenarios([], [])

        assert df.empty
        assert df.index.name == "Scenario"
        assert "total_catch" in df.columns

    def test_uses_output_interface(self, base_params):
        """Only the public output interface is needed."""
        real = fishery_run(base_params)
        output = MagicMock()
        output.params = base_params
        output.records = real.records
        output.start_state = real.start_state
        output.steps_executed = real.steps_executed
        output.stock = real.stock
        output.catch = real.catch
        output.recruitment = real.recruitment
        output.collapsed = False
        output.collapse_step = -1

        df = compare_scenarios([output], ["mocked"])
        assert df.loc["mocked", "total_catch"] == pytest.approx(real.total_catch)


class TestCheckFisheryStability:
    """Tests for check_fishery_stability."""

    def test_stable_fishery(self, base_params):
        results = check_fishery_stability(base_params)

        assert results["is_stable"] is True
        assert results["collapsed"] is False
        assert results["messages"]

    def test_collapsing_fishery(self, collapse_params):
        results = check_fishery_stability(collapse_params, burn_steps=20)

        assert results["is_stable"] is False
        assert results["collapsed"] is True
        assert results["collapse_step"] == 0

    def test_large_decline_is_unstable(self):
        params = create_fishery_params(
            intrinsic_growth_rate=0.1,
            carrying_capacity=1000.0,
            initial_stock=1000.0,
            fishing_policy=QuotaBased(quota=0.0),
            max_steps=10,
            natural_mortality_rate=0.3,
        )
        results = check_fishery_stability(params, burn_steps=20)

        assert results["is_stable"] is False
        assert results["relative_change"] < -0.5

    def test_input_params_unchanged(self, base_params):
        check_fishery_stability(base_params, burn_steps=5)
        assert base_params.max_steps == 50


class TestExportFisheryToDataframe:
    """Tests for export_fishery_to_dataframe."""

    def test_columns_and_index(self, base_params):
        output = fishery_run(base_params)
        df = export_fishery_to_dataframe(output)

        assert df.index.name == "step_index"
        assert list(df.columns) == [
            "stock_before", "recruitment", "catch", "stock_after", "collapsed", "cumulative_catch",
        ]
        assert len(df) == output.steps_executed

    def test_values(self, collapse_params):
        df = export_fishery_to_dataframe(fishery_run(collapse_params))

        assert df.loc[0, "stock_before"] == 10.0
        assert df.loc[0, "stock_after"] == 0.0
        assert df["collapsed"].dtype == bool
        assert df.loc[0, "cumulative_catch"] == pytest.approx(10.99)
