"""
Tests for the harvest model.
"""

import numpy as np
import pytest

from pyfishery.core.errors import SimulationError
from pyfishery.core.harvest import compute_catch, effort_catch, quota_catch
from pyfishery.core.params import EffortBased, QuotaBased


class TestEffortCatch:
    """Tests for effort-based harvest."""

    def test_proportional_to_stock(self):
        assert effort_catch(500.0, 10.0, 0.01) == pytest.approx(50.0)
        assert effort_catch(1000.0, 10.0, 0.01) == pytest.approx(100.0)

    def test_capped_at_stock(self):
        assert effort_catch(500.0, 300.0, 0.01) == 500.0

    def test_zero_effort_or_catchability(self):
        assert effort_catch(500.0, 0.0, 0.01) == 0.0
        assert effort_catch(500.0, 10.0, 0.0) == 0.0

    def test_dispatch(self):
        assert compute_catch(200.0, EffortBased(effort=5.0), 0.02) == pytest.approx(20.0)


class TestQuotaCatch:
    """Tests for quota-based harvest."""

    def test_full_quota_when_available(self):
        assert quota_catch(500.0, 30.0) == 30.0

    def test_capped_at_stock(self):
        assert quota_catch(10.99, 1000.0) == 10.99

    def test_zero_quota(self):
        assert quota_catch(500.0, 0.0) == 0.0

    def test_catchability_ignored(self):
        assert compute_catch(500.0, QuotaBased(quota=30.0), 0.0) == 30.0
        assert compute_catch(500.0, QuotaBased(quota=30.0), 0.9) == 30.0


class TestComputeCatch:
    """Tests for catch bounds and error handling."""

    @pytest.mark.parametrize(
        "policy",
        [EffortBased(effort=0.0), EffortBased(effort=50.0), EffortBased(effort=1e6),
         QuotaBased(quota=0.0), QuotaBased(quota=25.0), QuotaBased(quota=1e9)],
    )
    @pytest.mark.parametrize("stock", [0.0, 1.0, 480.0, 1200.0])
    def test_catch_within_stock(self, policy, stock):
        catch = compute_catch(stock, policy, 0.01)
        assert 0.0 <= catch <= stock

    def test_zero_stock_zero_catch(self):
        assert compute_catch(0.0, EffortBased(effort=10.0), 0.5) == 0.0
        assert compute_catch(0.0, QuotaBased(quota=10.0), 0.5) == 0.0

    @pytest.mark.parametrize("stock", [-0.1, np.nan, np.inf])
    def test_invalid_stock(self, stock):
        with pytest.raises(SimulationError) as exc_info:
            compute_catch(stock, QuotaBased(quota=1.0), 0.0)
        assert exc_info.value.kind == "invalid_stock"

    def test_unknown_policy(self):
        with pytest.raises(SimulationError) as exc_info:
            compute_catch(100.0, "trawl", 0.1)
        assert exc_info.value.kind == "unknown_policy"
