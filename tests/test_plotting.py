"""
Unit tests for the plotting module.

Tests for stock and catch time series, the summary grid
and figure saving.
"""

import pytest

# Skip plotting tests if matplotlib not available
pytest.importorskip("matplotlib")

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend for testing
import matplotlib.pyplot as plt

from pyfishery.core.params import EffortBased, QuotaBased, create_fishery_params
from pyfishery.core.plotting import (
    HAS_PLOTLY,
    plot_catch,
    plot_fishery_summary,
    plot_phase,
    plot_recruitment,
    plot_stock,
    plot_stock_interactive,
    save_plots,
)
from pyfishery.core.simulation import Fishery, fishery_run


@pytest.fixture
def output():
    params = create_fishery_params(
        intrinsic_growth_rate=0.4,
        carrying_capacity=1000.0,
        initial_stock=300.0,
        fishing_policy=EffortBased(effort=10.0),
        max_steps=30,
        catchability_coefficient=0.01,
        recruitment_noise_stddev=10.0,
        random_seed=11,
    )
    return fishery_run(params)


@pytest.fixture
def collapsed_output():
    params = create_fishery_params(
        intrinsic_growth_rate=0.1,
        carrying_capacity=1000.0,
        initial_stock=10.0,
        fishing_policy=QuotaBased(quota=1000.0),
        max_steps=3,
    )
    return fishery_run(params)


class TestPlotStock:
    """Tests for plot_stock function."""

    def test_returns_figure(self, output):
        """Should return matplotlib Figure."""
        fig = plot_stock(output)

        assert isinstance(fig, plt.Figure)
        plt.close(fig)

    def test_relative_stock(self, output):
        """Relative stock should be scaled by carrying capacity."""
        fig = plot_stock(output, relative=True, show_bmsy=True)

        line = fig.axes[0].get_lines()[0]
        assert max(line.get_ydata()) <= 1.0
        plt.close(fig)

    def test_uses_given_axes(self, output):
        fig, ax = plt.subplots()
        result = plot_stock(output, ax=ax)

        assert result is fig
        plt.close(fig)

    def test_marks_collapse(self, collapsed_output):
        fig = plot_stock(collapsed_output)

        labels = fig.axes[0].get_legend_handles_labels()[1]
        assert "Collapse" in labels
        plt.close(fig)


class TestPlotCatch:
    """Tests for plot_catch function."""

    def test_returns_figure(self, output):
        fig = plot_catch(output, show_msy=True)

        assert isinstance(fig, plt.Figure)
        plt.close(fig)

    def test_cumulative(self, output):
        fig = plot_catch(output, cumulative=True)

        line = fig.axes[0].get_lines()[0]
        assert line.get_ydata()[-1] == pytest.approx(output.total_catch)
        plt.close(fig)

    def test_no_steps(self, output):
        """Empty output should show a placeholder."""
        empty = Fishery(output.params).output()
        fig = plot_catch(empty)

        assert isinstance(fig, plt.Figure)
        assert fig.axes[0].texts[0].get_text() == "No catch data"
        plt.close(fig)


class TestOtherPlots:
    """Tests for recruitment, phase and summary plots."""

    def test_recruitment(self, output):
        fig = plot_recruitment(output)
        assert isinstance(fig, plt.Figure)
        plt.close(fig)

    def test_phase(self, output):
        fig = plot_phase(output)
        assert isinstance(fig, plt.Figure)
        plt.close(fig)

    def test_summary_grid(self, output):
        fig = plot_fishery_summary(output)

        assert len(fig.axes) == 4
        plt.close(fig)

    def test_summary_collapsed(self, collapsed_output):
        fig = plot_fishery_summary(collapsed_output)
        assert isinstance(fig, plt.Figure)
        plt.close(fig)

    @pytest.mark.skipif(not HAS_PLOTLY, reason="plotly not installed")
    def test_interactive(self, output):
        fig = plot_stock_interactive(output)
        assert len(fig.data) == 2


class TestSavePlots:
    """Tests for save_plots function."""

    def test_single_figure(self, output, tmp_path):
        fig = plot_stock(output)
        save_plots(fig, str(tmp_path / "stock"))

        assert (tmp_path / "stock.png").exists()
        plt.close(fig)

    def test_multiple_figures(self, output, tmp_path):
        figs = [plot_stock(output), plot_catch(output)]
        save_plots(figs, str(tmp_path / "run"), dpi=50)

        assert (tmp_path / "run_1.png").exists()
        assert (tmp_path / "run_2.png").exists()
        for fig in figs:
            plt.close(fig)
