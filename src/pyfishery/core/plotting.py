"""
Plotting module for PyFishery.

This module provides visualization functions for fishery simulation
results using matplotlib and optionally plotly.

Functions include:
- Stock time series (absolute or relative to carrying capacity)
- Catch time series (per step or cumulative)
- Summary grid with stock, catch, recruitment and phase plot
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

import numpy as np

# Import matplotlib
import matplotlib.pyplot as plt

# Try to import plotly for interactive plots
try:
    import plotly.graph_objects as go
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False

from pyfishery.config import COLORS, PLOTS
from pyfishery.core.analysis import reference_points
from pyfishery.core.simulation import FisheryOutput


def _style_context():
    """Context manager applying the first available configured style."""
    for style in [PLOTS.style] + PLOTS.fallback_styles:
        if style in plt.style.available or style == 'default':
            return plt.style.context(style)
    return plt.style.context('default')


def _mark_collapse(ax: plt.Axes, output: FisheryOutput) -> None:
    if output.collapsed:
        # Record i ends at x = i + 1 on the stock axis
        ax.axvline(
            x=output.collapse_step + 1,
            color=COLORS.collapse,
            linestyle=':',
            alpha=0.8,
            label='Collapse',
        )


# =============================================================================
# TIME SERIES
# =============================================================================

def plot_stock(
    output: FisheryOutput,
    relative: bool = False,
    show_capacity: bool = True,
    show_bmsy: bool = False,
    title: str = "Stock Time Series",
    figsize: Optional[Tuple[int, int]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Plot the stock trajectory of a fishery run.

    Parameters
    ----------
    output : FisheryOutput
        Simulation results
    relative : bool
        If True, plot stock relative to carrying capacity (B/K)
    show_capacity : bool
        Draw the carrying capacity line
    show_bmsy : bool
        Draw the stock level giving maximum sustainable yield
    title : str
        Plot title
    figsize : tuple, optional
        Figure size (default from PlotConfig)
    ax : Axes, optional
        Matplotlib axes

    Returns
    -------
    matplotlib.Figure
    """
    capacity = output.params.carrying_capacity
    stock = output.stock
    scale = capacity if relative else 1.0

    with _style_context():
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or PLOTS.figsize)
        else:
            fig = ax.figure

        steps = np.arange(len(stock))
        ax.plot(steps, stock / scale, color=COLORS.stock, linewidth=1.5, label='Stock')

        if show_capacity:
            ax.axhline(y=capacity / scale, color=COLORS.capacity, linestyle='--',
                       alpha=0.7, label='Carrying capacity')
        if show_bmsy:
            b_msy = reference_points(output.params).b_msy
            ax.axhline(y=b_msy / scale, color=COLORS.reference, linestyle='-.',
                       alpha=0.7, label='B_MSY')
        _mark_collapse(ax, output)

        ax.set_xlabel('Step', fontsize=11)
        ax.set_ylabel('Relative Stock (B/K)' if relative else 'Stock', fontsize=11)
        ax.set_title(title, fontsize=12)
        ax.legend(loc='best', fontsize=9)
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
    return fig


def plot_catch(
    output: FisheryOutput,
    cumulative: bool = False,
    show_msy: bool = False,
    title: str = "Catch Time Series",
    figsize: Optional[Tuple[int, int]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Plot catch per step from a fishery run.

    Parameters
    ----------
    output : FisheryOutput
        Simulation results
    cumulative : bool
        If True, plot the running total instead of per-step catch
    show_msy : bool
        Draw the maximum sustainable yield (per-step plots only)
    title : str
        Plot title
    figsize : tuple, optional
        Figure size
    ax : Axes, optional
        Matplotlib axes

    Returns
    -------
    matplotlib.Figure
    """
    with _style_context():
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or PLOTS.figsize)
        else:
            fig = ax.figure

        if output.steps_executed == 0:
            # No steps - return empty plot
            ax.text(0.5, 0.5, 'No catch data', ha='center', va='center', transform=ax.transAxes)
            ax.set_title(title)
            return fig

        steps = np.arange(output.steps_executed)
        if cumulative:
            ax.plot(steps, output.cumulative_catch, color=COLORS.catch,
                    linewidth=1.5, label='Cumulative catch')
        else:
            ax.plot(steps, output.catch, color=COLORS.catch, linewidth=1.5, label='Catch')
            if show_msy:
                ax.axhline(y=reference_points(output.params).msy, color=COLORS.reference,
                           linestyle='-.', alpha=0.7, label='MSY')

        ax.set_xlabel('Step', fontsize=11)
        ax.set_ylabel('Cumulative Catch' if cumulative else 'Catch', fontsize=11)
        ax.set_title(title, fontsize=12)
        ax.legend(loc='best', fontsize=9)
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
    return fig


def plot_recruitment(
    output: FisheryOutput,
    title: str = "Recruitment",
    figsize: Optional[Tuple[int, int]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Plot recruitment per step."""
    with _style_context():
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or PLOTS.figsize)
        else:
            fig = ax.figure

        steps = np.arange(output.steps_executed)
        ax.bar(steps, output.recruitment, color=COLORS.recruitment, alpha=0.7)
        ax.set_xlabel('Step', fontsize=11)
        ax.set_ylabel('Recruitment', fontsize=11)
        ax.set_title(title, fontsize=12)
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
    return fig


def plot_phase(
    output: FisheryOutput,
    title: str = "Catch vs Stock",
    figsize: Optional[Tuple[int, int]] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Plot catch against the stock entering each step."""
    with _style_context():
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or PLOTS.figsize)
        else:
            fig = ax.figure

        stock_before = output.stock[:-1]
        ax.plot(stock_before, output.catch, color=COLORS.catch, marker='o',
                markersize=3, linewidth=0.8, alpha=0.8)
        ax.set_xlabel('Stock', fontsize=11)
        ax.set_ylabel('Catch', fontsize=11)
        ax.set_title(title, fontsize=12)
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
    return fig


def plot_fishery_summary(
    output: FisheryOutput,
    figsize: Optional[Tuple[int, int]] = None,
) -> plt.Figure:
    """Create summary plot with stock, catch, recruitment and phase plot.

    Parameters
    ----------
    output : FisheryOutput
        Simulation results
    figsize : tuple, optional
        Figure size

    Returns
    -------
    matplotlib.Figure
    """
    fig, axes = plt.subplots(2, 2, figsize=figsize or PLOTS.summary_figsize)

    plot_stock(output, ax=axes[0, 0], show_bmsy=True)
    axes[0, 0].set_title('Stock')

    plot_catch(output, ax=axes[0, 1], show_msy=True)
    axes[0, 1].set_title('Catch per Step')

    plot_recruitment(output, ax=axes[1, 0])
    axes[1, 0].set_title('Recruitment per Step')

    plot_phase(output, ax=axes[1, 1])
    axes[1, 1].set_title('Catch vs Stock')

    fig.tight_layout()
    return fig


def plot_stock_interactive(output: FisheryOutput, title: str = "Stock and Catch"):
    """Interactive stock and catch plot using plotly.

    Parameters
    ----------
    output : FisheryOutput
        Simulation results
    title : str
        Plot title

    Returns
    -------
    plotly.graph_objects.Figure
    """
    if not HAS_PLOTLY:
        raise ImportError("plotly is required for interactive plots. Install with: pip install plotly")

    stock = output.stock
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=np.arange(len(stock)), y=stock, mode='lines', name='Stock',
        line=dict(color=COLORS.stock),
    ))
    fig.add_trace(go.Bar(
        x=np.arange(output.steps_executed), y=output.catch, name='Catch',
        marker_color=COLORS.catch, opacity=0.6,
    ))
    fig.update_layout(
        title=title,
        xaxis_title='Step',
        yaxis_title='Biomass',
        hovermode='x unified',
    )
    return fig


def save_plots(
    figures: Union[plt.Figure, List[plt.Figure]],
    filename: str,
    dpi: Optional[int] = None,
    format: str = 'png'
) -> None:
    """Save matplotlib figure(s) to file.

    Parameters
    ----------
    figures : Figure or list of Figure
        Figure(s) to save
    filename : str
        Output filename (without extension for multiple figures)
    dpi : int, optional
        Resolution (default from PlotConfig)
    format : str
        Output format ('png', 'pdf', 'svg')
    """
    if isinstance(figures, plt.Figure):
        figures = [figures]
    dpi = dpi or PLOTS.dpi

    if len(figures) == 1:
        figures[0].savefig(f"{filename}.{format}", dpi=dpi, bbox_inches='tight')
    else:
        for i, fig in enumerate(figures):
            fig.savefig(f"{filename}_{i+1}.{format}", dpi=dpi, bbox_inches='tight')
