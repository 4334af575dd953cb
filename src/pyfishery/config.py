"""PyFishery tooling configuration.

Centralized configuration for plotting, display and command line defaults.
Numerical bounds used by the engine live in ``pyfishery.core.constants``.
"""
from dataclasses import dataclass
from typing import Dict


@dataclass
class DisplayConfig:
    """Display and formatting configuration."""

    decimal_places: int = 3
    table_max_rows: int = 20

    # Labels for record columns
    column_labels: Dict[str, str] = None

    def __post_init__(self):
        """Initialize column labels dictionary."""
        if self.column_labels is None:
            self.column_labels = {
                'stock_before': 'Stock (start)',
                'recruitment': 'Recruitment',
                'catch': 'Catch',
                'stock_after': 'Stock (end)',
                'collapsed': 'Collapsed',
                'cumulative_catch': 'Cumulative catch',
            }


@dataclass
class PlotConfig:
    """Matplotlib plot configuration."""

    default_width: int = 12
    default_height: int = 6
    summary_width: int = 14
    summary_height: int = 10
    dpi: int = 150
    style: str = 'seaborn-v0_8-darkgrid'

    # Fallback styles if preferred not available
    fallback_styles: list = None

    def __post_init__(self):
        """Initialize fallback styles."""
        if self.fallback_styles is None:
            self.fallback_styles = [
                'seaborn-v0_8-darkgrid',
                'seaborn-darkgrid',
                'default'
            ]

    @property
    def figsize(self):
        return (self.default_width, self.default_height)

    @property
    def summary_figsize(self):
        return (self.summary_width, self.summary_height)


@dataclass
class ColorScheme:
    """Color scheme for visualizations."""

    stock: str = '#1D3557'         # Dark blue
    catch: str = '#E63946'         # Red
    recruitment: str = '#2A9D8F'   # Teal
    capacity: str = '#95a5a6'      # Gray
    reference: str = '#f39c12'     # Orange
    collapse: str = '#dc3545'      # Red


@dataclass
class SimulationDefaults:
    """Default parameter values for the command line driver."""

    intrinsic_growth_rate: float = 0.3
    carrying_capacity: float = 1000.0
    initial_stock: float = 500.0
    natural_mortality_rate: float = 0.0
    catchability_coefficient: float = 0.01
    effort: float = 10.0
    recruitment_noise_stddev: float = 0.0
    random_seed: int = 42
    max_steps: int = 100


# Singleton instances - import these in other modules
DISPLAY = DisplayConfig()
PLOTS = PlotConfig()
COLORS = ColorScheme()
DEFAULTS = SimulationDefaults()
