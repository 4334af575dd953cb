"""
Recruitment model for PyFishery.

Recruitment is logistic surplus production with optional additive
normal noise. Noise is drawn from a numpy Generator owned by the run,
never from a process-wide generator, so identical parameters and seed
give identical recruitment sequences.
"""

from __future__ import annotations

import math

import numpy as np

from pyfishery.core.errors import SimulationError
from pyfishery.core.params import FisheryParams


def create_rng(seed: int) -> np.random.Generator:
    """Create the noise generator for one run.

    Parameters
    ----------
    seed : int
        Any integer. Negative seeds map to a distinct entropy pool, so
        ``-1`` and ``1`` give different streams.

    Returns
    -------
    np.random.Generator
        PCG64 generator seeded through a SeedSequence.
    """
    seed = int(seed)
    entropy = [abs(seed), int(seed < 0)]
    return np.random.Generator(np.random.PCG64(np.random.SeedSequence(entropy)))


def logistic_growth(stock: float, growth_rate: float, carrying_capacity: float) -> float:
    """Deterministic logistic growth ``r * B * (1 - B / K)``.

    Parameters
    ----------
    stock : float
        Current stock B
    growth_rate : float
        Intrinsic growth rate r
    carrying_capacity : float
        Carrying capacity K

    Returns
    -------
    float
        Surplus production for one step
    """
    return growth_rate * stock * (1.0 - stock / carrying_capacity)


def compute_recruitment(
    stock: float,
    params: FisheryParams,
    rng: np.random.Generator,
) -> float:
    """Recruitment added to the stock in one step.

    Draws exactly one normal variate from ``rng`` when the noise standard
    deviation is positive and none otherwise. Negative raw values are
    clamped to zero: recruitment only adds to the stock.

    Parameters
    ----------
    stock : float
        Stock at the start of the step, in [0, K]
    params : FisheryParams
        Simulation parameters
    rng : np.random.Generator
        Per-run noise generator

    Returns
    -------
    float
        Non-negative recruitment

    Raises
    ------
    SimulationError
        If ``stock`` is non-finite or outside [0, K].
    """
    if not math.isfinite(stock) or stock < 0.0 or stock > params.carrying_capacity:
        raise SimulationError(
            "invalid_stock",
            f"recruitment model received stock {stock!r} outside "
            f"[0, {params.carrying_capacity}]",
        )

    growth = logistic_growth(stock, params.intrinsic_growth_rate, params.carrying_capacity)

    sigma = params.recruitment_noise_stddev
    noise = float(rng.normal(0.0, sigma)) if sigma > 0.0 else 0.0

    return max(0.0, growth + noise)
