"""
Harvest model for PyFishery.

Computes the catch removed in one step under either fishing policy:
- Effort-based: a fraction ``q * E`` of the stock
- Quota-based: a fixed amount per step

In both cases catch never exceeds the stock available.
"""

from __future__ import annotations

import math

from pyfishery.core.errors import SimulationError
from pyfishery.core.params import EffortBased, FishingPolicy, QuotaBased


def effort_catch(stock: float, effort: float, catchability: float) -> float:
    """Catch under an effort policy: ``min(B, q * E * B)``."""
    return min(stock, catchability * effort * stock)


def quota_catch(stock: float, quota: float) -> float:
    """Catch under a quota policy: ``min(B, Q)``."""
    return min(stock, quota)


def compute_catch(stock: float, policy: FishingPolicy, catchability: float) -> float:
    """Catch removed this step.

    Parameters
    ----------
    stock : float
        Stock after natural mortality and recruitment, before the
        capacity clamp. May exceed carrying capacity.
    policy : EffortBased or QuotaBased
        Fishing policy
    catchability : float
        Catchability coefficient q (used by effort policies only)

    Returns
    -------
    float
        Catch, with ``0 <= catch <= stock``

    Raises
    ------
    SimulationError
        If ``stock`` is negative or non-finite, or the policy type is unknown.
    """
    if not math.isfinite(stock) or stock < 0.0:
        raise SimulationError(
            "invalid_stock", f"harvest model received stock {stock!r}"
        )

    if isinstance(policy, EffortBased):
        return effort_catch(stock, policy.effort, catchability)
    if isinstance(policy, QuotaBased):
        return quota_catch(stock, policy.quota)

    raise SimulationError(
        "unknown_policy", f"unsupported fishing policy {type(policy).__name__}"
    )
