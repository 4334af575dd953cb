"""
Analysis and diagnostics module for PyFishery.

This module provides functions for analyzing fishery simulation
results, including:
- Summary statistics of stock, catch and recruitment
- Logistic (Schaefer) reference points
- Scenario comparison tables
- Stability diagnostics
- Export of step records to DataFrames
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from pyfishery.core.constants import DEFAULT_BURN_IN_STEPS, UNSTABLE_CHANGE_THRESHOLD
from pyfishery.core.params import FisheryParams
from pyfishery.core.simulation import FisheryOutput, fishery_run

# =============================================================================
# SUMMARY STATISTICS
# =============================================================================


@dataclass
class FisherySummary:
    """Summary statistics for a fishery simulation.

    Stock statistics are taken over the stock after each step; the
    initial stock is reported separately as ``stock_start``.

    Attributes
    ----------
    steps : int
        Number of steps executed
    collapsed : bool
        Whether the run ended in collapse
    collapse_step : int
        Step of collapse (-1 if none)

    Stock statistics
    ----------------
    stock_start : float
        Initial stock
    stock_end : float
        Final stock
    stock_min, stock_max, stock_mean, stock_std : float
        Range, mean and standard deviation of stock
    stock_cv : float
        Coefficient of variation of stock
    stock_change : float
        Relative change (end/start - 1)

    Catch statistics
    ----------------
    total_catch : float
        Total catch over the run
    mean_catch : float
        Mean catch per step
    catch_std : float
        Standard deviation of catch
    catch_cv : float
        Coefficient of variation of catch
    mean_recruitment : float
        Mean recruitment per step
    """

    steps: int = 0
    collapsed: bool = False
    collapse_step: int = -1

    # Stock
    stock_start: float = 0.0
    stock_end: float = 0.0
    stock_min: float = 0.0
    stock_max: float = 0.0
    stock_mean: float = 0.0
    stock_std: float = 0.0
    stock_cv: float = 0.0
    stock_change: float = 0.0

    # Catch
    total_catch: float = 0.0
    mean_catch: float = 0.0
    catch_std: float = 0.0
    catch_cv: float = 0.0
    mean_recruitment: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


def summarize_fishery_output(output: FisheryOutput) -> FisherySummary:
    """Calculate summary statistics for a fishery run.

    Parameters
    ----------
    output : FisheryOutput
        Simulation results

    Returns
    -------
    FisherySummary
        Summary statistics
    """
    stock_start = float(output.start_state.current_stock)

    if output.steps_executed == 0:
        return FisherySummary(
            stock_start=stock_start,
            stock_end=stock_start,
            stock_min=stock_start,
            stock_max=stock_start,
            stock_mean=stock_start,
        )

    stock = output.stock[1:]
    catch = output.catch
    recruitment = output.recruitment

    stock_mean = float(np.mean(stock))
    stock_std = float(np.std(stock))
    stock_end = float(stock[-1])

    mean_catch = float(np.mean(catch))
    catch_std = float(np.std(catch))

    return FisherySummary(
        steps=output.steps_executed,
        collapsed=output.collapsed,
        collapse_step=output.collapse_step,
        stock_start=stock_start,
        stock_end=stock_end,
        stock_min=float(np.min(stock)),
        stock_max=float(np.max(stock)),
        stock_mean=stock_mean,
        stock_std=stock_std,
        stock_cv=stock_std / stock_mean if stock_mean > 0 else 0.0,
        stock_change=stock_end / stock_start - 1 if stock_start > 0 else 0.0,
        total_catch=float(np.sum(catch)),
        mean_catch=mean_catch,
        catch_std=catch_std,
        catch_cv=catch_std / mean_catch if mean_catch > 0 else 0.0,
        mean_recruitment=float(np.mean(recruitment)),
    )


# =============================================================================
# REFERENCE POINTS
# =============================================================================


@dataclass
class ReferencePoints:
    """Logistic (Schaefer) reference points.

    Attributes
    ----------
    msy : float
        Maximum sustainable yield, r*K/4
    b_msy : float
        Stock at MSY, K/2
    f_msy : float
        Harvest fraction at MSY, r/2
    effort_msy : float
        Effort giving f_msy, f_msy/q (NaN when q == 0)
    """

    msy: float
    b_msy: float
    f_msy: float
    effort_msy: float


def reference_points(params: FisheryParams) -> ReferencePoints:
    """Calculate logistic reference points for a parameter set.

    Natural mortality is not included; these are the textbook values
    for the growth term alone.

    Parameters
    ----------
    params : FisheryParams
        Simulation parameters

    Returns
    -------
    ReferencePoints
    """
    r = params.intrinsic_growth_rate
    k = params.carrying_capacity
    q = params.catchability_coefficient
    f_msy = r / 2.0
    return ReferencePoints(
        msy=r * k / 4.0,
        b_msy=k / 2.0,
        f_msy=f_msy,
        effort_msy=f_msy / q if q > 0 else float("nan"),
    )


# =============================================================================
# SCENARIO COMPARISON
# =============================================================================


def compare_scenarios(outputs: List[FisheryOutput], names: List[str]) -> pd.DataFrame:
    """Compare multiple fishery runs.

    Parameters
    ----------
    outputs : list of FisheryOutput
        Simulation results to compare
    names : list of str
        Names for each scenario

    Returns
    -------
    pd.DataFrame
        One row per scenario, indexed by name, with final stock, total
        and mean catch, relative stock change and collapse information
    """
    if len(outputs) != len(names):
        raise ValueError("Number of outputs must match number of names")

    rows = []
    for output, name in zip(outputs, names):
        summary = summarize_fishery_output(output)
        rows.append(
            {
                "Scenario": name,
                "policy": output.params.fishing_policy.kind,
                "policy_value": output.params.fishing_policy.value,
                "steps": summary.steps,
                "final_stock": summary.stock_end,
                "pct_change": summary.stock_change * 100,
                "total_catch": summary.total_catch,
                "mean_catch": summary.mean_catch,
                "collapsed": summary.collapsed,
                "collapse_step": summary.collapse_step,
            }
        )

    columns = [
        "Scenario", "policy", "policy_value", "steps", "final_stock", "pct_change",
        "total_catch", "mean_catch", "collapsed", "collapse_step",
    ]
    return pd.DataFrame(rows, columns=columns).set_index("Scenario")


# =============================================================================
# MODEL DIAGNOSTICS
# =============================================================================


def check_fishery_stability(
    params: FisheryParams, burn_steps: Optional[int] = None
) -> Dict[str, Any]:
    """Check whether a parameter set settles without collapse.

    Runs a burn-in simulation (a copy of the parameters with
    ``max_steps = burn_steps``) and inspects the trajectory.

    Parameters
    ----------
    params : FisheryParams
        Parameters to check
    burn_steps : int, optional
        Steps to run (default: DEFAULT_BURN_IN_STEPS)

    Returns
    -------
    dict
        Stability diagnostics including:
        - is_stable: bool
        - collapsed: bool
        - collapse_step: int (-1 if none)
        - relative_change: float, stock end/start - 1 over the last half
        - messages: list of diagnostic messages
    """
    steps = DEFAULT_BURN_IN_STEPS if burn_steps is None else burn_steps
    output = fishery_run(params.replace(max_steps=steps))

    results: Dict[str, Any] = {
        "is_stable": True,
        "collapsed": output.collapsed,
        "collapse_step": output.collapse_step,
        "relative_change": 0.0,
        "messages": [],
    }

    if output.collapsed:
        results["is_stable"] = False
        results["messages"].append(f"Stock collapsed at step {output.collapse_step}")
        return results

    # Compare the middle of the burn-in with its end
    stock = output.stock
    mid = stock[len(stock) // 2]
    end = stock[-1]
    if mid > 0:
        change = end / mid - 1
        results["relative_change"] = float(change)
        if abs(change) > UNSTABLE_CHANGE_THRESHOLD:
            results["is_stable"] = False
            results["messages"].append(
                f"Stock changed {change * 100:.1f}% over second half of burn-in"
            )

    if not results["messages"]:
        results["messages"].append("Stock is stable over burn-in")

    return results


# =============================================================================
# DATA EXPORT
# =============================================================================


def export_fishery_to_dataframe(output: FisheryOutput) -> pd.DataFrame:
    """Export step records to a DataFrame.

    Parameters
    ----------
    output : FisheryOutput
        Simulation results

    Returns
    -------
    pd.DataFrame
        One row per step, indexed by ``step_index``, with columns
        stock_before, recruitment, catch, stock_after, collapsed and
        cumulative_catch
    """
    columns = ["step_index", "stock_before", "recruitment", "catch", "stock_after", "collapsed"]
    df = pd.DataFrame(output.as_tuples(), columns=columns)
    df["collapsed"] = df["collapsed"].astype(bool)
    df["cumulative_catch"] = df["catch"].cumsum()
    return df.set_index("step_index")
