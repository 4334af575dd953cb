"""
Fishery dynamic simulation.

This module contains the population state, the step engine that applies
natural mortality, recruitment, harvest and the capacity clamp for one
time step, and the run drivers that iterate it:

- ``fishery_run`` runs a parameter set to completion
- ``Fishery`` keeps a simulation alive and advances it a few steps at a time
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np

from pyfishery.core.constants import COLLAPSED_STOCK, MAX_STEPS_PER_UPDATE
from pyfishery.core.errors import SimulationError
from pyfishery.core.harvest import compute_catch
from pyfishery.core.params import FisheryParams
from pyfishery.core.recruitment import compute_recruitment, create_rng
from pyfishery.logger import get_logger

logger = get_logger(__name__)


class SimulationStatus(Enum):
    """Lifecycle of a simulation run."""

    RUNNING = "running"  # Initial state; steps may be taken
    COLLAPSED = "collapsed"  # Stock reached zero; terminal
    FINISHED = "finished"  # Step budget exhausted; terminal


@dataclass
class FisheryState:
    """State variables for a fishery simulation.

    Owned by exactly one run and mutated in place by the step engine.

    Attributes
    ----------
    current_stock : float
        Stock size, always in [0, carrying_capacity] between steps
    cumulative_catch : float
        Total catch so far (non-decreasing)
    step_index : int
        Number of steps taken so far
    collapsed : bool
        True once the stock has reached zero; never reverts
    status : SimulationStatus
        Lifecycle state of the run
    """

    current_stock: float
    cumulative_catch: float = 0.0
    step_index: int = 0
    collapsed: bool = False
    status: SimulationStatus = SimulationStatus.RUNNING

    def copy(self) -> "FisheryState":
        return dataclasses.replace(self)


@dataclass(frozen=True)
class StepRecord:
    """Outcome of one simulation step.

    Attributes
    ----------
    step_index : int
        Index of the step (0-based)
    stock_before : float
        Stock entering the step
    recruitment : float
        Recruitment added during the step
    catch : float
        Catch removed during the step
    stock_after : float
        Stock leaving the step, after the capacity clamp
    collapsed : bool
        Whether the stock reached zero in this step
    """

    step_index: int
    stock_before: float
    recruitment: float
    catch: float
    stock_after: float
    collapsed: bool

    def as_tuple(self) -> Tuple[int, float, float, float, float, bool]:
        """Fixed-arity tuple in field order."""
        return (
            self.step_index,
            self.stock_before,
            self.recruitment,
            self.catch,
            self.stock_after,
            self.collapsed,
        )


@dataclass(frozen=True)
class RunSummary:
    """Final-state summary of a run.

    Attributes
    ----------
    final_stock : float
        Stock after the last step
    total_catch : float
        Cumulative catch over the run
    steps_executed : int
        Number of steps taken
    collapsed : bool
        Whether the run ended in collapse
    """

    final_stock: float
    total_catch: float
    steps_executed: int
    collapsed: bool


@dataclass(frozen=True)
class FisheryUpdate:
    """Results of advancing a Fishery by a number of steps.

    Aggregates cover only the steps taken in this update. Means and
    standard deviations (population, ddof=0) are NaN when no step was taken.

    Attributes
    ----------
    records : tuple of StepRecord
        Steps taken in this update
    steps : int
        Number of steps taken (may be fewer than requested)
    stock_mean : float
        Mean stock after each step
    stock_std : float
        Standard deviation of stock after each step
    catch_total : float
        Total catch over the update
    catch_std : float
        Standard deviation of per-step catch
    status : SimulationStatus
        Status after the update
    """

    records: Tuple[StepRecord, ...]
    steps: int
    stock_mean: float
    stock_std: float
    catch_total: float
    catch_std: float
    status: SimulationStatus


@dataclass(frozen=True)
class FisheryOutput:
    """Output from a fishery simulation run.

    Attributes
    ----------
    params : FisheryParams
        Parameters the run used
    records : tuple of StepRecord
        One record per step executed, in order
    start_state : FisheryState
        Initial state (copy)
    end_state : FisheryState
        Final state at end of simulation (copy)
    """

    params: FisheryParams
    records: Tuple[StepRecord, ...]
    start_state: FisheryState
    end_state: FisheryState

    @property
    def steps_executed(self) -> int:
        return len(self.records)

    @property
    def final_stock(self) -> float:
        return self.end_state.current_stock

    @property
    def total_catch(self) -> float:
        return self.end_state.cumulative_catch

    @property
    def collapsed(self) -> bool:
        return self.end_state.collapsed

    @property
    def status(self) -> SimulationStatus:
        return self.end_state.status

    @property
    def collapse_step(self) -> int:
        """Step index at which the stock collapsed (-1 if no collapse)."""
        if self.records and self.records[-1].collapsed:
            return self.records[-1].step_index
        return -1

    @property
    def summary(self) -> RunSummary:
        return RunSummary(
            final_stock=self.final_stock,
            total_catch=self.total_catch,
            steps_executed=self.steps_executed,
            collapsed=self.collapsed,
        )

    @property
    def stock(self) -> np.ndarray:
        """Stock trajectory (n_steps + 1), starting with the initial stock."""
        values = [self.start_state.current_stock]
        values.extend(rec.stock_after for rec in self.records)
        return np.array(values, dtype=float)

    @property
    def catch(self) -> np.ndarray:
        """Catch per step (n_steps)."""
        return np.array([rec.catch for rec in self.records], dtype=float)

    @property
    def recruitment(self) -> np.ndarray:
        """Recruitment per step (n_steps)."""
        return np.array([rec.recruitment for rec in self.records], dtype=float)

    @property
    def cumulative_catch(self) -> np.ndarray:
        """Running total of catch after each step (n_steps)."""
        return np.cumsum(self.catch)

    def as_tuples(self) -> List[Tuple[int, float, float, float, float, bool]]:
        """Step records as fixed-arity tuples."""
        return [rec.as_tuple() for rec in self.records]


def fishery_state(params: FisheryParams) -> FisheryState:
    """Create the initial state for a run.

    Parameters
    ----------
    params : FisheryParams
        Simulation parameters

    Returns
    -------
    FisheryState
        State at step 0 with the initial stock and no catch
    """
    return FisheryState(current_stock=params.initial_stock)


def fishery_step(
    state: FisheryState,
    params: FisheryParams,
    rng: np.random.Generator,
) -> StepRecord:
    """Advance the state by one time step.

    The order of operations is fixed: natural mortality and recruitment
    act on the stock entering the step, harvest acts on the stock after
    growth, and the capacity clamp is applied last.

    Parameters
    ----------
    state : FisheryState
        State to advance, mutated in place
    params : FisheryParams
        Simulation parameters
    rng : np.random.Generator
        Per-run noise generator

    Returns
    -------
    StepRecord
        Record of the step just taken

    Raises
    ------
    SimulationError
        If the state is terminal or its stock is outside the valid domain.
        The step index is attached to the error.
    """
    step_index = state.step_index

    if state.status is not SimulationStatus.RUNNING:
        raise SimulationError(
            "terminal_state",
            f"cannot step a simulation in state '{state.status.value}'",
            step_index=step_index,
        )

    stock = state.current_stock
    if not math.isfinite(stock) or stock < 0.0:
        raise SimulationError(
            "invalid_stock",
            f"stock entering step is {stock!r}",
            step_index=step_index,
        )

    try:
        natural_loss = stock * params.natural_mortality_rate
        recruitment = compute_recruitment(stock, params, rng)
        stock_after_growth = stock - natural_loss + recruitment
        catch = compute_catch(
            stock_after_growth, params.fishing_policy, params.catchability_coefficient
        )
    except SimulationError as err:
        if err.step_index is None:
            err.step_index = step_index
        raise

    stock_after = min(max(stock_after_growth - catch, COLLAPSED_STOCK), params.carrying_capacity)
    collapsed = stock_after == COLLAPSED_STOCK

    record = StepRecord(
        step_index=step_index,
        stock_before=stock,
        recruitment=recruitment,
        catch=catch,
        stock_after=stock_after,
        collapsed=collapsed,
    )

    state.current_stock = stock_after
    state.cumulative_catch += catch
    state.step_index = step_index + 1
    if collapsed:
        state.collapsed = True
        state.status = SimulationStatus.COLLAPSED

    logger.debug(
        "step %d: stock %.6g -> %.6g (recruitment %.6g, catch %.6g)",
        step_index, stock, stock_after, recruitment, catch,
    )
    return record


class Fishery:
    """A live fishery simulation that can be advanced incrementally.

    Owns one FisheryState and one noise generator. Advancing by ``n``
    steps and then ``m`` steps gives the same records as a single run of
    ``n + m`` steps.

    Parameters
    ----------
    params : FisheryParams
        Validated simulation parameters (never mutated)

    Examples
    --------
    >>> fishery = Fishery(params)
    >>> first = fishery.update(10)
    >>> second = fishery.update(10)
    >>> output = fishery.output()
    """

    def __init__(self, params: FisheryParams):
        self.params = params
        self._start_state = fishery_state(params)
        self._state = self._start_state.copy()
        self._rng = create_rng(params.random_seed)
        self._records: List[StepRecord] = []

    @property
    def state(self) -> FisheryState:
        """Copy of the current state."""
        return self._state.copy()

    @property
    def status(self) -> SimulationStatus:
        return self._state.status

    @property
    def is_terminal(self) -> bool:
        return self._state.status is not SimulationStatus.RUNNING

    @property
    def records(self) -> Tuple[StepRecord, ...]:
        return tuple(self._records)

    def update(self, n_steps: int) -> FisheryUpdate:
        """Advance the simulation by up to ``n_steps`` steps.

        Stops early when the stock collapses or the step budget
        ``max_steps`` is exhausted. A terminal simulation returns an
        empty update.

        Parameters
        ----------
        n_steps : int
            Steps to progress, 0 <= n_steps <= MAX_STEPS_PER_UPDATE

        Returns
        -------
        FisheryUpdate
            Records and aggregate statistics for the steps taken

        Raises
        ------
        ValueError
            If ``n_steps`` is not an integer in the allowed range.
        SimulationError
            If the step engine detects a broken invariant.
        """
        if not isinstance(n_steps, numbers.Integral) or isinstance(n_steps, bool):
            raise ValueError(f"n_steps must be an integer, got {n_steps!r}")
        if n_steps < 0 or n_steps > MAX_STEPS_PER_UPDATE:
            raise ValueError(
                f"Amount of steps invalid ({n_steps}), must be in [0, {MAX_STEPS_PER_UPDATE}]"
            )

        if self._state.step_index == 0 and n_steps > 0 and not self.is_terminal:
            logger.info(
                "Starting fishery run: policy=%s(%s), max_steps=%d, seed=%d",
                self.params.fishing_policy.kind,
                self.params.fishing_policy.value,
                self.params.max_steps,
                self.params.random_seed,
            )

        taken: List[StepRecord] = []
        for _ in range(n_steps):
            if self.is_terminal:
                break
            record = fishery_step(self._state, self.params, self._rng)
            taken.append(record)
            if record.collapsed:
                logger.info("Stock collapsed at step %d", record.step_index)
            elif self._state.step_index >= self.params.max_steps:
                self._state.status = SimulationStatus.FINISHED
                logger.info(
                    "Fishery run finished after %d steps (stock %.6g, total catch %.6g)",
                    self._state.step_index,
                    self._state.current_stock,
                    self._state.cumulative_catch,
                )
        self._records.extend(taken)

        return _aggregate_update(taken, self._state.status)

    def output(self) -> FisheryOutput:
        """Snapshot of everything simulated so far."""
        return FisheryOutput(
            params=self.params,
            records=tuple(self._records),
            start_state=self._start_state.copy(),
            end_state=self._state.copy(),
        )


def _aggregate_update(records: List[StepRecord], status: SimulationStatus) -> FisheryUpdate:
    """Build a FisheryUpdate with mean/std aggregates over ``records``."""
    if not records:
        return FisheryUpdate(
            records=(),
            steps=0,
            stock_mean=float("nan"),
            stock_std=float("nan"),
            catch_total=0.0,
            catch_std=float("nan"),
            status=status,
        )

    stock = np.array([rec.stock_after for rec in records])
    catch = np.array([rec.catch for rec in records])
    return FisheryUpdate(
        records=tuple(records),
        steps=len(records),
        stock_mean=float(np.mean(stock)),
        stock_std=float(np.std(stock)),
        catch_total=float(np.sum(catch)),
        catch_std=float(np.std(catch)),
        status=status,
    )


def fishery_run(params: FisheryParams) -> FisheryOutput:
    """Run a fishery simulation to completion.

    Runs up to ``params.max_steps`` steps, stopping early if the stock
    collapses. Deterministic for a fixed ``random_seed``; ``params`` is
    never mutated.

    Parameters
    ----------
    params : FisheryParams
        Validated simulation parameters

    Returns
    -------
    FisheryOutput
        Step records and final state

    Raises
    ------
    SimulationError
        If the step engine detects a broken invariant.
    """
    fishery = Fishery(params)
    while not fishery.is_terminal:
        remaining = params.max_steps - fishery.state.step_index
        fishery.update(min(remaining, MAX_STEPS_PER_UPDATE))
    return fishery.output()


run_simulation = fishery_run
