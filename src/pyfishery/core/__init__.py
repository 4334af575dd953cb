"""
Core module for PyFishery.

Contains the parameter handling, the recruitment and harvest models,
and the simulation engine.
"""

from pyfishery.core.errors import FisheryError, SimulationError, ValidationError
from pyfishery.core.params import (
    EffortBased,
    QuotaBased,
    FisheryParams,
    create_fishery_params,
    validate_and_build_configuration,
    check_fishery_params,
    read_fishery_params,
    write_fishery_params,
)
from pyfishery.core.simulation import (
    SimulationStatus,
    FisheryState,
    StepRecord,
    FisheryOutput,
    Fishery,
    fishery_state,
    fishery_step,
    fishery_run,
    run_simulation,
)

__all__ = [
    # Errors
    "FisheryError",
    "SimulationError",
    "ValidationError",
    # Parameters
    "EffortBased",
    "QuotaBased",
    "FisheryParams",
    "create_fishery_params",
    "validate_and_build_configuration",
    "check_fishery_params",
    "read_fishery_params",
    "write_fishery_params",
    # Simulation
    "SimulationStatus",
    "FisheryState",
    "StepRecord",
    "FisheryOutput",
    "Fishery",
    "fishery_state",
    "fishery_step",
    "fishery_run",
    "run_simulation",
]
