"""
PyFishery - Single-stock fishery population simulation

Logistic stock growth with stochastic recruitment, harvested under an
effort-based or quota-based fishing policy.
"""

__version__ = "0.1.0"
__author__ = "PyFishery Development Team"

# Core imports
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
    # Version
    "__version__",
    "__author__",
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
