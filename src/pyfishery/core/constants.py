"""Numerical constants and parameter bounds for fishery simulations.

This module centralizes the limits and defaults used throughout PyFishery,
so that validation, the engine and the command line agree on them.
"""

# ============================================================================
# PARAMETER BOUNDS FOR VALIDATION
# ============================================================================

# Natural mortality is a per-step fraction in [0, 1)
MIN_NATURAL_MORTALITY = 0.0
MAX_NATURAL_MORTALITY = 1.0  # Exclusive

# Catchability, effort, quota and noise are bounded below only
MIN_CATCHABILITY = 0.0
MIN_EFFORT = 0.0
MIN_QUOTA = 0.0
MIN_NOISE_STDDEV = 0.0

# ============================================================================
# SIMULATION PARAMETERS
# ============================================================================

# Upper bound on steps a single incremental update may progress
MAX_STEPS_PER_UPDATE = 100000

# Stock value at which a run is considered collapsed
COLLAPSED_STOCK = 0.0

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Relative stock change above which a burn-in is flagged as unstable
UNSTABLE_CHANGE_THRESHOLD = 0.5

# Default burn-in length for stability checks
DEFAULT_BURN_IN_STEPS = 100

# Harvest fraction q*E at or above which an effort policy empties the stock
FULL_HARVEST_FRACTION = 1.0

# ============================================================================
# PARAMETER FILE LAYOUT
# ============================================================================

PARAMETER_COLUMN = "Parameter"
VALUE_COLUMN = "Value"
POLICY_KIND_KEY = "policy_kind"
POLICY_VALUE_KEY = "policy_value"
