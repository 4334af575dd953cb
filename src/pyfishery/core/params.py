"""
Parameter data structures for PyFishery.

This module contains the FisheryParams class, the fishing policy variants,
and functions for creating, reading, writing and validating fishery
parameter sets.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Mapping, Tuple, Union

import pandas as pd

from pyfishery.core.constants import (
    FULL_HARVEST_FRACTION,
    MAX_NATURAL_MORTALITY,
    MIN_CATCHABILITY,
    MIN_EFFORT,
    MIN_NATURAL_MORTALITY,
    MIN_NOISE_STDDEV,
    MIN_QUOTA,
    PARAMETER_COLUMN,
    POLICY_KIND_KEY,
    POLICY_VALUE_KEY,
    VALUE_COLUMN,
)
from pyfishery.core.errors import ValidationError
from pyfishery.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# FISHING POLICIES
# =============================================================================


@dataclass(frozen=True)
class EffortBased:
    """Fishing at a constant effort level.

    Catch each step is ``catchability_coefficient * effort * stock``,
    capped at the available stock.

    Attributes
    ----------
    effort : float
        Fishing effort (>= 0)
    """

    effort: float
    kind: ClassVar[str] = "effort"

    @property
    def value(self) -> float:
        return self.effort


@dataclass(frozen=True)
class QuotaBased:
    """Fishing to a constant catch quota.

    Catch each step is ``quota``, capped at the available stock.

    Attributes
    ----------
    quota : float
        Maximum catch per step (>= 0)
    """

    quota: float
    kind: ClassVar[str] = "quota"

    @property
    def value(self) -> float:
        return self.quota


FishingPolicy = Union[EffortBased, QuotaBased]

POLICY_TYPES: Dict[str, type] = {
    EffortBased.kind: EffortBased,
    QuotaBased.kind: QuotaBased,
}


def _policy_violations(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    missing = [key for key in ("kind", "value") if key not in data]
    if missing:
        return [("fishing_policy", f"missing key '{key}'") for key in missing]
    kind = str(data["kind"]).strip().lower()
    if kind not in POLICY_TYPES:
        return [("fishing_policy", f"kind must be one of {sorted(POLICY_TYPES)}, got '{kind}'")]
    return []


def fishing_policy_from_dict(data: Mapping[str, Any]) -> FishingPolicy:
    """Build a fishing policy from a plain ``{"kind": ..., "value": ...}`` mapping.

    Parameters
    ----------
    data : mapping
        Must contain ``kind`` ("effort" or "quota") and ``value``.

    Returns
    -------
    EffortBased or QuotaBased

    Raises
    ------
    ValidationError
        If the kind is unknown or a key is missing.
    """
    violations = _policy_violations(data)
    if violations:
        raise ValidationError(violations)
    return POLICY_TYPES[str(data["kind"]).strip().lower()](data["value"])


# =============================================================================
# FIELD VALIDATION
# =============================================================================

# Canonical order of the parameters, as written to parameter files
SETTING_ORDER: Tuple[str, ...] = (
    "intrinsic_growth_rate",
    "carrying_capacity",
    "initial_stock",
    "fishing_policy",
    "max_steps",
    "natural_mortality_rate",
    "catchability_coefficient",
    "recruitment_noise_stddev",
    "random_seed",
)

_FLOAT_FIELDS = (
    "intrinsic_growth_rate",
    "carrying_capacity",
    "initial_stock",
    "natural_mortality_rate",
    "catchability_coefficient",
    "recruitment_noise_stddev",
)
_INT_FIELDS = ("max_steps", "random_seed")


def setting_order() -> List[str]:
    """Return the parameter names in canonical order."""
    return list(SETTING_ORDER)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_real(name: str, value: Any, violations: List[Tuple[str, str]]) -> bool:
    if not _is_real(value):
        violations.append((name, f"must be a real number, got {value!r}"))
        return False
    if not math.isfinite(value):
        violations.append((name, f"must be finite, got {value!r}"))
        return False
    return True


def _collect_violations(fields: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Check every field against its domain and return all violations."""
    violations: List[Tuple[str, str]] = []

    unknown = sorted(set(fields) - set(SETTING_ORDER))
    for name in unknown:
        violations.append((name, "unknown parameter"))

    for name in SETTING_ORDER:
        if name not in fields:
            violations.append((name, "missing"))

    r = fields.get("intrinsic_growth_rate")
    if "intrinsic_growth_rate" in fields and _check_real("intrinsic_growth_rate", r, violations):
        if r <= 0:
            violations.append(("intrinsic_growth_rate", f"must be > 0, got {r}"))

    k = fields.get("carrying_capacity")
    k_ok = "carrying_capacity" in fields and _check_real("carrying_capacity", k, violations)
    if k_ok and k <= 0:
        violations.append(("carrying_capacity", f"must be > 0, got {k}"))
        k_ok = False

    b0 = fields.get("initial_stock")
    if "initial_stock" in fields and _check_real("initial_stock", b0, violations):
        if b0 < 0:
            violations.append(("initial_stock", f"must be >= 0, got {b0}"))
        elif k_ok and b0 > k:
            violations.append(
                ("initial_stock", f"must not exceed carrying_capacity ({k}), got {b0}")
            )

    m = fields.get("natural_mortality_rate")
    if "natural_mortality_rate" in fields and _check_real("natural_mortality_rate", m, violations):
        if not (MIN_NATURAL_MORTALITY <= m < MAX_NATURAL_MORTALITY):
            violations.append(("natural_mortality_rate", f"must be in [0, 1), got {m}"))

    q = fields.get("catchability_coefficient")
    if "catchability_coefficient" in fields and _check_real("catchability_coefficient", q, violations):
        if q < MIN_CATCHABILITY:
            violations.append(("catchability_coefficient", f"must be >= 0, got {q}"))

    sigma = fields.get("recruitment_noise_stddev")
    if "recruitment_noise_stddev" in fields and _check_real("recruitment_noise_stddev", sigma, violations):
        if sigma < MIN_NOISE_STDDEV:
            violations.append(("recruitment_noise_stddev", f"must be >= 0, got {sigma}"))

    if "fishing_policy" in fields:
        policy = fields["fishing_policy"]
        if isinstance(policy, EffortBased):
            if not _is_real(policy.effort) or not math.isfinite(policy.effort):
                violations.append(("fishing_policy", f"effort must be a finite number, got {policy.effort!r}"))
            elif policy.effort < MIN_EFFORT:
                violations.append(("fishing_policy", f"effort must be >= 0, got {policy.effort}"))
        elif isinstance(policy, QuotaBased):
            if not _is_real(policy.quota) or not math.isfinite(policy.quota):
                violations.append(("fishing_policy", f"quota must be a finite number, got {policy.quota!r}"))
            elif policy.quota < MIN_QUOTA:
                violations.append(("fishing_policy", f"quota must be >= 0, got {policy.quota}"))
        else:
            violations.append(
                ("fishing_policy", f"must be EffortBased or QuotaBased, got {type(policy).__name__}")
            )

    steps = fields.get("max_steps")
    if "max_steps" in fields:
        if not _is_integer(steps):
            violations.append(("max_steps", f"must be an integer, got {steps!r}"))
        elif steps <= 0:
            violations.append(("max_steps", f"must be > 0, got {steps}"))

    seed = fields.get("random_seed")
    if "random_seed" in fields:
        if not _is_integer(seed):
            violations.append(("random_seed", f"must be an integer, got {seed!r}"))

    return violations


# =============================================================================
# PARAMETER CONTAINER
# =============================================================================


@dataclass(frozen=True)
class FisheryParams:
    """Validated, immutable parameters for a single-stock fishery simulation.

    Construction validates every field and raises ValidationError listing
    all violations, so an instance is always internally consistent.

    Attributes
    ----------
    intrinsic_growth_rate : float
        Per-step logistic growth coefficient r (> 0)
    carrying_capacity : float
        Maximum sustainable stock K (> 0)
    initial_stock : float
        Stock at step 0, in [0, K]
    fishing_policy : EffortBased or QuotaBased
        How catch is determined each step
    max_steps : int
        Step budget for a run (> 0)
    natural_mortality_rate : float
        Fraction of stock lost to natural causes each step, in [0, 1)
    catchability_coefficient : float
        Converts effort to the fraction of stock caught (>= 0)
    recruitment_noise_stddev : float
        Standard deviation of additive recruitment noise (0 = deterministic)
    random_seed : int
        Seed of the per-run noise generator (any integer)

    Examples
    --------
    >>> params = FisheryParams(
    ...     intrinsic_growth_rate=0.3,
    ...     carrying_capacity=1000.0,
    ...     initial_stock=100.0,
    ...     fishing_policy=QuotaBased(quota=10.0),
    ...     max_steps=50,
    ... )
    >>> params.replace(fishing_policy=EffortBased(effort=2.0)).fishing_policy.kind
    'effort'
    """

    intrinsic_growth_rate: float
    carrying_capacity: float
    initial_stock: float
    fishing_policy: FishingPolicy
    max_steps: int
    natural_mortality_rate: float = 0.0
    catchability_coefficient: float = 0.0
    recruitment_noise_stddev: float = 0.0
    random_seed: int = 0

    def __post_init__(self):
        violations = _collect_violations(
            {name: getattr(self, name) for name in SETTING_ORDER}
        )
        if violations:
            logger.debug(
                "Rejected fishery parameters: %s",
                ", ".join(f"{name} ({reason})" for name, reason in violations),
            )
            raise ValidationError(violations)

        # Normalise numeric types so equal configurations compare equal
        for name in _FLOAT_FIELDS:
            object.__setattr__(self, name, float(getattr(self, name)))
        for name in _INT_FIELDS:
            object.__setattr__(self, name, int(getattr(self, name)))
        policy = self.fishing_policy
        object.__setattr__(self, "fishing_policy", type(policy)(float(policy.value)))

    def replace(self, **changes: Any) -> "FisheryParams":
        """Return a new validated parameter set with some fields changed."""
        return dataclasses.replace(self, **changes)

    def __repr__(self) -> str:
        policy = self.fishing_policy
        return (
            f"FisheryParams(\n"
            f"  r={self.intrinsic_growth_rate}, K={self.carrying_capacity}, "
            f"B0={self.initial_stock}, M={self.natural_mortality_rate}\n"
            f"  policy={policy.kind}({policy.value}), q={self.catchability_coefficient}\n"
            f"  noise={self.recruitment_noise_stddev}, seed={self.random_seed}, "
            f"steps={self.max_steps}\n"
            f")"
        )


def create_fishery_params(
    intrinsic_growth_rate: float,
    carrying_capacity: float,
    initial_stock: float,
    fishing_policy: FishingPolicy,
    max_steps: int,
    natural_mortality_rate: float = 0.0,
    catchability_coefficient: float = 0.0,
    recruitment_noise_stddev: float = 0.0,
    random_seed: int = 0,
) -> FisheryParams:
    """Validate all fields and build a FisheryParams object.

    Parameters
    ----------
    intrinsic_growth_rate : float
        Logistic growth coefficient r (> 0).
    carrying_capacity : float
        Carrying capacity K (> 0).
    initial_stock : float
        Starting stock, 0 <= initial_stock <= K.
    fishing_policy : EffortBased or QuotaBased
        Fishing policy.
    max_steps : int
        Number of steps to simulate (> 0).
    natural_mortality_rate : float
        Natural mortality fraction per step, in [0, 1).
    catchability_coefficient : float
        Catchability q (>= 0). Only used by effort-based policies.
    recruitment_noise_stddev : float
        Recruitment noise standard deviation (>= 0).
    random_seed : int
        Seed for the per-run generator (any integer).

    Returns
    -------
    FisheryParams
        Validated parameters.

    Raises
    ------
    ValidationError
        Listing every field that is outside its domain.

    Examples
    --------
    >>> params = create_fishery_params(
    ...     intrinsic_growth_rate=0.1,
    ...     carrying_capacity=1000.0,
    ...     initial_stock=10.0,
    ...     fishing_policy=QuotaBased(quota=1000.0),
    ...     max_steps=3,
    ... )
    """
    return FisheryParams(
        intrinsic_growth_rate=intrinsic_growth_rate,
        carrying_capacity=carrying_capacity,
        initial_stock=initial_stock,
        fishing_policy=fishing_policy,
        max_steps=max_steps,
        natural_mortality_rate=natural_mortality_rate,
        catchability_coefficient=catchability_coefficient,
        recruitment_noise_stddev=recruitment_noise_stddev,
        random_seed=random_seed,
    )


validate_and_build_configuration = create_fishery_params


def check_fishery_params(
    params: Union[FisheryParams, Mapping[str, Any]], warn: bool = True
) -> List[Tuple[str, str]]:
    """Check a parameter set for consistency without raising.

    Hard violations (fields outside their domain) are returned. When
    ``warn`` is True, legal but degenerate settings are reported with
    ``warnings.warn``.

    Parameters
    ----------
    params : FisheryParams or mapping
        Parameters to check. A mapping may be incomplete or invalid.
    warn : bool
        Emit a UserWarning for each degenerate setting found.

    Returns
    -------
    list of (str, str)
        Violations as (field, reason) pairs; empty if valid.
    """
    if isinstance(params, FisheryParams):
        fields = {name: getattr(params, name) for name in SETTING_ORDER}
    else:
        fields = dict(params)

    violations = _collect_violations(fields)
    n_warnings = 0

    if warn and not violations:
        r = fields["intrinsic_growth_rate"]
        k = fields["carrying_capacity"]
        m = fields["natural_mortality_rate"]
        q = fields["catchability_coefficient"]
        policy = fields["fishing_policy"]

        if m >= r:
            warnings.warn(
                f"natural_mortality_rate ({m}) >= intrinsic_growth_rate ({r}): "
                "deterministic stock can only decline"
            )
            n_warnings += 1

        if isinstance(policy, QuotaBased) and policy.quota > r * k / 4.0:
            warnings.warn(
                f"Quota ({policy.quota}) exceeds maximum surplus production "
                f"r*K/4 ({r * k / 4.0}): stock will be fished down"
            )
            n_warnings += 1

        if isinstance(policy, EffortBased) and q * policy.effort >= FULL_HARVEST_FRACTION:
            warnings.warn(
                f"catchability_coefficient * effort ({q * policy.effort}) >= 1: "
                "the whole stock is caught in the first step"
            )
            n_warnings += 1

    if violations:
        logger.info("Fishery parameters need attention! (%d violations)", len(violations))
    elif n_warnings:
        logger.info("Fishery parameters are valid (%d warnings)", n_warnings)
    else:
        logger.debug("Fishery parameters are functional.")
    return violations


# =============================================================================
# PLAIN MAPPINGS AND PARAMETER FILES
# =============================================================================


def params_to_dict(params: FisheryParams) -> Dict[str, Any]:
    """Flatten parameters to plain values, with the policy as kind/value."""
    data: Dict[str, Any] = {}
    for name in SETTING_ORDER:
        if name == "fishing_policy":
            data[POLICY_KIND_KEY] = params.fishing_policy.kind
            data[POLICY_VALUE_KEY] = params.fishing_policy.value
        else:
            data[name] = getattr(params, name)
    return data


def params_from_dict(data: Mapping[str, Any]) -> FisheryParams:
    """Build parameters from a plain mapping.

    The policy may be given either as ``fishing_policy`` (a policy object
    or a ``{"kind", "value"}`` mapping) or as flat ``policy_kind`` and
    ``policy_value`` entries, as produced by :func:`params_to_dict`.

    Raises
    ------
    ValidationError
        If any field is missing, unknown or out of its domain. Every
        violation is reported, including a malformed policy.
    """
    return _params_from_fields(dict(data), [])


def _params_from_fields(
    fields: Dict[str, Any], violations: List[Tuple[str, str]]
) -> FisheryParams:
    """Validate ``fields`` on top of already found ``violations`` and build.

    A field named in ``violations`` is not reported again as missing.
    """
    policy_data = None
    if POLICY_KIND_KEY in fields or POLICY_VALUE_KEY in fields:
        policy_data = {
            key: fields.pop(flat)
            for key, flat in (("kind", POLICY_KIND_KEY), ("value", POLICY_VALUE_KEY))
            if flat in fields
        }
    elif isinstance(fields.get("fishing_policy"), Mapping):
        policy_data = fields.pop("fishing_policy")

    reported = {name for name, _ in violations}
    if policy_data is not None and "fishing_policy" not in reported:
        policy_violations = _policy_violations(policy_data)
        if policy_violations:
            violations.extend(policy_violations)
        else:
            fields["fishing_policy"] = fishing_policy_from_dict(policy_data)

    reported = {name for name, _ in violations}
    violations.extend(v for v in _collect_violations(fields) if v[0] not in reported)
    if violations:
        raise ValidationError(violations)
    return FisheryParams(**fields)


def read_fishery_params(path: Union[str, Path]) -> FisheryParams:
    """Read fishery parameters from a two-column CSV file.

    Parameters
    ----------
    path : str or Path
        CSV file with ``Parameter`` and ``Value`` columns, as written by
        :func:`write_fishery_params`.

    Returns
    -------
    FisheryParams
        Validated parameters.

    Raises
    ------
    ValidationError
        If the file lacks the expected columns, or any value is invalid.
        Unparsable values are reported together with every other violation.
    """
    table = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing_cols = [c for c in (PARAMETER_COLUMN, VALUE_COLUMN) if c not in table.columns]
    if missing_cols:
        raise ValidationError([(col, "missing column in parameter file") for col in missing_cols])

    fields: Dict[str, Any] = {}
    violations: List[Tuple[str, str]] = []
    for name, raw in zip(table[PARAMETER_COLUMN], table[VALUE_COLUMN]):
        name = name.strip()
        raw = raw.strip()
        if name == POLICY_KIND_KEY:
            fields[name] = raw
            continue
        try:
            value = float(raw)
        except ValueError:
            field = "fishing_policy" if name == POLICY_VALUE_KEY else name
            violations.append((field, f"not a number: {raw!r}"))
            continue
        # Integer fields stay float when fractional so validation reports them
        fields[name] = int(value) if name in _INT_FIELDS and value.is_integer() else value

    logger.debug("Read %d parameters from %s", len(fields), path)
    return _params_from_fields(fields, violations)


def write_fishery_params(params: FisheryParams, path: Union[str, Path]) -> None:
    """Write fishery parameters to a two-column CSV file.

    Parameters
    ----------
    params : FisheryParams
        Parameters to write.
    path : str or Path
        Output file.
    """
    data = params_to_dict(params)
    table = pd.DataFrame(
        {PARAMETER_COLUMN: list(data.keys()), VALUE_COLUMN: [str(v) for v in data.values()]}
    )
    table.to_csv(Path(path), index=False)
    logger.debug("Wrote %d parameters to %s", len(table), path)
