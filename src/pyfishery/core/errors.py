"""
Exception types raised by PyFishery.

Validation failures are reported before any simulation state exists.
Simulation errors signal a broken engine invariant and abort a run.
A stock collapse is a normal terminal outcome and is never an exception.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple


class FisheryError(Exception):
    """Base class for all PyFishery errors."""


class ValidationError(FisheryError, ValueError):
    """One or more configuration fields are outside their domain.

    Parameters
    ----------
    violations : sequence of (str, str)
        Every violated constraint as ``(field, reason)`` pairs.

    Examples
    --------
    >>> err = ValidationError([("carrying_capacity", "must be > 0, got -5")])
    >>> err.fields
    ['carrying_capacity']
    """

    def __init__(self, violations: Sequence[Tuple[str, str]]):
        self.violations: List[Tuple[str, str]] = list(violations)
        lines = [f"  {name}: {reason}" for name, reason in self.violations]
        super().__init__(
            f"Invalid fishery parameters ({len(self.violations)} violations):\n"
            + "\n".join(lines)
        )

    def __reduce__(self):
        return (type(self), (self.violations,))

    @property
    def fields(self) -> List[str]:
        """Names of the violated fields, in reporting order."""
        return [name for name, _ in self.violations]


class SimulationError(FisheryError, RuntimeError):
    """An internal-consistency invariant of the step engine was violated.

    Parameters
    ----------
    kind : str
        Short machine-readable error class, e.g. ``"invalid_stock"``.
    message : str
        Human-readable description.
    step_index : int, optional
        Step at which the failure occurred. The step engine fills this in
        when a model raises without knowing the step.
    """

    def __init__(self, kind: str, message: str, step_index: Optional[int] = None):
        self.kind = kind
        self.message = message
        self.step_index = step_index
        super().__init__(str(self))

    def __reduce__(self):
        return (type(self), (self.kind, self.message, self.step_index))

    def __str__(self) -> str:
        where = f" at step {self.step_index}" if self.step_index is not None else ""
        return f"[{self.kind}]{where}: {self.message}"
