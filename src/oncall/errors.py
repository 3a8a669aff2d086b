"""Errors raised by a scheduling run."""
from typing import List, Optional


class SchedulingError(Exception):
    """Base class for all scheduling run failures."""


class ConfigurationError(SchedulingError):
    """Roster or configuration cannot produce any schedule; raised before model construction."""


class InfeasibleScheduleError(SchedulingError):
    """The solver proved the hard constraints cannot be satisfied together."""


class SolverStatusError(SchedulingError):
    """The solver stopped without a usable solution (unknown, timeout, invalid model)."""

    def __init__(self, status, message: str = ""):
        self.status = status
        super().__init__(message or f"Solver finished with status {status.value}")


class CoverageViolationError(SchedulingError):
    """A solved shift/role has zero or several people assigned."""

    def __init__(self, shift: int, role, candidates: Optional[List[str]] = None):
        self.shift = shift
        self.role = role
        self.candidates = list(candidates or [])
        super().__init__(
            f"Shift #{shift} {role.value}: expected exactly one person, got {self.candidates}"
        )


class ScheduleValidationError(SchedulingError):
    """A solved schedule breaks a hard rule when re-checked (cooldown, exclusivity, ...)."""

    def __init__(self, violations: List):
        self.violations = list(violations)
        summary = "; ".join(v.message for v in self.violations[:3])
        more = f" (+{len(self.violations) - 3} more)" if len(self.violations) > 3 else ""
        super().__init__(
            f"Schedule has {len(self.violations)} critical violation(s): {summary}{more}"
        )
