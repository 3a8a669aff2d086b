"""
Abstract Solver Backend
=======================
Defines the interface every combinatorial backend must implement so the
model builder never depends on how (or where) the model is solved.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from oncall.solver.model import OncallModel


class SolverStatus(Enum):
    """Status of solver execution."""
    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass
class SolverResult:
    """Result returned by any backend."""
    status: SolverStatus
    solve_time_seconds: float = 0.0
    objective_value: Optional[float] = None
    # Free assignment variable name -> truth value (only on success)
    solution: Dict[str, bool] = field(default_factory=dict)
    # Penalty variable name -> value (only on success)
    penalties: Dict[str, int] = field(default_factory=dict)
    message: str = ""
    stats: Dict = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """True if solver found a valid solution."""
        return self.status in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE)


class SolverBackend(ABC):
    """
    Abstract base class for solver backends.

    A backend is called exactly once per run with a fully built model and
    must not modify it.
    """

    @abstractmethod
    def solve(self, model: "OncallModel") -> SolverResult:
        """
        Solve the model, minimising its objective.

        Returns:
            SolverResult; ``solution`` covers every free variable when
            ``is_success`` is True and is empty otherwise.
        """
        pass
