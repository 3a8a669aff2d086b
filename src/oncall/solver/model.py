"""The assembled optimisation model of one scheduling run."""
from dataclasses import dataclass, field
from typing import Dict, List

from ortools.sat.python import cp_model

from oncall.models.constraints import SchedulerConfig
from oncall.models.person import Person
from oncall.solver.constraints.objectives import ObjectiveTerms, SoftBound
from oncall.solver.variables import ShiftVariables


@dataclass
class ModelStats:
    """Structural size of a built model."""
    variables: int
    constraints: int
    objective_terms: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "variables": self.variables,
            "constraints": self.constraints,
            "objective_terms": self.objective_terms,
        }


@dataclass
class OncallModel:
    """CP-SAT model plus the handles needed to read a solution back."""
    model: cp_model.CpModel
    shift_vars: ShiftVariables
    persons: List[Person]
    config: SchedulerConfig
    min_shifts: int = 0
    max_shifts: int = 0
    soft_bounds: List[SoftBound] = field(default_factory=list)
    objective_terms: ObjectiveTerms = field(default_factory=list)

    def free_variables(self) -> Dict[str, cp_model.IntVar]:
        """Solver-decided assignment variables by name."""
        return {var.Name(): var for var in self.shift_vars.free().values()}

    def penalty_variables(self) -> Dict[str, cp_model.IntVar]:
        """Surplus/deficit variables of the soft fairness bounds by name."""
        penalties = {}
        for b in self.soft_bounds:
            penalties[b.surplus.Name()] = b.surplus
            penalties[b.deficit.Name()] = b.deficit
        return penalties

    def stats(self) -> ModelStats:
        proto = self.model.Proto()
        return ModelStats(
            variables=len(proto.variables),
            constraints=len(proto.constraints),
            objective_terms=len(self.objective_terms),
        )
