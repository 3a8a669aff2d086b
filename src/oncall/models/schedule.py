"""Schedule and assignment models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import pandas as pd

from .shift import ROLES, Role


@dataclass(frozen=True)
class ShiftAssignment:
    """One person holding one role on one shift."""
    shift: int
    role: Role
    person: str

    def __repr__(self):
        return f"{self.role.label} Shift #{self.shift} for: {self.person}"


@dataclass
class OncallSchedule:
    """Complete on-call schedule for the future region of a run."""

    assignments: List[ShiftAssignment] = field(default_factory=list)
    num_shifts: int = 0
    lookback: int = 0
    people: List[str] = field(default_factory=list)

    # Solver metrics
    status: str = "unknown"
    objective_value: float = 0.0
    solve_time_seconds: float = 0.0

    # Fairness bounds used by the model
    min_shifts: int = 0
    max_shifts: int = 0
    penalty_total: int = 0

    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def shifts(self) -> range:
        return range(self.lookback, self.lookback + self.num_shifts)

    def as_tuples(self) -> List[Tuple[int, str, str]]:
        """Ordered (shift index, role, person name) output."""
        return [(a.shift, a.role.value, a.person) for a in self.assignments]

    def get(self, shift: int, role: Role) -> str:
        """Person holding `role` on `shift`."""
        for a in self.assignments:
            if a.shift == shift and a.role == role:
                return a.person
        raise KeyError((shift, role))

    def count_shifts(self, name: str, role: Role) -> int:
        """Count future shifts of a role for a person."""
        return sum(1 for a in self.assignments if a.person == name and a.role == role)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert assignments to a DataFrame."""
        if not self.assignments:
            return pd.DataFrame(columns=["shift", "role", "name"])
        rows = [
            {"shift": a.shift, "role": a.role.value, "name": a.person}
            for a in self.assignments
        ]
        return pd.DataFrame(rows)

    def to_matrix(self) -> pd.DataFrame:
        """Shift x role grid of person names."""
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame()
        return df.pivot(index="shift", columns="role", values="name")[[r.value for r in ROLES]]

    def get_person_stats(self) -> pd.DataFrame:
        """Get per-person role counts over the scheduled shifts."""
        cols = [r.value for r in ROLES]
        df = self.to_dataframe()
        index = pd.Index(self.people, name="name")
        if df.empty:
            stats = pd.DataFrame(0, index=index, columns=cols)
        else:
            stats = (
                df.groupby("name")["role"].value_counts().unstack(fill_value=0)
                .reindex(index=index, columns=cols, fill_value=0)
            )
        stats["total"] = stats[cols].sum(axis=1)
        return stats.reset_index()

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "num_shifts": self.num_shifts,
            "lookback": self.lookback,
            "people": len(self.people),
            "status": self.status,
            "objective": round(self.objective_value, 2),
            "penalty_total": self.penalty_total,
            "min_shifts": self.min_shifts,
            "max_shifts": self.max_shifts,
            "solve_time": round(self.solve_time_seconds, 2),
        }
