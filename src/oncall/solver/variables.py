"""
Shift Variable Factory
======================
One assignment variable per (shift index, person, role). History shifts get
variables fixed to what the history lookup reports; future shifts get free
booleans for the solver.
"""
from typing import Dict, List, Tuple

from ortools.sat.python import cp_model

from oncall.models.history import HistoryLookup
from oncall.models.person import Person
from oncall.models.shift import ROLES, Role
from oncall.utils.logging_setup import SolverLogger

slog = SolverLogger("oncall.solver.variables")

VarKey = Tuple[int, str, Role]


def variable_name(shift: int, name: str, role: Role, past: bool = False) -> str:
    """Diagnostic identifier of an assignment variable."""
    prefix = "past_" if past else ""
    return f"{prefix}{role.value}_shift_{shift}_{name}"


class ShiftVariables:
    """Assignment variables of a run keyed by (shift index, person name, role)."""

    def __init__(self, persons: List[Person], lookback: int, num_shifts: int):
        self.persons = list(persons)
        self.names = [p.name for p in self.persons]
        self.lookback = lookback
        self.num_shifts = num_shifts
        self.vars: Dict[VarKey, cp_model.IntVar] = {}
        self.fixed: Dict[VarKey, bool] = {}

    @property
    def history_range(self) -> range:
        return range(0, self.lookback)

    @property
    def future_range(self) -> range:
        return range(self.lookback, self.lookback + self.num_shifts)

    @property
    def all_shifts(self) -> range:
        return range(0, self.lookback + self.num_shifts)

    def is_history(self, shift: int) -> bool:
        return shift < self.lookback

    def get(self, shift: int, name: str, role: Role) -> cp_model.IntVar:
        return self.vars[(shift, name, role)]

    def for_shift(self, shift: int, role: Role) -> List[cp_model.IntVar]:
        """Variables of every available person for one shift/role, in roster order."""
        return [self.vars[(shift, n, role)] for n in self.names]

    def for_person(self, name: str, role: Role) -> List[cp_model.IntVar]:
        """Variables of one person/role over history and future."""
        return [self.vars[(i, name, role)] for i in self.all_shifts]

    def free(self) -> Dict[VarKey, cp_model.IntVar]:
        """Future (solver-decided) variables."""
        return {k: v for k, v in self.vars.items() if k not in self.fixed}

    def __len__(self) -> int:
        return len(self.vars)

    @classmethod
    def create(
        cls,
        model: cp_model.CpModel,
        persons: List[Person],
        lookback: int,
        num_shifts: int,
        history: HistoryLookup,
    ) -> "ShiftVariables":
        """
        Create all assignment variables of a run.

        The history lookup is only consulted for indices below `lookback`.
        """
        shift_vars = cls(persons, lookback, num_shifts)

        # Look back to previous and already scheduled shifts and add the truths.
        slog.step(f"Fixing {lookback} historical shift(s) from history")
        for i in shift_vars.history_range:
            for p in shift_vars.persons:
                for role in ROLES:
                    value = bool(history.was_on_call(i, p, role))
                    key = (i, p.name, role)
                    shift_vars.vars[key] = model.NewIntVar(
                        int(value), int(value), variable_name(i, p.name, role, past=True)
                    )
                    shift_vars.fixed[key] = value
                    if value:
                        slog.detail(f"history #{i}", f"{role.label}={p.name}")

        # Create the shifts we need to schedule.
        slog.step(f"Creating free variables for {num_shifts} shift(s)")
        for i in shift_vars.future_range:
            for p in shift_vars.persons:
                for role in ROLES:
                    shift_vars.vars[(i, p.name, role)] = model.NewBoolVar(
                        variable_name(i, p.name, role)
                    )
                    slog.trace(variable_name(i, p.name, role))

        slog.detail("variables", f"{len(shift_vars)} ({len(shift_vars.fixed)} fixed)")
        return shift_vars
