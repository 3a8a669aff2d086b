"""
Objective Builders for CP-SAT Solver
====================================
Soft fairness bounds on per-person role counts and cost weighting of
expensive periods. Everything added here ends up in one minimised sum.
"""
from dataclasses import dataclass
from typing import List, Tuple

from ortools.sat.python import cp_model

from oncall.models.constraints import SchedulerConfig
from oncall.models.person import Person
from oncall.models.shift import ROLES, Role
from oncall.solver.variables import ShiftVariables
from oncall.utils.logging_setup import SolverLogger

slog = SolverLogger("oncall.solver.objectives")


# (variable or expression, weight)
ObjectiveTerms = List[Tuple[cp_model.LinearExprT, int]]


@dataclass
class SoftBound:
    """Penalty variables of one soft bound."""
    name: str
    bound: int
    surplus: cp_model.IntVar
    deficit: cp_model.IntVar


def fairness_bounds(total_shifts: int, available_count: int) -> Tuple[int, int]:
    """
    Fair share of shifts per person and role.

    Returns:
        (min_shifts, max_shifts) with ``max_shifts - min_shifts <= 1``
    """
    if available_count <= 0:
        return 0, 0
    min_shifts = total_shifts // available_count
    max_shifts = min_shifts if total_shifts % available_count == 0 else min_shifts + 1
    return min_shifts, max_shifts


def soft_at_least(
    model: cp_model.CpModel,
    expr: cp_model.LinearExprT,
    lower: int,
    objective_terms: ObjectiveTerms,
    name: str,
) -> SoftBound:
    """
    Soft ``expr >= lower``.

    Imposes ``lower <= expr + surplus - deficit`` with both penalty
    variables in ``[0, lower]`` and unit weight in the objective.
    """
    surplus = model.NewIntVar(0, lower, f"{name}_surplus")
    deficit = model.NewIntVar(0, lower, f"{name}_deficit")
    model.Add(lower <= expr + surplus - deficit)
    objective_terms.append((surplus, 1))
    objective_terms.append((deficit, 1))
    return SoftBound(name, lower, surplus, deficit)


def soft_at_most(
    model: cp_model.CpModel,
    expr: cp_model.LinearExprT,
    upper: int,
    objective_terms: ObjectiveTerms,
    name: str,
) -> SoftBound:
    """
    Soft ``expr <= upper``.

    Imposes ``expr + surplus - deficit <= upper`` with both penalty
    variables in ``[0, 2 * upper]`` and unit weight in the objective.
    """
    surplus = model.NewIntVar(0, 2 * upper, f"{name}_surplus")
    deficit = model.NewIntVar(0, 2 * upper, f"{name}_deficit")
    model.Add(expr + surplus - deficit <= upper)
    objective_terms.append((surplus, 1))
    objective_terms.append((deficit, 1))
    return SoftBound(name, upper, surplus, deficit)


def add_fairness_objective(
    model: cp_model.CpModel,
    shift_vars: ShiftVariables,
    min_shifts: int,
    max_shifts: int,
    objective_terms: ObjectiveTerms,
) -> List[SoftBound]:
    """
    Make sure everyone has an equal number of assignments per role.

    Soft, as with out-of-office people some others need to take more
    shifts than their share. Counts include the historical shifts.
    """
    slog.step(f"Soft: Fair share per role in [{min_shifts}, {max_shifts}]")
    bounds = []
    for p in shift_vars.names:
        for role in ROLES:
            count = sum(shift_vars.for_person(p, role))
            bounds.append(soft_at_least(
                model, count, min_shifts, objective_terms, f"{role.value}_min_{p}"
            ))
            bounds.append(soft_at_most(
                model, count, max_shifts, objective_terms, f"{role.value}_max_{p}"
            ))
    return bounds


def add_cost_objective(
    model: cp_model.CpModel,
    shift_vars: ShiftVariables,
    persons: List[Person],
    config: SchedulerConfig,
    objective_terms: ObjectiveTerms,
) -> None:
    """Weight every future assignment by its cost (expensive periods cost more)."""
    slog.step(f"Soft: Assignment cost ({len(config.cost_windows)} expensive window(s))")
    for i in shift_vars.future_range:
        for person in persons:
            cost = config.cost(i, person.location)
            if cost != config.default_cost:
                slog.detail(f"cost #{i} {person.name}", cost)
            for role in ROLES:
                objective_terms.append((shift_vars.get(i, person.name, role), cost))
