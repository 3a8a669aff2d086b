"""
Hard Constraint Builders for CP-SAT Solver
==========================================
Each builder takes the model and the assignment variables and adds one
family of hard constraints over the future shifts. None of these are ever
relaxed: if they cannot hold together the model is infeasible.
"""
from typing import Dict, List

from ortools.sat.python import cp_model

from oncall.models.shift import ROLES, Role
from oncall.solver.variables import ShiftVariables
from oncall.utils.logging_setup import SolverLogger

slog = SolverLogger("oncall.solver.constraints")


def add_exclusivity_constraint(model: cp_model.CpModel, shift_vars: ShiftVariables) -> None:
    """Person must not be primary and secondary at the same time."""
    slog.step("Constraint: Not primary and secondary on the same shift")
    for i in shift_vars.future_range:
        for p in shift_vars.names:
            model.Add(
                shift_vars.get(i, p, Role.PRIMARY) + shift_vars.get(i, p, Role.SECONDARY) <= 1
            )


def add_cooldown_constraint(model: cp_model.CpModel, shift_vars: ShiftVariables) -> None:
    """
    No one holds the same role back to back.

    The first future shift is checked against the last historical one.
    """
    slog.step("Constraint: No back-to-back role (incl. history boundary)")
    for i in shift_vars.future_range:
        if i < 1:
            continue
        for p in shift_vars.names:
            for role in ROLES:
                model.Add(shift_vars.get(i, p, role) + shift_vars.get(i - 1, p, role) <= 1)


def add_coverage_constraint(model: cp_model.CpModel, shift_vars: ShiftVariables) -> None:
    """Each shift must have exactly one person per role."""
    slog.step("Constraint: Exactly one primary and one secondary per shift")
    for i in shift_vars.future_range:
        for role in ROLES:
            model.Add(sum(shift_vars.for_shift(i, role)) == 1)


def add_unavailability_constraint(
    model: cp_model.CpModel,
    shift_vars: ShiftVariables,
    unavailable: Dict[str, List[int]],
) -> None:
    """Person is off for any role on shifts they are out of office."""
    blocked = {
        name: [i for i in shifts if i in shift_vars.future_range]
        for name, shifts in unavailable.items()
        if name in shift_vars.names
    }
    blocked = {name: shifts for name, shifts in blocked.items() if shifts}
    if not blocked:
        return

    slog.step(f"Constraint: Out of office ({len(blocked)} people)")
    for name, shifts in blocked.items():
        slog.detail(name, shifts)
        for i in shifts:
            for role in ROLES:
                model.Add(shift_vars.get(i, name, role) == 0)


def add_hard_constraints(
    model: cp_model.CpModel,
    shift_vars: ShiftVariables,
    unavailable: Dict[str, List[int]] = None,
) -> None:
    """Add every hard constraint family."""
    add_exclusivity_constraint(model, shift_vars)
    add_cooldown_constraint(model, shift_vars)
    add_coverage_constraint(model, shift_vars)
    add_unavailability_constraint(model, shift_vars, unavailable or {})


__all__ = [
    "add_exclusivity_constraint",
    "add_cooldown_constraint",
    "add_coverage_constraint",
    "add_unavailability_constraint",
    "add_hard_constraints",
]
