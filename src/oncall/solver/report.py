"""
Result Reporter
===============
Reads a solution back into one assignment per future shift and role.
"""
from typing import Dict, List

from oncall.errors import CoverageViolationError
from oncall.models.schedule import ShiftAssignment
from oncall.models.shift import ROLES
from oncall.solver.variables import ShiftVariables
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.report")


def extract_assignments(
    solution: Dict[str, bool],
    shift_vars: ShiftVariables,
) -> List[ShiftAssignment]:
    """
    Find the person holding each role on each future shift.

    Args:
        solution: Free variable name -> truth value
        shift_vars: Variable map the solution refers to

    Returns:
        Assignments ordered by shift index, Primary before Secondary

    Raises:
        CoverageViolationError: zero or several people hold a shift/role
    """
    assignments = []
    for i in shift_vars.future_range:
        for role in ROLES:
            on_call = [
                name for name in shift_vars.names
                if solution.get(shift_vars.get(i, name, role).Name(), False)
            ]
            if len(on_call) != 1:
                logger.error(
                    f"Coverage defect: {role.label} Shift #{i} has {len(on_call)} people: {on_call}"
                )
                raise CoverageViolationError(i, role, on_call)
            assignments.append(ShiftAssignment(shift=i, role=role, person=on_call[0]))

    for a in assignments:
        logger.info(repr(a))
    return assignments
