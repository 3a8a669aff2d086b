"""
Validation
==========
Re-check a reported schedule against the rotation rules, independently of
the model that produced it.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from oncall.models.history import HistoryLookup, NoHistory
from oncall.models.person import Person
from oncall.models.schedule import OncallSchedule
from oncall.models.shift import ROLES, Role
from oncall.utils.logging_setup import get_logger, log_constraint

logger = get_logger("oncall.solver.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "coverage", "exclusivity", "cooldown", "unavailable", "fairness"
    severity: str  # "critical", "warning"
    shift: int
    message: str
    person: str = ""
    role: str = ""


@dataclass
class ValidationResult:
    """Validation metrics for a schedule."""
    coverage: int = 0
    exclusivity: int = 0
    cooldown: int = 0
    unavailable: int = 0
    fairness: int = 0

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)
        setattr(self, v.type, getattr(self, v.type) + 1)

    def as_dict(self) -> Dict[str, int]:
        return {
            "coverage": self.coverage,
            "exclusivity": self.exclusivity,
            "cooldown": self.cooldown,
            "unavailable": self.unavailable,
            "fairness": self.fairness,
        }

    @property
    def has_critical_issues(self) -> bool:
        return bool(self.get_critical_violations())

    def get_critical_violations(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "critical"]

    def get_warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "warning"]


def validate_schedule(
    schedule: OncallSchedule,
    persons: List[Person],
    history: Optional[HistoryLookup] = None,
    unavailable: Optional[Dict[str, List[int]]] = None,
) -> ValidationResult:
    """
    Validate a schedule.

    Args:
        schedule: Reported schedule of the future shifts
        persons: Available persons the schedule was built for
        history: Lookup for shifts before ``schedule.lookback``
        unavailable: Per-person shift indices they must not take

    Returns:
        ValidationResult; fairness deviations are warnings, the rest critical
    """
    history = history or NoHistory()
    unavailable = unavailable or {}
    result = ValidationResult()

    holders: Dict[tuple, List[str]] = {}
    for a in schedule.assignments:
        holders.setdefault((a.shift, a.role), []).append(a.person)

    def on_call(shift: int, person: Person, role: Role) -> bool:
        if shift < schedule.lookback:
            return bool(history.was_on_call(shift, person, role))
        return person.name in holders.get((shift, role), [])

    for i in schedule.shifts:
        for role in ROLES:
            count = len(holders.get((i, role), []))
            if count != 1:
                result.add_violation(Violation(
                    "coverage", "critical", i,
                    f"{role.label} Shift #{i} has {count} people", role=role.value,
                ))

        for p in persons:
            if on_call(i, p, Role.PRIMARY) and on_call(i, p, Role.SECONDARY):
                result.add_violation(Violation(
                    "exclusivity", "critical", i,
                    f"{p.name} is primary and secondary on shift #{i}", person=p.name,
                ))
            for role in ROLES:
                if not on_call(i, p, role):
                    continue
                if i >= 1 and on_call(i - 1, p, role):
                    result.add_violation(Violation(
                        "cooldown", "critical", i,
                        f"{p.name} is {role.value} on shifts #{i - 1} and #{i}",
                        person=p.name, role=role.value,
                    ))
                if i in unavailable.get(p.name, []):
                    result.add_violation(Violation(
                        "unavailable", "critical", i,
                        f"{p.name} is out of office on shift #{i}",
                        person=p.name, role=role.value,
                    ))

    all_shifts = range(0, schedule.lookback + schedule.num_shifts)
    for p in persons:
        for role in ROLES:
            count = sum(1 for i in all_shifts if on_call(i, p, role))
            if not schedule.min_shifts <= count <= schedule.max_shifts:
                result.add_violation(Violation(
                    "fairness", "warning", -1,
                    f"{p.name} has {count} {role.value} shifts, "
                    f"fair share is [{schedule.min_shifts}, {schedule.max_shifts}]",
                    person=p.name, role=role.value,
                ))

    for check, count in result.as_dict().items():
        log_constraint(logger, check, count == 0, f"{count} violation(s)" if count else "")
    return result
