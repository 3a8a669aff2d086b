# oncall/models - Data models for the on-call scheduler
from .constraints import CostWindow, SchedulerConfig
from .history import AssignmentHistory, HistoryLookup, NoHistory
from .person import Person, Rotation
from .schedule import OncallSchedule, ShiftAssignment
from .shift import ROLES, Role

__all__ = [
    "Person", "Rotation",
    "Role", "ROLES",
    "OncallSchedule", "ShiftAssignment",
    "HistoryLookup", "NoHistory", "AssignmentHistory",
    "SchedulerConfig", "CostWindow",
]
