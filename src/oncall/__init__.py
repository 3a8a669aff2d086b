"""Primary/secondary on-call rotation scheduler built on OR-Tools CP-SAT."""
from oncall.errors import (
    ConfigurationError,
    CoverageViolationError,
    InfeasibleScheduleError,
    ScheduleValidationError,
    SchedulingError,
    SolverStatusError,
)
from oncall.models import (
    AssignmentHistory,
    CostWindow,
    NoHistory,
    OncallSchedule,
    Person,
    Role,
    Rotation,
    SchedulerConfig,
    ShiftAssignment,
)
from oncall.solver import CpSatBackend, build_model, schedule

__version__ = "0.1.0"

__all__ = [
    "schedule",
    "build_model",
    "CpSatBackend",
    "Person",
    "Rotation",
    "Role",
    "SchedulerConfig",
    "CostWindow",
    "NoHistory",
    "AssignmentHistory",
    "OncallSchedule",
    "ShiftAssignment",
    "SchedulingError",
    "ConfigurationError",
    "InfeasibleScheduleError",
    "SolverStatusError",
    "CoverageViolationError",
    "ScheduleValidationError",
]
