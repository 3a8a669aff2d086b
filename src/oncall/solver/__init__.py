# oncall/solver - OR-Tools CP-SAT on-call model builder
from .base import SolverBackend, SolverResult, SolverStatus
from .cpsat import CpSatBackend
from .engine import build_model, schedule
from .model import ModelStats, OncallModel
from .report import extract_assignments
from .roster import available_persons
from .validation import ValidationResult, validate_schedule
from .variables import ShiftVariables

__all__ = [
    "schedule",
    "build_model",
    "OncallModel",
    "ModelStats",
    "ShiftVariables",
    "available_persons",
    "extract_assignments",
    "SolverBackend",
    "SolverResult",
    "SolverStatus",
    "CpSatBackend",
    "validate_schedule",
    "ValidationResult",
]
