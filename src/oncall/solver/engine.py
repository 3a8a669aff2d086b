"""
On-call Scheduling Engine
=========================
Builds the CP-SAT model of one run, hands it to a solver backend once and
turns the answer into an OncallSchedule.

Data flows one way:
    roster -> variables -> hard constraints -> objective -> backend -> report
"""
import time
import uuid
from typing import Optional

from ortools.sat.python import cp_model

from oncall.errors import (
    ConfigurationError,
    InfeasibleScheduleError,
    ScheduleValidationError,
    SolverStatusError,
)
from oncall.models.constraints import MAX_SEED, SchedulerConfig
from oncall.models.history import HistoryLookup, NoHistory
from oncall.models.person import Rotation
from oncall.models.schedule import OncallSchedule
from oncall.solver.base import SolverBackend, SolverStatus
from oncall.solver.constraints import add_hard_constraints
from oncall.solver.constraints.objectives import (
    add_cost_objective,
    add_fairness_objective,
    fairness_bounds,
)
from oncall.solver.cpsat import CpSatBackend
from oncall.solver.model import OncallModel
from oncall.solver.report import extract_assignments
from oncall.solver.roster import available_persons
from oncall.solver.validation import validate_schedule
from oncall.solver.variables import ShiftVariables
from oncall.utils.logging_setup import SolverLogger, get_logger
from oncall.utils.structured_logging import bind_context, clear_context, get_structured_logger

logger = get_logger("oncall.solver.engine")
slog = SolverLogger("oncall.solver.engine")


def _check_config(config: SchedulerConfig) -> None:
    if config.num_shifts < 0:
        raise ConfigurationError(f"num_shifts must be >= 0, got {config.num_shifts}")
    if config.lookback < 0:
        raise ConfigurationError(f"lookback must be >= 0, got {config.lookback}")
    if config.default_cost < 0 or any(w.cost < 0 for w in config.cost_windows):
        raise ConfigurationError("Assignment costs must be non-negative")
    if config.seed is not None and not 0 <= config.seed <= MAX_SEED:
        raise ConfigurationError(f"seed must be in [0, {MAX_SEED}], got {config.seed}")


def build_model(
    rotation: Rotation,
    config: Optional[SchedulerConfig] = None,
    history: Optional[HistoryLookup] = None,
) -> OncallModel:
    """
    Build the optimisation model of a scheduling run.

    Args:
        rotation: Full candidate pool
        config: Run configuration (uses defaults if None)
        history: Past assignments for the lookback shifts (nobody if None)

    Returns:
        OncallModel ready to be solved

    Raises:
        ConfigurationError: before any variable is created
    """
    config = config or SchedulerConfig()
    history = history or NoHistory()
    _check_config(config)

    slog.phase("Building On-call Model")
    persons = available_persons(rotation, config)
    logger.info(
        f"Scheduling {config.num_shifts} shift(s) after {config.lookback} historical, "
        f"{len(persons)}/{len(rotation)} people available"
    )

    model = cp_model.CpModel()

    # ========== Variables ==========
    shift_vars = ShiftVariables.create(
        model, persons, config.lookback, config.num_shifts, history
    )

    # ========== Hard Constraints ==========
    slog.phase("Adding Hard Constraints")
    add_hard_constraints(model, shift_vars, config.unavailable)

    # ========== Soft Constraints (Objective) ==========
    slog.phase("Adding Soft Constraints")
    min_shifts, max_shifts = fairness_bounds(config.total_shifts, len(persons))
    logger.info(f"min: {min_shifts} max: {max_shifts}")

    objective_terms = []
    soft_bounds = add_fairness_objective(
        model, shift_vars, min_shifts, max_shifts, objective_terms
    )
    add_cost_objective(model, shift_vars, persons, config, objective_terms)

    if objective_terms:
        model.Minimize(sum(var * weight for var, weight in objective_terms))

    oncall_model = OncallModel(
        model=model,
        shift_vars=shift_vars,
        persons=persons,
        config=config,
        min_shifts=min_shifts,
        max_shifts=max_shifts,
        soft_bounds=soft_bounds,
        objective_terms=objective_terms,
    )
    slog.detail("model", oncall_model.stats().as_dict())
    return oncall_model


def schedule(
    rotation: Rotation,
    config: Optional[SchedulerConfig] = None,
    history: Optional[HistoryLookup] = None,
    backend: Optional[SolverBackend] = None,
) -> OncallSchedule:
    """
    Run one scheduling pass: build, solve once, report.

    Args:
        rotation: Full candidate pool
        config: Run configuration (uses defaults if None)
        history: Past assignments for the lookback shifts
        backend: Solver backend (CP-SAT from config if None)

    Returns:
        OncallSchedule of the future shifts

    Raises:
        ConfigurationError: unusable roster or configuration
        InfeasibleScheduleError: hard constraints cannot all hold
        SolverStatusError: no usable solution (unknown, timeout, invalid model)
        CoverageViolationError: solution does not staff a shift/role exactly once
    """
    config = config or SchedulerConfig()
    history = history or NoHistory()
    backend = backend or CpSatBackend.from_config(config)
    events = get_structured_logger("oncall.engine")

    bind_context(run_id=uuid.uuid4().hex[:8])
    try:
        start_time = time.time()
        events.info(
            "schedule_started",
            num_shifts=config.num_shifts,
            lookback=config.lookback,
            rotation=len(rotation),
        )

        oncall_model = build_model(rotation, config, history)
        result = backend.solve(oncall_model)

        if result.status == SolverStatus.INFEASIBLE:
            logger.error("Model is infeasible: hard constraints cannot be satisfied")
            events.error("schedule_failed", status=result.status.value)
            raise InfeasibleScheduleError(
                f"No schedule satisfies the hard constraints for "
                f"{len(oncall_model.persons)} available people over {config.num_shifts} shifts"
            )
        if not result.is_success:
            logger.error(f"Solver returned no usable solution: {result.status.value}")
            events.error("schedule_failed", status=result.status.value)
            raise SolverStatusError(result.status, result.message)

        slog.phase("Extracting Solution")
        assignments = extract_assignments(result.solution, oncall_model.shift_vars)

        oncall_schedule = OncallSchedule(
            assignments=assignments,
            num_shifts=config.num_shifts,
            lookback=config.lookback,
            people=[p.name for p in oncall_model.persons],
            status=result.status.value,
            objective_value=result.objective_value or 0.0,
            solve_time_seconds=result.solve_time_seconds,
            min_shifts=oncall_model.min_shifts,
            max_shifts=oncall_model.max_shifts,
            penalty_total=sum(result.penalties.values()),
            stats={**result.stats, **oncall_model.stats().as_dict()},
        )

        validation = validate_schedule(
            oncall_schedule, oncall_model.persons, history, config.unavailable
        )
        oncall_schedule.stats["violations"] = validation.as_dict()
        if validation.has_critical_issues:
            critical = validation.get_critical_violations()
            logger.error(
                f"Solved schedule breaks {len(critical)} hard rule(s): {validation.as_dict()}"
            )
            events.error("schedule_failed", status=oncall_schedule.status, violations=len(critical))
            raise ScheduleValidationError(critical)

        events.info(
            "schedule_finished",
            status=oncall_schedule.status,
            objective=oncall_schedule.objective_value,
            penalty=oncall_schedule.penalty_total,
            seconds=round(time.time() - start_time, 3),
        )
        return oncall_schedule
    finally:
        clear_context()
