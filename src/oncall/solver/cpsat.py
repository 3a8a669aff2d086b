"""OR-Tools CP-SAT solver backend."""
import time

from ortools.sat.python import cp_model

from oncall.solver.base import SolverBackend, SolverResult, SolverStatus
from oncall.solver.model import OncallModel
from oncall.utils.logging_setup import SolverLogger, get_logger

logger = get_logger("oncall.solver.cpsat")
slog = SolverLogger("oncall.solver.cpsat")


class CpSatBackend(SolverBackend):
    """Solve with a local ``cp_model.CpSolver``."""

    def __init__(
        self,
        time_limit_seconds: float = 30.0,
        num_workers: int = 0,
        random_seed: int = None,
        log_search_progress: bool = False,
    ):
        self.time_limit_seconds = time_limit_seconds
        self.num_workers = num_workers
        self.random_seed = random_seed
        self.log_search_progress = log_search_progress

    @classmethod
    def from_config(cls, config) -> "CpSatBackend":
        return cls(
            time_limit_seconds=config.time_limit_seconds,
            num_workers=config.num_workers,
            random_seed=config.seed,
            log_search_progress=config.log_search_progress,
        )

    def _status(self, status: int, wall_time: float) -> SolverStatus:
        if status == cp_model.UNKNOWN and wall_time >= self.time_limit_seconds:
            return SolverStatus.TIMEOUT
        return {
            cp_model.OPTIMAL: SolverStatus.OPTIMAL,
            cp_model.FEASIBLE: SolverStatus.FEASIBLE,
            cp_model.INFEASIBLE: SolverStatus.INFEASIBLE,
            cp_model.MODEL_INVALID: SolverStatus.ERROR,
            cp_model.UNKNOWN: SolverStatus.UNKNOWN,
        }.get(status, SolverStatus.UNKNOWN)

    def solve(self, model: OncallModel) -> SolverResult:
        slog.phase("Solving")
        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.time_limit_seconds
        solver.parameters.log_search_progress = self.log_search_progress
        if self.num_workers > 0:
            solver.parameters.num_workers = self.num_workers
        if self.random_seed is not None:
            solver.parameters.random_seed = self.random_seed

        start_time = time.time()
        status = solver.Solve(model.model)
        solve_time = time.time() - start_time
        result_status = self._status(status, solver.WallTime())

        logger.info(f"Solve complete: status={result_status.value}, time={solve_time:.2f}s")
        logger.debug(solver.ResponseStats())

        result = SolverResult(
            status=result_status,
            solve_time_seconds=solve_time,
            message=solver.StatusName(status),
            stats={
                "conflicts": solver.NumConflicts(),
                "branches": solver.NumBranches(),
                "wall_time": solver.WallTime(),
            },
        )
        if not result.is_success:
            return result

        result.objective_value = solver.ObjectiveValue()
        result.solution = {
            name: bool(solver.BooleanValue(var)) for name, var in model.free_variables().items()
        }
        result.penalties = {
            name: int(solver.Value(var)) for name, var in model.penalty_variables().items()
        }
        return result
