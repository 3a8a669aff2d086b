"""Tests for the scheduling engine (build, solve, report)."""
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from oncall.errors import (
    ConfigurationError,
    CoverageViolationError,
    InfeasibleScheduleError,
    ScheduleValidationError,
    SolverStatusError,
)
from oncall.models.constraints import CostWindow, SchedulerConfig
from oncall.models.history import AssignmentHistory, NoHistory
from oncall.models.person import Person, Rotation
from oncall.models.shift import ROLES, Role
from oncall.solver.base import SolverBackend, SolverResult, SolverStatus
from oncall.solver.engine import build_model, schedule
from oncall.solver.validation import validate_schedule


def _role_total(result, history, name, role):
    """Role count over history and future."""
    past = sum(
        1 for i in range(result.lookback)
        if history.was_on_call(i, Person(name), role)
    )
    return past + result.count_shifts(name, role)


class TestSolverBasics:
    """Basic end-to-end runs."""

    def test_returns_schedule(self, sample_rotation, default_config, sample_history):
        result = schedule(sample_rotation, default_config, sample_history)
        assert result.status in ("optimal", "feasible")
        assert result.num_shifts == 4
        assert len(result.assignments) == 4 * 2

    def test_assignments_ordered(self, sample_rotation, default_config, sample_history):
        result = schedule(sample_rotation, default_config, sample_history)
        keys = [(shift, role) for shift, role, _ in result.as_tuples()]
        assert keys == [(i, r.value) for i in range(1, 5) for r in ROLES]

    def test_defaults_without_history(self, sample_rotation):
        result = schedule(sample_rotation, SchedulerConfig(seed=1, time_limit_seconds=10))
        assert len(result.assignments) == 8

    def test_no_violations_recorded(self, sample_rotation, default_config, sample_history):
        result = schedule(sample_rotation, default_config, sample_history)
        assert result.stats["violations"] == {
            "coverage": 0, "exclusivity": 0, "cooldown": 0, "unavailable": 0, "fairness": 0,
        }


class TestHardProperties:
    """Coverage, exclusivity and cooldown hold on solved schedules."""

    @pytest.fixture
    def result(self, sample_rotation, sample_history):
        config = SchedulerConfig(num_shifts=10, lookback=1, seed=3, time_limit_seconds=10)
        return schedule(sample_rotation, config, sample_history)

    def test_one_person_per_role(self, result):
        for i in result.shifts:
            for role in ROLES:
                assert len([a for a in result.assignments if a.shift == i and a.role == role]) == 1

    def test_exclusivity(self, result):
        for i in result.shifts:
            assert result.get(i, Role.PRIMARY) != result.get(i, Role.SECONDARY)

    def test_cooldown(self, result, sample_history):
        for role in ROLES:
            assert result.get(1, role) != ("A" if role == Role.PRIMARY else "B")
            for i in range(2, 11):
                assert result.get(i, role) != result.get(i - 1, role)

    def test_validation_clean(self, result, sample_rotation, sample_history):
        validation = validate_schedule(result, sample_rotation.persons, sample_history)
        assert not validation.has_critical_issues


class TestScenarios:
    """Reference scenarios."""

    def test_four_people_with_history(self, sample_rotation, default_config, sample_history):
        result = schedule(sample_rotation, default_config, sample_history)

        # Cooldown across the history boundary
        assert result.get(1, Role.PRIMARY) != "A"
        assert result.get(1, Role.SECONDARY) != "B"

        assert (result.min_shifts, result.max_shifts) == (1, 2)
        assert result.penalty_total == 0
        for name in "ABCD":
            for role in ROLES:
                assert 1 <= _role_total(result, sample_history, name, role) <= 2

    def test_out_of_office_person_excluded(self, sample_rotation, default_config, sample_history):
        rotation = Rotation(persons=sample_rotation.persons + [Person("ooo", "loc2")])
        result = schedule(rotation, default_config, sample_history)
        assert "ooo" not in result.people
        assert all(a.person != "ooo" for a in result.assignments)
        # Denominator is the 4 available people
        assert (result.min_shifts, result.max_shifts) == (1, 2)

    def test_single_person_infeasible(self, default_config):
        rotation = Rotation(persons=[Person("A", "loc1"), Person("ooo", "loc1")])
        with pytest.raises(InfeasibleScheduleError):
            schedule(rotation, default_config)

    def test_two_people_feasible_without_history(self):
        rotation = Rotation(persons=[Person("A"), Person("B")])
        config = SchedulerConfig(num_shifts=4, lookback=0, seed=1, time_limit_seconds=10)
        result = schedule(rotation, config)
        # Roles must alternate
        primaries = [result.get(i, Role.PRIMARY) for i in result.shifts]
        assert primaries in (["A", "B", "A", "B"], ["B", "A", "B", "A"])

    def test_mostly_unavailable_person_pays_penalty(self, sample_rotation):
        config = SchedulerConfig(
            num_shifts=8, lookback=0, seed=5, time_limit_seconds=10,
            unavailable={"A": list(range(1, 8))},
        )
        result = schedule(sample_rotation, config, NoHistory())
        assert all(a.person != "A" for a in result.assignments if a.shift > 0)

        deviation = 0
        for name in "ABCD":
            for role in ROLES:
                count = result.count_shifts(name, role)
                deviation += max(0, result.min_shifts - count) + max(0, count - result.max_shifts)
        assert deviation > 0
        assert result.penalty_total == deviation
        # Every assignment costs 1, penalties cost 1 per unit
        assert result.objective_value == pytest.approx(deviation + 2 * config.num_shifts)

    def test_expensive_window_avoided_when_free(self):
        rotation = Rotation(persons=[
            Person("a1", "abc"), Person("a2", "abc"), Person("d1", "def"), Person("d2", "def"),
        ])
        config = SchedulerConfig(
            num_shifts=4, lookback=0, seed=2, time_limit_seconds=10,
            cost_windows=[CostWindow(location="def", start=1, end=2, cost=10)],
        )
        result = schedule(rotation, config)
        assert {result.get(1, r) for r in ROLES} == {"a1", "a2"}


class TestBuildModel:
    """Model construction without solving."""

    def test_structurally_idempotent(self, sample_rotation, sample_history):
        config = SchedulerConfig(num_shifts=6, lookback=2)
        first = build_model(sample_rotation, config, sample_history).stats()
        second = build_model(sample_rotation, config, sample_history).stats()
        assert first == second

    def test_model_sizes(self, sample_rotation, default_config, sample_history):
        model = build_model(sample_rotation, default_config, sample_history)
        stats = model.stats()
        n, people = 5, 4
        soft = people * 2 * 2
        assert stats.variables == n * people * 2 + soft * 2
        # exclusivity + cooldown + coverage + fairness
        assert stats.constraints == 4 * people + 4 * people * 2 + 4 * 2 + soft
        # penalties + cost terms
        assert stats.objective_terms == soft * 2 + 4 * people * 2

    def test_free_and_penalty_handles(self, sample_rotation, default_config):
        model = build_model(sample_rotation, default_config)
        assert len(model.free_variables()) == 4 * 4 * 2
        assert len(model.penalty_variables()) == 4 * 2 * 2 * 2
        assert "primary_shift_1_A" in model.free_variables()

    def test_negative_lookback_rejected(self, sample_rotation):
        with pytest.raises(ConfigurationError):
            build_model(sample_rotation, SchedulerConfig(lookback=-1))

    def test_empty_rotation_rejected(self):
        with pytest.raises(ConfigurationError):
            build_model(Rotation(), SchedulerConfig())


class TestBackendFailures:
    """Non-successful backend answers are terminal."""

    def _backend(self, result):
        backend = MagicMock(spec=SolverBackend)
        backend.solve.return_value = result
        return backend

    def test_unknown_status(self, sample_rotation, default_config):
        backend = self._backend(SolverResult(status=SolverStatus.UNKNOWN))
        with pytest.raises(SolverStatusError) as exc:
            schedule(sample_rotation, default_config, backend=backend)
        assert exc.value.status == SolverStatus.UNKNOWN
        backend.solve.assert_called_once()

    def test_timeout_distinct_from_infeasible(self, sample_rotation, default_config):
        backend = self._backend(SolverResult(status=SolverStatus.TIMEOUT))
        with pytest.raises(SolverStatusError):
            schedule(sample_rotation, default_config, backend=backend)

    def test_infeasible_status(self, sample_rotation, default_config):
        backend = self._backend(SolverResult(status=SolverStatus.INFEASIBLE))
        with pytest.raises(InfeasibleScheduleError):
            schedule(sample_rotation, default_config, backend=backend)

    def test_coverage_defect_surfaces(self, sample_rotation, default_config):
        model = build_model(sample_rotation, default_config)
        # Everybody primary on every shift
        solution = {name: name.startswith("primary") for name in model.free_variables()}
        backend = self._backend(SolverResult(status=SolverStatus.OPTIMAL, solution=solution))
        with pytest.raises(CoverageViolationError) as exc:
            schedule(sample_rotation, default_config, backend=backend)
        assert exc.value.shift == 1
        assert exc.value.role == Role.PRIMARY
        assert sorted(exc.value.candidates) == ["A", "B", "C", "D"]

    def test_hard_rule_breach_surfaces(self, sample_rotation, default_config):
        model = build_model(sample_rotation, default_config)
        # A primary and B secondary on every shift: covered, but back to back
        solution = {
            name: (name.startswith("primary_") and name.endswith("_A"))
            or (name.startswith("secondary_") and name.endswith("_B"))
            for name in model.free_variables()
        }
        backend = self._backend(SolverResult(status=SolverStatus.OPTIMAL, solution=solution))
        with capture_logs() as logs, pytest.raises(ScheduleValidationError) as exc:
            schedule(sample_rotation, default_config, backend=backend)
        assert len(exc.value.violations) == 3 * 2
        assert {v.type for v in exc.value.violations} == {"cooldown"}
        assert logs[-1]["event"] == "schedule_failed"
        assert logs[-1]["violations"] == 6

    def test_seed_out_of_range_before_backend(self, sample_rotation):
        backend = self._backend(SolverResult(status=SolverStatus.OPTIMAL))
        with pytest.raises(ConfigurationError, match="seed"):
            schedule(sample_rotation, SchedulerConfig(seed=2**31), backend=backend)
        backend.solve.assert_not_called()

    def test_config_error_before_backend(self, default_config):
        backend = self._backend(SolverResult(status=SolverStatus.OPTIMAL))
        with pytest.raises(ConfigurationError):
            schedule(Rotation(persons=[Person("ooo")]), default_config, backend=backend)
        backend.solve.assert_not_called()


class TestHistoryFromPreviousRun:
    """Feeding a run's output back as history."""

    def test_chained_runs_respect_cooldown(self, sample_rotation):
        first_cfg = SchedulerConfig(num_shifts=3, lookback=0, seed=1, time_limit_seconds=10)
        first = schedule(sample_rotation, first_cfg)
        history = AssignmentHistory.from_records(first.as_tuples())

        second_cfg = SchedulerConfig(num_shifts=3, lookback=3, seed=1, time_limit_seconds=10)
        second = schedule(sample_rotation, second_cfg, history)
        for role in ROLES:
            assert second.get(3, role) != first.get(2, role)
