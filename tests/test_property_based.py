"""
Property-Based Tests with Hypothesis
====================================
Invariants that hold for arbitrary valid rosters and horizons.
"""
import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from oncall.models.constraints import SchedulerConfig
from oncall.models.person import Person, Rotation
from oncall.models.shift import ROLES
from oncall.solver.constraints.objectives import fairness_bounds
from oncall.solver.engine import build_model, schedule
from oncall.solver.roster import available_persons


def _rotation(size, ooo=0):
    persons = [Person(f"p{i}", "abc" if i % 2 else "def") for i in range(size)]
    persons += [Person("ooo", "def")] * min(ooo, 1)
    return Rotation(persons=persons)


class TestFairnessBoundProperties:
    """min/max share arithmetic."""

    @given(
        total=st.integers(min_value=0, max_value=1000),
        count=st.integers(min_value=1, max_value=100),
    )
    def test_bounds_bracket_total(self, total, count):
        min_shifts, max_shifts = fairness_bounds(total, count)
        assert min_shifts * count <= total <= max_shifts * count
        assert 0 <= max_shifts - min_shifts <= 1


class TestRosterProperties:
    """Shuffling never changes membership."""

    @given(size=st.integers(min_value=1, max_value=30), seed=st.integers(min_value=0))
    def test_membership_preserved(self, size, seed):
        rotation = _rotation(size, ooo=1)
        available = available_persons(rotation, SchedulerConfig(seed=seed))
        assert sorted(p.name for p in available) == sorted(n for n in rotation.names if n != "ooo")


class TestModelProperties:
    """Model construction is structurally deterministic."""

    @settings(max_examples=25, deadline=None)
    @given(
        size=st.integers(min_value=1, max_value=8),
        num_shifts=st.integers(min_value=1, max_value=8),
        lookback=st.integers(min_value=0, max_value=3),
        seed=st.integers(min_value=0, max_value=10_000),
    )
    def test_build_is_idempotent(self, size, num_shifts, lookback, seed):
        rotation = _rotation(size)
        config = SchedulerConfig(num_shifts=num_shifts, lookback=lookback, seed=seed)
        first = build_model(rotation, config).stats()
        second = build_model(rotation, SchedulerConfig(
            num_shifts=num_shifts, lookback=lookback, seed=seed + 1
        )).stats()
        assert first == second


class TestScheduleProperties:
    """Solved schedules satisfy the hard rules."""

    @settings(
        max_examples=10,
        deadline=None,
        suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    )
    @given(
        size=st.integers(min_value=3, max_value=6),
        num_shifts=st.integers(min_value=1, max_value=6),
        seed=st.integers(min_value=0, max_value=1000),
    )
    def test_hard_rules_hold(self, size, num_shifts, seed):
        config = SchedulerConfig(
            num_shifts=num_shifts, lookback=0, seed=seed, time_limit_seconds=10
        )
        result = schedule(_rotation(size), config)
        for i in result.shifts:
            assert result.get(i, ROLES[0]) != result.get(i, ROLES[1])
            if i > result.shifts.start:
                for role in ROLES:
                    assert result.get(i, role) != result.get(i - 1, role)
        if result.penalty_total == 0:
            for name in result.people:
                for role in ROLES:
                    assert result.min_shifts <= result.count_shifts(name, role) <= result.max_shifts
