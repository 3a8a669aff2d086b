"""Pytest configuration and fixtures."""
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
import structlog

from oncall.models.constraints import SchedulerConfig
from oncall.models.history import AssignmentHistory
from oncall.models.person import Person, Rotation
from oncall.models.shift import Role


@pytest.fixture
def sample_rotation():
    """Four engineers across two locations."""
    return Rotation(persons=[
        Person(name="A", location="loc1"),
        Person(name="B", location="loc1"),
        Person(name="C", location="loc2"),
        Person(name="D", location="loc2"),
    ])


@pytest.fixture
def sample_history():
    """A was primary and B secondary on shift 0."""
    return AssignmentHistory({(0, Role.PRIMARY): "A", (0, Role.SECONDARY): "B"})


@pytest.fixture
def default_config():
    """Scenario configuration: one shift of history, four to schedule."""
    return SchedulerConfig(num_shifts=4, lookback=1, seed=42, time_limit_seconds=10)


@pytest.fixture
def demo_roster_path():
    """Path to the demo roster."""
    return Path(__file__).parent.parent / "data" / "rotation_demo.csv"


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers and structlog config installed by a test."""
    yield
    logger = logging.getLogger("oncall")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    structlog.reset_defaults()
