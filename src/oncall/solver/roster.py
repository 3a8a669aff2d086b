"""
Roster & Availability
=====================
Filters the rotation down to the people who can take at least one shift
and shuffles them so ties in the solver do not always favour whoever is
listed first in the roster.
"""
import random
from typing import List

from oncall.errors import ConfigurationError
from oncall.models.constraints import SchedulerConfig
from oncall.models.person import Person, Rotation
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.roster")


def is_fully_out_of_office(person: Person, config: SchedulerConfig) -> bool:
    """True if the person cannot take any shift of the horizon."""
    if person.name == config.ooo_marker:
        return True
    blocked = set(config.unavailable_shifts(person.name))
    return config.num_shifts > 0 and blocked.issuperset(config.future_range)


def available_persons(rotation: Rotation, config: SchedulerConfig) -> List[Person]:
    """
    Get the people that can handle at least one shift.

    Args:
        rotation: Full candidate pool
        config: Run configuration (horizon, out-of-office marker, seed)

    Returns:
        Available persons, shuffled with ``config.seed`` when ``config.shuffle`` is set

    Raises:
        ConfigurationError: empty rotation, duplicate names, or nobody available
    """
    if len(rotation) == 0:
        raise ConfigurationError("Rotation has no persons")

    dupes = rotation.duplicate_names()
    if dupes:
        raise ConfigurationError(f"Duplicate names in rotation: {dupes}")

    available = []
    for person in rotation:
        if is_fully_out_of_office(person, config):
            logger.info(f"Excluding {person.name!r}: out of office for the whole horizon")
            continue
        available.append(person)

    if not available and config.num_shifts > 0:
        raise ConfigurationError(
            f"No available persons for {config.num_shifts} shifts "
            f"(rotation of {len(rotation)}, all out of office)"
        )

    if config.shuffle:
        random.Random(config.seed).shuffle(available)

    logger.debug(f"Available persons: {[p.name for p in available]}")
    return available
