"""Scheduler configuration and cost-window definitions."""
from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional

# CP-SAT random_seed is an int32
MAX_SEED = 2**31 - 1


@dataclass
class CostWindow:
    """An expensive period (e.g. a public holiday) for one location.

    Covers absolute shift indices ``start <= i < end``.
    """
    location: str
    start: int
    end: int
    cost: int = 10

    def covers(self, shift: int, location: str) -> bool:
        return location == self.location and self.start <= shift < self.end

    def to_dict(self) -> Dict:
        return {
            "location": self.location,
            "start": self.start,
            "end": self.end,
            "cost": self.cost,
        }


@dataclass
class SchedulerConfig:
    """Configuration for one scheduling run."""

    # Horizon
    num_shifts: int = 4
    lookback: int = 1

    # Roster
    ooo_marker: str = "ooo"
    shuffle: bool = True
    seed: Optional[int] = None

    # Per-person unavailable shift indices (hard)
    unavailable: Dict[str, List[int]] = field(default_factory=dict)

    # Cost weighting
    default_cost: int = 1
    cost_windows: List[CostWindow] = field(default_factory=list)

    # Solver behavior
    time_limit_seconds: float = 30.0
    num_workers: int = 0  # 0 = CP-SAT default
    log_search_progress: bool = False

    @property
    def total_shifts(self) -> int:
        return self.num_shifts + self.lookback

    @property
    def history_range(self) -> range:
        return range(0, self.lookback)

    @property
    def future_range(self) -> range:
        return range(self.lookback, self.lookback + self.num_shifts)

    def cost(self, shift: int, location: str) -> int:
        """Objective weight of assigning a person at `location` to `shift`."""
        costs = [w.cost for w in self.cost_windows if w.covers(shift, location)]
        return max(costs) if costs else self.default_cost

    def unavailable_shifts(self, name: str) -> List[int]:
        """Future shift indices the person cannot take."""
        return sorted(i for i in self.unavailable.get(name, []) if i in self.future_range)

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "num_shifts": self.num_shifts,
            "lookback": self.lookback,
            "ooo_marker": self.ooo_marker,
            "shuffle": self.shuffle,
            "seed": self.seed,
            "unavailable": {k: list(v) for k, v in self.unavailable.items()},
            "default_cost": self.default_cost,
            "cost_windows": [w.to_dict() for w in self.cost_windows],
            "time_limit_seconds": self.time_limit_seconds,
            "num_workers": self.num_workers,
            "log_search_progress": self.log_search_progress,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "SchedulerConfig":
        """Create from dictionary."""
        cfg = cls()
        names = {f.name for f in fields(cls)}
        for key, value in d.items():
            if key in names:
                if key == "cost_windows":
                    value = [w if isinstance(w, CostWindow) else CostWindow(**w) for w in value]
                elif key == "unavailable":
                    value = {str(k): [int(i) for i in v] for k, v in value.items()}
                setattr(cfg, key, value)
        return cfg
