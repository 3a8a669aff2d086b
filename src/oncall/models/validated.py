"""
Pydantic Validated Models
=========================
Pydantic validation layer for configuration coming from the CLI or JSON files.

Usage:
    from oncall.models.validated import ValidatedSchedulerConfig

    config = ValidatedSchedulerConfig(num_shifts=8, lookback=2).to_dataclass()

Note: The dataclass SchedulerConfig remains the type consumed by the solver.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from oncall.models.constraints import MAX_SEED, CostWindow, SchedulerConfig


class ValidatedCostWindow(BaseModel):
    """Expensive period for one location."""
    location: str = Field(min_length=1)
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    cost: int = Field(default=10, ge=0)

    @model_validator(mode="after")
    def validate_bounds(self):
        """Window must not end before it starts."""
        if self.end < self.start:
            raise ValueError("cost window end must be >= start")
        return self


class ValidatedSchedulerConfig(BaseModel):
    """
    Pydantic-validated scheduler configuration.

    Use this for strict validation at API boundaries.
    Can be converted to/from the dataclass SchedulerConfig.
    """
    model_config = ConfigDict(validate_assignment=True)

    # Horizon
    num_shifts: int = Field(default=4, ge=1, le=520, description="Shifts to schedule")
    lookback: int = Field(default=1, ge=0, le=520, description="Historical shifts to seed")

    # Roster
    ooo_marker: str = Field(default="ooo")
    shuffle: bool = Field(default=True)
    seed: Optional[int] = Field(default=None, ge=0, le=MAX_SEED)
    unavailable: Dict[str, List[int]] = Field(default_factory=dict)

    # Cost weighting
    default_cost: int = Field(default=1, ge=0)
    cost_windows: List[ValidatedCostWindow] = Field(default_factory=list)

    # Solver behavior
    time_limit_seconds: float = Field(default=30.0, gt=0, le=3600)
    num_workers: int = Field(default=0, ge=0, le=64)
    log_search_progress: bool = Field(default=False)

    @field_validator("unavailable")
    @classmethod
    def validate_unavailable(cls, v: Dict[str, List[int]]) -> Dict[str, List[int]]:
        """Shift indices must be non-negative."""
        for name, shifts in v.items():
            if any(i < 0 for i in shifts):
                raise ValueError(f"negative shift index in unavailability of {name!r}")
        return v

    def to_dataclass(self):
        """Convert to dataclass SchedulerConfig for solver compatibility."""
        return SchedulerConfig(
            num_shifts=self.num_shifts,
            lookback=self.lookback,
            ooo_marker=self.ooo_marker,
            shuffle=self.shuffle,
            seed=self.seed,
            unavailable={k: list(v) for k, v in self.unavailable.items()},
            default_cost=self.default_cost,
            cost_windows=[CostWindow(**w.model_dump()) for w in self.cost_windows],
            time_limit_seconds=self.time_limit_seconds,
            num_workers=self.num_workers,
            log_search_progress=self.log_search_progress,
        )

    @classmethod
    def from_dataclass(cls, config) -> "ValidatedSchedulerConfig":
        """Create from dataclass SchedulerConfig."""
        return cls(**config.to_dict())
