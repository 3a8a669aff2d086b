"""Person and rotation models for the on-call roster."""
from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass(frozen=True)
class Person:
    """An engineer taking part in the on-call rotation."""

    name: str
    location: str = ""

    def __post_init__(self):
        """Normalize fields."""
        object.__setattr__(self, "name", str(self.name).strip())
        object.__setattr__(self, "location", str(self.location).strip())

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "location": self.location}

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            name=d.get("name", ""),
            location=d.get("location", ""),
        )


@dataclass
class Rotation:
    """The full candidate pool of one on-call rotation, in roster order."""

    persons: List[Person] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.persons)

    def __iter__(self) -> Iterator[Person]:
        return iter(self.persons)

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.persons]

    def duplicate_names(self) -> List[str]:
        """Names that appear more than once, in first-seen order."""
        seen = set()
        dupes = []
        for name in self.names:
            if name in seen and name not in dupes:
                dupes.append(name)
            seen.add(name)
        return dupes

    def get(self, name: str) -> Person:
        for p in self.persons:
            if p.name == name:
                return p
        raise KeyError(name)
