"""
History Lookup
==============
Sources of already-resolved on-call assignments. The scheduler only asks
whether a person held a role on a past shift index; how that is stored is
up to the implementation.
"""
from typing import Dict, Iterable, Protocol, Tuple

import pandas as pd

from .person import Person
from .shift import Role


class HistoryLookup(Protocol):
    """Protocol for objects that know past on-call assignments."""

    def was_on_call(self, shift_index: int, person: Person, role: Role) -> bool:
        """True if `person` held `role` on the elapsed shift `shift_index`."""
        ...


class NoHistory:
    """History where nobody was ever on call."""

    def was_on_call(self, shift_index: int, person: Person, role: Role) -> bool:
        return False


class AssignmentHistory:
    """History backed by explicit (shift, role) -> person name records."""

    def __init__(self, records: Dict[Tuple[int, Role], str] = None):
        self.records: Dict[Tuple[int, Role], str] = dict(records or {})

    def was_on_call(self, shift_index: int, person: Person, role: Role) -> bool:
        return self.records.get((shift_index, role)) == person.name

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def from_records(cls, records: Iterable[Tuple[int, str, str]]) -> "AssignmentHistory":
        """Build from (shift, role, name) tuples, e.g. a previous schedule's output."""
        history = cls()
        for shift, role, name in records:
            key = (int(shift), Role.from_string(role) if not isinstance(role, Role) else role)
            name = str(name).strip()
            if key in history.records and history.records[key] != name:
                raise ValueError(
                    f"Conflicting history for shift {key[0]} {key[1].value}: "
                    f"{history.records[key]!r} and {name!r}"
                )
            history.records[key] = name
        return history

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "AssignmentHistory":
        """Build from a DataFrame with `shift`, `role` and `name` columns."""
        missing = {"shift", "role", "name"} - set(df.columns)
        if missing:
            raise ValueError(f"History must have columns: {sorted(missing)}")
        return cls.from_records(
            (row["shift"], row["role"], row["name"]) for _, row in df.iterrows()
        )
