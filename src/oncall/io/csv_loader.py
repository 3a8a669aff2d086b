"""CSV loading and saving for rosters and on-call history."""
from pathlib import Path
from typing import Union

import pandas as pd

from oncall.models.history import AssignmentHistory
from oncall.models.person import Person, Rotation


def load_rotation(source: Union[str, Path, pd.DataFrame]) -> Rotation:
    """
    Load a rotation from CSV file or DataFrame.

    Expects a ``name`` column and an optional ``location`` column. Rows
    without a name are skipped; row order is kept.
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str)

    df = df.fillna("")

    if "name" not in df.columns:
        raise ValueError("CSV must have a 'name' column")

    persons = []
    for _, row in df.iterrows():
        name = str(row["name"]).strip()
        if not name:
            continue
        persons.append(Person(name=name, location=str(row.get("location", "")).strip()))

    return Rotation(persons=persons)


def save_rotation(rotation: Rotation, path: Union[str, Path]) -> None:
    """Save a rotation to CSV file."""
    rotation_to_dataframe(rotation).to_csv(path, index=False)


def rotation_to_dataframe(rotation: Rotation) -> pd.DataFrame:
    """Convert rotation to DataFrame for display."""
    if not rotation.persons:
        return pd.DataFrame(columns=["name", "location"])
    return pd.DataFrame([p.to_dict() for p in rotation])


def load_history(source: Union[str, Path, pd.DataFrame]) -> AssignmentHistory:
    """
    Load past on-call assignments from CSV file or DataFrame.

    Expects ``shift``, ``role`` and ``name`` columns, i.e. the format
    written by ``export_csv``.
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype={"name": str, "role": str})

    df = df.dropna(subset=[c for c in ("shift", "role", "name") if c in df.columns])
    return AssignmentHistory.from_dataframe(df)
