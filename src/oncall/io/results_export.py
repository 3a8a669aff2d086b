"""
Results Export
==============
Writes a solved schedule to JSON (summary + assignments) or CSV.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from oncall.models.constraints import SchedulerConfig
from oncall.models.schedule import OncallSchedule
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.io.results_export")


def schedule_to_dict(
    schedule: OncallSchedule,
    config: Optional[SchedulerConfig] = None,
) -> Dict[str, Any]:
    """JSON-serialisable view of a schedule."""
    stats = schedule.get_person_stats()
    data = {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "summary": schedule.summary(),
        "assignments": [
            {"shift": shift, "role": role, "name": name}
            for shift, role, name in schedule.as_tuples()
        ],
        "person_stats": stats.to_dict(orient="records"),
    }
    if config is not None:
        data["config"] = config.to_dict()
    return data


def export_json(
    schedule: OncallSchedule,
    path: Union[str, Path],
    config: Optional[SchedulerConfig] = None,
) -> Path:
    """
    Export a schedule to JSON.

    Returns:
        Path to the exported JSON file
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(schedule_to_dict(schedule, config), f, indent=2, ensure_ascii=False, default=int)
    logger.info(f"Exported {len(schedule.assignments)} assignments to {output_path}")
    return output_path


def export_csv(schedule: OncallSchedule, path: Union[str, Path]) -> Path:
    """Export assignments as ``shift,role,name`` rows (loadable as history)."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    schedule.to_dataframe().to_csv(output_path, index=False)
    logger.info(f"Exported {len(schedule.assignments)} assignments to {output_path}")
    return output_path
