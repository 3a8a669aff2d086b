# oncall/io - Roster/history loading and schedule export
from .csv_loader import load_history, load_rotation, rotation_to_dataframe, save_rotation
from .results_export import export_csv, export_json, schedule_to_dict

__all__ = [
    "load_rotation", "save_rotation", "rotation_to_dataframe", "load_history",
    "export_json", "export_csv", "schedule_to_dict",
]
