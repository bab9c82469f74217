from .json_exporter import dumps_forest, export_json, forest_to_dict, thing_to_dict

__all__ = [
    "dumps_forest",
    "export_json",
    "forest_to_dict",
    "thing_to_dict",
]
