from .scenario_io import (
    SCENARIO_SCHEMA_VERSION,
    color_from_value,
    color_to_hex,
    deserialize_scenario_definition,
    load_scenario_definition,
    save_scenario_definition,
    scenario_definition_from_dict,
    scenario_definition_to_dict,
    serialize_scenario_definition,
)

__all__ = [
    "SCENARIO_SCHEMA_VERSION",
    "color_from_value",
    "color_to_hex",
    "deserialize_scenario_definition",
    "load_scenario_definition",
    "save_scenario_definition",
    "scenario_definition_from_dict",
    "scenario_definition_to_dict",
    "serialize_scenario_definition",
]
