from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from ..scenario_definition import (
    SCENARIO_SCHEMA_VERSION,
    BodyDefinition,
    ScenarioDefinition,
    SimulationDefinition,
)


def color_to_hex(color: int) -> str:
    return f"#{int(color) & 0xFFFFFF:06X}"


def color_from_value(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Unsupported color value: {value!r}")
    if isinstance(value, int):
        return value & 0xFFFFFF
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if text.lower().startswith("0x"):
            text = text[2:]
        try:
            return int(text, 16) & 0xFFFFFF
        except ValueError:
            raise ValueError(f"Unsupported color value: {value!r}") from None
    raise ValueError(f"Unsupported color value: {value!r}")


def scenario_definition_to_dict(defn: ScenarioDefinition) -> Dict[str, Any]:
    return {
        "schema_version": defn.schema_version,
        "name": defn.name,
        "simulation": {
            "dt": defn.simulation.dt,
            "integrator": defn.simulation.integrator,
            "softening_length": defn.simulation.softening_length,
            "gravitational_constant": defn.simulation.gravitational_constant,
            "fault_policy": defn.simulation.fault_policy,
        },
        "bodies": [_body_to_dict(body) for body in defn.bodies],
    }


def _body_to_dict(body: BodyDefinition) -> Dict[str, Any]:
    return {
        "body_id": body.body_id,
        "mass": body.mass,
        "position": np.asarray(body.position, dtype=float).tolist(),
        "velocity": np.asarray(body.velocity, dtype=float).tolist(),
        "radius": body.radius,
        "color": color_to_hex(body.color),
        "is_anchor": bool(body.is_anchor),
    }


def _require_mapping(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def scenario_definition_from_dict(payload: Dict[str, Any]) -> ScenarioDefinition:
    payload = _require_mapping(payload, "Scenario")
    version = int(payload.get("schema_version", 0))
    if version != SCENARIO_SCHEMA_VERSION:
        raise ValueError(f"Unsupported scenario schema version: {version}")
    defaults = SimulationDefinition()
    simulation_payload = _require_mapping(payload.get("simulation", {}), "Simulation settings")
    body_payloads = payload.get("bodies", [])
    if not isinstance(body_payloads, list):
        raise ValueError("Bodies must be a JSON array")
    simulation = SimulationDefinition(
        dt=float(simulation_payload.get("dt", defaults.dt)),
        integrator=str(simulation_payload.get("integrator", defaults.integrator)),
        softening_length=float(simulation_payload.get("softening_length", defaults.softening_length)),
        gravitational_constant=float(
            simulation_payload.get("gravitational_constant", defaults.gravitational_constant)
        ),
        fault_policy=str(simulation_payload.get("fault_policy", defaults.fault_policy)),
    )
    bodies: List[BodyDefinition] = []
    for body_payload in body_payloads:
        body_payload = _require_mapping(body_payload, "Body entry")
        if "mass" not in body_payload:
            raise ValueError(f"Body {body_payload.get('body_id', '?')} has no mass")
        bodies.append(
            BodyDefinition(
                body_id=str(body_payload.get("body_id", "")),
                mass=float(body_payload["mass"]),
                position=np.array(body_payload.get("position", [0.0, 0.0]), dtype=float),
                velocity=np.array(body_payload.get("velocity", [0.0, 0.0]), dtype=float),
                radius=float(body_payload.get("radius", 1.0)),
                color=color_from_value(body_payload.get("color", 0xFFFFFF)),
                is_anchor=bool(body_payload.get("is_anchor", False)),
            )
        )
    return ScenarioDefinition(
        name=str(payload.get("name", "Untitled Scenario")),
        simulation=simulation,
        bodies=bodies,
        schema_version=version,
    )


def serialize_scenario_definition(defn: ScenarioDefinition) -> str:
    return json.dumps(scenario_definition_to_dict(defn), indent=2)


def deserialize_scenario_definition(payload: str) -> ScenarioDefinition:
    return scenario_definition_from_dict(json.loads(payload))


def load_scenario_definition(path: Path) -> ScenarioDefinition:
    return deserialize_scenario_definition(path.read_text(encoding="utf-8"))


def save_scenario_definition(defn: ScenarioDefinition, path: Path) -> Path:
    path.write_text(serialize_scenario_definition(defn), encoding="utf-8")
    return path
