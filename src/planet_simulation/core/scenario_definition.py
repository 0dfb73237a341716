from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

import numpy as np

from .model import Body, BodyRegistry
from .physics import DEFAULT_DT, G, SOFTENING_LENGTH
from .sim import FaultPolicy, Integrator, Simulation, SymplecticEulerIntegrator

SCENARIO_SCHEMA_VERSION = 1

INTEGRATOR_IDS: dict[str, type[SymplecticEulerIntegrator]] = {
    "symplectic_euler": SymplecticEulerIntegrator,
}


@dataclass
class SimulationDefinition:
    dt: float = DEFAULT_DT
    integrator: str = "symplectic_euler"
    softening_length: float = SOFTENING_LENGTH
    gravitational_constant: float = G
    fault_policy: str = FaultPolicy.ROLLBACK.value


@dataclass
class BodyDefinition:
    body_id: str
    mass: float
    position: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=float))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=float))
    radius: float = 1.0
    color: int = 0xFFFFFF
    is_anchor: bool = False


@dataclass
class ScenarioDefinition:
    name: str
    simulation: SimulationDefinition = field(default_factory=SimulationDefinition)
    bodies: List[BodyDefinition] = field(default_factory=list)
    schema_version: int = SCENARIO_SCHEMA_VERSION


def integrator_from_definition(defn: SimulationDefinition) -> Integrator:
    integrator_cls = INTEGRATOR_IDS.get(defn.integrator)
    if integrator_cls is None:
        raise ValueError(f"Unknown integrator id: {defn.integrator}")
    try:
        policy = FaultPolicy(defn.fault_policy)
    except ValueError:
        raise ValueError(f"Unknown fault policy: {defn.fault_policy}") from None
    return integrator_cls(
        softening_length=float(defn.softening_length),
        gravitational_constant=float(defn.gravitational_constant),
        fault_policy=policy,
    )


def body_from_definition(defn: BodyDefinition) -> Body:
    return Body(
        body_id=defn.body_id,
        mass=float(defn.mass),
        position=np.array(defn.position, dtype=float),
        velocity=np.array(defn.velocity, dtype=float),
        radius=float(defn.radius),
        color=int(defn.color),
        is_anchor=bool(defn.is_anchor),
    )


def bodies_from_definition(bodies: Iterable[BodyDefinition]) -> list[Body]:
    return [body_from_definition(body) for body in bodies]


def simulation_from_definition(defn: ScenarioDefinition) -> Simulation:
    dt = float(defn.simulation.dt)
    if not np.isfinite(dt) or dt <= 0:
        raise ValueError("dt must be positive")
    return Simulation(
        registry=BodyRegistry(bodies_from_definition(defn.bodies)),
        dt=dt,
        integrator=integrator_from_definition(defn.simulation),
    )
