from __future__ import annotations

import numpy as np

from ..physics import AU, DEFAULT_DT
from ..scenario_definition import (
    BodyDefinition,
    ScenarioDefinition,
    SimulationDefinition,
    simulation_from_definition,
)
from ..sim import Simulation
from .base import ScenarioUIDefaults
from .registry import scenario_registry

SUN_MASS = 1.98892e30


class InnerSolarSystemScenario:
    scenario_id = "inner_solar_system"
    name = "Inner Solar System"

    def definition(self) -> ScenarioDefinition:
        bodies = [
            BodyDefinition(
                body_id="Sun",
                mass=SUN_MASS,
                radius=30.0,
                color=0xFFFF00,
                is_anchor=True,
            ),
            BodyDefinition(
                body_id="Earth",
                mass=5.9742e24,
                position=np.array([-1.0 * AU, 0.0]),
                velocity=np.array([0.0, 29.783 * 1000.0]),
                radius=16.0,
                color=0x6495ED,
            ),
            BodyDefinition(
                body_id="Mars",
                mass=6.39e23,
                position=np.array([-1.524 * AU, 0.0]),
                velocity=np.array([0.0, 24.077 * 1000.0]),
                radius=12.0,
                color=0xBC2732,
            ),
            BodyDefinition(
                body_id="Mercury",
                mass=3.30e23,
                position=np.array([0.387 * AU, 0.0]),
                velocity=np.array([0.0, -47.4 * 1000.0]),
                radius=8.0,
                color=0x504E51,
            ),
            BodyDefinition(
                body_id="Venus",
                mass=4.8685e24,
                position=np.array([0.723 * AU, 0.0]),
                velocity=np.array([0.0, -35.02 * 1000.0]),
                radius=14.0,
                color=0xFFFFFF,
            ),
        ]
        return ScenarioDefinition(
            name=self.name,
            simulation=SimulationDefinition(dt=DEFAULT_DT),
            bodies=bodies,
        )

    def create_simulation(self) -> Simulation:
        return simulation_from_definition(self.definition())

    def ui_defaults(self) -> ScenarioUIDefaults:
        return ScenarioUIDefaults(view_range=(-1.8, 1.8, -1.8, 1.8))


scenario_registry.register(InnerSolarSystemScenario())
