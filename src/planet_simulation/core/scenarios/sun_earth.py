from __future__ import annotations

import numpy as np

from ..physics import DEFAULT_DT, SOFTENING_LENGTH
from ..scenario_definition import (
    BodyDefinition,
    ScenarioDefinition,
    SimulationDefinition,
    simulation_from_definition,
)
from ..sim import Simulation
from .base import ScenarioUIDefaults
from .registry import scenario_registry


class SunEarthScenario:
    """Isolated anchor plus one orbiter; the reference two-body setup."""

    scenario_id = "sun_earth"
    name = "Sun and Earth"

    def definition(self) -> ScenarioDefinition:
        bodies = [
            BodyDefinition(body_id="Sun", mass=1.989e30, radius=30.0, color=0xFFFF00, is_anchor=True),
            BodyDefinition(
                body_id="Earth",
                mass=5.9742e24,
                position=np.array([-1.496e11, 0.0]),
                velocity=np.array([0.0, 29783.0]),
                radius=16.0,
                color=0x6495ED,
            ),
        ]
        return ScenarioDefinition(
            name=self.name,
            simulation=SimulationDefinition(dt=DEFAULT_DT, softening_length=SOFTENING_LENGTH),
            bodies=bodies,
        )

    def create_simulation(self) -> Simulation:
        return simulation_from_definition(self.definition())

    def ui_defaults(self) -> ScenarioUIDefaults:
        return ScenarioUIDefaults(view_range=(-1.3, 1.3, -1.3, 1.3))


scenario_registry.register(SunEarthScenario())
