from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..scenario_definition import ScenarioDefinition
from ..sim import Simulation


@dataclass(frozen=True)
class ScenarioUIDefaults:
    # x_min, x_max, y_min, y_max in astronomical units.
    view_range: tuple[float, float, float, float] | None = None


class Scenario(Protocol):
    scenario_id: str
    name: str

    def definition(self) -> ScenarioDefinition:
        ...

    def create_simulation(self) -> Simulation:
        ...

    def ui_defaults(self) -> ScenarioUIDefaults | None:
        ...
