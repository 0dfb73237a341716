from .bodies_panel import BodiesPanel
from .invariants_panel import InvariantsPanel
from .orbit_view import OrbitView
from .simulation_panel import SimulationPanel

__all__ = [
    "BodiesPanel",
    "InvariantsPanel",
    "OrbitView",
    "SimulationPanel",
]
