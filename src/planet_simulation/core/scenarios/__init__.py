from .base import Scenario, ScenarioUIDefaults
from .registry import ScenarioRegistry, scenario_registry


def load_builtin_scenarios() -> None:
    # Import side effects to register built-in scenarios.
    from . import inner_solar_system  # noqa: F401
    from . import sun_earth  # noqa: F401


__all__ = [
    "Scenario",
    "ScenarioUIDefaults",
    "ScenarioRegistry",
    "scenario_registry",
    "load_builtin_scenarios",
]
