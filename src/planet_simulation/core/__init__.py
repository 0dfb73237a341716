from .model import Body, BodyRegistry, BodyState, Vector
from .physics import (
    AU,
    DEFAULT_DT,
    G,
    SECONDS_PER_DAY,
    SOFTENING_LENGTH,
    PairwiseForce,
    angular_momentum,
    calculate_force,
    center_of_mass,
    total_energy,
    total_mass,
    total_momentum,
)
from .sim import FaultKind, FaultPolicy, Integrator, Simulation, StepFault, SymplecticEulerIntegrator

__all__ = [
    "Body",
    "BodyRegistry",
    "BodyState",
    "Vector",
    "AU",
    "DEFAULT_DT",
    "G",
    "SECONDS_PER_DAY",
    "SOFTENING_LENGTH",
    "PairwiseForce",
    "angular_momentum",
    "calculate_force",
    "center_of_mass",
    "total_energy",
    "total_mass",
    "total_momentum",
    "FaultKind",
    "FaultPolicy",
    "Integrator",
    "Simulation",
    "StepFault",
    "SymplecticEulerIntegrator",
]
