from .simulation import (
    FaultKind,
    FaultPolicy,
    Integrator,
    Simulation,
    StepFault,
    SymplecticEulerIntegrator,
)

__all__ = [
    "FaultKind",
    "FaultPolicy",
    "Integrator",
    "Simulation",
    "StepFault",
    "SymplecticEulerIntegrator",
]
