from .constants import AU, DEFAULT_DT, G, SECONDS_PER_DAY, SOFTENING_LENGTH
from .gravity import (
    PairwiseForce,
    calculate_force,
    max_pairwise_force,
    softened_distance,
)
from .invariants import (
    angular_momentum,
    center_of_mass,
    kinetic_energy,
    pair_potential,
    potential_energy,
    total_energy,
    total_mass,
    total_momentum,
)

__all__ = [
    "AU",
    "DEFAULT_DT",
    "G",
    "SECONDS_PER_DAY",
    "SOFTENING_LENGTH",
    "PairwiseForce",
    "angular_momentum",
    "calculate_force",
    "center_of_mass",
    "kinetic_energy",
    "max_pairwise_force",
    "pair_potential",
    "potential_energy",
    "softened_distance",
    "total_energy",
    "total_mass",
    "total_momentum",
]
