from __future__ import annotations

from typing import NamedTuple

import numpy as np

from ..model import MassLike
from .constants import G, SOFTENING_LENGTH


class PairwiseForce(NamedTuple):
    fx: float
    fy: float
    distance: float

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.fx) and np.isfinite(self.fy))


def softened_distance(dx: float, dy: float, softening_length: float = SOFTENING_LENGTH) -> float:
    # float64 arithmetic overflows to inf instead of raising like Python float powers.
    dx, dy, s = np.float64(dx), np.float64(dy), np.float64(softening_length)
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.sqrt(dx * dx + dy * dy + s * s))


def calculate_force(
    body: MassLike,
    other: MassLike,
    *,
    softening_length: float = SOFTENING_LENGTH,
    gravitational_constant: float = G,
) -> PairwiseForce:
    """Force exerted on ``body`` by ``other``, plus their softened separation.

    The magnitude is ``G * m1 * m2 / distance**2`` where ``distance`` already
    includes the softening term, so a coincident pair yields
    ``G * m1 * m2 / softening_length**2`` rather than a singularity.
    """
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        dx = np.float64(other.position[0] - body.position[0])
        dy = np.float64(other.position[1] - body.position[1])
        distance = np.float64(softened_distance(dx, dy, softening_length))

        force = gravitational_constant * body.mass * other.mass / (distance * distance)
        theta = np.arctan2(dy, dx)
        fx = float(np.cos(theta) * force)
        fy = float(np.sin(theta) * force)
    return PairwiseForce(fx, fy, float(distance))


def max_pairwise_force(
    mass_a: float,
    mass_b: float,
    *,
    softening_length: float = SOFTENING_LENGTH,
    gravitational_constant: float = G,
) -> float:
    if softening_length <= 0:
        return float("inf")
    return gravitational_constant * mass_a * mass_b / softening_length**2

