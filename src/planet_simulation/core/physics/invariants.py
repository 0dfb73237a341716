from __future__ import annotations

from typing import Iterable, Protocol

import numpy as np

from ..model import Vector
from .constants import G, SOFTENING_LENGTH


class MovingMass(Protocol):
    mass: float
    position: Vector
    velocity: Vector


def total_mass(bodies: Iterable[MovingMass]) -> float:
    masses = [body.mass for body in bodies]
    return float(np.sum(masses))


def center_of_mass(bodies: Iterable[MovingMass]) -> Vector:
    bodies_list = list(bodies)
    if not bodies_list:
        raise ValueError("No bodies provided")
    masses = np.array([body.mass for body in bodies_list], dtype=float)
    positions = np.stack([body.position for body in bodies_list])
    return np.sum(positions * masses[:, None], axis=0) / np.sum(masses)


def total_momentum(bodies: Iterable[MovingMass]) -> Vector:
    bodies_list = list(bodies)
    if not bodies_list:
        return np.zeros(2, dtype=float)
    masses = np.array([body.mass for body in bodies_list], dtype=float)
    velocities = np.stack([body.velocity for body in bodies_list])
    return np.sum(velocities * masses[:, None], axis=0)


def kinetic_energy(bodies: Iterable[MovingMass]) -> float:
    return float(sum(0.5 * body.mass * float(np.dot(body.velocity, body.velocity)) for body in bodies))


def pair_potential(
    mass_a: float,
    mass_b: float,
    separation: float,
    *,
    softening_length: float = SOFTENING_LENGTH,
    gravitational_constant: float = G,
) -> float:
    """Potential whose radial derivative is ``G m_a m_b / (r**2 + s**2)``.

    Reduces to the Newtonian ``-G m_a m_b / r`` when the softening length is zero.
    """
    k = gravitational_constant * mass_a * mass_b
    if softening_length == 0:
        # Coincident bodies give -inf.
        with np.errstate(divide="ignore"):
            return float(np.float64(-k) / np.float64(separation))
    s = softening_length
    return -(k / s) * (0.5 * np.pi - float(np.arctan(separation / s)))


def potential_energy(
    bodies: Iterable[MovingMass],
    *,
    softening_length: float = SOFTENING_LENGTH,
    gravitational_constant: float = G,
) -> float:
    bodies_list = list(bodies)
    energy = 0.0
    for i in range(len(bodies_list)):
        for j in range(i + 1, len(bodies_list)):
            a, b = bodies_list[i], bodies_list[j]
            separation = float(np.linalg.norm(b.position - a.position))
            energy += pair_potential(
                a.mass,
                b.mass,
                separation,
                softening_length=softening_length,
                gravitational_constant=gravitational_constant,
            )
    return energy


def total_energy(
    bodies: Iterable[MovingMass],
    *,
    softening_length: float = SOFTENING_LENGTH,
    gravitational_constant: float = G,
) -> float:
    bodies_list = list(bodies)
    return kinetic_energy(bodies_list) + potential_energy(
        bodies_list,
        softening_length=softening_length,
        gravitational_constant=gravitational_constant,
    )


def angular_momentum(bodies: Iterable[MovingMass]) -> float:
    # z-component about the origin.
    return float(
        sum(
            body.mass * (body.position[0] * body.velocity[1] - body.position[1] * body.velocity[0])
            for body in bodies
        )
    )
