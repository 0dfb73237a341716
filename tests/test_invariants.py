import numpy as np
import pytest

from planet_simulation.core.model import Body, BodyRegistry
from planet_simulation.core.physics import (
    G,
    SOFTENING_LENGTH,
    angular_momentum,
    center_of_mass,
    pair_potential,
    total_energy,
    total_mass,
    total_momentum,
)
from planet_simulation.core.sim import Simulation


def _two_body() -> Simulation:
    bodies = [
        Body(body_id="Sun", mass=1.989e30, is_anchor=True),
        Body(
            body_id="Earth",
            mass=5.9742e24,
            position=np.array([-1.496e11, 0.0]),
            velocity=np.array([0.0, 29783.0]),
        ),
    ]
    return Simulation(registry=BodyRegistry(bodies), dt=86400.0)


def test_energy_and_angular_momentum_drift_is_bounded() -> None:
    sim = _two_body()
    energy0 = total_energy(sim.bodies)
    angular0 = angular_momentum(sim.bodies)

    worst_energy = 0.0
    for _ in range(2 * 365):
        sim.step()
        worst_energy = max(worst_energy, abs((total_energy(sim.bodies) - energy0) / energy0))
        assert angular_momentum(sim.bodies) == pytest.approx(angular0, rel=1e-9)

    assert sim.last_faults == []
    assert worst_energy < 5e-3


def test_momentum_is_conserved() -> None:
    sim = _two_body()
    momentum0 = total_momentum(sim.bodies)

    sim.run(100)

    np.testing.assert_allclose(total_momentum(sim.bodies), momentum0, atol=1e-6 * 5.9742e24 * 29783.0)


def test_pair_potential_matches_softened_force() -> None:
    m1, m2, r, h = 1.989e30, 5.9742e24, 1.0e11, 1.0e5
    slope = (pair_potential(m1, m2, r + h) - pair_potential(m1, m2, r - h)) / (2 * h)

    assert slope == pytest.approx(G * m1 * m2 / (r**2 + SOFTENING_LENGTH**2), rel=1e-6)


def test_pair_potential_without_softening_is_newtonian() -> None:
    assert pair_potential(2.0, 3.0, 4.0, softening_length=0.0) == pytest.approx(-G * 6.0 / 4.0)


def test_center_of_mass_and_total_mass() -> None:
    bodies = [
        Body(body_id="A", mass=2.0, position=np.array([1.0, 0.0])),
        Body(body_id="B", mass=3.0, position=np.array([-1.0, 2.0])),
        Body(body_id="C", mass=5.0, position=np.array([0.0, -1.5])),
    ]

    assert total_mass(bodies) == pytest.approx(10.0)
    np.testing.assert_allclose(center_of_mass(bodies), np.array([-0.1, -0.15]))
    with pytest.raises(ValueError):
        center_of_mass([])


def test_pair_potential_without_softening_at_zero_separation() -> None:
    assert pair_potential(2.0, 3.0, 0.0, softening_length=0.0) == float("-inf")

    bodies = [Body(body_id="A", mass=2.0), Body(body_id="B", mass=3.0)]
    assert total_energy(bodies, softening_length=0.0) == float("-inf")
