import logging
import warnings

import numpy as np
import pytest

from planet_simulation.core.model import Body, BodyRegistry
from planet_simulation.core.physics import G, SOFTENING_LENGTH
from planet_simulation.core.scenarios import load_builtin_scenarios, scenario_registry
from planet_simulation.core.sim import (
    FaultKind,
    FaultPolicy,
    Simulation,
    SymplecticEulerIntegrator,
)

SIM_LOGGER = "planet_simulation.core.sim.simulation"


def _sun_earth() -> list[Body]:
    return [
        Body(body_id="Sun", mass=1.989e30, is_anchor=True),
        Body(
            body_id="Earth",
            mass=5.9742e24,
            position=np.array([-1.496e11, 0.0]),
            velocity=np.array([0.0, 29783.0]),
        ),
    ]


def _inner_solar_system() -> Simulation:
    load_builtin_scenarios()
    return scenario_registry.get("inner_solar_system").create_simulation()


def test_single_step_matches_semi_implicit_euler() -> None:
    dt = 86400.0
    big_m, small_m = 1.989e30, 5.9742e24
    x0, vy0 = -1.496e11, 29783.0
    sim = Simulation(registry=BodyRegistry(_sun_earth()), dt=dt)

    faults = sim.step()

    dx = 0.0 - x0
    distance = np.sqrt(dx**2 + SOFTENING_LENGTH**2)
    force = G * small_m * big_m / distance**2
    vx = 0.0 + force / small_m * dt
    expected_position = np.array([x0 + vx * dt, 0.0 + vy0 * dt])
    expected_velocity = np.array([vx, vy0])

    earth = sim.registry.get("Earth")
    assert faults == []
    np.testing.assert_allclose(earth.velocity, expected_velocity, rtol=1e-12)
    np.testing.assert_allclose(earth.position, expected_position, rtol=1e-12)
    assert earth.trail == [(earth.position[0], earth.position[1])]
    assert earth.distance_to_anchor == pytest.approx(distance, rel=1e-15)

    sun = sim.registry.get("Sun")
    sun_vx = -force / big_m * dt
    assert sun.velocity[0] == pytest.approx(sun_vx, rel=1e-12)
    assert sun.position[0] == pytest.approx(sun_vx * dt, rel=1e-12)
    assert sun.distance_to_anchor == 0.0
    assert sim.time == dt
    assert sim.step_count == 1


def test_anchor_distance_uses_softening() -> None:
    x = 2.0e11
    registry = BodyRegistry(
        [
            Body(body_id="Anchor", mass=1.989e30, is_anchor=True),
            Body(body_id="Probe", mass=1.0e3, position=np.array([x, 0.0])),
        ]
    )

    registry.step(86400.0, SymplecticEulerIntegrator())

    assert registry.get("Probe").distance_to_anchor == pytest.approx(np.sqrt(x**2 + SOFTENING_LENGTH**2), rel=1e-15)


def test_last_anchor_wins() -> None:
    registry = BodyRegistry(
        [
            Body(body_id="Near", mass=1.0e30, position=np.array([1.0e11, 0.0]), is_anchor=True),
            Body(body_id="Probe", mass=1.0e3),
            Body(body_id="Far", mass=1.0e30, position=np.array([3.0e11, 0.0]), is_anchor=True),
        ]
    )

    registry.step(60.0, SymplecticEulerIntegrator())

    assert registry.anchor() is registry.get("Far")
    assert registry.get("Probe").distance_to_anchor == pytest.approx(
        np.sqrt(3.0e11**2 + SOFTENING_LENGTH**2), rel=1e-15
    )


def test_trail_is_append_only() -> None:
    sim = _inner_solar_system()
    sim.run(10)
    before = {body.body_id: list(body.trail) for body in sim.bodies}

    sim.run(25)

    for body in sim.bodies:
        assert len(body.trail) == len(before[body.body_id]) + 25
        assert body.trail[: len(before[body.body_id])] == before[body.body_id]
        assert body.trail[-1] == (body.position[0], body.position[1])


def test_body_order_does_not_change_results() -> None:
    forward = _inner_solar_system()
    bodies = list(_inner_solar_system().bodies)
    backward = Simulation(registry=BodyRegistry(reversed(bodies)), dt=forward.dt)

    forward.run(5)
    backward.run(5)

    for body in forward.bodies:
        other = backward.registry.get(body.body_id)
        np.testing.assert_allclose(body.position, other.position, rtol=1e-12)
        np.testing.assert_allclose(body.velocity, other.velocity, rtol=1e-12)
        assert body.distance_to_anchor == pytest.approx(other.distance_to_anchor, rel=1e-12)


def test_snapshot_is_detached_from_live_state() -> None:
    registry = BodyRegistry(_sun_earth())
    snapshot = registry.snapshot()

    registry.get("Earth").position[0] = 0.0

    assert snapshot[1].position[0] == -1.496e11
    with pytest.raises(ValueError):
        snapshot[1].position[0] = 1.0
    assert [state.body_id for state in registry.others(0, snapshot)] == ["Earth"]


def test_non_finite_velocity_is_contained(caplog: pytest.LogCaptureFixture) -> None:
    sim = _inner_solar_system()
    mars = sim.registry.get("Mars")
    mars.velocity = np.array([np.nan, 24077.0])
    position_before = mars.position.copy()
    trail_before = list(mars.trail)

    with caplog.at_level(logging.WARNING, logger=SIM_LOGGER):
        faults = sim.step()

    np.testing.assert_array_equal(mars.position, position_before)
    assert mars.trail == trail_before
    assert [(fault.body_id, fault.kind) for fault in faults] == [("Mars", FaultKind.VELOCITY)]
    assert "Non-finite velocity for Mars" in caplog.text
    for body in sim.bodies:
        if body.body_id == "Mars":
            continue
        assert np.all(np.isfinite(body.position))
        assert np.all(np.isfinite(body.velocity))
        assert len(body.trail) == 1


def test_non_finite_position_drops_pair_forces(caplog: pytest.LogCaptureFixture) -> None:
    sim = _inner_solar_system()
    venus = sim.registry.get("Venus")
    venus.position = np.array([np.nan, 0.0])

    with caplog.at_level(logging.WARNING, logger=SIM_LOGGER):
        faults = sim.step()

    force_faults = {fault.body_id for fault in faults if fault.kind == FaultKind.FORCE}
    assert force_faults == {"Sun", "Earth", "Mars", "Mercury", "Venus"}
    assert any(fault.body_id == "Venus" and fault.kind == FaultKind.POSITION for fault in faults)
    assert venus.trail == []
    assert "Non-finite force on Earth from Venus" in caplog.text
    for body in sim.bodies:
        if body.body_id != "Venus":
            assert np.all(np.isfinite(body.position))
            assert len(body.trail) == 1


def test_step_never_raises_on_faults() -> None:
    sim = _inner_solar_system()
    sim.registry.get("Earth").velocity = np.array([np.inf, -np.inf])
    sim.registry.get("Mercury").position = np.array([np.nan, np.nan])

    sim.run(20)

    assert np.all(np.isfinite(sim.registry.get("Mars").position))
    assert len(sim.registry.get("Mars").trail) == 20


def _runaway_registry() -> BodyRegistry:
    # A step this long throws the probe past the largest representable float.
    return BodyRegistry(
        [
            Body(body_id="Anchor", mass=1.989e30, is_anchor=True),
            Body(body_id="Probe", mass=1.0, position=np.array([1.5e11, 0.0]), velocity=np.array([0.0, 3.0e4])),
        ]
    )


def test_position_fault_rolls_back_velocity_by_default() -> None:
    registry = _runaway_registry()
    probe = registry.get("Probe")

    faults = registry.step(1.0e300, SymplecticEulerIntegrator())

    assert any(fault.body_id == "Probe" and fault.kind == FaultKind.POSITION for fault in faults)
    np.testing.assert_array_equal(probe.position, np.array([1.5e11, 0.0]))
    np.testing.assert_array_equal(probe.velocity, np.array([0.0, 3.0e4]))
    assert probe.trail == []


def test_position_fault_can_commit_velocity() -> None:
    registry = _runaway_registry()
    probe = registry.get("Probe")

    registry.step(1.0e300, SymplecticEulerIntegrator(fault_policy=FaultPolicy.COMMIT_VELOCITY))

    np.testing.assert_array_equal(probe.position, np.array([1.5e11, 0.0]))
    assert probe.velocity[0] < -1.0e290
    assert np.all(np.isfinite(probe.velocity))
    assert probe.trail == []


def test_velocity_fault_policy_controls_committed_velocity() -> None:
    for policy, expect_finite in ((FaultPolicy.ROLLBACK, True), (FaultPolicy.COMMIT_VELOCITY, False)):
        registry = BodyRegistry(
            [
                Body(body_id="Heavy", mass=1.0e40, position=np.array([1.0e9, 0.0]), is_anchor=True),
                Body(body_id="Probe", mass=1.0, velocity=np.array([0.0, 3.0e4])),
            ]
        )

        faults = registry.step(1.0e300, SymplecticEulerIntegrator(fault_policy=policy))

        probe = registry.get("Probe")
        assert any(fault.body_id == "Probe" and fault.kind == FaultKind.VELOCITY for fault in faults)
        np.testing.assert_array_equal(probe.position, np.zeros(2))
        assert probe.trail == []
        assert bool(np.all(np.isfinite(probe.velocity))) is expect_finite


@pytest.mark.parametrize("dt", [0.0, -1.0, float("nan"), float("inf")])
def test_invalid_dt_is_rejected(dt: float) -> None:
    sim = Simulation(registry=BodyRegistry(_sun_earth()))
    with pytest.raises(ValueError):
        sim.step(dt)


def test_negative_softening_is_rejected() -> None:
    with pytest.raises(ValueError):
        SymplecticEulerIntegrator(softening_length=-1.0)


def test_overflow_faults_do_not_emit_numpy_warnings() -> None:
    heavy = BodyRegistry(
        [
            Body(body_id="Heavy", mass=1.0e40, position=np.array([1.0e9, 0.0]), is_anchor=True),
            Body(body_id="Probe", mass=1.0, velocity=np.array([0.0, 3.0e4])),
        ]
    )
    poisoned = BodyRegistry([*_sun_earth(), Body(body_id="Twin", mass=1.0e20)])
    poisoned.get("Earth").position = np.array([np.nan, np.nan])

    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        faults = _runaway_registry().step(1.0e300, SymplecticEulerIntegrator())
        faults += heavy.step(1.0e300, SymplecticEulerIntegrator())
        faults += poisoned.step(86400.0, SymplecticEulerIntegrator(softening_length=0.0))

    assert {fault.kind for fault in faults} >= {FaultKind.POSITION, FaultKind.VELOCITY, FaultKind.FORCE}
