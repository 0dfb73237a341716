from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol, Sequence

import numpy as np

from ..model import Body, BodyRegistry, Snapshot
from ..physics import DEFAULT_DT, G, SOFTENING_LENGTH, calculate_force

_LOG = logging.getLogger(__name__)


class FaultKind(str, Enum):
    FORCE = "force"
    VELOCITY = "velocity"
    POSITION = "position"


class FaultPolicy(str, Enum):
    # Velocity is restored to its entry value whenever the position update is withheld.
    ROLLBACK = "rollback"
    # The velocity update stands even when the position update is withheld.
    COMMIT_VELOCITY = "commit_velocity"


@dataclass(frozen=True)
class StepFault:
    body_id: str
    kind: FaultKind
    detail: str


class Integrator(Protocol):
    def step(self, registry: BodyRegistry, dt: float) -> List[StepFault]:
        ...


@dataclass
class SymplecticEulerIntegrator:
    """Semi-implicit Euler integrator with softened pairwise gravity.

    Every body reads only the snapshot taken when the step begins, so the order in
    which bodies are updated has no effect on the result. Numerical faults are
    contained per body: a degenerate pair is dropped from the force sum, and a
    degenerate velocity or position freezes that body's position for the step.
    """

    softening_length: float = SOFTENING_LENGTH
    gravitational_constant: float = G
    fault_policy: FaultPolicy = FaultPolicy.ROLLBACK

    def __post_init__(self) -> None:
        self.fault_policy = FaultPolicy(self.fault_policy)
        if not np.isfinite(self.softening_length) or self.softening_length < 0:
            raise ValueError("softening_length must be non-negative")

    def step(self, registry: BodyRegistry, dt: float) -> List[StepFault]:
        snapshot = registry.snapshot()
        faults: List[StepFault] = []
        for index, body in enumerate(registry):
            faults.extend(self.update_body(body, registry.others(index, snapshot), dt))
        return faults

    def update_body(self, body: Body, others: Snapshot, dt: float) -> List[StepFault]:
        # Overflow is reported through the fault checks below.
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            return self._update_body(body, others, dt)

    def _update_body(self, body: Body, others: Snapshot, dt: float) -> List[StepFault]:
        _LOG.debug(
            "Before update %s: position=%s velocity=%s", body.body_id, body.position, body.velocity
        )
        faults: List[StepFault] = []
        total_force = np.zeros(2, dtype=float)

        for other in others:
            pair = calculate_force(
                body,
                other,
                softening_length=self.softening_length,
                gravitational_constant=self.gravitational_constant,
            )
            if not pair.is_finite():
                _LOG.warning(
                    "Non-finite force on %s from %s: fx=%s fy=%s (position=%s, other position=%s)",
                    body.body_id,
                    other.body_id,
                    pair.fx,
                    pair.fy,
                    body.position,
                    other.position,
                )
                faults.append(
                    StepFault(body.body_id, FaultKind.FORCE, f"pair with {other.body_id} discarded")
                )
                continue
            total_force += (pair.fx, pair.fy)
            if other.is_anchor:
                body.distance_to_anchor = pair.distance

        previous_velocity = body.velocity.copy()
        velocity = body.velocity + total_force / body.mass * dt
        if not np.all(np.isfinite(velocity)):
            _LOG.warning(
                "Non-finite velocity for %s: x_vel=%s y_vel=%s", body.body_id, velocity[0], velocity[1]
            )
            if self.fault_policy == FaultPolicy.COMMIT_VELOCITY:
                body.velocity = velocity
            faults.append(StepFault(body.body_id, FaultKind.VELOCITY, "position update skipped"))
            return faults

        body.velocity = velocity
        new_position = body.position + body.velocity * dt
        if not np.all(np.isfinite(new_position)):
            _LOG.warning(
                "Non-finite position for %s: x=%s y=%s", body.body_id, new_position[0], new_position[1]
            )
            if self.fault_policy == FaultPolicy.ROLLBACK:
                body.velocity = previous_velocity
            faults.append(StepFault(body.body_id, FaultKind.POSITION, "position update skipped"))
            return faults

        body.position = new_position
        body.trail.append((float(new_position[0]), float(new_position[1])))
        _LOG.debug(
            "After update %s: position=%s velocity=%s", body.body_id, body.position, body.velocity
        )
        return faults


@dataclass
class Simulation:
    registry: BodyRegistry
    dt: float = DEFAULT_DT
    integrator: Integrator = field(default_factory=SymplecticEulerIntegrator)
    time: float = 0.0
    step_count: int = 0
    last_faults: List[StepFault] = field(default_factory=list)

    @property
    def bodies(self) -> Sequence[Body]:
        return self.registry.bodies

    def step(self, dt: float | None = None) -> List[StepFault]:
        step_dt = self.dt if dt is None else dt
        self.last_faults = self.registry.step(step_dt, self.integrator)
        self.time += step_dt
        self.step_count += 1
        return self.last_faults

    def run(self, steps: int, dt: float | None = None) -> List[StepFault]:
        faults: List[StepFault] = []
        for _ in range(steps):
            faults.extend(self.step(dt))
        return faults
