from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, List, Protocol, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from ..sim.simulation import Integrator, StepFault

Vector = np.ndarray
TrailPoint = Tuple[float, float]

DIMENSION = 2


def _to_vector(values: Iterable[float], *, length: int = DIMENSION) -> Vector:
    arr = np.array(list(values), dtype=float)
    if arr.ndim != 1:
        raise ValueError("Vector must be 1D")
    if arr.size != length:
        raise ValueError(f"Vector must have length {length}")
    return arr


class MassLike(Protocol):
    mass: float
    position: Vector


@dataclass
class Body:
    """A simulated mass point.

    ``radius`` and ``color`` are rendering hints and take no part in the physics.
    Position and velocity may hold non-finite values; the integrator is in charge
    of keeping them from spreading.
    """

    body_id: str
    mass: float
    position: Vector = field(default_factory=lambda: np.zeros(DIMENSION, dtype=float))
    velocity: Vector = field(default_factory=lambda: np.zeros(DIMENSION, dtype=float))
    radius: float = 1.0
    color: int = 0xFFFFFF
    is_anchor: bool = False
    distance_to_anchor: float = 0.0
    trail: List[TrailPoint] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.mass = float(self.mass)
        if not np.isfinite(self.mass) or self.mass <= 0:
            raise ValueError("Mass must be positive")
        self.position = _to_vector(self.position)
        self.velocity = _to_vector(self.velocity)
        self.radius = float(self.radius)
        self.color = int(self.color) & 0xFFFFFF
        self.trail = [(float(x), float(y)) for x, y in self.trail]

    def state(self) -> BodyState:
        return BodyState(
            body_id=self.body_id,
            mass=self.mass,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            is_anchor=self.is_anchor,
        )


@dataclass(frozen=True)
class BodyState:
    body_id: str
    mass: float
    position: Vector
    velocity: Vector
    is_anchor: bool = False

    def __post_init__(self) -> None:
        # Snapshots must not alias or be aliased by the live arrays.
        position = np.array(self.position, dtype=float)
        velocity = np.array(self.velocity, dtype=float)
        position.setflags(write=False)
        velocity.setflags(write=False)
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "velocity", velocity)


Snapshot = Tuple[BodyState, ...]


class BodyRegistry:
    """Ordered, fixed set of bodies advanced together one step at a time."""

    def __init__(self, bodies: Iterable[Body]) -> None:
        self._bodies: List[Body] = list(bodies)
        ids = [body.body_id for body in self._bodies]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate body ids: {ids}")

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __getitem__(self, index: int) -> Body:
        return self._bodies[index]

    @property
    def bodies(self) -> Sequence[Body]:
        return tuple(self._bodies)

    def get(self, body_id: str) -> Body:
        for body in self._bodies:
            if body.body_id == body_id:
                return body
        raise KeyError(body_id)

    def anchor(self) -> Body | None:
        anchor = None
        for body in self._bodies:
            if body.is_anchor:
                anchor = body
        return anchor

    def snapshot(self) -> Snapshot:
        return tuple(body.state() for body in self._bodies)

    @staticmethod
    def others(index: int, snapshot: Snapshot) -> Snapshot:
        return snapshot[:index] + snapshot[index + 1 :]

    def step(self, dt: float, integrator: Integrator) -> List[StepFault]:
        if not np.isfinite(dt) or dt <= 0:
            raise ValueError("dt must be positive")
        return integrator.step(self, float(dt))
