from .bodies import (
    DIMENSION,
    Body,
    BodyRegistry,
    BodyState,
    MassLike,
    Snapshot,
    TrailPoint,
    Vector,
)

__all__ = [
    "DIMENSION",
    "Body",
    "BodyRegistry",
    "BodyState",
    "MassLike",
    "Snapshot",
    "TrailPoint",
    "Vector",
]
