from __future__ import annotations

from typing import Sequence

import numpy as np

from ..core.model import TrailPoint
from ..core.physics import AU


def to_view_units(values: np.ndarray | Sequence[float]) -> np.ndarray:
    """Meters to astronomical units, the unit the orbit view is plotted in."""
    return np.asarray(values, dtype=float) / AU


def format_distance(distance_m: float) -> str:
    return f"{distance_m / 1000.0:.1f}km"


def color_to_rgb(color: int) -> tuple[int, int, int]:
    color = int(color) & 0xFFFFFF
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def trail_points(trail: Sequence[TrailPoint], limit: int | None = None) -> np.ndarray:
    """Trail as an (N, 2) array, downsampled to at most ``limit`` points.

    The first and the most recent points are always kept so the drawn path stays
    attached to the body. The trail itself is never modified.
    """
    if not trail:
        return np.zeros((0, 2), dtype=float)
    points = np.asarray(trail, dtype=float).reshape(-1, 2)
    if limit is None or points.shape[0] <= limit:
        return points
    if limit < 2:
        return points[-1:].copy()
    indices = np.linspace(0, points.shape[0] - 1, num=limit).round().astype(int)
    return points[np.unique(indices)]


def finite_points(points: np.ndarray) -> np.ndarray:
    if points.size == 0:
        return points
    return points[np.all(np.isfinite(points), axis=1)]
