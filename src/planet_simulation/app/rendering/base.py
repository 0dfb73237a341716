from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from PySide6 import QtCore, QtWidgets

from ...core.model import Body


@dataclass
class DisplayOptions:
    show_trails: bool = True
    show_labels: bool = True
    # Drawing-side cap on trail vertices; bodies keep their full history.
    trail_limit: int | None = 2000


class Renderer(QtWidgets.QWidget):
    body_selected = QtCore.Signal(str)

    def set_scene(self, bodies: Sequence[Body], display: DisplayOptions, selected_id: str | None) -> None:
        raise NotImplementedError

    def set_view_range(self, view_range: tuple[float, float, float, float]) -> None:
        _ = view_range

    def clear(self) -> None:
        raise NotImplementedError
