from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np
import pyqtgraph as pg
from PySide6 import QtWidgets

from ...core.model import Body
from ..projection import color_to_rgb, finite_points, format_distance, to_view_units, trail_points
from ..rendering.base import DisplayOptions, Renderer


class OrbitView(Renderer):
    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._plot = pg.PlotWidget(background="k")
        self._plot.setAspectLocked(True)
        self._plot.showGrid(x=True, y=True, alpha=0.15)
        self._plot.setLabel("bottom", "X", units="AU")
        self._plot.setLabel("left", "Y", units="AU")
        # Screen y grows downward in a frame buffer; keep that orientation.
        self._plot.getViewBox().invertY(True)
        self._points = pg.ScatterPlotItem(pxMode=True)
        self._points.sigClicked.connect(self._on_points_clicked)
        self._plot.addItem(self._points)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._plot)

        self._trail_items: Dict[str, pg.PlotDataItem] = {}
        self._label_items: Dict[str, pg.TextItem] = {}
        self._body_ids: List[str] = []
        self._selected_id: Optional[str] = None

    def set_view_range(self, view_range: tuple[float, float, float, float]) -> None:
        x_min, x_max, y_min, y_max = view_range
        self._plot.setXRange(x_min, x_max, padding=0.0)
        self._plot.setYRange(y_min, y_max, padding=0.0)

    def set_scene(self, bodies: Sequence[Body], display: DisplayOptions, selected_id: str | None) -> None:
        self._selected_id = selected_id
        self._body_ids = [body.body_id for body in bodies]
        self._drop_stale_items()

        spots = []
        for body in bodies:
            position = to_view_units(body.position)
            rgb = color_to_rgb(body.color)
            self._update_trail(body, rgb, display)
            self._update_label(body, position, rgb, display)
            if not np.all(np.isfinite(position)):
                continue
            is_selected = body.body_id == selected_id
            spots.append(
                {
                    "pos": position,
                    "size": self._point_size(body.radius),
                    "brush": pg.mkBrush(*rgb),
                    "pen": pg.mkPen("w" if is_selected else rgb, width=2.5 if is_selected else 1.0),
                    "data": body.body_id,
                }
            )
        self._points.setData(spots)

    def clear(self) -> None:
        self._points.setData([])
        for item in self._trail_items.values():
            self._plot.removeItem(item)
        for item in self._label_items.values():
            self._plot.removeItem(item)
        self._trail_items.clear()
        self._label_items.clear()
        self._body_ids = []

    def _update_trail(self, body: Body, rgb: tuple[int, int, int], display: DisplayOptions) -> None:
        item = self._trail_items.get(body.body_id)
        if item is None:
            item = pg.PlotDataItem(pen=pg.mkPen(*rgb, width=1.0))
            self._plot.addItem(item)
            self._trail_items[body.body_id] = item
        item.setVisible(display.show_trails)
        if not display.show_trails:
            return
        points = finite_points(to_view_units(trail_points(body.trail, display.trail_limit)))
        if points.shape[0] < 2:
            item.setData([], [])
            return
        item.setData(points[:, 0], points[:, 1])

    def _update_label(
        self,
        body: Body,
        position: np.ndarray,
        rgb: tuple[int, int, int],
        display: DisplayOptions,
    ) -> None:
        item = self._label_items.get(body.body_id)
        if item is None:
            item = pg.TextItem(color=rgb, anchor=(0.5, 1.4))
            self._plot.addItem(item)
            self._label_items[body.body_id] = item
        # The anchor itself carries no distance label.
        visible = display.show_labels and not body.is_anchor and bool(np.all(np.isfinite(position)))
        item.setVisible(visible)
        if visible:
            item.setText(format_distance(body.distance_to_anchor))
            item.setPos(float(position[0]), float(position[1]))

    def _drop_stale_items(self) -> None:
        live = set(self._body_ids)
        for items in (self._trail_items, self._label_items):
            for body_id in [key for key in items if key not in live]:
                self._plot.removeItem(items.pop(body_id))

    @staticmethod
    def _point_size(radius: float) -> float:
        return max(4.0, 0.6 * float(radius))

    def _on_points_clicked(self, _item: pg.ScatterPlotItem, points, _event=None) -> None:
        for point in points:
            body_id = point.data()
            if body_id is not None:
                self.body_selected.emit(str(body_id))
                return

