from __future__ import annotations

from typing import Sequence

import numpy as np
from PySide6 import QtCore, QtWidgets

from ...core.model import Body
from ..projection import format_distance


class BodiesPanel(QtWidgets.QGroupBox):
    body_selected = QtCore.Signal(str)

    _COLUMNS = ["ID", "Mass (kg)", "Distance", "Speed (km/s)", "Trail"]

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__("Bodies", parent)
        layout = QtWidgets.QVBoxLayout(self)
        self._table = QtWidgets.QTableWidget(0, len(self._COLUMNS))
        self._table.setHorizontalHeaderLabels(self._COLUMNS)
        self._table.horizontalHeader().setStretchLastSection(True)
        self._table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self._table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self._table.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self._table.itemSelectionChanged.connect(self._emit_selection)
        layout.addWidget(self._table)
        self._block_selection = False

    def set_bodies(self, bodies: Sequence[Body], selected_id: str | None) -> None:
        self._block_selection = True
        self._table.setRowCount(len(bodies))
        for row, body in enumerate(bodies):
            speed = float(np.linalg.norm(body.velocity)) / 1000.0
            distance = "-" if body.is_anchor else format_distance(body.distance_to_anchor)
            values = [
                body.body_id,
                f"{body.mass:.4e}",
                distance,
                f"{speed:.3f}",
                str(len(body.trail)),
            ]
            for column, text in enumerate(values):
                item = self._table.item(row, column)
                if item is None:
                    item = QtWidgets.QTableWidgetItem()
                    self._table.setItem(row, column, item)
                item.setText(text)
            if body.body_id == selected_id:
                self._table.selectRow(row)
        if selected_id is None:
            self._table.clearSelection()
        self._block_selection = False

    def _emit_selection(self) -> None:
        if self._block_selection:
            return
        rows = self._table.selectionModel().selectedRows()
        if not rows:
            return
        item = self._table.item(rows[0].row(), 0)
        if item is not None:
            self.body_selected.emit(item.text())
