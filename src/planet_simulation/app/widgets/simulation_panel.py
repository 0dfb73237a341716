from __future__ import annotations

from PySide6 import QtCore, QtWidgets

from ...core.physics import SECONDS_PER_DAY
from ...core.sim import FaultPolicy


class SimulationPanel(QtWidgets.QGroupBox):
    settings_changed = QtCore.Signal(float, str)
    display_changed = QtCore.Signal(bool, bool, int)

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__("Simulation", parent)
        layout = QtWidgets.QFormLayout(self)

        self._dt_spin = QtWidgets.QDoubleSpinBox()
        self._dt_spin.setRange(1e-3, 365.0)
        self._dt_spin.setDecimals(3)
        self._dt_spin.setSuffix(" d")
        self._dt_spin.setValue(1.0)

        self._policy_combo = QtWidgets.QComboBox()
        self._policy_combo.addItem("Roll back velocity", FaultPolicy.ROLLBACK.value)
        self._policy_combo.addItem("Commit velocity", FaultPolicy.COMMIT_VELOCITY.value)

        self._show_trails = QtWidgets.QCheckBox("Show Trails")
        self._show_trails.setChecked(True)
        self._show_labels = QtWidgets.QCheckBox("Show Distances")
        self._show_labels.setChecked(True)

        self._trail_limit_spin = QtWidgets.QSpinBox()
        self._trail_limit_spin.setRange(0, 1_000_000)
        self._trail_limit_spin.setSpecialValueText("Unlimited")
        self._trail_limit_spin.setValue(2000)

        layout.addRow("dt", self._dt_spin)
        layout.addRow("Fault Policy", self._policy_combo)
        layout.addRow(self._show_trails)
        layout.addRow(self._show_labels)
        layout.addRow("Trail Points", self._trail_limit_spin)

        self._dt_spin.valueChanged.connect(self._emit_settings_changed)
        self._policy_combo.currentIndexChanged.connect(self._emit_settings_changed)
        self._show_trails.toggled.connect(self._emit_display_changed)
        self._show_labels.toggled.connect(self._emit_display_changed)
        self._trail_limit_spin.valueChanged.connect(self._emit_display_changed)

    def set_settings(self, dt: float, fault_policy: str) -> None:
        self._dt_spin.blockSignals(True)
        self._policy_combo.blockSignals(True)
        self._dt_spin.setValue(float(dt) / SECONDS_PER_DAY)
        idx = self._policy_combo.findData(fault_policy)
        if idx >= 0:
            self._policy_combo.setCurrentIndex(idx)
        self._dt_spin.blockSignals(False)
        self._policy_combo.blockSignals(False)

    def _emit_settings_changed(self) -> None:
        self.settings_changed.emit(
            float(self._dt_spin.value()) * SECONDS_PER_DAY,
            str(self._policy_combo.currentData()),
        )

    def _emit_display_changed(self) -> None:
        self.display_changed.emit(
            self._show_trails.isChecked(),
            self._show_labels.isChecked(),
            int(self._trail_limit_spin.value()),
        )
