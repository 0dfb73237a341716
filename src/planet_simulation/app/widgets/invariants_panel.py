from __future__ import annotations

from typing import Sequence

import numpy as np
from PySide6 import QtWidgets

from ...core.model import Body
from ...core.physics import G, SECONDS_PER_DAY, angular_momentum, total_energy, total_momentum


class InvariantsPanel(QtWidgets.QGroupBox):
    """Conserved quantities and their drift since the scenario was loaded."""

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__("Invariants", parent)
        layout = QtWidgets.QFormLayout(self)

        self._elapsed = QtWidgets.QLabel("-")
        self._energy = QtWidgets.QLabel("-")
        self._energy_drift = QtWidgets.QLabel("-")
        self._angular_momentum = QtWidgets.QLabel("-")
        self._angular_drift = QtWidgets.QLabel("-")
        self._momentum = QtWidgets.QLabel("-")
        self._faults = QtWidgets.QLabel("-")

        layout.addRow("Elapsed", self._elapsed)
        layout.addRow("Energy (J)", self._energy)
        layout.addRow("Energy Drift", self._energy_drift)
        layout.addRow("L_z (kg m^2/s)", self._angular_momentum)
        layout.addRow("L_z Drift", self._angular_drift)
        layout.addRow("||p|| (kg m/s)", self._momentum)
        layout.addRow("Faults (last step)", self._faults)

        self._energy0: float | None = None
        self._angular0: float | None = None
        self._softening_length: float | None = None
        self._gravitational_constant: float = G

    def reset_reference(
        self,
        bodies: Sequence[Body],
        softening_length: float,
        gravitational_constant: float = G,
    ) -> None:
        self._softening_length = softening_length
        self._gravitational_constant = gravitational_constant
        self._energy0 = self._total_energy(bodies)
        self._angular0 = angular_momentum(bodies)

    def update_values(self, bodies: Sequence[Body], elapsed_s: float, fault_count: int) -> None:
        if not bodies or self._softening_length is None:
            for label in (
                self._elapsed,
                self._energy,
                self._energy_drift,
                self._angular_momentum,
                self._angular_drift,
                self._momentum,
                self._faults,
            ):
                label.setText("-")
            return

        energy = self._total_energy(bodies)
        angular = angular_momentum(bodies)
        momentum = float(np.linalg.norm(total_momentum(bodies)))

        self._elapsed.setText(f"{elapsed_s / SECONDS_PER_DAY:.1f} d")
        self._energy.setText(f"{energy:.6e}")
        self._energy_drift.setText(self._format_drift(energy, self._energy0))
        self._angular_momentum.setText(f"{angular:.6e}")
        self._angular_drift.setText(self._format_drift(angular, self._angular0))
        self._momentum.setText(f"{momentum:.6e}")
        self._faults.setText(str(fault_count))

    def _total_energy(self, bodies: Sequence[Body]) -> float:
        return total_energy(
            bodies,
            softening_length=self._softening_length,
            gravitational_constant=self._gravitational_constant,
        )

    @staticmethod
    def _format_drift(value: float, reference: float | None) -> str:
        if reference is None or reference == 0 or not np.isfinite(value):
            return "-"
        return f"{(value - reference) / abs(reference):+.3e}"
