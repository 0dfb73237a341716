from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..core.io import load_scenario_definition, save_scenario_definition
from ..core.scenario_definition import ScenarioDefinition, integrator_from_definition, simulation_from_definition
from ..core.scenarios import load_builtin_scenarios, scenario_registry
from ..core.sim import Simulation
from .rendering import DisplayOptions
from .widgets import BodiesPanel, InvariantsPanel, OrbitView, SimulationPanel

_LOG = logging.getLogger(__name__)

# Roughly 60 frames per second, one simulation step per frame.
FRAME_INTERVAL_MS = 16


class MainWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        scenario_id: str | None = None,
        definition: ScenarioDefinition | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Planet Simulation")
        self.resize(1100, 800)

        load_builtin_scenarios()

        self._renderer = OrbitView()
        self.setCentralWidget(self._renderer)

        self._simulation_panel = SimulationPanel()
        self._invariants = InvariantsPanel()
        self._invariants.setTitle("")
        self._bodies_panel = BodiesPanel()
        self._bodies_panel.setTitle("")

        self._simulation_dock = self._add_dock("Simulation", self._simulation_panel)
        self._invariants_dock = self._add_dock("Invariants", self._invariants)
        self._bodies_dock = self._add_dock("Bodies", self._bodies_panel)

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self._on_tick)

        self._play_action = QtGui.QAction("Play", self)
        self._play_action.setCheckable(True)
        self._play_action.setShortcut(QtGui.QKeySequence(QtCore.Qt.Key_Space))
        self._play_action.triggered.connect(self._toggle_play)

        self._step_action = QtGui.QAction("Step", self)
        self._step_action.triggered.connect(self._single_step)

        self._reset_action = QtGui.QAction("Reset", self)
        self._reset_action.triggered.connect(self._reset_scene)

        self._open_action = QtGui.QAction("Open Scenario...", self)
        self._open_action.triggered.connect(self._open_scenario)

        self._save_action = QtGui.QAction("Save Scenario As...", self)
        self._save_action.triggered.connect(self._save_scenario)

        self._quit_action = QtGui.QAction("Quit", self)
        self._quit_action.setShortcut(QtGui.QKeySequence(QtCore.Qt.Key_Escape))
        self._quit_action.triggered.connect(self.close)

        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")
        self._scenario_menu = file_menu.addMenu("Scenario")
        self._scenario_group = QtGui.QActionGroup(self)
        self._scenario_group.setExclusive(True)
        self._scenario_actions: dict[str, QtGui.QAction] = {}
        for scenario in scenario_registry.all():
            action = QtGui.QAction(scenario.name, self)
            action.setCheckable(True)
            action.setData(scenario.scenario_id)
            action.triggered.connect(self._on_scenario_action)
            self._scenario_group.addAction(action)
            self._scenario_menu.addAction(action)
            self._scenario_actions[scenario.scenario_id] = action
        file_menu.addSeparator()
        file_menu.addAction(self._open_action)
        file_menu.addAction(self._save_action)
        file_menu.addSeparator()
        file_menu.addAction(self._quit_action)

        sim_menu = menu_bar.addMenu("Simulation")
        sim_menu.addAction(self._play_action)
        sim_menu.addAction(self._step_action)
        sim_menu.addAction(self._reset_action)

        view_menu = menu_bar.addMenu("View")
        for dock in (self._simulation_dock, self._invariants_dock, self._bodies_dock):
            view_menu.addAction(dock.toggleViewAction())

        self._renderer.body_selected.connect(self._on_body_selected)
        self._bodies_panel.body_selected.connect(self._on_body_selected)
        self._simulation_panel.settings_changed.connect(self._on_settings_changed)
        self._simulation_panel.display_changed.connect(self._on_display_changed)

        self._simulation: Simulation | None = None
        self._definition: ScenarioDefinition | None = None
        self._scenario_id: str | None = None
        self._selected_id: Optional[str] = None
        self._display = DisplayOptions()

        if definition is not None:
            self._set_definition(definition, scenario_id=None)
            return
        scenario_ids = [scenario.scenario_id for scenario in scenario_registry.all()]
        initial_id = scenario_id or (scenario_ids[0] if scenario_ids else None)
        if initial_id is not None:
            self._set_scenario(initial_id)

    def _add_dock(self, title: str, widget: QtWidgets.QWidget) -> QtWidgets.QDockWidget:
        dock = QtWidgets.QDockWidget(title, self)
        dock.setWidget(widget)
        dock.setAllowedAreas(QtCore.Qt.LeftDockWidgetArea | QtCore.Qt.RightDockWidgetArea)
        self.addDockWidget(QtCore.Qt.RightDockWidgetArea, dock)
        return dock

    def _on_scenario_action(self) -> None:
        action = self.sender()
        if not isinstance(action, QtGui.QAction):
            return
        scenario_id = action.data()
        if scenario_id is None:
            return
        self._set_scenario(str(scenario_id))

    def _set_scenario(self, scenario_id: str) -> None:
        scenario = scenario_registry.get(scenario_id)
        self._set_definition(scenario.definition(), scenario_id)
        defaults = scenario.ui_defaults()
        if defaults and defaults.view_range:
            self._renderer.set_view_range(defaults.view_range)

    def _set_definition(self, definition: ScenarioDefinition, scenario_id: str | None) -> None:
        simulation = simulation_from_definition(definition)
        self._definition = definition
        self._simulation = simulation
        self._scenario_id = scenario_id
        self._selected_id = None
        self._select_scenario_in_menu(scenario_id)
        self._simulation_panel.set_settings(definition.simulation.dt, definition.simulation.fault_policy)
        self._renderer.clear()
        self._invariants.reset_reference(
            simulation.bodies,
            definition.simulation.softening_length,
            definition.simulation.gravitational_constant,
        )
        self.setWindowTitle(f"Planet Simulation - {definition.name}")
        self._update_ui()

    def _select_scenario_in_menu(self, scenario_id: str | None) -> None:
        for key, action in self._scenario_actions.items():
            action.setChecked(key == scenario_id)

    def _update_ui(self) -> None:
        if self._simulation is None:
            return
        bodies = self._simulation.bodies
        self._renderer.set_scene(bodies, self._display, self._selected_id)
        self._bodies_panel.set_bodies(bodies, self._selected_id)
        self._invariants.update_values(bodies, self._simulation.time, len(self._simulation.last_faults))

    def _toggle_play(self, checked: bool) -> None:
        if self._simulation is None:
            return
        if checked:
            self._play_action.setText("Pause")
            self._timer.start(FRAME_INTERVAL_MS)
        else:
            self._play_action.setText("Play")
            self._timer.stop()

    def _single_step(self) -> None:
        if self._simulation is None:
            return
        if self._timer.isActive():
            return
        self._simulation.step()
        self._update_ui()

    def _on_tick(self) -> None:
        if self._simulation is None:
            return
        self._simulation.step()
        self._update_ui()

    def _reset_scene(self) -> None:
        if self._definition is None:
            return
        self._set_definition(self._definition, self._scenario_id)

    def _on_body_selected(self, body_id: str) -> None:
        self._selected_id = None if body_id == self._selected_id else body_id
        self._update_ui()

    def _on_settings_changed(self, dt: float, fault_policy: str) -> None:
        if self._definition is None or self._simulation is None:
            return
        settings = replace(self._definition.simulation, dt=dt, fault_policy=fault_policy)
        try:
            integrator = integrator_from_definition(settings)
        except ValueError as exc:
            _LOG.warning("Rejected simulation settings: %s", exc)
            return
        self._definition.simulation = settings
        self._simulation.dt = dt
        self._simulation.integrator = integrator

    def _on_display_changed(self, show_trails: bool, show_labels: bool, trail_limit: int) -> None:
        self._display = DisplayOptions(
            show_trails=show_trails,
            show_labels=show_labels,
            trail_limit=trail_limit or None,
        )
        self._update_ui()

    def _open_scenario(self) -> None:
        file_path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Open Scenario", "", "Scenario Files (*.json)"
        )
        if not file_path:
            return
        try:
            definition = load_scenario_definition(Path(file_path))
            self._set_definition(definition, scenario_id=None)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            _LOG.warning("Failed to load scenario %s: %s", file_path, exc)
            QtWidgets.QMessageBox.warning(self, "Open Scenario", f"Failed to load scenario:\n{exc}")

    def _save_scenario(self) -> None:
        if self._definition is None:
            return
        file_path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Save Scenario", "", "Scenario Files (*.json)"
        )
        if not file_path:
            return
        try:
            save_scenario_definition(self._definition, Path(file_path))
        except OSError as exc:
            _LOG.warning("Failed to save scenario %s: %s", file_path, exc)
            QtWidgets.QMessageBox.warning(self, "Save Scenario", f"Failed to save scenario:\n{exc}")
