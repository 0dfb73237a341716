from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from PySide6 import QtWidgets

from ..core.io import load_scenario_definition
from ..core.scenario_definition import simulation_from_definition
from ..core.scenarios import load_builtin_scenarios, scenario_registry
from .window import MainWindow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="planet-simulation", description="Planet orbit simulation viewer")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--scenario", help="built-in scenario id, e.g. inner_solar_system")
    source.add_argument("--file", type=Path, help="scenario JSON file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (DEBUG traces every body update)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args, qt_args = parser.parse_known_args(argv)
    load_builtin_scenarios()
    if args.scenario is not None and args.scenario not in scenario_registry:
        known = ", ".join(scenario.scenario_id for scenario in scenario_registry.all())
        parser.error(f"unknown scenario {args.scenario!r} (choose from {known})")
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    definition = None
    if args.file is not None:
        try:
            definition = load_scenario_definition(args.file)
            simulation_from_definition(definition)
        except (OSError, ValueError, TypeError) as exc:
            parser.error(f"cannot load scenario file {args.file}: {exc}")
    app = QtWidgets.QApplication([sys.argv[0], *qt_args])
    window = MainWindow(scenario_id=args.scenario, definition=definition)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
