"""
Application Initialization
==========================
This module builds the Model-View-Controller objects and starts the Qt event
loop.

Why is this file needed?
------------------------
It acts as the composition root. It:
1. Reads the configuration (environment, then command line).
2. Sets up logging.
3. Instantiates the diagram store (Model) and the main window (View), which
   owns the click controller.
"""
from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import sys
from typing import Optional, Sequence

from voronoiblend.config import DiagramConfig
from voronoiblend.logging_config import setup_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voronoiblend",
        description="Interactive Voronoi diagram: click cells to blend their colors.",
    )
    parser.add_argument("--points", type=int, default=None, help="Number of points to generate.")
    parser.add_argument("--threshold", type=float, default=None, help="Color distance below which cells merge.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible diagrams.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[DiagramConfig] = None) -> DiagramConfig:
    """Apply command line overrides on top of ``base`` (environment config by default)."""
    config = base if base is not None else DiagramConfig.from_env()
    if args.points is not None:
        if args.points < 0:
            raise ValueError(f"--points must be non-negative, got {args.points}.")
        config = replace(config, point_count=args.points)
    if args.threshold is not None:
        if args.threshold <= 0:
            raise ValueError(f"--threshold must be positive, got {args.threshold}.")
        config = replace(config, threshold=args.threshold)
    if args.seed is not None:
        config = replace(config, seed=args.seed)
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    from PySide6.QtWidgets import QApplication
    from voronoiblend.model.state import DiagramStore
    from voronoiblend.view.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName("voronoiblend")

    store = DiagramStore(config)
    logger.info(f"Starting with {len(store.state)} points (threshold {config.threshold:g}).")

    window = MainWindow(store)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
