"""Command line entry point for Filter Studio."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from filter_studio import get_version
from filter_studio.core.logging_config import LoggingConfigurator, LoggingOptions


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filter-studio",
        description="Load an image and preview interactive OpenCV filters.",
    )
    parser.add_argument("image", nargs="?", type=Path, help="image to open on start-up")
    parser.add_argument("--log-dir", type=Path, default=None, help="directory for the rotating log file")
    parser.add_argument("--debug", action="store_true", help="enable developer diagnostics logging")
    parser.add_argument("--no-console-log", action="store_true", help="only log to the log file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def configure_logging(args: argparse.Namespace) -> Path:
    options = LoggingOptions(
        log_directory=args.log_dir,
        enable_console=not args.no_console_log,
        developer_diagnostics=args.debug,
    )
    return LoggingConfigurator(options).configure()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_path = configure_logging(args)
    LOGGER.info("Starting Filter Studio %s", get_version(), extra={"component": "app"})
    LOGGER.debug("Logging to %s", log_path, extra={"component": "app"})

    from PyQt5 import QtWidgets

    from filter_studio.core.settings_manager import SettingsManager
    from filter_studio.ui.main_window import MainWindow

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])
    app.setApplicationName("Filter Studio")
    window = MainWindow(SettingsManager())
    window.show()
    if args.image is not None:
        window.open_image(args.image)
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
