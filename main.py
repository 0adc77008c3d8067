#!/usr/bin/env python3
"""
Level Shape Editor - Main Entry Point

An interactive editor for the polygons and primitive shapes of a 2D level,
with vertex dragging, snapping, vertex insertion/removal, recentering and
export to physics entity descriptors.

Usage:
    python main.py
    python main.py --debug                  # Enable debug logging
    python main.py --config settings.json   # Use a specific settings file
"""

import sys
import logging
import argparse
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPalette, QColor

from services import get_settings
from views import MainWindow


def setup_logging(debug: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if debug else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at {'DEBUG' if debug else 'INFO'} level")


def setup_application() -> QApplication:
    """Configure the Qt application."""
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Level Shape Editor")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("level-shape-editor")

    # Dark scheme to match the canvas
    palette = QPalette()
    for role, color in [
        (QPalette.ColorRole.Window, "#2B2B2B"),
        (QPalette.ColorRole.WindowText, "#E5E7EB"),
        (QPalette.ColorRole.Base, "#1F1F1F"),
        (QPalette.ColorRole.Text, "#E5E7EB"),
        (QPalette.ColorRole.Button, "#3A3A3A"),
        (QPalette.ColorRole.ButtonText, "#E5E7EB"),
        (QPalette.ColorRole.Highlight, "#3B82F6"),
    ]:
        palette.setColor(role, QColor(color))
    app.setPalette(palette)

    return app


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Level Shape Editor')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', metavar='PATH', help='Settings file to use')
    args = parser.parse_args()

    setup_logging(debug=args.debug)

    app = setup_application()

    window = MainWindow(get_settings(args.config))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
