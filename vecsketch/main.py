#!/usr/bin/env python3
"""
VecSketch - Main Entry Point

This is the main entry point for the VecSketch application.
Run with: python -m vecsketch.main
"""

import logging
import os
import sys
from PyQt6.QtWidgets import QApplication


def setup_logging():
    """Configure logging; the level comes from VECSKETCH_LOG_LEVEL."""
    level_name = os.environ.get("VECSKETCH_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def main():
    """Main entry point for VecSketch application."""
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        # Create application
        app = QApplication(sys.argv)
        app.setApplicationName("VecSketch")
        app.setApplicationVersion("0.1.0")
        app.setOrganizationName("VecSketch")

        # Import here to avoid circular imports and speed up startup check
        from .ui.mainwindow import MainWindow

        # Create and show main window
        window = MainWindow()
        window.show()

        # Run event loop
        return app.exec()
    except Exception:
        logger.exception("Fatal error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
