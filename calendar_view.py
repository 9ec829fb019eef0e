#!/usr/bin/env python3
"""
Calendar View - A PySide6 calendar with month, week, day and agenda views.

This is the main entry point for the application.
"""

import sys
import argparse
import logging
from pathlib import Path

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from backend.config import Config
from backend.timezone_utils import set_timezone
from backend.views import InvalidView
from gui.main_window import MainWindow


EXAMPLE_CONFIG = """
[General]
views = ["month", "week", "day", "agenda"]
default_view = "month"
culture = "en-US"
timezone = "Europe/Amsterdam"

[Subscription.Example]
url = "https://example.com/calendar.ics"
name = "Example Calendar"
color = "#4285f4"
"""


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Calendar View - month/week/day/agenda calendar for ICS feeds"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(path):
    """Load the configuration; the default location may be absent."""
    try:
        return Config.load(path)
    except FileNotFoundError:
        if path is not None:
            raise
        return Config()


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("\nExample configuration:")
        print(EXAMPLE_CONFIG)
        sys.exit(1)
    except (InvalidView, ValueError) as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    set_timezone(config.timezone)
    logging.getLogger(__name__).debug(
        "Loaded configuration: views=%s, subscriptions=%d",
        config.views, len(config.ics_subscriptions)
    )

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Calendar View")
    app.setApplicationVersion("0.1")
    app.setStyle("Fusion")

    try:
        window = MainWindow(config)
    except ValueError as e:
        # Custom views need renderers supplied by an embedding host
        print(f"Error: {e}")
        sys.exit(1)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
