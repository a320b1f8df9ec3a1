"""Sticker Year: one sticker per calendar day, browsed by month or year.

Usage:
    python sticker_year.py [--catalog stickers.json] [--stickers-dir stickers] [--debug]
"""

import argparse
import logging
import sys

from PySide6.QtWidgets import QMessageBox

from catalog import load_catalog
from controller import MainWindow, StickerYearApp
from engine import CalendarEngine
from models import CATALOG_FILE, STICKERS_DIR, CatalogLoadError
from storage import SettingsStorage


# === Entry Point ===

def main():
    parser = argparse.ArgumentParser(description="Sticker Year")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--catalog", default=CATALOG_FILE, help="Sticker catalog JSON feed")
    parser.add_argument("--stickers-dir", default=STICKERS_DIR, help="Directory of sticker images")
    parser.add_argument("--settings", default=None,
                        help="Keep state in this INI file instead of the user settings store")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    app = StickerYearApp(sys.argv)

    # The catalog must be loaded before anything is offered to the user
    try:
        catalog = load_catalog(args.catalog)
    except CatalogLoadError as e:
        logging.getLogger(__name__).error("%s", e)
        QMessageBox.critical(None, "Sticker Year", f"Could not load stickers:\n{e}")
        sys.exit(1)

    storage = SettingsStorage.at_path(args.settings) if args.settings else SettingsStorage()
    engine = CalendarEngine(storage, catalog)
    window = MainWindow(engine, args.stickers_dir)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
