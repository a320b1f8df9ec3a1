"""Controller layer: MainWindow and StickerYearApp.

Orchestrates the engine, the catalog, and the views. Every user action is
one engine call followed by a re-render.
"""

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QStatusBar, QFileDialog, QMessageBox, QDialog,
    QComboBox, QStackedWidget, QToolBar,
)

from calendar_grid import supports_month
from codec import export_filename
from engine import CalendarEngine
from models import (
    ImportValidationError, JSON_FILTER, MONTHS, SETTINGS_ORG, VIEW_MONTH,
)
from views import MonthView, YearView, StickerPickerDialog, StickerPixmaps

log = logging.getLogger(__name__)

YEAR_SPAN = 5  # year selector shows this year +/- 5


# === MainWindow ===

class MainWindow(QMainWindow):
    """Top-level window: toolbar, month/year views, status bar."""

    def __init__(self, engine: CalendarEngine, stickers_dir: str):
        super().__init__()
        self.engine = engine
        self.pixmaps = StickerPixmaps(stickers_dir)

        self.setWindowTitle("Sticker Year")
        self.resize(900, 760)

        self.month_view = MonthView(self.pixmaps)
        self.year_view = YearView(self.pixmaps)
        self.month_view.day_clicked.connect(self._on_day_clicked)
        self.year_view.day_clicked.connect(self._on_day_clicked)

        self._stack = QStackedWidget()
        self._stack.addWidget(self.month_view)
        self._stack.addWidget(self.year_view)
        self.setCentralWidget(self._stack)

        self._build_menus()
        self._build_toolbar()
        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self.render()

    def _build_menus(self):
        mb = self.menuBar()

        # --- File menu ---
        file_menu = mb.addMenu("&File")

        act = QAction("&Export...", self)
        act.setShortcut(QKeySequence.StandardKey.Save)
        act.triggered.connect(self._export)
        file_menu.addAction(act)

        act = QAction("&Import...", self)
        act.setShortcut(QKeySequence.StandardKey.Open)
        act.triggered.connect(self._import)
        file_menu.addAction(act)

        file_menu.addSeparator()

        act = QAction("&Quit", self)
        act.setShortcut(QKeySequence.StandardKey.Quit)
        act.triggered.connect(self.close)
        file_menu.addAction(act)

        # --- Edit menu ---
        edit_menu = mb.addMenu("&Edit")

        act = QAction("&Clear This Year...", self)
        act.triggered.connect(self._clear_year)
        edit_menu.addAction(act)

        # --- View menu ---
        view_menu = mb.addMenu("&View")

        self._prev_action = QAction("&Previous Month", self)
        self._prev_action.setShortcut(QKeySequence(Qt.Key.Key_Left))
        self._prev_action.triggered.connect(lambda: self._navigate(self.engine.shift_month, -1))
        view_menu.addAction(self._prev_action)

        self._next_action = QAction("&Next Month", self)
        self._next_action.setShortcut(QKeySequence(Qt.Key.Key_Right))
        self._next_action.triggered.connect(lambda: self._navigate(self.engine.shift_month, 1))
        view_menu.addAction(self._next_action)

        self._today_action = QAction("&Today", self)
        self._today_action.setShortcut(QKeySequence("Ctrl+T"))
        self._today_action.triggered.connect(lambda: self._navigate(self.engine.jump_to_today))
        view_menu.addAction(self._today_action)

        view_menu.addSeparator()

        self._toggle_action = QAction("Year View", self)
        self._toggle_action.setShortcut(QKeySequence("Ctrl+Y"))
        self._toggle_action.triggered.connect(lambda: self._navigate(self.engine.toggle_view))
        view_menu.addAction(self._toggle_action)

    def _build_toolbar(self):
        tb = QToolBar("Navigation")
        tb.setMovable(False)
        self.addToolBar(tb)

        tb.addAction(self._prev_action)
        tb.addAction(self._next_action)
        tb.addAction(self._today_action)
        tb.addSeparator()

        self.month_combo = QComboBox()
        for i, name in enumerate(MONTHS):
            self.month_combo.addItem(name, i)
        self.month_combo.activated.connect(
            lambda idx: self._navigate(self.engine.set_month, self.month_combo.itemData(idx)))
        tb.addWidget(self.month_combo)

        self.year_combo = QComboBox()
        self.year_combo.activated.connect(
            lambda idx: self._navigate(self.engine.set_year, self.year_combo.itemData(idx)))
        tb.addWidget(self.year_combo)

        tb.addSeparator()
        tb.addAction(self._toggle_action)

    # --- Rendering ---

    def render(self):
        """Redraw everything from engine state."""
        engine = self.engine
        self._sync_selectors()
        if engine.view == VIEW_MONTH:
            self.month_view.refresh(engine)
            self._stack.setCurrentWidget(self.month_view)
            self._toggle_action.setText("Year View")
        else:
            self.year_view.refresh(engine)
            self._stack.setCurrentWidget(self.year_view)
            self._toggle_action.setText("Month View")
        self._update_status()

    def _sync_selectors(self):
        base = self.engine.today().year
        nearby = {y for y in range(base - YEAR_SPAN, base + YEAR_SPAN + 1)
                  if supports_month(y, self.engine.month)}
        years = sorted(nearby | {self.engine.year})
        self.year_combo.clear()
        for y in years:
            self.year_combo.addItem(str(y), y)
        self.year_combo.setCurrentIndex(years.index(self.engine.year))
        self.month_combo.setCurrentIndex(self.engine.month)

    def _update_status(self):
        engine = self.engine
        n = engine.count_for_month()
        text = (f"{n} day{'s' if n != 1 else ''} stickered in "
                f"{MONTHS[engine.month]} {engine.year} | {len(engine.catalog)} stickers")
        if not engine.persistent:
            text += " | Not saving: storage unavailable"
        self._status.showMessage(text)

    def _navigate(self, operation, *args):
        try:
            operation(*args)
        except ValueError as e:
            log.info("Navigation refused: %s", e)
            self._status.showMessage(str(e), 5000)
            return
        self.render()

    # --- Editing ---

    def _on_day_clicked(self, key: str):
        try:
            self.engine.select_day(key)
        except ValueError as e:
            log.info("Selection refused: %s", e)
            self._status.showMessage(str(e), 5000)
            return
        self.render()
        action, sticker_id = self._run_picker(key)
        if action == "pick":
            self.engine.pick_sticker(sticker_id)
        elif action == "remove":
            self.engine.remove_selected_sticker()
        else:
            self.engine.close_selection()
        self.render()

    def _run_picker(self, key: str) -> tuple[str | None, str | None]:
        """Show the picker; returns ("pick", id), ("remove", None) or (None, None)."""
        dlg = StickerPickerDialog(self.engine.catalog, self.pixmaps, key,
                                  self.engine.record_for(key), self)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            return None, None
        if dlg.wants_removal():
            return "remove", None
        if dlg.chosen_sticker() is not None:
            return "pick", dlg.chosen_sticker()
        return None, None

    def _clear_year(self):
        year = self.engine.year
        reply = QMessageBox.question(
            self, "Clear Year",
            f"Clear all stickers for {year}?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        self.engine.clear_year(year)
        self.render()

    # --- Export / Import ---

    def _export(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Stickers", export_filename(self.engine.snapshot()), JSON_FILTER)
        if not path:
            return
        self.export_file(path)

    def export_file(self, path: str) -> bool:
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.engine.export_document())
            return True
        except OSError as e:
            QMessageBox.critical(self, "Export Error", f"Could not write file:\n{e}")
            return False

    def _import(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import Stickers", "", JSON_FILTER)
        if not path:
            return
        if self.import_file(path):
            QMessageBox.information(self, "Import", "Imported!")

    def import_file(self, path: str) -> bool:
        """Read and merge an export file. State is untouched on any failure."""
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            QMessageBox.critical(self, "Import Error", f"Could not read file:\n{e}")
            return False
        try:
            self.engine.import_text(data)
        except ImportValidationError as e:
            QMessageBox.warning(self, "Import Error", str(e))
            return False
        self.pixmaps.invalidate()
        self.render()
        return True


# === StickerYearApp ===

class StickerYearApp(QApplication):
    """QApplication with the organization/application names QSettings uses."""

    def __init__(self, argv):
        super().__init__(argv)
        self.setOrganizationName(SETTINGS_ORG)
        self.setApplicationName("Sticker Year")
