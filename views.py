"""View layer: Qt widgets for display and interaction.

Contains MonthView (6-week grid), YearView (12 mini months), and
StickerPickerDialog. Views only render engine output and emit the Day Key
the user clicked; they never touch application state.
"""

import io

from PIL import Image
from PySide6.QtCore import Qt, QSize, Signal
from PySide6.QtGui import QFont, QIcon, QImage, QPixmap
from PySide6.QtWidgets import (
    QWidget, QDialog, QDialogButtonBox, QComboBox, QGridLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QListView, QPushButton, QToolButton,
    QVBoxLayout, QHBoxLayout,
)

from catalog import image_path
from daykey import day_key
from models import (
    Catalog, StickerRecord,
    GRID_COLS, GRID_ROWS, MONTHS, WEEKDAYS,
)

DAY_ICON = 40
MINI_ICON = 14
PICKER_ICON = 64


# === Pixmap cache ===

class StickerPixmaps:
    """Loads sticker images from the sticker directory, once per file."""

    def __init__(self, base_dir: str):
        self.base_dir = base_dir
        self._cache: dict[str, QPixmap | None] = {}

    def get(self, record: StickerRecord | None) -> QPixmap | None:
        if record is None:
            return None
        if record.file not in self._cache:
            self._cache[record.file] = self._load(image_path(record, self.base_dir))
        return self._cache[record.file]

    def icon(self, record: StickerRecord | None) -> QIcon:
        pix = self.get(record)
        return QIcon(pix) if pix is not None else QIcon()

    @staticmethod
    def _load(path: str) -> QPixmap | None:
        """Normalize through Pillow to RGBA PNG so odd palettes load cleanly."""
        try:
            img = Image.open(path)
            img.load()
        except OSError:
            return None
        img = img.convert("RGBA")
        img.thumbnail((PICKER_ICON * 2, PICKER_ICON * 2))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        qimg = QImage()
        qimg.loadFromData(buf.getvalue())
        return QPixmap.fromImage(qimg)

    def invalidate(self):
        self._cache.clear()


# === Month view ===

class MonthView(QWidget):
    """Month grid: 42 clickable days including neighbouring-month days."""

    day_clicked = Signal(str)

    def __init__(self, pixmaps: StickerPixmaps, parent=None):
        super().__init__(parent)
        self._pixmaps = pixmaps

        layout = QVBoxLayout(self)

        self.title_label = QLabel()
        font = QFont()
        font.setPointSize(16)
        font.setBold(True)
        self.title_label.setFont(font)
        layout.addWidget(self.title_label)

        self.count_label = QLabel()
        layout.addWidget(self.count_label)

        grid = QGridLayout()
        grid.setSpacing(4)
        for col, name in enumerate(WEEKDAYS):
            header = QLabel(name)
            header.setAlignment(Qt.AlignmentFlag.AlignCenter)
            grid.addWidget(header, 0, col)

        self.day_buttons: list[QToolButton] = []
        for i in range(GRID_ROWS * GRID_COLS):
            btn = QToolButton()
            btn.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextUnderIcon)
            btn.setIconSize(QSize(DAY_ICON, DAY_ICON))
            btn.setMinimumSize(DAY_ICON + 16, DAY_ICON + 24)
            btn.clicked.connect(lambda _checked=False, b=btn: self.day_clicked.emit(b.property("dayKey")))
            grid.addWidget(btn, 1 + i // GRID_COLS, i % GRID_COLS)
            self.day_buttons.append(btn)
        layout.addLayout(grid)
        layout.addStretch()

    def refresh(self, engine):
        today_key = day_key(engine.today())
        self.title_label.setText(f"{MONTHS[engine.month]} {engine.year}")
        self.count_label.setText(f"{engine.count_for_month()} days stickered")

        for btn, cell in zip(self.day_buttons, engine.month_grid()):
            record = engine.record_for(cell.day_key)
            btn.setProperty("dayKey", cell.day_key)
            btn.setProperty("outside", cell.is_outside_month)
            btn.setText(str(cell.date.day))
            btn.setIcon(self._pixmaps.icon(record))
            btn.setToolTip(f"{cell.day_key}: {record.label}" if record else cell.day_key)
            btn.setAccessibleName(f"Day {cell.day_key}")
            font = btn.font()
            font.setBold(cell.day_key == today_key)
            btn.setFont(font)
            btn.setStyleSheet("color: gray;" if cell.is_outside_month else "")


# === Year view ===

class YearView(QWidget):
    """Twelve mini months. Blank padding, no neighbouring-month days."""

    day_clicked = Signal(str)

    def __init__(self, pixmaps: StickerPixmaps, parent=None):
        super().__init__(parent)
        self._pixmaps = pixmaps
        self._grid = QGridLayout(self)
        self._grid.setSpacing(12)
        self.month_widgets: list[QWidget] = []
        self.day_buttons: dict[str, QToolButton] = {}

    def _clear(self):
        for w in self.month_widgets:
            self._grid.removeWidget(w)
            w.deleteLater()
        self.month_widgets = []
        self.day_buttons = {}

    def refresh(self, engine):
        self._clear()
        for m, cells in enumerate(engine.year_grid()):
            self.month_widgets.append(self._build_month(engine, m, cells))
            self._grid.addWidget(self.month_widgets[-1], m // 4, m % 4)

    def _build_month(self, engine, month: int, cells) -> QWidget:
        card = QWidget()
        layout = QVBoxLayout(card)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QLabel(f"{MONTHS[month]} {engine.year}"))

        mini = QGridLayout()
        mini.setSpacing(1)
        for i, cell in enumerate(cells):
            row, col = divmod(i, GRID_COLS)
            if cell is None:
                mini.addWidget(QLabel(""), row, col)
                continue
            btn = QToolButton()
            btn.setFixedSize(MINI_ICON + 6, MINI_ICON + 6)
            btn.setIconSize(QSize(MINI_ICON, MINI_ICON))
            btn.setAccessibleName(cell.day_key)
            btn.setProperty("dayKey", cell.day_key)
            record = engine.record_for(cell.day_key)
            if record is not None:
                btn.setIcon(self._pixmaps.icon(record))
                btn.setToolTip(f"{cell.day_key}: {record.label}")
            else:
                btn.setText("·")
                btn.setToolTip(cell.day_key)
            btn.clicked.connect(lambda _checked=False, k=cell.day_key: self.day_clicked.emit(k))
            mini.addWidget(btn, row, col)
            self.day_buttons[cell.day_key] = btn
        layout.addLayout(mini)
        return card


# === Sticker Picker Dialog ===

class StickerPickerDialog(QDialog):
    """Modal picker for the sticker of one day.

    After ``exec()``: ``chosen_sticker()`` is the picked id, or
    ``wants_removal()`` is True, or neither (closed without change).
    """

    def __init__(self, catalog: Catalog, pixmaps: StickerPixmaps, key: str,
                 current: StickerRecord | None = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(key)
        self.resize(560, 520)
        self._catalog = catalog
        self._pixmaps = pixmaps
        self._chosen: str | None = None
        self._remove = False

        layout = QVBoxLayout(self)

        heading = QLabel(key if current is None else f"{key} \u2014 {current.label}")
        layout.addWidget(heading)

        filters = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search stickers")
        self.search_edit.textChanged.connect(self._refresh_list)
        filters.addWidget(self.search_edit, 1)

        self.category_combo = QComboBox()
        self.category_combo.addItem("All categories", "")
        for cat in catalog.categories():
            self.category_combo.addItem(cat, cat)
        self.category_combo.currentIndexChanged.connect(self._refresh_list)
        filters.addWidget(self.category_combo)
        layout.addLayout(filters)

        self.sticker_list = QListWidget()
        self.sticker_list.setViewMode(QListView.ViewMode.IconMode)
        self.sticker_list.setIconSize(QSize(PICKER_ICON, PICKER_ICON))
        self.sticker_list.setResizeMode(QListView.ResizeMode.Adjust)
        self.sticker_list.setMovement(QListView.Movement.Static)
        self.sticker_list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self.sticker_list, 1)

        btn_row = QHBoxLayout()
        self.remove_button = QPushButton("Remove Sticker")
        self.remove_button.clicked.connect(self._on_remove)
        btn_row.addWidget(self.remove_button)
        btn_row.addStretch()
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        btn_row.addWidget(buttons)
        layout.addLayout(btn_row)

        self._refresh_list()

    def _refresh_list(self):
        self.sticker_list.clear()
        found = self._catalog.search(self.search_edit.text(), self.category_combo.currentData() or "")
        for record in found:
            item = QListWidgetItem(self._pixmaps.icon(record), record.label)
            item.setData(Qt.ItemDataRole.UserRole, record.id)
            item.setToolTip(record.id)
            self.sticker_list.addItem(item)

    def _on_item_clicked(self, item: QListWidgetItem):
        self._chosen = item.data(Qt.ItemDataRole.UserRole)
        self.accept()

    def _on_remove(self):
        self._remove = True
        self.accept()

    def chosen_sticker(self) -> str | None:
        return self._chosen

    def wants_removal(self) -> bool:
        return self._remove
