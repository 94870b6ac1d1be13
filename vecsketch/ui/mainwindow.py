"""
VecSketch Main Window

Toolbar, menus and status bar around the editor canvas.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PyQt6.QtWidgets import (
    QMainWindow, QToolBar, QStatusBar, QScrollArea, QComboBox,
    QToolButton, QMenu, QFileDialog, QMessageBox, QLabel
)
from PyQt6.QtCore import Qt, QSettings
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence, QColor, QPixmap, QIcon

from ..core.settings import EditorSettings, FILL_PALETTE, STROKE_PALETTE
from ..core.shapes import ShapeKind
from ..graphics.editor import ShapeEditor, EditorMode
from .canvas import EditorCanvas

logger = logging.getLogger(__name__)

_TOOLS = [
    ("Rectangle", ShapeKind.RECTANGLE),
    ("Ellipse", ShapeKind.ELLIPSE),
    ("Line", ShapeKind.LINE),
    ("Polygon", ShapeKind.POLYGON),
]


def _swatch(color: str, size: int = 16) -> QIcon:
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(color))
    return QIcon(pixmap)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Optional[EditorSettings] = None):
        super().__init__()

        self.editor = ShapeEditor(settings=settings)

        self.setWindowTitle("VecSketch")
        self.setMinimumSize(900, 700)

        # Setup UI components
        self._create_actions()
        self._create_menus()
        self._create_toolbars()
        self._create_central_widget()
        self._create_status_bar()

        # Load settings
        self._load_settings()

        # Connect signals
        self._connect_signals()
        self._update_color_buttons()

    def _create_actions(self):
        """Create all menu/toolbar actions."""

        # File actions
        self.action_new = QAction("&New", self)
        self.action_new.setShortcut(QKeySequence.StandardKey.New)
        self.action_new.setStatusTip("Clear the canvas")
        self.action_new.triggered.connect(self._on_new)

        self.action_save = QAction("&Save as SVG...", self)
        self.action_save.setShortcut(QKeySequence.StandardKey.Save)
        self.action_save.setStatusTip("Export the drawing to an SVG file")
        self.action_save.triggered.connect(self._on_save)

        self.action_exit = QAction("E&xit", self)
        self.action_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self.action_exit.triggered.connect(self.close)

        # Edit actions
        self.action_undo = QAction("&Undo", self)
        self.action_undo.setShortcut(QKeySequence.StandardKey.Undo)
        self.action_undo.setStatusTip("Nothing to undo")
        self.action_undo.triggered.connect(self._on_undo)

        self.action_delete = QAction("&Delete", self)
        self.action_delete.setShortcut(QKeySequence.StandardKey.Delete)
        self.action_delete.setEnabled(False)
        self.action_delete.triggered.connect(self._on_delete)

        # Mode actions
        self.action_draw_mode = QAction("Draw", self)
        self.action_draw_mode.setCheckable(True)
        self.action_draw_mode.setChecked(True)
        self.action_draw_mode.setStatusTip("Click and drag to create shapes")
        self.action_draw_mode.triggered.connect(
            lambda: self.editor.set_mode(EditorMode.CREATING))

        self.action_edit_mode = QAction("Edit", self)
        self.action_edit_mode.setCheckable(True)
        self.action_edit_mode.setStatusTip("Select, move and resize shapes")
        self.action_edit_mode.triggered.connect(
            lambda: self.editor.set_mode(EditorMode.EDITING))

        self.mode_group = QActionGroup(self)
        self.mode_group.addAction(self.action_draw_mode)
        self.mode_group.addAction(self.action_edit_mode)

    def _create_menus(self):
        """Create menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction(self.action_new)
        file_menu.addAction(self.action_save)
        file_menu.addSeparator()
        file_menu.addAction(self.action_exit)

        edit_menu = menubar.addMenu("&Edit")
        edit_menu.addAction(self.action_undo)
        edit_menu.addAction(self.action_delete)

    def _create_toolbars(self):
        """Create toolbar with mode, tool and color controls."""
        toolbar = QToolBar("Tools")
        toolbar.setObjectName("ToolsToolbar")
        self.addToolBar(toolbar)

        toolbar.addAction(self.action_draw_mode)
        toolbar.addAction(self.action_edit_mode)
        toolbar.addSeparator()

        toolbar.addWidget(QLabel(" Shape: "))
        self.tool_combo = QComboBox()
        for name, _kind in _TOOLS:
            self.tool_combo.addItem(name)
        self.tool_combo.currentIndexChanged.connect(self._on_tool_changed)
        toolbar.addWidget(self.tool_combo)
        toolbar.addSeparator()

        self.fill_button = self._create_color_button("Fill", FILL_PALETTE, self._on_fill_color)
        toolbar.addWidget(self.fill_button)
        self.stroke_button = self._create_color_button("Stroke", STROKE_PALETTE, self._on_stroke_color)
        toolbar.addWidget(self.stroke_button)
        toolbar.addSeparator()

        toolbar.addAction(self.action_delete)
        toolbar.addAction(self.action_undo)
        toolbar.addAction(self.action_save)

    def _create_color_button(self, label: str, palette: List[Tuple[str, str]],
                             handler) -> QToolButton:
        button = QToolButton()
        button.setText(label)
        button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        button.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)

        menu = QMenu(button)
        for name, color in palette:
            action = menu.addAction(_swatch(color), name)
            action.triggered.connect(lambda _checked=False, c=color: handler(c))
        button.setMenu(menu)
        return button

    def _create_central_widget(self):
        """Create the canvas inside a scroll area."""
        self.canvas = EditorCanvas(self.editor)
        scroll = QScrollArea()
        scroll.setWidget(self.canvas)
        scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCentralWidget(scroll)

    def _create_status_bar(self):
        """Create status bar."""
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Ready")

    def _connect_signals(self):
        self.editor.history_changed.connect(self._on_history_changed)
        self.editor.selection_changed.connect(self._on_selection_changed)
        self.editor.mode_changed.connect(self._on_mode_changed)
        self.editor.notification.connect(self._on_notification)

    def _load_settings(self):
        """Load application settings."""
        settings = QSettings("VecSketch", "VecSketch")

        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

        state = settings.value("windowState")
        if state:
            self.restoreState(state)

        tool_index = settings.value("toolIndex", 0, type=int)
        if 0 <= tool_index < len(_TOOLS):
            self.tool_combo.setCurrentIndex(tool_index)

        for key, apply in (("fillColor", self.editor.set_fill_color),
                           ("strokeColor", self.editor.set_stroke_color)):
            color = settings.value(key)
            if color:
                try:
                    apply(color)
                except ValueError:
                    logger.warning(f"Ignoring invalid saved {key}: {color!r}")

    def _save_settings(self):
        """Save application settings."""
        settings = QSettings("VecSketch", "VecSketch")
        settings.setValue("geometry", self.saveGeometry())
        settings.setValue("windowState", self.saveState())
        settings.setValue("toolIndex", self.tool_combo.currentIndex())
        settings.setValue("fillColor", self.editor.fill_color)
        settings.setValue("strokeColor", self.editor.stroke_color)

    def closeEvent(self, event):
        """Handle window close."""
        self._save_settings()
        event.accept()

    # Action handlers

    def _on_new(self):
        self.editor.new_document()
        self.status_bar.showMessage("New drawing", 3000)

    def _choose_svg_target(self) -> Optional[str]:
        filepath, _ = QFileDialog.getSaveFileName(
            self,
            "Save as SVG",
            "",
            "SVG Files (*.svg);;All Files (*)"
        )
        if not filepath:
            return None
        if Path(filepath).suffix == "":
            filepath += ".svg"
        return filepath

    def _on_save(self):
        self.editor.export_svg(self._choose_svg_target)

    def _on_undo(self):
        self.editor.undo()

    def _on_delete(self):
        self.editor.delete_selected()

    def _on_tool_changed(self, index: int):
        if 0 <= index < len(_TOOLS):
            self.editor.set_tool(_TOOLS[index][1])

    def _on_fill_color(self, color: str):
        self.editor.set_fill_color(color)
        self._update_color_buttons()

    def _on_stroke_color(self, color: str):
        self.editor.set_stroke_color(color)
        self._update_color_buttons()

    def _on_selection_changed(self, shape):
        self.action_delete.setEnabled(shape is not None)
        self._update_color_buttons()

    def _on_mode_changed(self, mode: EditorMode):
        self.action_draw_mode.setChecked(mode == EditorMode.CREATING)
        self.action_edit_mode.setChecked(mode == EditorMode.EDITING)
        self._update_color_buttons()

    def _on_history_changed(self, can_undo: bool):
        self.action_undo.setStatusTip("Undo the last action" if can_undo else "Nothing to undo")

    def _on_notification(self, message: str, level: str):
        if level == "error":
            QMessageBox.warning(self, "VecSketch", message)
        self.status_bar.showMessage(message, 3000)

    def _update_color_buttons(self):
        """Show the colors a click would change, with a matching tooltip."""
        shape = self.editor.selected_shape
        editing = self.editor.mode == EditorMode.EDITING and shape is not None

        fill = shape.fill_color if editing and shape.has_fill else self.editor.fill_color
        stroke = shape.stroke_color if editing else self.editor.stroke_color
        self.fill_button.setIcon(_swatch(fill))
        self.stroke_button.setIcon(_swatch(stroke))

        target = "the selected shape" if editing else "new shapes"
        self.fill_button.setToolTip(f"Fill color for {target}")
        self.stroke_button.setToolTip(f"Stroke color for {target}")
