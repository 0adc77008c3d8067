"""
Main application window.

Lays out the editor canvas beside the export and history panel.
"""

import logging
from typing import Optional

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout,
    QPushButton, QLabel, QFormLayout, QDoubleSpinBox,
    QListWidget, QListWidgetItem, QPlainTextEdit, QGroupBox, QMessageBox,
)

from models import DataFormatError
from services import EditorSession, HistoryStore, SettingsManager, get_settings
from views.editor_canvas import EditorCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main window of the level shape editor."""

    def __init__(self, settings_manager: Optional[SettingsManager] = None):
        super().__init__()

        self.settings_manager = settings_manager or get_settings()
        self.store = HistoryStore(self.settings_manager.get_history_path())
        self.session = EditorSession(self.settings_manager.settings, self.store)

        self._setup_window()
        self._setup_menu()
        self._setup_central_widget()
        self._setup_status_bar()
        self._connect_signals()

        self._refresh_history()

    def _setup_window(self):
        """Configure window properties."""
        self.setWindowTitle("Level Shape Editor")
        self.resize(1100, 640)

        self.setStyleSheet("""
            QMainWindow {
                background: #2B2B2B;
            }
            QGroupBox {
                font-weight: 600;
            }
            QPlainTextEdit {
                font-family: monospace;
                font-size: 11px;
            }
        """)

    def _setup_menu(self):
        """Create menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")

        save_action = QAction("&Save to History", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self._on_save)
        file_menu.addAction(save_action)

        export_action = QAction("&Export Entities", self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self._on_export)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Edit menu
        edit_menu = menubar.addMenu("&Edit")

        recenter_action = QAction("&Recenter All Polygons", self)
        recenter_action.setShortcut(QKeySequence("Alt+P"))
        recenter_action.triggered.connect(self._on_recenter_all)
        edit_menu.addAction(recenter_action)

        clear_action = QAction("&Clear Shapes", self)
        clear_action.triggered.connect(self._on_clear_shapes)
        edit_menu.addAction(clear_action)

        self.snapping_action = QAction("&Snap to Vertices", self)
        self.snapping_action.setCheckable(True)
        self.snapping_action.setChecked(self.session.controller.snapping)
        self.snapping_action.toggled.connect(self._on_snapping_toggled)
        edit_menu.addAction(self.snapping_action)

        # View menu
        view_menu = menubar.addMenu("&View")

        reset_view_action = QAction("&Reset View", self)
        reset_view_action.triggered.connect(self._on_reset_view)
        view_menu.addAction(reset_view_action)

    def _setup_central_widget(self):
        """Create the canvas and the side panel."""
        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        self.canvas = EditorCanvas(self.session)
        layout.addWidget(self.canvas, stretch=1)

        panel = QWidget()
        panel.setFixedWidth(320)
        panel_layout = QVBoxLayout(panel)
        panel_layout.setContentsMargins(0, 0, 0, 0)

        # Export
        export_group = QGroupBox("Export")
        export_layout = QVBoxLayout(export_group)

        form = QFormLayout()
        self.scale_spin = QDoubleSpinBox()
        self.scale_spin.setDecimals(3)
        self.scale_spin.setRange(0.001, 1000.0)
        self.scale_spin.setSingleStep(0.1)
        self.scale_spin.setValue(self.session.view.scale)
        form.addRow("Scale:", self.scale_spin)
        export_layout.addLayout(form)

        self.export_btn = QPushButton("Export (Space)")
        export_layout.addWidget(self.export_btn)

        self.export_text = QPlainTextEdit()
        self.export_text.setReadOnly(True)
        export_layout.addWidget(self.export_text)
        panel_layout.addWidget(export_group, stretch=1)

        # History
        history_group = QGroupBox("History")
        history_layout = QVBoxLayout(history_group)

        self.history_list = QListWidget()
        history_layout.addWidget(self.history_list)

        buttons = QHBoxLayout()
        self.load_btn = QPushButton("Load")
        self.remove_btn = QPushButton("Remove")
        self.clear_btn = QPushButton("Clear")
        buttons.addWidget(self.load_btn)
        buttons.addWidget(self.remove_btn)
        buttons.addWidget(self.clear_btn)
        history_layout.addLayout(buttons)
        panel_layout.addWidget(history_group, stretch=1)

        hint = QLabel("A: add  D: delete  V: insert vertex  Alt: remove vertex\n"
                      "R: reset view  Alt+P: recenter  Space: export")
        hint.setStyleSheet("color: #9CA3AF; font-size: 11px;")
        panel_layout.addWidget(hint)

        layout.addWidget(panel)
        self.setCentralWidget(central)

    def _setup_status_bar(self):
        self.statusBar().showMessage("Ready")

    def _connect_signals(self):
        self.canvas.exported.connect(self._on_exported)
        self.canvas.shapesChanged.connect(self._on_shapes_changed)
        self.scale_spin.valueChanged.connect(self._on_scale_changed)
        self.export_btn.clicked.connect(self._on_export)
        self.load_btn.clicked.connect(self._on_load_entry)
        self.remove_btn.clicked.connect(self._on_remove_entry)
        self.clear_btn.clicked.connect(self._on_clear_history)
        self.history_list.itemDoubleClicked.connect(self._on_history_double_clicked)

    # =========================================================================
    # History
    # =========================================================================

    def _refresh_history(self):
        self.history_list.clear()
        for key in self.store.keys():
            self.history_list.addItem(QListWidgetItem(key))

    def _selected_key(self) -> Optional[str]:
        item = self.history_list.currentItem()
        return item.text() if item else None

    def _load_key(self, key: str):
        try:
            self.session.load_key(key)
        except (DataFormatError, KeyError) as e:
            logger.warning(f"Could not load '{key}': {e}")
            self.statusBar().showMessage(f"Could not load '{key}': {e}", 5000)
            return
        self.canvas.update()
        self.statusBar().showMessage(f"Loaded {key}", 3000)

    def _on_load_entry(self):
        key = self._selected_key()
        if key:
            self._load_key(key)

    def _on_history_double_clicked(self, item: QListWidgetItem):
        self._load_key(item.text())

    def _on_remove_entry(self):
        key = self._selected_key()
        if key and self.store.remove(key):
            self._refresh_history()
            self.statusBar().showMessage(f"Removed {key}", 2000)

    def _on_clear_history(self):
        reply = QMessageBox.question(
            self, "Clear History", "Clear history?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        self.store.clear()
        self._refresh_history()
        self.statusBar().showMessage("History cleared", 2000)

    # =========================================================================
    # Actions
    # =========================================================================

    def _on_save(self):
        key = self.session.save()
        self._refresh_history()
        self.statusBar().showMessage(f"Saved {key}", 3000)

    def _on_export(self):
        self.canvas.export(self.scale_spin.value())

    def _on_exported(self, data: str):
        self.export_text.setPlainText(data)
        self._refresh_history()
        self.statusBar().showMessage("Exported physics entities", 3000)

    def _on_scale_changed(self, value: float):
        self.session.view.set_scale(value)
        self.canvas.update()

    def _on_recenter_all(self):
        self.canvas.recenter_all()

    def _on_clear_shapes(self):
        self.session.clear()
        self.canvas.update()

    def _on_reset_view(self):
        self.canvas.reset_view()

    def _on_snapping_toggled(self, checked: bool):
        self.session.controller.snapping = checked

    def _on_shapes_changed(self):
        count = len(self.session.shapes)
        self.statusBar().showMessage(f"{count} shape(s)", 2000)

    def closeEvent(self, event):
        """Handle window close - save settings."""
        settings = self.settings_manager.settings
        settings.export.scale = self.session.view.scale
        settings.edit.snapping = self.session.controller.snapping
        self.settings_manager.save()
        super().closeEvent(event)
