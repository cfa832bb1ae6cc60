"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the cup controls and the
3D scene.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the pour controls to the currently selected cup and
   keeps the cup selector in sync with the CupRegistry.
"""
import logging
from typing import List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSplitter, QComboBox, QPushButton
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction

from bubbletea.model.liquids import LiquidCatalog
from bubbletea.view.scene import CupHandle, CupRegistry
from bubbletea.view.tabs.tab_pour import PourControlPanel
from bubbletea.view.widgets.plot_3d import PyVistaWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Bubble Tea: Kelímek"

# Distance between neighbouring cups along X
CUP_SPACING: float = 1.6


class MainWindow(QMainWindow):
    def __init__(self, registry: CupRegistry, catalog: LiquidCatalog) -> None:
        super().__init__()
        self.registry = registry
        self.catalog = catalog
        self._handles: List[CupHandle] = []

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 800)

        # --- MAIN CONTAINER ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Cup selector + Pour controls ---
        sidebar = QWidget()
        sidebar_layout = QVBoxLayout(sidebar)

        selector_row = QHBoxLayout()
        self.cup_combo = QComboBox()
        self.cup_combo.currentIndexChanged.connect(self.on_cup_selected)
        selector_row.addWidget(self.cup_combo, stretch=1)

        self.btn_new_cup = QPushButton("Nový kelímek")
        self.btn_new_cup.clicked.connect(self.on_new_cup)
        selector_row.addWidget(self.btn_new_cup)

        self.btn_remove_cup = QPushButton("Odebrat")
        self.btn_remove_cup.clicked.connect(self.on_remove_cup)
        selector_row.addWidget(self.btn_remove_cup)

        sidebar_layout.addLayout(selector_row)

        self.pour_panel = PourControlPanel(self.catalog)
        sidebar_layout.addWidget(self.pour_panel)

        splitter.addWidget(sidebar)

        # --- RIGHT SIDE: Shared 3D Visualization ---
        self.visualizer = PyVistaWidget(self.registry)
        splitter.addWidget(self.visualizer)

        # Set initial proportions (1 part sidebar : 3 parts 3D view)
        splitter.setSizes([300, 900])

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Start with one empty cup
        self.on_new_cup()
        self.visualizer.refresh()
        self.visualizer.reset_camera()

    def _create_actions(self) -> None:
        self.act_new_cup = QAction("Nový kelímek", self)
        self.act_new_cup.setShortcut("Ctrl+N")
        self.act_new_cup.triggered.connect(self.on_new_cup)

        self.act_blend = QAction("Promíchat", self)
        self.act_blend.setShortcut("Ctrl+B")
        self.act_blend.triggered.connect(self.pour_panel.on_blend)

        self.act_exit = QAction("Ukončit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        cup_menu = menu_bar.addMenu("&Kelímek")
        cup_menu.addAction(self.act_new_cup)
        cup_menu.addAction(self.act_blend)
        cup_menu.addSeparator()
        cup_menu.addAction(self.act_exit)

    # --- HELPER METHODS ---
    def current_handle(self) -> Optional[CupHandle]:
        index = self.cup_combo.currentIndex()
        if 0 <= index < len(self._handles):
            return self._handles[index]
        return None

    def _next_position(self) -> tuple:
        if not self._handles:
            return (0.0, 0.0, 0.0)
        return (max(h.position[0] for h in self._handles) + CUP_SPACING, 0.0, 0.0)

    # --- SLOTS ---
    def on_new_cup(self) -> None:
        handle = self.registry.create(position=self._next_position())
        self._handles.append(handle)
        self.cup_combo.addItem(f"Kelímek {handle.number}")
        self.cup_combo.setCurrentIndex(len(self._handles) - 1)

    def on_remove_cup(self) -> None:
        handle = self.current_handle()
        if handle is None: return

        index = self._handles.index(handle)
        self.visualizer.remove_cup(handle)
        self._handles.pop(index)
        self.cup_combo.removeItem(index)
        logger.info(f"Removed cup {handle.cup_id[:8]}")

    def on_cup_selected(self, index: int) -> None:
        handle = self.current_handle()
        self.pour_panel.set_cup(self.registry.get(handle) if handle else None)
        self.btn_remove_cup.setEnabled(handle is not None)

    def closeEvent(self, event) -> None:
        self.visualizer.close()
        event.accept()
