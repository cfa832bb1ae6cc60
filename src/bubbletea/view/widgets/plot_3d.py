"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

from typing import Optional

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent

from pyvistaqt import QtInteractor

from bubbletea.view.scene import CupHandle, CupRegistry, CupScene

logger = logging.getLogger(__name__)

# Display refresh period
REFRESH_INTERVAL_MS: int = 33


class PyVistaWidget(QWidget):
    def __init__(self, registry: CupRegistry, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        self.scene = CupScene(self.plotter, registry)

        # Models are mutated by UI slots; redraw happens on the next tick only
        self._refresh_timer = QTimer(self)
        self._refresh_timer.setInterval(REFRESH_INTERVAL_MS)
        self._refresh_timer.timeout.connect(self.refresh)
        self._refresh_timer.start()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def refresh(self) -> None:
        self.scene.refresh()

    def remove_cup(self, handle: CupHandle) -> None:
        self.scene.remove_cup(handle)
        self.plotter.render()

    def reset_camera(self) -> None:
        self.plotter.reset_camera()

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("white")
        self.plotter.add_axes()
        self.plotter.camera_position = [(3.0, 3.5, 6.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0)]

    def closeEvent(self, event: QCloseEvent) -> None:
        self._refresh_timer.stop()
        self.plotter.close()
        event.accept()
