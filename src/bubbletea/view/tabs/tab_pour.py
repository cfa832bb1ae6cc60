"""
Pour Control Panel
"""
import logging
from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QDoubleSpinBox, QGroupBox, QFormLayout, QGridLayout
)
from PySide6.QtCore import Signal, Qt

from bubbletea.model.cup import CupLiquids
from bubbletea.model.liquids import LiquidCatalog

logger = logging.getLogger(__name__)


class PourControlPanel(QWidget):
    # Emitted after any change of the cup contents
    contents_changed = Signal()

    def __init__(self, catalog: LiquidCatalog) -> None:
        super().__init__()
        self.catalog = catalog
        self.cup: Optional[CupLiquids] = None

        layout = QVBoxLayout(self)

        # --- Amount ---
        grp_amount = QGroupBox("Množství")
        form = QFormLayout(grp_amount)

        self.amount_spin = QDoubleSpinBox()
        self.amount_spin.setRange(0.01, 1.0)
        self.amount_spin.setSingleStep(0.05)
        self.amount_spin.setValue(0.1)
        form.addRow("Objem jedné dávky:", self.amount_spin)

        layout.addWidget(grp_amount)

        # --- Liquids ---
        grp_liquids = QGroupBox("Nalít")
        grid = QGridLayout(grp_liquids)
        for i, name in enumerate(self.catalog.get_names()):
            liquid = self.catalog.get_type(name)
            btn = QPushButton(name)
            btn.setToolTip(liquid.description)
            btn.setStyleSheet(f"QPushButton {{ border-left: 12px solid {liquid.color.to_hex()[:7]}; }}")
            btn.clicked.connect(lambda _=False, n=name: self.on_pour_liquid(n))
            grid.addWidget(btn, i // 2, i % 2)
        layout.addWidget(grp_liquids)

        # --- Presets ---
        grp_presets = QGroupBox("Směsi")
        presets_layout = QVBoxLayout(grp_presets)
        for name in self.catalog.get_preset_names():
            btn = QPushButton(name)
            btn.clicked.connect(lambda _=False, n=name: self.on_pour_preset(n))
            presets_layout.addWidget(btn)
        layout.addWidget(grp_presets)

        # --- Actions ---
        self.btn_pour_out = QPushButton("Odlít")
        self.btn_pour_out.clicked.connect(self.on_pour_out)
        layout.addWidget(self.btn_pour_out)

        self.btn_blend = QPushButton("Promíchat")
        self.btn_blend.setMinimumHeight(40)
        self.btn_blend.clicked.connect(self.on_blend)
        layout.addWidget(self.btn_blend)

        self.btn_empty = QPushButton("Vylít vše")
        self.btn_empty.clicked.connect(self.on_empty)
        layout.addWidget(self.btn_empty)

        # --- Status Info ---
        self.lbl_status = QLabel("Stav: Kelímek je prázdný.")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)

        layout.addStretch()
        self.set_cup(None)

    def set_cup(self, cup: Optional[CupLiquids]) -> None:
        """Switch the panel to another cup (None disables the actions)."""
        self.cup = cup
        self.setEnabled(cup is not None)
        self._update_status()

    # --- Slots ---
    def on_pour_liquid(self, name: str) -> None:
        if self.cup is None: return
        self.cup.add(self.catalog.get_type(name), self.amount_spin.value())
        self._changed()

    def on_pour_preset(self, name: str) -> None:
        if self.cup is None: return
        self.cup.add(self.catalog.get_preset(name), self.amount_spin.value())
        self._changed()

    def on_pour_out(self) -> None:
        if self.cup is None: return
        self.cup.remove_liquid(self.amount_spin.value())
        self._changed()

    def on_blend(self) -> None:
        if self.cup is None: return
        self.cup.blend()
        self._changed()

    def on_empty(self) -> None:
        if self.cup is None: return
        self.cup.clear()
        self._changed()

    def _changed(self) -> None:
        self._update_status()
        self.contents_changed.emit()

    def _update_status(self) -> None:
        if self.cup is None:
            self.lbl_status.setText("Stav: Není vybrán žádný kelímek.")
        elif self.cup.is_empty:
            self.lbl_status.setText("Stav: Kelímek je prázdný.")
        else:
            self.lbl_status.setText(
                f"Stav: {len(self.cup)} vrstev, celkem {self.cup.total_amount:.2f}"
            )
