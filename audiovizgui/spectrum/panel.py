"""Framed visualiser panel: title, Live/Idle indicator and one canvas."""

from __future__ import annotations

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout

from ..theme import COLORS
from .canvas import AnimatedCanvas


class VisualizerPanel(QFrame):
    """Wraps an :class:`AnimatedCanvas` and mirrors its activity state."""

    def __init__(self, title: str, canvas: AnimatedCanvas, parent=None):
        super().__init__(parent)
        self.setObjectName("vizPanel")
        self.canvas = canvas

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 10)
        layout.setSpacing(6)

        header = QHBoxLayout()
        title_label = QLabel(title)
        title_label.setObjectName("panelTitle")
        header.addWidget(title_label)
        header.addStretch(1)
        self._status = QLabel()
        self._status.setObjectName("panelInfo")
        header.addWidget(self._status)
        layout.addLayout(header)
        layout.addWidget(canvas, 1)

        canvas.activity_changed.connect(self._set_status)
        self._set_status(canvas.is_active)

    @property
    def status_text(self) -> str:
        return self._status.text()

    def _set_status(self, active: bool):
        if active:
            self._status.setText("● Live")
            self._status.setStyleSheet(f"color: {COLORS['cyan']};")
        else:
            self._status.setText("○ Idle")
            self._status.setStyleSheet(f"color: {COLORS['dim']};")
