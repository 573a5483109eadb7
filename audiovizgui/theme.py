"""Neon palette, bar colour bands and dark-theme application."""

from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication


# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

COLORS = {
    "cyan": "#00f3ff",
    "orange": "#ff6b00",
    "purple": "#b026ff",
    "pink": "#ff1493",
    "bg": "#0a0e27",
    "surface": "#141a3a",
    "border": "#2a3055",
    "text": "#ffffff",
    "dim": "#b3b3b3",
    "disabled": "#666666",
}

# First, middle and last third of a bar row
BAND_COLORS = (COLORS["cyan"], COLORS["pink"], COLORS["orange"])


def rgba(name: str, alpha: float) -> QColor:
    """Palette colour *name* with opacity *alpha* in [0, 1]."""
    color = QColor(COLORS[name])
    color.setAlphaF(max(0.0, min(1.0, alpha)))
    return color


# ---------------------------------------------------------------------------
# Dark theme
# ---------------------------------------------------------------------------

STYLESHEET = """
    QMainWindow { background-color: #0a0e27; }
    QToolBar { background-color: #141a3a; border-bottom: 1px solid #2a3055; spacing: 6px; padding: 2px; }
    QToolBar QToolButton { color: #ffffff; padding: 4px 10px; }
    QToolBar QToolButton:hover { background-color: #1f2650; }
    QToolBar QToolButton:disabled { color: #666666; }
    QLabel#panelTitle { color: #ffffff; font-size: 11pt; font-weight: 600; }
    QLabel#panelInfo { color: #b3b3b3; font-size: 9pt; }
    QLabel#timeLabel { color: #b3b3b3; font-family: Consolas, monospace; padding: 0 8px; }
    QFrame#vizPanel { background-color: #10163a; border: 1px solid #2a3055; border-radius: 6px; }
    QStatusBar { background-color: #141a3a; color: #b3b3b3; }
"""


def apply_dark_theme(window) -> None:
    """Apply the dark palette and stylesheet to the application and window."""
    app = QApplication.instance()

    palette = QPalette()
    bg = QColor(COLORS["bg"])
    surface = QColor(COLORS["surface"])
    text = QColor(COLORS["text"])
    highlight = QColor(COLORS["purple"])

    palette.setColor(QPalette.Window, bg)
    palette.setColor(QPalette.WindowText, text)
    palette.setColor(QPalette.Base, surface)
    palette.setColor(QPalette.AlternateBase, bg)
    palette.setColor(QPalette.ToolTipBase, surface)
    palette.setColor(QPalette.ToolTipText, text)
    palette.setColor(QPalette.Text, text)
    palette.setColor(QPalette.Button, surface)
    palette.setColor(QPalette.ButtonText, text)
    palette.setColor(QPalette.Highlight, highlight)
    palette.setColor(QPalette.HighlightedText, QColor("#ffffff"))
    palette.setColor(QPalette.Disabled, QPalette.Text, QColor(COLORS["disabled"]))
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, QColor(COLORS["disabled"]))

    app.setPalette(palette)
    window.setStyleSheet(STYLESHEET)
