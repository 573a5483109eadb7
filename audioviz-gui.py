"""
AudioViz GUI: amplitude chart and live spectrum visualiser.

Usage:
    python audioviz-gui.py [FILE]
    uv run python audioviz-gui.py [FILE]

Requires: PySide6, numpy, scipy, soundfile, sounddevice
"""

from audiovizgui import main

if __name__ == "__main__":
    main()
