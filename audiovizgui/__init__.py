"""AudioViz GUI: PySide6 front-end for the amplitude chart and live spectra."""


def main(argv=None):
    """Launch the application (imports Qt and the audio backend on demand)."""
    from .mainwindow import main as _main
    return _main(argv)


__all__ = ["main"]
