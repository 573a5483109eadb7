"""The per-test Qt fixture disposes of widgets a test leaves open."""

from PySide6.QtWidgets import QWidget

from audiovizgui.amplitude import AmplitudePanel

# Held here so only the fixture's deleteLater() can destroy them.
_kept = []
_destroyed = []


def test_leaves_widgets_open(qt):
    for w in (QWidget(), AmplitudePanel()):
        w.destroyed.connect(lambda *_: _destroyed.append(True))
        w.show()
        _kept.append(w)
    assert all(w in qt.topLevelWidgets() for w in _kept)


def test_previous_widgets_were_deleted(qt):
    assert _destroyed == [True, True]
