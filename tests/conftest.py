"""Shared fixtures: headless Qt and small audio buffers."""

import gc
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest

from audiovizlib.models import AudioSampleBuffer


def _dispose_widgets(app):
    """Close every top-level widget and flush the deferred deletes."""
    from PySide6.QtCore import QEvent
    for w in app.topLevelWidgets():
        w.close()
        w.deleteLater()
    app.sendPostedEvents(None, QEvent.DeferredDelete)
    app.processEvents()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
    _dispose_widgets(app)
    gc.collect()
    app.processEvents()


@pytest.fixture
def qt(qapp):
    """Per-test Qt application; widgets left open are disposed of after."""
    yield qapp
    _dispose_widgets(qapp)


@pytest.fixture
def silence_1s():
    return AudioSampleBuffer.from_array(np.zeros(44100), 44100)


@pytest.fixture
def sine_buffer():
    sr = 8000
    t = np.arange(sr * 3) / sr
    return AudioSampleBuffer.from_array(0.5 * np.sin(2 * np.pi * 440 * t), sr)
