"""Tests for background file decoding (run synchronously)."""

import numpy as np
import pytest
import soundfile as sf

from audiovizgui.worker import AudioLoadWorker


@pytest.fixture(autouse=True)
def _app(qt):
    return qt


def _collect(worker):
    done, failed = [], []
    worker.finished.connect(lambda *args: done.append(args))
    worker.error.connect(lambda *args: failed.append(args))
    worker.run()
    return done, failed


def test_decodes_wav(tmp_path):
    path = str(tmp_path / "tone.wav")
    sf.write(path, np.full((800, 2), 0.25), 8000)
    done, failed = _collect(AudioLoadWorker(7, path))
    assert failed == []
    ((request_id, data, sr),) = done
    assert request_id == 7
    assert sr == 8000
    assert data.shape == (800, 2)
    assert data[0, 0] == pytest.approx(0.25, abs=1e-4)


def test_unreadable_file_reports_error(tmp_path):
    path = tmp_path / "broken.wav"
    path.write_bytes(b"not audio at all")
    done, failed = _collect(AudioLoadWorker(3, str(path)))
    assert done == []
    assert failed and failed[0][0] == 3


def test_cancelled_load_emits_nothing(tmp_path):
    path = str(tmp_path / "tone.wav")
    sf.write(path, np.zeros(100), 8000)
    worker = AudioLoadWorker(1, path)
    worker.cancel()
    done, failed = _collect(worker)
    assert done == [] and failed == []
