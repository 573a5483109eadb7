"""Background file decoding for the main window."""

from __future__ import annotations

import time

import soundfile as sf

from PySide6.QtCore import QThread, Signal

from .log import dbg


class AudioLoadWorker(QThread):
    """Decode an audio file off the GUI thread.

    Emits ``finished(request_id, data, samplerate)`` on success or
    ``error(request_id, message)`` when the file cannot be decoded.  The
    request id lets the window ignore results from a superseded load.
    """

    finished = Signal(int, object, int)   # request id, ndarray, samplerate
    error = Signal(int, str)

    def __init__(self, request_id: int, path: str, parent=None):
        super().__init__(parent)
        self._request_id = request_id
        self._path = path
        self._cancelled = False

    @property
    def request_id(self) -> int:
        return self._request_id

    @property
    def path(self) -> str:
        return self._path

    def cancel(self):
        self._cancelled = True

    def run(self):
        t0 = time.perf_counter()
        try:
            data, sr = sf.read(self._path, dtype='float64', always_2d=False)
        except Exception as exc:
            if not self._cancelled:
                self.error.emit(self._request_id, str(exc))
            return
        if self._cancelled:
            dbg(f"load #{self._request_id} cancelled")
            return
        dbg(f"load #{self._request_id}: {len(data)} frames @ {sr} Hz, "
            f"{(time.perf_counter() - t0) * 1000:.1f} ms")
        self.finished.emit(self._request_id, data, int(sr))
