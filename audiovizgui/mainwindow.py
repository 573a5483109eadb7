"""Main application window for the AudioViz GUI."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from typing import Any

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QAction, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QLabel,
    QMainWindow,
    QSizePolicy,
    QSplitter,
    QStatusBar,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from audiovizlib.chart import ChartLayout, format_time
from audiovizlib.config import section
from audiovizlib.models import AudioSampleBuffer

from .amplitude import AmplitudePanel
from .log import dbg, set_debug
from .playback import PlaybackController
from .settings import config_path, load_config, save_config
from .spectrum import (CircularSpectrumWidget, FrequencySpectrumWidget,
                       VisualizerPanel)
from .theme import apply_dark_theme
from .worker import AudioLoadWorker

_AUDIO_FILTER = ("Audio files (*.wav *.flac *.ogg *.aiff *.aif *.mp3);;"
                 "All files (*)")


class AudioVizWindow(QMainWindow):
    def __init__(self, config: dict[str, Any] | None = None):
        t_init = time.perf_counter()
        super().__init__()
        self.setWindowTitle("AudioViz")

        screen = QApplication.primaryScreen()
        if screen:
            avail = screen.availableGeometry()
            w = min(1400, avail.width() - 40)
            h = min(900, avail.height() - 40)
            self.resize(w, h)
            self.move(
                avail.x() + (avail.width() - w) // 2,
                avail.y() + (avail.height() - h) // 2,
            )
        else:
            self.resize(1400, 900)

        self._config = config if config is not None else load_config()
        analysis = section(self._config, "analysis")
        display = section(self._config, "display")

        self._load_worker: AudioLoadWorker | None = None
        self._load_request: int = 0
        self._current_path: str | None = None

        self._playback = PlaybackController(self, analysis=analysis)
        self._playback.cursor_updated.connect(self._on_cursor_updated)
        self._playback.playback_finished.connect(self._on_playback_finished)
        self._playback.state_changed.connect(self._on_playback_state)
        self._playback.error.connect(self._on_playback_error)

        layout = ChartLayout(db_min=analysis["db_min"], db_max=analysis["db_max"],
                             db_step=analysis["db_step"])
        self.amplitude_panel = AmplitudePanel(
            layout=layout,
            window_sec=analysis["amplitude_window_sec"],
            debounce_ms=display["tooltip_debounce_ms"],
        )
        self.spectrum = FrequencySpectrumWidget(
            section(self._config, "spectrum"), fps=display["fps"])
        self.circular = CircularSpectrumWidget(
            section(self._config, "circular"), fps=display["fps"])

        self._init_ui()
        apply_dark_theme(self)

        # Spacebar toggles play/pause
        self._space_shortcut = QShortcut(QKeySequence(Qt.Key_Space), self)
        self._space_shortcut.activated.connect(self._on_toggle_play)

        dbg(f"AudioVizWindow.__init__ total: "
            f"{(time.perf_counter() - t_init) * 1000:.1f} ms")

    # ── UI setup ──────────────────────────────────────────────────────────

    def _init_ui(self):
        toolbar = QToolBar("Transport")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._open_action = QAction("Open…", self)
        self._open_action.setShortcut(QKeySequence.Open)
        self._open_action.triggered.connect(self._on_open)
        toolbar.addAction(self._open_action)
        toolbar.addSeparator()

        self._play_action = QAction("Play", self)
        self._play_action.triggered.connect(self._on_toggle_play)
        toolbar.addAction(self._play_action)

        self._stop_action = QAction("Stop", self)
        self._stop_action.triggered.connect(self._on_stop)
        toolbar.addAction(self._stop_action)

        spacer = QWidget()
        spacer.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        toolbar.addWidget(spacer)
        self._time_label = QLabel()
        self._time_label.setObjectName("timeLabel")
        toolbar.addWidget(self._time_label)

        central = QWidget()
        vbox = QVBoxLayout(central)
        vbox.setContentsMargins(10, 10, 10, 10)
        vbox.setSpacing(10)

        splitter = QSplitter(Qt.Vertical)
        splitter.addWidget(self.amplitude_panel)

        viz_row = QSplitter(Qt.Horizontal)
        viz_row.addWidget(VisualizerPanel("Frequency Spectrum", self.spectrum))
        viz_row.addWidget(VisualizerPanel("Circular Spectrum", self.circular))
        viz_row.setSizes([1, 1])
        splitter.addWidget(viz_row)
        splitter.setSizes([2, 3])
        vbox.addWidget(splitter, 1)
        self.setCentralWidget(central)

        self.setStatusBar(QStatusBar())
        self.statusBar().showMessage("Open an audio file to begin")
        self._update_transport()

    # ── Loading ───────────────────────────────────────────────────────────

    @Slot()
    def _on_open(self):
        start_dir = self._config.get("gui", {}).get("last_directory", "")
        path, _ = QFileDialog.getOpenFileName(
            self, "Open audio file", start_dir, _AUDIO_FILTER)
        if path:
            self.load_file(path)

    def load_file(self, path: str):
        """Decode *path* in the background; a later call supersedes this one."""
        self._load_request += 1
        if self._load_worker is not None:
            self._load_worker.cancel()
            self._load_worker.finished.disconnect()
            self._load_worker.error.disconnect()
            self._load_worker = None

        self._current_path = path
        self._playback.stop()
        self.amplitude_panel.set_buffer(None)
        self.statusBar().showMessage(f"Loading {os.path.basename(path)}…")

        worker = AudioLoadWorker(self._load_request, path, parent=self)
        worker.finished.connect(self._on_audio_loaded)
        worker.error.connect(self._on_audio_error)
        self._load_worker = worker
        worker.start()
        self._remember_directory(path)

    @Slot(int, object, int)
    def _on_audio_loaded(self, request_id: int, data, samplerate: int):
        if request_id != self._load_request:
            dbg(f"ignoring stale load #{request_id}")
            return
        self._load_worker = None
        path = self._current_path
        self._playback.load(data, samplerate)
        buffer = AudioSampleBuffer.from_array(data, samplerate)
        self.amplitude_panel.set_buffer(buffer)
        self.spectrum.set_source(self._playback.analyser)
        self.circular.set_source(self._playback.analyser)

        name = os.path.basename(path) if path else "audio"
        self.statusBar().showMessage(
            f"{name}: {buffer.num_channels} ch, {samplerate} Hz, "
            f"{format_time(buffer.duration)}")
        self._update_transport()

    @Slot(int, str)
    def _on_audio_error(self, request_id: int, message: str):
        if request_id != self._load_request:
            return
        self._load_worker = None
        dbg(f"load #{request_id} failed: {message}")
        self._playback.load(None, self._playback.samplerate)
        self.amplitude_panel.set_buffer(None)
        self.spectrum.set_source(None)
        self.circular.set_source(None)
        self.statusBar().showMessage(f"No buffer available: {message}")
        self._update_transport()

    def _remember_directory(self, path: str):
        gui = self._config.setdefault("gui", {})
        directory = os.path.dirname(path)
        if gui.get("last_directory") == directory:
            return
        gui["last_directory"] = directory
        try:
            save_config(self._config)
        except OSError as exc:
            dbg(f"could not save {config_path()}: {exc}")

    # ── Playback ──────────────────────────────────────────────────────────

    @Slot()
    def _on_toggle_play(self):
        if self._playback.has_audio:
            self._playback.toggle()

    @Slot()
    def _on_stop(self):
        self._playback.stop()
        self._update_transport()

    @Slot(bool)
    def _on_playback_state(self, playing: bool):
        self.spectrum.set_playing(playing)
        self.circular.set_playing(playing)
        self._update_transport()

    @Slot(int)
    def _on_cursor_updated(self, _sample: int):
        self._update_time_label()

    @Slot()
    def _on_playback_finished(self):
        self._update_transport()

    @Slot(str)
    def _on_playback_error(self, message: str):
        self.statusBar().showMessage(f"Playback error: {message}")

    def _update_transport(self):
        has_audio = self._playback.has_audio
        self._play_action.setEnabled(has_audio)
        self._stop_action.setEnabled(has_audio)
        self._play_action.setText("Pause" if self._playback.is_playing else "Play")
        self._update_time_label()

    def _update_time_label(self):
        self._time_label.setText(
            f"{format_time(self._playback.position())} / "
            f"{format_time(self._playback.duration)}")

    def closeEvent(self, event):
        self._playback.stop()
        if self._load_worker is not None:
            self._load_worker.cancel()
            self._load_worker.wait(2000)
        self.amplitude_panel.shutdown()
        super().closeEvent(event)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _apply_scale_factor():
    """Set ``QT_SCALE_FACTOR`` from the saved config before Qt starts."""
    path = config_path()
    if not os.path.isfile(path):
        return
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        scale = float(raw.get("gui", {}).get("scale_factor", 1.0))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        dbg(f"ignoring scale factor: {exc}")
        return
    if scale > 0 and scale != 1.0:
        os.environ["QT_SCALE_FACTOR"] = str(scale)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="audioviz-gui",
        description="Amplitude chart and live spectrum visualiser.",
    )
    parser.add_argument("file", nargs="?", help="audio file to open on start")
    parser.add_argument("--debug", action="store_true",
                        help="trace loads, builds and playback to stderr")
    args = parser.parse_args(argv)
    if args.debug:
        set_debug(True)

    t_main = time.perf_counter()
    _apply_scale_factor()

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    window = AudioVizWindow()
    window.show()
    if args.file:
        window.load_file(args.file)

    dbg(f"main() total: {(time.perf_counter() - t_main) * 1000:.1f} ms")
    sys.exit(app.exec())
