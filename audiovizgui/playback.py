"""Audio playback controller using sounddevice.

Every block written to the output stream is also published on
:attr:`PlaybackController.events` as a ``"block"`` event; the controller's
:class:`~audiovizlib.analyser.StreamingAnalyser` subscribes to it, which is
what the live spectrum widgets read each frame.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import sounddevice as sd

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from audiovizlib.analyser import StreamingAnalyser
from audiovizlib.events import EventBus, Subscription

from .log import dbg


class PlaybackController(QObject):
    """Manages audio playback state and sounddevice OutputStream lifecycle.

    Signals:
        cursor_updated(int): Emitted ~30fps with the current sample position.
        playback_finished(): Emitted when playback reaches the end of audio.
        state_changed(bool): Emitted when playback starts or stops.
        error(str): Emitted on playback errors.
    """

    cursor_updated = Signal(int)
    playback_finished = Signal()
    state_changed = Signal(bool)
    error = Signal(str)

    def __init__(self, parent=None, *, analysis: dict[str, Any] | None = None):
        super().__init__(parent)
        self._analysis = dict(analysis or {})
        self._stream: sd.OutputStream | None = None
        self._play_start_sample: int = 0
        self._play_frame_count: list[int] = [0]
        self._resume_sample: int = 0
        self._audio_data: np.ndarray | None = None  # (samples, channels)
        self._samplerate: int = 44100
        self._analyser: StreamingAnalyser | None = None
        self._analyser_sub: Subscription | None = None
        self.events = EventBus()

        self._timer = QTimer(self)
        self._timer.setInterval(30)
        self._timer.timeout.connect(self._on_timer)

    # ── State ──────────────────────────────────────────────────────────────

    @property
    def is_playing(self) -> bool:
        return self._stream is not None and self._stream.active

    @property
    def has_audio(self) -> bool:
        return self._audio_data is not None

    @property
    def analyser(self) -> StreamingAnalyser | None:
        """Live analyser, or ``None`` until the first file is loaded."""
        return self._analyser

    @property
    def samplerate(self) -> int:
        return self._samplerate

    @property
    def total_samples(self) -> int:
        return 0 if self._audio_data is None else self._audio_data.shape[0]

    @property
    def duration(self) -> float:
        if self._samplerate <= 0:
            return 0.0
        return self.total_samples / self._samplerate

    def current_sample(self) -> int:
        """Return the current playback sample position."""
        if self._stream is None:
            return self._resume_sample
        return self._play_start_sample + self._play_frame_count[0]

    def position(self) -> float:
        if self._samplerate <= 0:
            return 0.0
        return self.current_sample() / self._samplerate

    # ── Loading ────────────────────────────────────────────────────────────

    def load(self, audio_data: np.ndarray | None, samplerate: int):
        """Replace the current audio; playback stops and the analyser resets."""
        self.stop()
        if audio_data is None or audio_data.size == 0:
            self._audio_data = None
        else:
            audio = audio_data.reshape(-1, 1) if audio_data.ndim == 1 else audio_data
            self._audio_data = np.ascontiguousarray(audio, dtype=np.float32)
        self._samplerate = samplerate
        self._resume_sample = 0
        if self._analyser is None:
            self._analyser = StreamingAnalyser(
                self._analysis.get("fft_size", 1024),
                smoothing=self._analysis.get("smoothing", 0.8),
                min_decibels=self._analysis.get("min_decibels", -90.0),
                max_decibels=self._analysis.get("max_decibels", -10.0),
            )
            self._analyser_sub = self.events.subscribe("block", self._feed_analyser)
        else:
            self._analyser.reset()

    def _feed_analyser(self, samples: np.ndarray, **_):
        if self._analyser is not None:
            self._analyser.process(samples)

    # ── Transport ──────────────────────────────────────────────────────────

    def play(self, start_sample: int | None = None):
        """Start playback from *start_sample*, or resume where it paused."""
        self._close_stream()
        audio = self._audio_data
        if audio is None:
            return

        if start_sample is None:
            start_sample = self._resume_sample
        if start_sample < 0 or start_sample >= audio.shape[0]:
            start_sample = 0

        self._play_start_sample = start_sample
        self._play_frame_count = [0]
        play_data = audio[start_sample:]

        frame_count = self._play_frame_count
        events = self.events

        def callback(outdata, frames, time_info, status):
            pos = frame_count[0]
            end = pos + frames
            if end <= len(play_data):
                outdata[:] = play_data[pos:end]
                frame_count[0] = end
                events.emit("block", samples=outdata.copy())
            else:
                remaining = len(play_data) - pos
                if remaining > 0:
                    outdata[:remaining] = play_data[pos:]
                outdata[remaining:] = 0
                frame_count[0] = len(play_data)
                events.emit("block", samples=outdata.copy())
                raise sd.CallbackStop()

        try:
            self._stream = sd.OutputStream(
                samplerate=self._samplerate,
                channels=audio.shape[1],
                dtype="float32",
                callback=callback,
                finished_callback=self._on_finished_sd,
            )
            self._stream.start()
            self._timer.start()
        except Exception as e:
            self._stream = None
            dbg(f"playback failed: {e}")
            self.error.emit(str(e))
            return
        self.state_changed.emit(True)

    def pause(self):
        """Stop output but remember the position for the next :meth:`play`."""
        if self._stream is None:
            return
        self._resume_sample = self.current_sample()
        self._close_stream()
        self.state_changed.emit(False)

    def toggle(self):
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def stop(self):
        """Stop playback and rewind to the start."""
        was_running = self._stream is not None
        self._close_stream()
        self._resume_sample = 0
        if was_running:
            self.state_changed.emit(False)

    def seek(self, sample: int):
        """Jump to *sample*; keeps playing if playback was running."""
        sample = max(0, min(int(sample), max(self.total_samples - 1, 0)))
        if self._stream is not None:
            self.play(sample)
        else:
            self._resume_sample = sample
            self.cursor_updated.emit(sample)

    def _close_stream(self):
        self._timer.stop()
        stream = self._stream
        self._stream = None
        if stream is None:
            return
        try:
            stream.stop()
            stream.close()
        except sd.PortAudioError as e:
            dbg(f"closing output stream failed: {e}")

    # ── Stream callbacks ───────────────────────────────────────────────────

    def _on_finished_sd(self):
        """Called by sounddevice from the audio thread when playback ends."""
        QTimer.singleShot(0, self._on_finished_main)

    @Slot()
    def _on_finished_main(self):
        """Handle playback completion on the main thread."""
        if self._stream is None or self._stream.active:
            return  # stopped or restarted by the user
        self._timer.stop()
        self._stream.close()
        self._stream = None
        self._resume_sample = 0
        self.state_changed.emit(False)
        self.playback_finished.emit()

    @Slot()
    def _on_timer(self):
        """Emit cursor position updates during playback."""
        if self._stream is not None:
            self.cursor_updated.emit(self.current_sample())
