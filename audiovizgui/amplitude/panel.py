"""Amplitude panel: title row, summary readout and the chart widget."""

from __future__ import annotations

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout

from audiovizlib.amplitude import amplitude_summary
from audiovizlib.chart import ChartLayout, format_clock

from .widget import AmplitudeChartWidget


class AmplitudePanel(QFrame):
    """Framed amplitude chart with a header and a loudness summary."""

    def __init__(self, parent=None, **chart_kwargs):
        super().__init__(parent)
        self.setObjectName("vizPanel")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 10)
        layout.setSpacing(6)

        header = QHBoxLayout()
        title = QLabel("Amplitude Analysis")
        title.setObjectName("panelTitle")
        header.addWidget(title)
        header.addStretch(1)
        self._summary_label = QLabel("")
        self._summary_label.setObjectName("panelInfo")
        header.addWidget(self._summary_label)
        self._range_label = QLabel("")
        self._range_label.setObjectName("panelInfo")
        header.addWidget(self._range_label)
        layout.addLayout(header)

        self.chart = AmplitudeChartWidget(**chart_kwargs)
        self.chart.cache_ready.connect(self._update_summary)
        layout.addWidget(self.chart, 1)

        self._range_label.setText(_range_text(self.chart.chart_layout))

    def set_buffer(self, buffer):
        self._summary_label.setText("")
        self.chart.set_buffer(buffer)

    def shutdown(self):
        self.chart.shutdown()

    @property
    def summary_text(self) -> str:
        return self._summary_label.text()

    def _update_summary(self):
        summary = amplitude_summary(self.chart.points)
        if summary is None:
            self._summary_label.setText("")
            return
        self._summary_label.setText(
            f"Peak {summary.peak_db:.1f} dB @ {format_clock(summary.peak_time)}"
            f"  ·  Mean {summary.mean_db:.1f} dB   |"
        )


def _range_text(layout: ChartLayout) -> str:
    return f"{layout.db_min:g} dB to {layout.db_max:+g} dB"
