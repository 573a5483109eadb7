"""Amplitude chart subpackage."""

from .compute import AmplitudeCache, AmplitudeCacheWorker, build_amplitude_cache
from .panel import AmplitudePanel
from .renderer import present, render_amplitude_cache
from .widget import AmplitudeChartWidget

__all__ = ["AmplitudeCache", "AmplitudeCacheWorker", "build_amplitude_cache",
           "AmplitudePanel", "AmplitudeChartWidget", "present",
           "render_amplitude_cache"]
