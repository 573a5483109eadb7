"""Live spectrum visualiser subpackage."""

from .bars import FrequencySpectrumWidget
from .canvas import AnimatedCanvas, take_snapshot
from .circular import CircularSpectrumWidget
from .panel import VisualizerPanel

__all__ = ["AnimatedCanvas", "FrequencySpectrumWidget",
           "CircularSpectrumWidget", "VisualizerPanel", "take_snapshot"]
