from ._version import __version__
from .models import (
    AudioSampleBuffer,
    AmplitudePoint,
    FrequencySnapshot,
    TooltipState,
)
from .amplitude import (
    calculate_amplitude,
    amplitude_summary,
    AmplitudeSummary,
    DB_MIN,
    DB_MAX,
)
from .windowing import apply_hann_window, hann_window, normalize_bytes
from .spline import BezierSegment, catmull_rom_segments, evaluate_segments
from .animation import (
    RotationState,
    FrameScheduler,
    ManualScheduler,
    idle_wave,
    band_index,
)
from .chart import ChartLayout, hit_test, nearest_point, time_step_for
from .analyser import StreamingAnalyser, AnalyserError
from .config import (
    build_structured_defaults,
    validate_structured_config,
    validate_config,
    section,
    ConfigError,
    ConfigFieldError,
    ParamSpec,
)
from .events import EventBus, Subscription

__all__ = [
    "__version__",
    "AudioSampleBuffer",
    "AmplitudePoint",
    "FrequencySnapshot",
    "TooltipState",
    "calculate_amplitude",
    "amplitude_summary",
    "AmplitudeSummary",
    "DB_MIN",
    "DB_MAX",
    "apply_hann_window",
    "hann_window",
    "normalize_bytes",
    "BezierSegment",
    "catmull_rom_segments",
    "evaluate_segments",
    "RotationState",
    "FrameScheduler",
    "ManualScheduler",
    "idle_wave",
    "band_index",
    "ChartLayout",
    "hit_test",
    "nearest_point",
    "time_step_for",
    "StreamingAnalyser",
    "AnalyserError",
    "build_structured_defaults",
    "validate_structured_config",
    "validate_config",
    "section",
    "ConfigError",
    "ConfigFieldError",
    "ParamSpec",
    "EventBus",
    "Subscription",
]
