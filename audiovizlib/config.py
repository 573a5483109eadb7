from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class ConfigFieldError:
    """A single validation error for one configuration field.

    Attributes:
        key:     The config key that failed validation.
        value:   The offending value.
        message: Human-readable explanation of what is wrong.
    """
    key: str
    value: Any
    message: str


@dataclass(frozen=True)
class ParamSpec:
    """Declarative specification for a single configuration parameter."""
    key: str
    type: type | tuple              # expected Python type(s)
    default: Any
    label: str                       # short UI label
    description: str = ""
    min: float | int | None = None   # inclusive lower bound (unless min_exclusive)
    max: float | int | None = None   # inclusive upper bound (unless max_exclusive)
    min_exclusive: bool = False
    max_exclusive: bool = False
    choices: list | None = None


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

ANALYSIS_PARAMS: list[ParamSpec] = [
    ParamSpec(
        key="fft_size", type=int, default=1024,
        choices=[256, 512, 1024, 2048, 4096, 8192],
        label="FFT size",
        description="Samples per live analysis frame. Half as many frequency bins.",
    ),
    ParamSpec(
        key="smoothing", type=(int, float), default=0.8, min=0.0, max=1.0,
        label="Spectrum smoothing",
        description="Weight of the previous frame in the smoothed magnitudes.",
    ),
    ParamSpec(
        key="min_decibels", type=(int, float), default=-90.0,
        label="Analyser floor (dB)",
        description="Level mapped to byte value 0.",
    ),
    ParamSpec(
        key="max_decibels", type=(int, float), default=-10.0,
        label="Analyser ceiling (dB)",
        description="Level mapped to byte value 255.",
    ),
    ParamSpec(
        key="amplitude_window_sec", type=(int, float), default=0.5,
        min=0.0, min_exclusive=True,
        label="Amplitude window (s)",
        description="Length of each RMS window in the amplitude chart.",
    ),
    ParamSpec(
        key="db_min", type=(int, float), default=-90.0,
        label="Chart floor (dB)",
    ),
    ParamSpec(
        key="db_max", type=(int, float), default=3.0,
        label="Chart ceiling (dB)",
    ),
    ParamSpec(
        key="db_step", type=(int, float), default=20.0,
        min=0.0, min_exclusive=True,
        label="Chart dB gridline step",
    ),
]

SPECTRUM_PARAMS: list[ParamSpec] = [
    ParamSpec(key="bar_count", type=int, default=64, min=1, label="Bars"),
    ParamSpec(key="bar_spacing", type=(int, float), default=2.0, min=0.0,
              label="Bar spacing (px)"),
    ParamSpec(key="height_fraction", type=(int, float), default=0.9,
              min=0.0, max=1.0, min_exclusive=True,
              label="Bar height fraction",
              description="Share of the surface height a full-scale bar uses."),
    ParamSpec(key="glow_blur", type=(int, float), default=15.0, min=0.0,
              label="Glow radius"),
    ParamSpec(key="idle_alpha", type=(int, float), default=0.4,
              min=0.0, max=1.0, label="Idle opacity"),
]

CIRCULAR_PARAMS: list[ParamSpec] = [
    ParamSpec(key="bar_count", type=int, default=128, min=1, label="Bars"),
    ParamSpec(key="min_bar_height", type=(int, float), default=5.0, min=0.0,
              label="Minimum bar length"),
    ParamSpec(key="max_bar_height", type=(int, float), default=150.0, min=0.0,
              label="Maximum bar length",
              description="Length of a full-scale bar on a 500 px surface."),
    ParamSpec(key="bar_width", type=(int, float), default=4.0,
              min=0.0, min_exclusive=True, label="Bar width"),
    ParamSpec(key="rotation_speed", type=(int, float), default=0.001,
              label="Rotation per frame (rad)",
              description="Idle frames rotate at half this rate."),
    ParamSpec(key="glow_blur", type=(int, float), default=20.0, min=0.0,
              label="Glow radius"),
    ParamSpec(key="peak_threshold", type=(int, float), default=0.5,
              min=0.0, max=1.0, label="Peak dot threshold"),
]

DISPLAY_PARAMS: list[ParamSpec] = [
    ParamSpec(key="fps", type=int, default=60, min=1, max=240,
              label="Target frame rate"),
    ParamSpec(key="tooltip_debounce_ms", type=int, default=50, min=0,
              label="Tooltip debounce (ms)"),
]

SECTIONS: dict[str, list[ParamSpec]] = {
    "analysis": ANALYSIS_PARAMS,
    "spectrum": SPECTRUM_PARAMS,
    "circular": CIRCULAR_PARAMS,
    "display": DISPLAY_PARAMS,
}


# ---------------------------------------------------------------------------
# Validation  (ParamSpec-driven)
# ---------------------------------------------------------------------------

def validate_param_values(
    params: list[ParamSpec],
    values: dict[str, Any],
) -> list[ConfigFieldError]:
    """Validate *values* against a list of :class:`ParamSpec` definitions.

    Only keys present in *values* are checked; missing keys are not errors
    (they will receive their default).
    """
    errors: list[ConfigFieldError] = []

    for spec in params:
        if spec.key not in values:
            continue
        value = values[spec.key]

        # -- type (bool is not an int here) --
        expected = spec.type
        if expected is not bool and isinstance(value, bool):
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be {_type_label(expected)}, got boolean.",
            ))
            continue
        if not isinstance(value, expected):
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be {_type_label(expected)}, "
                f"got {type(value).__name__}.",
            ))
            continue

        if spec.choices is not None and value not in spec.choices:
            opts = ", ".join(repr(c) for c in spec.choices)
            errors.append(ConfigFieldError(
                spec.key, value, f"{spec.label} must be one of {opts}.",
            ))
            continue

        if spec.min is not None:
            if spec.min_exclusive and value <= spec.min:
                errors.append(ConfigFieldError(
                    spec.key, value,
                    f"{spec.label} must be greater than {spec.min}.",
                ))
                continue
            if not spec.min_exclusive and value < spec.min:
                errors.append(ConfigFieldError(
                    spec.key, value, f"{spec.label} must be at least {spec.min}.",
                ))
                continue
        if spec.max is not None:
            if spec.max_exclusive and value >= spec.max:
                errors.append(ConfigFieldError(
                    spec.key, value, f"{spec.label} must be less than {spec.max}.",
                ))
                continue
            if not spec.max_exclusive and value > spec.max:
                errors.append(ConfigFieldError(
                    spec.key, value, f"{spec.label} must be at most {spec.max}.",
                ))
                continue

    return errors


def build_structured_defaults() -> dict[str, Any]:
    """All defaults organised by section (``analysis``, ``spectrum``, ...)."""
    return {
        name: {p.key: p.default for p in params}
        for name, params in SECTIONS.items()
    }


def validate_structured_config(
    structured: dict[str, Any],
) -> list[ConfigFieldError]:
    """Validate a structured config dict section by section.

    Keys in the returned errors are prefixed with their section, e.g.
    ``"spectrum.bar_count"``.
    """
    errors: list[ConfigFieldError] = []
    for name, params in SECTIONS.items():
        section = structured.get(name, {})
        if not isinstance(section, dict):
            errors.append(ConfigFieldError(
                name, section, f"Section '{name}' must be an object."))
            continue
        for err in validate_param_values(params, section):
            errors.append(ConfigFieldError(
                f"{name}.{err.key}", err.value, err.message))

    analysis = structured.get("analysis", {})
    if isinstance(analysis, dict) and not errors:
        if analysis.get("db_min", -90.0) >= analysis.get("db_max", 3.0):
            errors.append(ConfigFieldError(
                "analysis.db_min", analysis.get("db_min"),
                "Chart floor must be below the chart ceiling."))
        if analysis.get("min_decibels", -90.0) >= analysis.get("max_decibels", -10.0):
            errors.append(ConfigFieldError(
                "analysis.min_decibels", analysis.get("min_decibels"),
                "Analyser floor must be below the analyser ceiling."))
    return errors


def validate_config(structured: dict[str, Any]) -> None:
    """Raise :class:`ConfigError` listing every invalid field."""
    errors = validate_structured_config(structured)
    if errors:
        lines = [f"{e.key}: {e.message}" for e in errors]
        raise ConfigError(
            "Configuration has invalid values:\n  • " + "\n  • ".join(lines)
        )


def section(structured: dict[str, Any], name: str) -> dict[str, Any]:
    """Return section *name* with defaults filled in for missing keys."""
    values = {p.key: p.default for p in SECTIONS[name]}
    given = structured.get(name, {}) if structured else {}
    if isinstance(given, dict):
        values.update({k: v for k, v in given.items() if k in values})
    return values


def _type_label(t) -> str:
    """Human-readable label for an expected type or tuple of types."""
    if isinstance(t, tuple):
        return " or ".join(x.__name__ for x in t)
    return t.__name__
