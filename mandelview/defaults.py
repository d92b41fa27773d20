"""Static configuration for the viewer."""

from __future__ import annotations

import operator
from dataclasses import dataclass

from .errors import ConfigError

START_SCALE = 4.0
ZOOM_FACTOR = 2.0
ZOOM_SENSITIVITY = 0.1
MAX_ITERATIONS = 256
ESCAPE_RADIUS_SQUARED = 4.0

# (re_min, re_max, im_min, im_max)
BOUNDS = (-2.0, 1.0, -1.5, 1.5)

PRIMARY_BUTTON = "left"

PRECISIONS = ("float64", "float32")
MAX_UINT32 = 2 ** 32 - 1

# (min_scale, max_scale) per precision. Both ends stay normal numbers, and a
# world offset of scale times any sane aspect ratio stays finite on the device.
SCALE_LIMITS = {
    "float64": (1e-300, 1e300),
    "float32": (1e-30, 1e30),
}

# Largest world coordinate a snapshot may carry in each precision.
COORDINATE_LIMITS = {
    "float64": 1e300,
    "float32": 1e30,
}


@dataclass(frozen=True)
class ViewerConfig:
    """Settings fixed for the lifetime of a viewer."""

    start_scale: float = START_SCALE
    zoom_factor: float = ZOOM_FACTOR
    zoom_sensitivity: float = ZOOM_SENSITIVITY
    max_iterations: int = MAX_ITERATIONS
    precision: str = "float64"

    def validate(self) -> "ViewerConfig":
        if self.precision not in PRECISIONS:
            raise ConfigError(f"Unknown precision '{self.precision}'. Valid choices: {', '.join(PRECISIONS)}.")
        min_scale, max_scale = SCALE_LIMITS[self.precision]
        if not min_scale <= self.start_scale <= max_scale:
            raise ConfigError(f"start_scale must be in [{min_scale:g}, {max_scale:g}] for {self.precision}")
        if not 0 < self.zoom_factor < float("inf"):
            raise ConfigError("zoom_factor must be positive and finite")
        if not 0 <= self.zoom_sensitivity < float("inf"):
            raise ConfigError("zoom_sensitivity must be finite and not negative")
        if isinstance(self.max_iterations, bool):
            raise ConfigError("max_iterations must be an integer")
        try:
            max_iterations = operator.index(self.max_iterations)
        except TypeError:
            raise ConfigError("max_iterations must be an integer") from None
        if not 1 <= max_iterations <= MAX_UINT32:
            raise ConfigError(f"max_iterations must be in [1, {MAX_UINT32}]")
        return self
