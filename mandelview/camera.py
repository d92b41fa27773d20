"""Viewport transform between screen pixels and the complex plane."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .defaults import COORDINATE_LIMITS, PRECISIONS, SCALE_LIMITS, START_SCALE, ZOOM_FACTOR, ZOOM_SENSITIVITY


@dataclass
class Camera:
    """Mutable view state driven by pointer, scroll and resize events.

    ``scale`` is the world-space extent of the viewport height; the width is
    aspect-corrected so a square on screen stays square in world space.
    ``precision`` names the snapshot precision the camera feeds, and bounds
    ``scale`` and ``world_center`` to values that precision can carry.

    The coordinate conversions raise ``ValueError`` while the window has no
    area; ``zoom`` and ``pan`` leave the camera untouched instead.
    """

    window_size: tuple[float, float]
    scale: float = START_SCALE
    world_center: tuple[float, float] = (0.0, 0.0)
    pointer_position: tuple[float, float] = (0.0, 0.0)
    pointer_pressed: bool = False
    zoom_factor: float = ZOOM_FACTOR
    zoom_sensitivity: float = ZOOM_SENSITIVITY
    precision: str = "float64"

    def __post_init__(self) -> None:
        if self.precision not in PRECISIONS:
            raise ValueError(f"Unknown precision '{self.precision}'. Valid choices: {', '.join(PRECISIONS)}.")
        min_scale, max_scale = SCALE_LIMITS[self.precision]
        if not min_scale <= self.scale <= max_scale:
            raise ValueError(f"scale must be in [{min_scale:g}, {max_scale:g}] for {self.precision}")
        self.window_size = (float(self.window_size[0]), float(self.window_size[1]))

    @property
    def has_area(self) -> bool:
        return self.window_size[0] > 0 and self.window_size[1] > 0

    def _require_area(self) -> tuple[float, float]:
        if not self.has_area:
            raise ValueError(f"Window {self.window_size[0]:g}x{self.window_size[1]:g} has no area")
        return self.window_size

    def _in_range(self, center: tuple[float, float]) -> bool:
        limit = COORDINATE_LIMITS[self.precision]
        return abs(center[0]) <= limit and abs(center[1]) <= limit

    def screen_to_normalized(self, position: tuple[float, float]) -> tuple[float, float]:
        width, height = self._require_area()
        return position[0] / width - 0.5, position[1] / height - 0.5

    def normalized_to_offset(self, position: tuple[float, float]) -> tuple[float, float]:
        """Convert a normalized-space displacement into a world-space one."""

        width, height = self._require_area()
        return position[0] * self.scale * width / height, position[1] * self.scale

    def screen_to_world(self, position: tuple[float, float]) -> tuple[float, float]:
        x, y = self.normalized_to_offset(self.screen_to_normalized(position))
        return self.world_center[0] + x, self.world_center[1] + y

    def pointer_world_position(self) -> tuple[float, float]:
        return self.screen_to_world(self.pointer_position)

    def zoom(self, delta: float) -> None:
        """Zoom in for positive ``delta``, keeping the point under the pointer fixed.

        The scale is clamped to the limits of the camera's precision.
        """

        if not self.has_area:
            return

        try:
            factor = self.zoom_factor ** (-delta * self.zoom_sensitivity)
        except OverflowError:
            factor = math.inf
        new_scale = self.scale * factor
        if math.isnan(new_scale):
            return
        min_scale, max_scale = SCALE_LIMITS[self.precision]
        new_scale = min(max(new_scale, min_scale), max_scale)

        world_x, world_y = self.pointer_world_position()
        old_scale, self.scale = self.scale, new_scale
        new_world_x, new_world_y = self.pointer_world_position()

        center = (
            self.world_center[0] + (world_x - new_world_x),
            self.world_center[1] + (world_y - new_world_y),
        )
        if not self._in_range(center):
            self.scale = old_scale
            return
        self.world_center = center

    def pan(self, screen_delta: tuple[float, float]) -> None:
        """Drag the view so the content follows the pointer."""

        if not self.pointer_pressed or not self.has_area:
            return

        width, height = self.window_size
        x, y = self.normalized_to_offset((screen_delta[0] / width, screen_delta[1] / height))
        center = (self.world_center[0] - x, self.world_center[1] - y)
        if self._in_range(center):
            self.world_center = center

    def set_pointer_pressed(self, pressed: bool) -> None:
        self.pointer_pressed = bool(pressed)

    def move_pointer(self, position: tuple[float, float]) -> None:
        self.pointer_position = (float(position[0]), float(position[1]))

    def resize(self, window_size: tuple[float, float]) -> None:
        self.window_size = (float(window_size[0]), float(window_size[1]))
