"""Single owner of the camera and the latest render parameters."""

from __future__ import annotations

from typing import Optional

from .camera import Camera
from .defaults import PRIMARY_BUTTON, ViewerConfig
from .errors import AlreadyInitializedError, NotInitializedError
from .params import RenderParameters

SCROLL_UNITS = ("lines", "pixels")


class Viewer:
    """Consume window events and publish render parameter snapshots.

    Every event handler returns the fresh snapshot when the frame driver has
    to upload it and schedule a redraw, and ``None`` otherwise. While the
    window has no area the previous snapshot stays in effect.
    """

    def __init__(self, config: Optional[ViewerConfig] = None):
        self.config = (config if config is not None else ViewerConfig()).validate()
        self.camera: Optional[Camera] = None
        self.params: Optional[RenderParameters] = None
        self.redraw_needed = False

    @property
    def initialized(self) -> bool:
        return self.camera is not None

    def initialize(self, window_size: tuple[float, float]) -> Optional[RenderParameters]:
        if self.camera is not None:
            raise AlreadyInitializedError("Viewer is already initialized")
        self.camera = Camera(
            window_size,
            scale=self.config.start_scale,
            zoom_factor=self.config.zoom_factor,
            zoom_sensitivity=self.config.zoom_sensitivity,
            precision=self.config.precision,
        )
        return self._publish()

    def _require_camera(self) -> Camera:
        if self.camera is None:
            raise NotInitializedError("Viewer received an event before initialize()")
        return self.camera

    def _publish(self) -> Optional[RenderParameters]:
        camera = self._require_camera()
        if not camera.has_area:
            return None
        self.params = RenderParameters.from_camera(camera, self.config.max_iterations, self.config.precision)
        self.redraw_needed = True
        return self.params

    def take_redraw(self) -> bool:
        """Return and clear the pending redraw signal."""

        redraw, self.redraw_needed = self.redraw_needed, False
        return redraw

    def resize(self, window_size: tuple[float, float]) -> Optional[RenderParameters]:
        self._require_camera().resize(window_size)
        return self._publish()

    def pointer_moved(self, position: tuple[float, float]) -> Optional[RenderParameters]:
        camera = self._require_camera()
        snapshot = None
        if camera.pointer_pressed:
            camera.pan((position[0] - camera.pointer_position[0], position[1] - camera.pointer_position[1]))
            snapshot = self._publish()
        camera.move_pointer(position)
        return snapshot

    def pointer_button(self, button: str, pressed: bool) -> None:
        camera = self._require_camera()
        if button == PRIMARY_BUTTON:
            camera.set_pointer_pressed(pressed)

    def scroll(self, delta: float, unit: str = "lines") -> Optional[RenderParameters]:
        """Zoom at the pointer; pixel deltas only contribute their direction."""

        if unit not in SCROLL_UNITS:
            raise ValueError(f"Unknown scroll unit '{unit}'. Valid choices: {', '.join(SCROLL_UNITS)}.")
        if unit == "pixels":
            delta = (delta > 0) - (delta < 0)
        self._require_camera().zoom(float(delta))
        return self._publish()
