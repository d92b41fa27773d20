"""Public API for the interactive Mandelbrot viewport."""

from .camera import Camera
from .controller import Viewer
from .defaults import ViewerConfig
from .errors import AlreadyInitializedError, ConfigError, NotInitializedError, ViewerError
from .evaluator import escape_iterations, escape_iterations_grid
from .palette import color, colorize
from .params import RenderParameters, uniform_dtype
from .renderer import Frame, render_frame, render_reference, world_grid

__all__ = [
    "AlreadyInitializedError",
    "Camera",
    "ConfigError",
    "Frame",
    "NotInitializedError",
    "RenderParameters",
    "Viewer",
    "ViewerConfig",
    "ViewerError",
    "color",
    "colorize",
    "escape_iterations",
    "escape_iterations_grid",
    "render_frame",
    "render_reference",
    "uniform_dtype",
    "world_grid",
]
