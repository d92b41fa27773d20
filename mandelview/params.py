"""Render parameter snapshots shared between the host and the evaluator."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .camera import Camera
from .defaults import BOUNDS, MAX_UINT32, PRECISIONS


def uniform_dtype(precision: str = "float64") -> np.dtype:
    """Return the structured dtype that mirrors the uniform block byte for byte.

    Fields use natural alignment, so the float64 layout carries four bytes of
    padding after ``max_iterations`` and the float32 layout carries none.
    """

    if precision not in PRECISIONS:
        raise ValueError(f"Unknown precision '{precision}'. Valid choices: {', '.join(PRECISIONS)}.")
    float_type = "<f8" if precision == "float64" else "<f4"
    return np.dtype(
        [
            ("max_iterations", "<u4"),
            ("scale", float_type),
            ("window_size", float_type, (2,)),
            ("world_center", float_type, (2,)),
        ],
        align=True,
    )


@dataclass(frozen=True)
class RenderParameters:
    """Snapshot of everything the evaluator needs to draw one frame."""

    max_iterations: int
    scale: float
    window_size: tuple[float, float]
    world_center: tuple[float, float]
    precision: str = "float64"

    def __post_init__(self) -> None:
        if not 0 <= int(self.max_iterations) <= MAX_UINT32:
            raise ValueError("max_iterations must fit in an unsigned 32-bit integer")
        if self.precision not in PRECISIONS:
            raise ValueError(f"Unknown precision '{self.precision}'. Valid choices: {', '.join(PRECISIONS)}.")

    @classmethod
    def from_camera(cls, camera: Camera, max_iterations: int, precision: str = "float64") -> "RenderParameters":
        return cls(
            max_iterations=int(max_iterations),
            scale=float(camera.scale),
            window_size=(float(camera.window_size[0]), float(camera.window_size[1])),
            world_center=(float(camera.world_center[0]), float(camera.world_center[1])),
            precision=precision,
        )

    @classmethod
    def for_bounds(
        cls,
        window_size: tuple[float, float],
        max_iterations: int,
        bounds: tuple[float, float, float, float] = BOUNDS,
        precision: str = "float64",
    ) -> "RenderParameters":
        """Frame a fixed region of the plane through the regular camera transform.

        The imaginary extent sets the scale; the real extent follows from the
        window's aspect ratio.
        """

        re_min, re_max, im_min, im_max = bounds
        return cls(
            max_iterations=int(max_iterations),
            scale=float(im_max - im_min),
            window_size=(float(window_size[0]), float(window_size[1])),
            world_center=((re_min + re_max) / 2.0, (im_min + im_max) / 2.0),
            precision=precision,
        )

    @classmethod
    def from_bytes(cls, data: bytes, precision: str = "float64") -> "RenderParameters":
        dtype = uniform_dtype(precision)
        if len(data) != dtype.itemsize:
            raise ValueError(f"Expected {dtype.itemsize} bytes for {precision} parameters, got {len(data)}")
        record = np.frombuffer(data, dtype=dtype, count=1)[0]
        return cls(
            max_iterations=int(record["max_iterations"]),
            scale=float(record["scale"]),
            window_size=(float(record["window_size"][0]), float(record["window_size"][1])),
            world_center=(float(record["world_center"][0]), float(record["world_center"][1])),
            precision=precision,
        )

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.precision)

    @property
    def has_area(self) -> bool:
        return self.window_size[0] > 0 and self.window_size[1] > 0

    @property
    def resolution(self) -> tuple[int, int]:
        return int(self.window_size[0]), int(self.window_size[1])

    def to_bytes(self) -> bytes:
        record = np.zeros(1, dtype=uniform_dtype(self.precision))
        record["max_iterations"] = self.max_iterations
        record["scale"] = self.scale
        record["window_size"] = self.window_size
        record["world_center"] = self.world_center
        return record.tobytes()

    def quantized(self) -> "RenderParameters":
        """Return the parameters exactly as the evaluator reads them back."""

        return RenderParameters.from_bytes(self.to_bytes(), self.precision)

    def pixel_to_world(self, x, y):
        """Map screen coordinates (scalars or arrays) to the plane in this precision."""

        scalar = self.dtype.type
        width, height = scalar(self.window_size[0]), scalar(self.window_size[1])
        scale = scalar(self.scale)
        half = scalar(0.5)
        nx = np.asarray(x, dtype=self.dtype) / width - half
        ny = np.asarray(y, dtype=self.dtype) / height - half
        re = scalar(self.world_center[0]) + nx * scale * width / height
        im = scalar(self.world_center[1]) + ny * scale
        return re, im

