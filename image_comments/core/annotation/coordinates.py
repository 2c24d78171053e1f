"""
Coordinate conversion between pixel space and fractional space.

Fractional coordinates express a position as a fraction of the rendered
image's width and height, so a stored annotation stays pinned to the same
region of the image whatever size it is displayed at.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Union

logger = logging.getLogger(__name__)


class DegenerateFrame(ValueError):
    """Raised when a frame has a non-positive width or height."""

    def __init__(self, frame: "Frame"):
        super().__init__(
            f"Frame must have positive dimensions, got {frame.width}x{frame.height}"
        )
        self.frame = frame


@dataclass(frozen=True)
class Frame:
    """Current rendered pixel size of the reference image."""

    width: float
    height: float
    # Pixel position of the image's top-left corner in pointer coordinates
    origin_x: float = 0.0
    origin_y: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return not (self.width > 0 and self.height > 0)

    def validate(self):
        if self.is_degenerate:
            raise DegenerateFrame(self)


@dataclass(frozen=True)
class PixelPoint:
    x: float
    y: float

    @classmethod
    def coerce(cls, value: Union["PixelPoint", Sequence[float]]) -> "PixelPoint":
        """Accept either a PixelPoint or an (x, y) pair."""
        if isinstance(value, cls):
            return value
        x, y = value
        return cls(x=x, y=y)


@dataclass(frozen=True)
class FractionalPoint:
    x: float
    y: float


def clamp_point(point: FractionalPoint) -> FractionalPoint:
    """Confine a fractional point to the unit square."""
    return FractionalPoint(x=min(max(point.x, 0.0), 1.0), y=min(max(point.y, 0.0), 1.0))


@dataclass(frozen=True)
class PixelRect:
    """Pixel-space rectangle; points project to a zero-size rectangle."""

    x: float
    y: float
    width: float = 0.0
    height: float = 0.0

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class CoordinateNormalizer:
    """
    Maps pixel points to fractional points and back.

    Results of to_fractional are not clamped: pointer events slightly outside
    the frame (a fast drag leaving the image) produce values outside [0, 1].
    Pass clamp=True to confine captured points to the unit square instead.
    """

    def __init__(self, clamp: bool = False):
        self.clamp = clamp

    def to_fractional(self, pixel_point, frame: Frame) -> FractionalPoint:
        """
        Convert a pointer position to fractional coordinates.

        Args:
            pixel_point: PixelPoint or (x, y) pair in pointer coordinates
            frame: Current frame of the reference image

        Returns:
            FractionalPoint relative to the frame

        Raises:
            DegenerateFrame: If the frame has a non-positive dimension
        """
        frame.validate()
        point = PixelPoint.coerce(pixel_point)
        fractional = FractionalPoint(
            x=(point.x - frame.origin_x) / frame.width,
            y=(point.y - frame.origin_y) / frame.height,
        )
        if self.clamp:
            return clamp_point(fractional)
        return fractional

    def to_pixel(self, fractional_point: FractionalPoint, frame: Frame) -> PixelPoint:
        """Convert fractional coordinates back to pixels within the frame."""
        return PixelPoint(
            x=fractional_point.x * frame.width,
            y=fractional_point.y * frame.height,
        )

    def scale_extent(self, fractional_width: float, fractional_height: float, frame: Frame):
        """Scale a fractional extent to pixels, independently per axis."""
        return fractional_width * frame.width, fractional_height * frame.height

    def project(self, selection, frame: Frame) -> PixelRect:
        """
        Project a stored selection into pixel space for display.

        The selection itself is never modified.

        Raises:
            DegenerateFrame: If the frame has a non-positive dimension
        """
        frame.validate()
        origin = self.to_pixel(FractionalPoint(selection.x, selection.y), frame)
        width, height = self.scale_extent(
            getattr(selection, "width", 0.0),
            getattr(selection, "height", 0.0),
            frame,
        )
        return PixelRect(x=origin.x, y=origin.y, width=width, height=height)
