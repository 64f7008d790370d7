"""Geometric value objects for drawn characters."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from ..config import CANVAS_MAX
from ..errors import MalformedInputError


@dataclass(frozen=True)
class Point:
    """Immutable 2D point on the normalized canvas."""
    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to tuple for numpy interop."""
        return (self.x, self.y)

    @classmethod
    def from_list(cls, lst: Sequence[float]) -> Point:
        """Create a canvas point from an ``[x, y]`` pair.

        Coordinates are rounded to the nearest integer and clamped into
        ``0..CANVAS_MAX``, the way the drawing surface reports them.

        Raises:
            MalformedInputError: If the pair does not hold two numbers.
        """
        try:
            x, y = float(lst[0]), float(lst[1])
        except (TypeError, ValueError, IndexError) as e:
            raise MalformedInputError(f"Invalid point {lst!r}: {e}") from e
        if math.isnan(x) or math.isnan(y):
            raise MalformedInputError(f"Invalid point {lst!r}: NaN coordinate")
        return cls(_clamp_coord(x), _clamp_coord(y))


def _clamp_coord(value: float) -> int:
    return int(min(CANVAS_MAX, max(0, round(value))))


@dataclass(frozen=True)
class BBox:
    """Immutable bounding box."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Point:
        return Point(
            (self.x_min + self.x_max) / 2,
            (self.y_min + self.y_max) / 2
        )

    def to_square(self, min_side: float = 0.0) -> BBox:
        """Square box with the same center whose side is the larger extent.

        Args:
            min_side: Lower bound of the side, used for tiny or degenerate
                boxes (a single tap has zero extent).
        """
        side = max(self.width, self.height, min_side)
        c = self.center
        half = side / 2
        return BBox(c.x - half, c.y - half, c.x + half, c.y + half)

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> BBox:
        """Create bounding box containing all points."""
        if not points:
            return cls(0, 0, 0, 0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class Stroke:
    """One pen-down to pen-up gesture as an immutable sequence of points."""
    points: tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)


@dataclass(frozen=True)
class Character:
    """A drawn character: strokes in the order they were written."""
    strokes: tuple[Stroke, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'strokes', tuple(self.strokes))

    def __len__(self) -> int:
        return len(self.strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self.strokes)

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    @property
    def bbox(self) -> BBox:
        """Bounding box over the points of all strokes."""
        return BBox.from_points([p for stroke in self.strokes for p in stroke])

    @classmethod
    def from_lists(cls, strokes: Sequence[Sequence[Sequence[float]]]) -> Character:
        """Build a character from nested ``[[[x, y], ...], ...]`` lists.

        This is the shape drawing surfaces hand over. Coordinates are
        rounded and clamped to the canvas (see Point.from_list). Emptiness
        is not checked here; analysis rejects empty characters and strokes.

        Raises:
            MalformedInputError: If the nesting or a point is invalid.
        """
        if isinstance(strokes, (str, bytes)):
            raise MalformedInputError("Character must be a list of strokes")
        try:
            return cls(tuple(
                Stroke(tuple(Point.from_list(p) for p in stroke))
                for stroke in strokes
            ))
        except TypeError as e:
            raise MalformedInputError(f"Invalid stroke data: {e}") from e
