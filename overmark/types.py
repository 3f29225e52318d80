"""Core data types for overmark."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

from .config import DEFAULT_COLOR, DEFAULT_LINE_WIDTH, WIDGET_NAME


class AnnotationKind(str, Enum):
    """Discriminator tag for the annotation variants."""
    STROKE = "pen"
    ARROW = "arrow"


class ToolKind(str, Enum):
    """Drawing tools. Each tool creates exactly one annotation kind."""
    PEN = "pen"
    ARROW = "arrow"


class CommitAction(str, Enum):
    """User actions that produce a commit notification."""
    SAVE = "save"
    DELETE = "delete"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Point:
    """A location in image-native pixel coordinates."""
    x: float
    y: float

    def copy(self) -> Point:
        return Point(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Stroke:
    """Freehand annotation: an ordered run of points."""
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_LINE_WIDTH
    points: List[Point] = field(default_factory=list)
    kind: AnnotationKind = field(default=AnnotationKind.STROKE, init=False)


@dataclass
class Arrow:
    """Directed annotation from start to end."""
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_LINE_WIDTH
    start: Point = field(default_factory=lambda: Point(0.0, 0.0))
    end: Point = field(default_factory=lambda: Point(0.0, 0.0))
    kind: AnnotationKind = field(default=AnnotationKind.ARROW, init=False)


Annotation = Union[Stroke, Arrow]


@dataclass(frozen=True)
class ArrowPolygon:
    """Vertices of the arrow silhouette, all in image pixels."""
    tail_left: Point
    tail_right: Point
    shaft_left: Point
    shaft_right: Point
    head_left: Point
    head_right: Point
    tip: Point

    def outline(self) -> List[Tuple[float, float]]:
        """Vertices in drawing order: up the left side, round the tip, back down."""
        return [
            self.tail_left.as_tuple(),
            self.shaft_left.as_tuple(),
            self.head_left.as_tuple(),
            self.tip.as_tuple(),
            self.head_right.as_tuple(),
            self.shaft_right.as_tuple(),
            self.tail_right.as_tuple(),
        ]


@dataclass(frozen=True)
class ImageSize:
    """Natural (unscaled) raster dimensions."""
    width: int = 0
    height: int = 0

    @property
    def is_known(self) -> bool:
        return self.width > 0 and self.height > 0

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class SurfaceRect:
    """On-screen bounding box of the interaction surface, in client space."""
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PointerEvent:
    """A pointer sample in client space."""
    client_x: float
    client_y: float
    pointer_id: int = 1


@dataclass(frozen=True)
class CommitEvent:
    """Notification emitted by every commit action."""
    action: CommitAction
    payload: str
    timestamp: int
    widget: str = WIDGET_NAME
