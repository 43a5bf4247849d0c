"""
Data models for handle layout and edge geometry.

This module contains the dataclasses and enumerations shared by the layout
engines. Every value here is ephemeral: distributions and curves are rebuilt
from scratch on each layout pass and are never persisted.

Classes:
    NodeKind: Closed enumeration of workflow node kinds.
    DistributionClass: Placement class of a single anchor.
    SemanticType: Logical meaning of a branch (yes/no/success/error/default).
    Strategy: Name of the distribution strategy that produced anchors.
    Point: Immutable canvas coordinate.
    NodeGeometry: Position and size of a node box.
    AnchorPoint: A point on a node border where an edge attaches.
    Distribution: Ordered anchors of one node plus summary geometry.
    EdgeCurve: Cubic Bezier connecting an anchor to a target.
    ParallelEdgeGroup: Size of an edge's (source, target) group and its index.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .validation import LayoutError

# Default node box size used by the editor canvas
DEFAULT_NODE_WIDTH = 220
DEFAULT_NODE_HEIGHT = 85


class NodeKind(str, Enum):
    """Kinds of workflow nodes. Only CONDITION changes anchor placement."""

    TRIGGER = "trigger"
    ACTION = "action"
    CONDITION = "condition"
    DELAY = "delay"
    LOOP = "loop"
    SWITCH = "switch"
    FILTER = "filter"
    TRANSFORM = "transform"

    @classmethod
    def parse(cls, value: Union["NodeKind", str]) -> "NodeKind":
        """
        Resolve a node kind from an enum member or its string value.

        Raises:
            LayoutError: If the value is not a known node kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise LayoutError(
                f"Unknown node kind {value!r} (expected one of: {valid})"
            ) from None


class DistributionClass(str, Enum):
    """Placement class of an anchor within its distribution."""

    CENTER = "center"
    FAN_LEFT = "fan-left"
    FAN_CENTER = "fan-center"
    FAN_RIGHT = "fan-right"
    ARC = "arc"


class SemanticType(str, Enum):
    """Logical meaning of a branch, independent of its screen position."""

    YES = "yes"
    NO = "no"
    SUCCESS = "success"
    ERROR = "error"
    DEFAULT = "default"


class Strategy(str, Enum):
    """Distribution strategies."""

    CENTER = "center"
    FAN = "fan"
    ARC = "arc"
    CONDITIONAL = "conditional"


@dataclass(frozen=True)
class Point:
    """A canvas coordinate."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


PointLike = Union[Point, Tuple[float, float]]


def as_point(value) -> Point:
    """
    Coerce a Point, an AnchorPoint or an (x, y) pair to a Point.

    Raises:
        LayoutError: If the value has no usable coordinates.
    """
    if isinstance(value, Point):
        return value
    if isinstance(value, AnchorPoint):
        return value.position
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Point(value[0], value[1])
    raise LayoutError(f"Expected a point or an (x, y) pair, got {value!r}")


@dataclass(frozen=True)
class NodeGeometry:
    """
    Position and size of a node box.

    Attributes:
        x: Left edge x-coordinate.
        y: Top edge y-coordinate.
        width: Box width.
        height: Box height.
    """

    x: float
    y: float
    width: float = DEFAULT_NODE_WIDTH
    height: float = DEFAULT_NODE_HEIGHT

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def bottom_y(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def bottom_center(self) -> Point:
        return Point(self.center_x, self.bottom_y)

    @property
    def top_center(self) -> Point:
        return Point(self.center_x, self.y)


@dataclass(frozen=True)
class AnchorPoint:
    """
    A point on a node's border where a connection attaches.

    Attributes:
        x: Canvas x-coordinate.
        y: Canvas y-coordinate.
        angle: Direction in degrees (270 is straight down). Arc anchors are
            not normalized, so values above 360 occur.
        distribution_class: Placement class within the distribution.
        semantic_type: Branch meaning, never None.
        label: Optional display label (e.g. "Yes" on condition nodes).
    """

    x: float
    y: float
    angle: float
    distribution_class: DistributionClass
    semantic_type: SemanticType = SemanticType.DEFAULT
    label: Optional[str] = None

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


@dataclass
class Distribution:
    """
    Result of laying out the anchors of one node.

    Attributes:
        anchors: Anchors in branch order.
        centroid: Reference point of the distribution.
        max_spread: Visual spread reported by the strategy. Its meaning
            differs per strategy; see pairwise_spread for a uniform measure.
        strategy: Strategy that produced the anchors.
    """

    anchors: List[AnchorPoint] = field(default_factory=list)
    centroid: Point = Point(0.0, 0.0)
    max_spread: float = 0.0
    strategy: Strategy = Strategy.CENTER

    def __len__(self) -> int:
        return len(self.anchors)

    @property
    def pairwise_spread(self) -> float:
        """Largest distance between any two anchors (0 for fewer than two)."""
        spread = 0.0
        for i, first in enumerate(self.anchors):
            for second in self.anchors[i + 1 :]:
                spread = max(spread, first.position.distance_to(second.position))
        return spread

    def semantic_counts(self) -> Dict[SemanticType, int]:
        """Count anchors per semantic type."""
        counts: Dict[SemanticType, int] = {}
        for anchor in self.anchors:
            counts[anchor.semantic_type] = counts.get(anchor.semantic_type, 0) + 1
        return counts


@dataclass(frozen=True)
class EdgeCurve:
    """
    A cubic Bezier curve from a source anchor to a target point.

    Only control1 and control2 are ever adjusted; start and end are the
    anchor position and target point exactly.
    """

    start: Point
    control1: Point
    control2: Point
    end: Point

    @property
    def lateral_offset(self) -> float:
        """Horizontal shift applied to the second control point."""
        return self.control2.x - self.end.x

    def point_at(self, t: float) -> Point:
        """Evaluate the curve at parameter t in [0, 1]."""
        u = 1 - t
        weights = (u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t)
        points = (self.start, self.control1, self.control2, self.end)
        return Point(
            sum(w * p.x for w, p in zip(weights, points)),
            sum(w * p.y for w, p in zip(weights, points)),
        )

    def sample(self, steps: int = 24) -> List[Point]:
        """
        Approximate the curve with a polyline of steps + 1 points.

        The first and last points are the exact endpoints.
        """
        if steps < 1:
            raise LayoutError(f"Curve sampling needs at least 1 step, got {steps}")
        points = [self.start]
        points.extend(self.point_at(i / steps) for i in range(1, steps))
        points.append(self.end)
        return points

    def to_svg_path(self) -> str:
        """Format the curve as an SVG path data string."""
        coords = (self.start, self.control1, self.control2, self.end)
        x0, c1, c2, x3 = (f"{p.x:g},{p.y:g}" for p in coords)
        return f"M {x0} C {c1} {c2} {x3}"


@dataclass(frozen=True)
class ParallelEdgeGroup:
    """
    Membership of an edge in its (source, target) group.

    Attributes:
        count: Number of edges sharing the same source and target.
        index: Position of this edge within the group.
    """

    count: int = 1
    index: int = 0
