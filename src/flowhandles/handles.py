"""
Handle layout for nodes with any number of outgoing connections.

Decides where on a node's border each outgoing connection originates:
- Center: a single anchor at the bottom-center of the box
- Fan: anchors spread beneath the node for 2-5 branches
- Arc: anchors wrapping around the right side for 6+ branches
- Conditional: fixed Yes/No anchors plus extra branches below them

Strategy selection is an ordered rule table; the first matching predicate
wins. Every function here is pure: identical inputs give identical output.
"""

import logging
import math
from typing import Callable, List, Tuple, Union

from .labels import get_handle_label
from .models import (
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_WIDTH,
    AnchorPoint,
    Distribution,
    DistributionClass,
    NodeGeometry,
    NodeKind,
    Point,
    SemanticType,
    Strategy,
)
from .validation import (
    LayoutError,
    check_coordinate,
    check_count,
    check_dimension,
)

logger = logging.getLogger(__name__)

# =============================================================================
# LAYOUT CONFIGURATION - Adjust these values to tune anchor placement
# =============================================================================

# --- Strategy thresholds (branch counts) ---

# Up to this many branches use a single bottom-center anchor
CENTER_MAX_BRANCHES = 1

# Exactly this many branches sit side by side at the bottom
PAIR_BRANCHES = 2

# Up to this many branches fan out below the node; beyond it the arc is used
FAN_MAX_BRANCHES = 5

# --- Angles (degrees, 270 points straight down) ---

DOWN_ANGLE = 270

# Total spread of a fan before the per-step cap kicks in
FAN_SPREAD_ANGLE = 100

# Maximum angle between two neighbouring fan anchors
FAN_MAX_STEP = 25

# Sweep of the arc strategy, starting straight down
ARC_SWEEP_ANGLE = 270

# Sweep of the extra branches of a condition node
CONDITION_EXTRA_SWEEP = 180

# --- Distances (pixels) ---

# Distance between the two anchors of a two-way fan
MIN_SPACING = 40

# Radius of the 3-5 branch fan around the bottom-center
FAN_RADIUS = 50

# Arc radius is max(height / 2 + ARC_CLEARANCE, ARC_MIN_RADIUS)
ARC_CLEARANCE = 30
ARC_MIN_RADIUS = 60

# Yes/No anchors of a condition node, as fractions of the width
CONDITION_YES_RATIO = 0.3
CONDITION_NO_RATIO = 0.7

# Extra condition branches hang this far below the bottom edge
CONDITION_EXTRA_DROP = 40
CONDITION_EXTRA_RADIUS = 50

# Spread reported by a condition node that has extra branches
CONDITION_EXTRA_SPREAD = 60

# =============================================================================

StrategyRule = Tuple[Callable[[int, NodeKind], bool], Callable[..., Distribution]]


class HandleLayoutEngine:
    """
    Computes anchor distributions for nodes.

    The engine holds configuration only; layout() never mutates it, so one
    instance can serve any number of nodes.

    Attributes:
        min_spacing: Distance between the anchors of a two-way fan.
        fan_radius: Radius of the 3-5 branch fan.
        fan_spread_angle: Total fan spread before the step cap.
        fan_max_step: Maximum angle between neighbouring fan anchors.
        fan_max_branches: Largest branch count handled by the fan.
        arc_sweep_angle: Sweep of the arc strategy.
        rules: Ordered (predicate, strategy) table used by layout().
    """

    def __init__(
        self,
        min_spacing: float = MIN_SPACING,
        fan_radius: float = FAN_RADIUS,
        fan_spread_angle: float = FAN_SPREAD_ANGLE,
        fan_max_step: float = FAN_MAX_STEP,
        fan_max_branches: int = FAN_MAX_BRANCHES,
        arc_sweep_angle: float = ARC_SWEEP_ANGLE,
    ):
        self.min_spacing = min_spacing
        self.fan_radius = fan_radius
        self.fan_spread_angle = fan_spread_angle
        self.fan_max_step = fan_max_step
        self.fan_max_branches = fan_max_branches
        self.arc_sweep_angle = arc_sweep_angle

        self.rules: List[StrategyRule] = [
            (lambda n, kind: kind is NodeKind.CONDITION, self._conditional),
            (lambda n, kind: n == 0, self._empty),
            (lambda n, kind: n <= CENTER_MAX_BRANCHES, self._center),
            (lambda n, kind: n == PAIR_BRANCHES, self._pair),
            (lambda n, kind: n <= self.fan_max_branches, self._fan),
            (lambda n, kind: True, self._arc),
        ]

    def layout(
        self,
        branch_count: int,
        node_kind: Union[NodeKind, str],
        x: float,
        y: float,
        width: float = DEFAULT_NODE_WIDTH,
        height: float = DEFAULT_NODE_HEIGHT,
    ) -> Distribution:
        """
        Compute the anchor distribution of one node.

        Args:
            branch_count: Number of outgoing connections (>= 0).
            node_kind: Kind of node; condition nodes always get Yes/No.
            x: Left edge of the node box.
            y: Top edge of the node box.
            width: Box width.
            height: Box height.

        Returns:
            Distribution with branch_count anchors, or max(branch_count, 2)
            for condition nodes.

        Raises:
            LayoutError: On negative or non-integer counts, unknown kinds,
                or non-finite / negative geometry.
        """
        branch_count = check_count("branch_count", branch_count)
        kind = NodeKind.parse(node_kind)
        geometry = NodeGeometry(
            check_coordinate("x", x),
            check_coordinate("y", y),
            check_dimension("width", width),
            check_dimension("height", height),
        )
        return self._layout_geometry(branch_count, kind, geometry)

    def _layout_geometry(
        self, branch_count: int, node_kind: NodeKind, geometry: NodeGeometry
    ) -> Distribution:
        """Run the rule table against already validated input."""
        for predicate, strategy in self.rules:
            if predicate(branch_count, node_kind):
                distribution = strategy(geometry, branch_count)
                logger.debug(
                    "%s node with %d branch(es): %s strategy, %d anchor(s)",
                    node_kind.value,
                    branch_count,
                    distribution.strategy.value,
                    len(distribution.anchors),
                )
                return distribution
        raise LayoutError(
            f"no strategy rule matches {branch_count} branch(es) on a "
            f"{node_kind.value} node"
        )

    def _empty(self, geometry: NodeGeometry, count: int) -> Distribution:
        return Distribution(
            anchors=[],
            centroid=geometry.bottom_center,
            max_spread=0,
            strategy=Strategy.CENTER,
        )

    def _center(self, geometry: NodeGeometry, count: int) -> Distribution:
        anchor = AnchorPoint(
            x=geometry.center_x,
            y=geometry.bottom_y,
            angle=DOWN_ANGLE,
            distribution_class=DistributionClass.CENTER,
        )
        return Distribution(
            anchors=[anchor],
            centroid=geometry.bottom_center,
            max_spread=0,
            strategy=Strategy.CENTER,
        )

    def _pair(self, geometry: NodeGeometry, count: int) -> Distribution:
        center_x = geometry.center_x
        base_y = geometry.bottom_y
        half = self.min_spacing / 2
        anchors = [
            AnchorPoint(
                center_x - half, base_y, DOWN_ANGLE, DistributionClass.FAN_LEFT
            ),
            AnchorPoint(
                center_x + half, base_y, DOWN_ANGLE, DistributionClass.FAN_RIGHT
            ),
        ]
        return Distribution(
            anchors=anchors,
            centroid=Point(center_x, base_y),
            max_spread=self.min_spacing,
            strategy=Strategy.FAN,
        )

    def _fan(self, geometry: NodeGeometry, count: int) -> Distribution:
        """
        Fan of 3-5 anchors around the bottom-center.

        The step shrinks with the count but never exceeds fan_max_step, so
        the total spread stays near fan_spread_angle. The fan is centred on
        straight down; indices run left to right. Canvas y grows downward,
        so the sine term is subtracted and 270 lands below the node.
        """
        center_x = geometry.center_x
        base_y = geometry.bottom_y
        step = min(self.fan_spread_angle / (count - 1), self.fan_max_step)
        start = -(step * (count - 1)) / 2

        anchors = []
        for i in range(count):
            angle = start + step * i + DOWN_ANGLE
            radians = math.radians(angle)
            if i == 0:
                distribution_class = DistributionClass.FAN_LEFT
            elif i == count - 1:
                distribution_class = DistributionClass.FAN_RIGHT
            else:
                distribution_class = DistributionClass.FAN_CENTER
            anchors.append(
                AnchorPoint(
                    x=center_x + self.fan_radius * math.cos(radians),
                    y=base_y - self.fan_radius * math.sin(radians),
                    angle=angle,
                    distribution_class=distribution_class,
                )
            )

        return Distribution(
            anchors=anchors,
            centroid=Point(center_x, base_y),
            max_spread=count * self.min_spacing,
            strategy=Strategy.FAN,
        )

    def _arc(self, geometry: NodeGeometry, count: int) -> Distribution:
        """
        Arc of 6+ anchors around the node center.

        Starts straight down and sweeps through the right side. Angles are
        reported unwrapped (270 up to 270 + arc_sweep_angle).
        """
        center_x = geometry.center_x
        center_y = geometry.center_y
        radius = max(geometry.height / 2 + ARC_CLEARANCE, ARC_MIN_RADIUS)
        step = self.arc_sweep_angle / max(count - 1, 1)

        anchors = []
        for i in range(count):
            angle = DOWN_ANGLE + step * i
            radians = math.radians(angle)
            anchors.append(
                AnchorPoint(
                    x=center_x + radius * math.cos(radians),
                    y=center_y - radius * math.sin(radians),
                    angle=angle,
                    distribution_class=DistributionClass.ARC,
                )
            )

        return Distribution(
            anchors=anchors,
            centroid=Point(center_x, center_y),
            max_spread=radius * 2,
            strategy=Strategy.ARC,
        )

    def _conditional(self, geometry: NodeGeometry, count: int) -> Distribution:
        """Yes/No anchors, then any extra branches on a half circle below."""
        base_y = geometry.bottom_y
        left_x = geometry.x + geometry.width * CONDITION_YES_RATIO
        right_x = geometry.x + geometry.width * CONDITION_NO_RATIO
        center_x = geometry.center_x

        anchors = [
            AnchorPoint(
                x=left_x,
                y=base_y,
                angle=DOWN_ANGLE,
                distribution_class=DistributionClass.FAN_LEFT,
                semantic_type=SemanticType.YES,
                label=get_handle_label(SemanticType.YES),
            ),
            AnchorPoint(
                x=right_x,
                y=base_y,
                angle=DOWN_ANGLE,
                distribution_class=DistributionClass.FAN_RIGHT,
                semantic_type=SemanticType.NO,
                label=get_handle_label(SemanticType.NO),
            ),
        ]

        extra = count - 2
        if extra > 0:
            anchors.extend(
                _half_circle_anchors(center_x, base_y + CONDITION_EXTRA_DROP, extra)
            )

        return Distribution(
            anchors=anchors,
            centroid=Point(center_x, base_y),
            max_spread=max(
                abs(left_x - right_x), CONDITION_EXTRA_SPREAD if extra > 0 else 0
            ),
            strategy=Strategy.CONDITIONAL,
        )


def _half_circle_anchors(
    center_x: float, center_y: float, count: int
) -> List[AnchorPoint]:
    """Spread count anchors evenly over a half circle, endpoints excluded."""
    step = CONDITION_EXTRA_SWEEP / (count + 1)
    anchors = []
    for i in range(1, count + 1):
        angle = step * i
        radians = math.radians(angle)
        anchors.append(
            AnchorPoint(
                x=center_x + CONDITION_EXTRA_RADIUS * math.cos(radians),
                y=center_y + CONDITION_EXTRA_RADIUS * math.sin(radians),
                angle=angle - 90,
                distribution_class=DistributionClass.ARC,
            )
        )
    return anchors


_default_engine = HandleLayoutEngine()


def calculate_handle_positions(
    branch_count: int,
    node_kind: Union[NodeKind, str],
    x: float,
    y: float,
    width: float = DEFAULT_NODE_WIDTH,
    height: float = DEFAULT_NODE_HEIGHT,
) -> Distribution:
    """
    Compute anchor positions with the default engine configuration.

    Example:
        >>> dist = calculate_handle_positions(1, "action", 100, 100)
        >>> dist.anchors[0].position
        Point(x=210.0, y=185)
    """
    return _default_engine.layout(branch_count, node_kind, x, y, width, height)
