"""
Edge geometry: cubic Bezier curves between anchors and targets.

Curves leave the source anchor heading down and arrive at the target heading
down. Edges that share the same source and target are spread apart by
shifting the control point next to the target sideways, so the endpoints
always stay exactly on the anchor and the target.
"""

import logging
from typing import Union

from .models import AnchorPoint, EdgeCurve, Point, PointLike, as_point
from .validation import check_coordinate, check_parallel_group

logger = logging.getLogger(__name__)

# =============================================================================
# CURVE CONFIGURATION
# =============================================================================

# Fraction of the vertical distance used as control point depth
CONTROL_DEPTH_RATIO = 0.5

# Deepest bulge allowed, so long edges don't curve excessively
MAX_CONTROL_DEPTH = 80

# Outermost lateral offset of a parallel edge group (pixels); the group is
# spread evenly over [-MAX_PARALLEL_OFFSET, +MAX_PARALLEL_OFFSET]
MAX_PARALLEL_OFFSET = 30

# =============================================================================


def lateral_offset(
    parallel_count: int, index_in_group: int, max_offset: float = MAX_PARALLEL_OFFSET
) -> float:
    """
    Sideways shift of the target-side control point of a parallel edge.

    A lone edge is not shifted. Groups are spread symmetrically around zero;
    even-sized groups never include zero.

    Example:
        >>> [lateral_offset(3, i) for i in range(3)]
        [-30.0, 0.0, 30.0]
    """
    if parallel_count <= 1:
        return 0
    step = (max_offset * 2) / (parallel_count - 1)
    return -max_offset + step * index_in_group


class EdgeGeometryEngine:
    """
    Computes edge curves.

    Attributes:
        depth_ratio: Fraction of the vertical distance used as curve depth.
        max_depth: Cap on the curve depth.
        max_offset: Outermost lateral offset of a parallel group.
    """

    def __init__(
        self,
        depth_ratio: float = CONTROL_DEPTH_RATIO,
        max_depth: float = MAX_CONTROL_DEPTH,
        max_offset: float = MAX_PARALLEL_OFFSET,
    ):
        self.depth_ratio = depth_ratio
        self.max_depth = max_depth
        self.max_offset = max_offset

    def curve(
        self,
        source_anchor: Union[AnchorPoint, PointLike],
        target_point: PointLike,
        parallel_count: int = 1,
        index_in_group: int = 0,
    ) -> EdgeCurve:
        """
        Compute the curve from a source anchor to a target point.

        Args:
            source_anchor: Anchor (or plain point) the edge starts at.
            target_point: Point the edge ends at.
            parallel_count: Number of edges sharing this source/target pair.
            index_in_group: Position of this edge within that group.

        Returns:
            EdgeCurve whose start and end equal the inputs exactly.

        Raises:
            LayoutError: On non-finite coordinates or an invalid group.
        """
        start = as_point(source_anchor)
        end = as_point(target_point)
        for name, value in (
            ("source x", start.x),
            ("source y", start.y),
            ("target x", end.x),
            ("target y", end.y),
        ):
            check_coordinate(name, value)
        check_parallel_group(parallel_count, index_in_group)

        depth = min(abs(end.y - start.y) * self.depth_ratio, self.max_depth)
        offset = lateral_offset(parallel_count, index_in_group, self.max_offset)

        if parallel_count > 1:
            logger.debug(
                "Parallel edge %d/%d shifted by %s",
                index_in_group + 1,
                parallel_count,
                offset,
            )

        return EdgeCurve(
            start=start,
            control1=Point(start.x, start.y + depth),
            control2=Point(end.x + offset, end.y - depth),
            end=end,
        )


_default_engine = EdgeGeometryEngine()


def calculate_edge_curve(
    source_anchor: Union[AnchorPoint, PointLike],
    target_point: PointLike,
    parallel_count: int = 1,
    index_in_group: int = 0,
) -> EdgeCurve:
    """Compute an edge curve with the default engine configuration."""
    return _default_engine.curve(
        source_anchor, target_point, parallel_count, index_in_group
    )
