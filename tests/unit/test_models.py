"""Unit tests for the models module."""

import pytest

from flowhandles import (
    AnchorPoint,
    Distribution,
    DistributionClass,
    LayoutError,
    NodeGeometry,
    NodeKind,
    Point,
    SemanticType,
)
from flowhandles.models import as_point


class TestNodeKind:
    """Tests for NodeKind parsing."""

    def test_parse_member(self):
        """Test members pass through unchanged."""
        assert NodeKind.parse(NodeKind.LOOP) is NodeKind.LOOP

    def test_parse_string(self):
        """Test string values resolve to members."""
        assert NodeKind.parse("transform") is NodeKind.TRANSFORM

    def test_closed_enumeration(self):
        """Test exactly the eight editor node kinds exist."""
        assert {k.value for k in NodeKind} == {
            "trigger",
            "action",
            "condition",
            "delay",
            "loop",
            "switch",
            "filter",
            "transform",
        }

    def test_parse_unknown(self):
        """Test unknown kinds raise LayoutError listing the valid ones."""
        with pytest.raises(LayoutError, match="condition"):
            NodeKind.parse("Condition")


class TestNodeGeometry:
    """Tests for NodeGeometry dataclass."""

    def test_defaults(self):
        """Test the default node size."""
        geometry = NodeGeometry(0, 0)
        assert geometry.width == 220
        assert geometry.height == 85

    def test_derived_properties(self):
        """Test edges and centers."""
        geometry = NodeGeometry(10, 20, 100, 50)
        assert geometry.x2 == 110
        assert geometry.bottom_y == 70
        assert geometry.center_x == 60
        assert geometry.center_y == 45
        assert geometry.bottom_center == Point(60, 70)
        assert geometry.top_center == Point(60, 20)


class TestPoints:
    """Tests for Point and as_point."""

    def test_distance(self):
        """Test Euclidean distance."""
        assert Point(0, 0).distance_to(Point(3, 4)) == 5

    def test_as_point(self):
        """Test coercion from points, anchors and pairs."""
        anchor = AnchorPoint(1, 2, 270, DistributionClass.CENTER)
        assert as_point(Point(1, 2)) == Point(1, 2)
        assert as_point(anchor) == Point(1, 2)
        assert as_point((1, 2)) == Point(1, 2)
        assert as_point([1, 2]) == Point(1, 2)

    def test_as_point_rejects_other_values(self):
        """Test values without two coordinates are rejected."""
        with pytest.raises(LayoutError):
            as_point((1, 2, 3))
        with pytest.raises(LayoutError):
            as_point(None)


class TestDistribution:
    """Tests for Distribution helpers."""

    def test_pairwise_spread(self):
        """Test the largest anchor-to-anchor distance."""
        dist = Distribution(
            anchors=[
                AnchorPoint(0, 0, 270, DistributionClass.FAN_LEFT),
                AnchorPoint(10, 0, 270, DistributionClass.FAN_CENTER),
                AnchorPoint(30, 40, 270, DistributionClass.FAN_RIGHT),
            ]
        )
        assert dist.pairwise_spread == 50

    def test_pairwise_spread_single_anchor(self):
        """Test fewer than two anchors have no spread."""
        assert Distribution().pairwise_spread == 0
        anchor = AnchorPoint(5, 5, 270, DistributionClass.CENTER)
        assert Distribution(anchors=[anchor]).pairwise_spread == 0

    def test_semantic_counts(self):
        """Test anchors are counted per semantic type."""
        dist = Distribution(
            anchors=[
                AnchorPoint(0, 0, 270, DistributionClass.FAN_LEFT, SemanticType.YES),
                AnchorPoint(1, 0, 270, DistributionClass.ARC),
                AnchorPoint(2, 0, 270, DistributionClass.ARC),
            ]
        )
        assert dist.semantic_counts() == {
            SemanticType.YES: 1,
            SemanticType.DEFAULT: 2,
        }

    def test_anchor_defaults(self):
        """Test anchors default to the default semantic type and no label."""
        anchor = AnchorPoint(0, 0, 270, DistributionClass.CENTER)
        assert anchor.semantic_type is SemanticType.DEFAULT
        assert anchor.label is None
