"""
Tests for the tracer module.

These tests verify the debug tracing infrastructure used to capture
detailed information about workflow layout passes.
"""

from flowhandles.tracer import AnchorPlacement, LayoutStage, LayoutTrace


class TestAnchorPlacement:
    """Tests for AnchorPlacement dataclass."""

    def test_creation(self):
        """Test basic creation of AnchorPlacement."""
        placement = AnchorPlacement(
            node_id="check", index=0, x=66, y=85, strategy="conditional",
            reason="fan-left/yes"
        )
        assert placement.node_id == "check"
        assert placement.index == 0
        assert placement.strategy == "conditional"

    def test_str(self):
        """Test string representation."""
        placement = AnchorPlacement("check", 1, 154, 85, "conditional", "fan-right/no")
        result = str(placement)
        assert "check[1]" in result
        assert "(154.0,85.0)" in result
        assert "fan-right/no" in result
        assert "conditional" in result


class TestLayoutStage:
    """Tests for LayoutStage dataclass."""

    def test_str(self):
        """Test stage formatting."""
        stage = LayoutStage(name="branch_counts", data={"a": 2})
        result = str(stage)
        assert "=== Stage: branch_counts ===" in result
        assert "a: 2" in result

    def test_str_truncates_long_values(self):
        """Test long values are truncated to 100 characters."""
        stage = LayoutStage(name="curves", data={"e1": "x" * 150})
        result = str(stage)
        assert "x" * 100 + "..." in result
        assert "x" * 101 not in result


class TestLayoutTrace:
    """Tests for LayoutTrace."""

    def make_trace(self):
        trace = LayoutTrace(node_count=2, edge_count=3)
        trace.add_stage("branch_counts", {"a": 3, "b": 0})
        trace.add_placement("a", 0, 0, 0, "fan", "fan-left/default")
        trace.add_placement("a", 1, 10, 0, "fan", "fan-center/default")
        trace.add_placement("b", 0, 5, 5, "center", "center/default")
        return trace

    def test_add_stage_copies_data(self):
        """Test stage data is snapshotted."""
        trace = LayoutTrace()
        data = {"a": 1}
        trace.add_stage("branch_counts", data)
        data["a"] = 2
        assert trace.get_stage("branch_counts").data == {"a": 1}

    def test_get_stage_missing(self):
        """Test unknown stages return None."""
        assert LayoutTrace().get_stage("curves") is None

    def test_placement_queries(self):
        """Test filtering placements by node and strategy."""
        trace = self.make_trace()
        assert len(trace.get_placements_for("a")) == 2
        assert len(trace.get_placements_by_strategy("center")) == 1
        assert trace.get_placements_for("zzz") == []

    def test_summary(self):
        """Test the summary lists counts and strategies."""
        summary = self.make_trace().summary()
        assert "LAYOUT TRACE SUMMARY" in summary
        assert "Nodes: 2" in summary
        assert "Edges: 3" in summary
        assert "Total anchors placed: 3" in summary
        assert "fan: 2" in summary
        assert "center: 1" in summary

    def test_dump(self):
        """Test the dump includes stages and placements."""
        dump = self.make_trace().dump()
        assert "DETAILED TRACE" in dump
        assert "=== Stage: branch_counts ===" in dump
        assert "ANCHOR PLACEMENTS:" in dump
        assert "b[0]" in dump

    def test_dump_to_file(self, tmp_path):
        """Test writing the dump to a file."""
        path = tmp_path / "trace.txt"
        trace = self.make_trace()
        trace.dump_to_file(str(path))
        assert path.read_text(encoding="utf-8") == trace.dump()
