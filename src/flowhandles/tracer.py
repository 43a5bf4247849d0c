"""
Debug tracing for workflow layout passes.

When debug mode is enabled, WorkflowLayout records every stage of a layout
pass and every anchor it places. This is primarily useful for:
1. Understanding why an anchor ended up where it did
2. Seeing which strategy each node used
3. Writing targeted tests against intermediate results

Usage:
    >>> layout = WorkflowLayout(nodes, edges)
    >>> geometry = layout.compute(debug=True)
    >>> trace = layout.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("layout_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class AnchorPlacement:
    """
    Record of a single anchor placed during a layout pass.

    Attributes:
        node_id: Node the anchor belongs to
        index: Position of the anchor within the node's distribution
        x: X coordinate on the canvas
        y: Y coordinate on the canvas
        strategy: Strategy that produced the anchor (e.g. "fan")
        reason: Distribution class and semantic type of the anchor
    """

    node_id: str
    index: int
    x: float
    y: float
    strategy: str
    reason: str

    def __str__(self) -> str:
        return (
            f"{self.node_id}[{self.index}] ({self.x:.1f},{self.y:.1f}) "
            f"[{self.reason}] via {self.strategy}"
        )


@dataclass
class LayoutStage:
    """
    Snapshot of data at one stage of a layout pass.

    Stages, in order: branch_counts, parallel_groups, distributions, curves.
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class LayoutTrace:
    """
    Complete trace of a workflow layout pass.

    Attributes:
        stages: Pipeline stages with their data
        anchor_placements: Every anchor placed, in placement order
        node_count: Number of nodes laid out
        edge_count: Number of edges laid out
    """

    stages: List[LayoutStage] = field(default_factory=list)
    anchor_placements: List[AnchorPlacement] = field(default_factory=list)
    node_count: int = 0
    edge_count: int = 0

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        self.stages.append(LayoutStage(name, data.copy()))

    def add_placement(
        self,
        node_id: str,
        index: int,
        x: float,
        y: float,
        strategy: str,
        reason: str,
    ) -> None:
        self.anchor_placements.append(
            AnchorPlacement(node_id, index, x, y, strategy, reason)
        )

    def get_stage(self, name: str) -> Optional[LayoutStage]:
        """Get a specific stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_placements_for(self, node_id: str) -> List[AnchorPlacement]:
        """Get all anchors placed for one node."""
        return [p for p in self.anchor_placements if p.node_id == node_id]

    def get_placements_by_strategy(self, strategy: str) -> List[AnchorPlacement]:
        return [p for p in self.anchor_placements if p.strategy == strategy]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the stage list, the anchor count and the
        number of anchors per strategy.
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Nodes: {self.node_count}",
            f"Edges: {self.edge_count}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name}")

        lines.extend(["", f"Total anchors placed: {len(self.anchor_placements)}", ""])

        strategy_counts: Dict[str, int] = {}
        for p in self.anchor_placements:
            strategy_counts[p.strategy] = strategy_counts.get(p.strategy, 0) + 1

        lines.append("Anchors by strategy:")
        for strategy, count in sorted(strategy_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {strategy}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Summary followed by every stage and every anchor placement."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("ANCHOR PLACEMENTS:")
        lines.append("-" * 40)
        for p in self.anchor_placements:
            lines.append(str(p))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
