"""
Workflow-level layout using networkx.

Bridges an editor's node and edge lists and the layout engines:
- Branch counts from node out-degrees
- Parallel-edge groups from (source, target) pairs
- Binding each edge to an anchor of its source node
- Curves from every bound anchor to its target node

The edge list is held in a networkx MultiDiGraph keyed by edge id, so edges
sharing a source and target stay distinct.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Union

import networkx as nx

from .edges import EdgeGeometryEngine
from .handles import HandleLayoutEngine
from .models import (
    AnchorPoint,
    Distribution,
    EdgeCurve,
    NodeGeometry,
    NodeKind,
    ParallelEdgeGroup,
    SemanticType,
)
from .tracer import LayoutTrace
from .validation import LayoutError

logger = logging.getLogger(__name__)


@dataclass
class WorkflowNode:
    """A node as supplied by the editor."""

    id: str
    kind: Union[NodeKind, str]
    geometry: NodeGeometry

    def __post_init__(self):
        self.kind = NodeKind.parse(self.kind)


@dataclass
class WorkflowEdge:
    """
    An edge as supplied by the editor.

    Attributes:
        id: Unique edge id.
        source: Source node id.
        target: Target node id.
        source_handle: Optional handle id on the source node; "yes"/"no"
            select the matching anchor of a condition node.
    """

    id: str
    source: str
    target: str
    source_handle: Optional[str] = None


@dataclass
class WorkflowGeometry:
    """Everything needed to draw a workflow canvas."""

    distributions: Dict[str, Distribution] = field(default_factory=dict)
    anchors: Dict[str, AnchorPoint] = field(default_factory=dict)
    curves: Dict[str, EdgeCurve] = field(default_factory=dict)


class WorkflowLayout:
    """
    Lays out the anchors and curves of a whole workflow.

    Nothing is cached between calls; every method recomputes from the node
    and edge lists given at construction.
    """

    def __init__(
        self,
        nodes: Iterable[WorkflowNode],
        edges: Iterable[WorkflowEdge],
        handle_engine: Optional[HandleLayoutEngine] = None,
        edge_engine: Optional[EdgeGeometryEngine] = None,
    ):
        """
        Build the workflow graph.

        Raises:
            LayoutError: On duplicate ids or edges referencing unknown nodes.
        """
        self.handle_engine = handle_engine or HandleLayoutEngine()
        self.edge_engine = edge_engine or EdgeGeometryEngine()
        self.nodes: Dict[str, WorkflowNode] = {}
        self.edges: List[WorkflowEdge] = list(edges)
        self.graph = nx.MultiDiGraph()
        self._trace: Optional[LayoutTrace] = None

        for node in nodes:
            if node.id in self.nodes:
                raise LayoutError(f"Duplicate node id {node.id!r}")
            self.nodes[node.id] = node
            self.graph.add_node(node.id)

        seen: Set[str] = set()
        for edge in self.edges:
            if edge.id in seen:
                raise LayoutError(f"Duplicate edge id {edge.id!r}")
            seen.add(edge.id)
            for end in (edge.source, edge.target):
                if end not in self.nodes:
                    raise LayoutError(
                        f"Edge {edge.id!r} references unknown node {end!r}"
                    )
            self.graph.add_edge(edge.source, edge.target, key=edge.id)

    def branch_counts(self) -> Dict[str, int]:
        """Number of outgoing edges of every node."""
        return {node_id: self.graph.out_degree(node_id) for node_id in self.nodes}

    def parallel_groups(self) -> Dict[str, ParallelEdgeGroup]:
        """Group size and index of every edge, indexed in edge order."""
        groups = {}
        for edge in self.edges:
            keys = list(self.graph[edge.source][edge.target])
            groups[edge.id] = ParallelEdgeGroup(
                count=len(keys), index=keys.index(edge.id)
            )
        return groups

    def distributions(self) -> Dict[str, Distribution]:
        """Anchor distribution of every node."""
        counts = self.branch_counts()
        result = {}
        for node_id, node in self.nodes.items():
            geometry = node.geometry
            result[node_id] = self.handle_engine.layout(
                counts[node_id],
                node.kind,
                geometry.x,
                geometry.y,
                geometry.width,
                geometry.height,
            )
        return result

    def bind_anchors(
        self, distributions: Optional[Dict[str, Distribution]] = None
    ) -> Dict[str, AnchorPoint]:
        """
        Pick the source anchor of every edge.

        Edges whose source_handle names a semantic type claim the first free
        anchor of that type. Remaining edges take free anchors in anchor
        order, in edge order.
        """
        if distributions is None:
            distributions = self.distributions()

        outgoing: Dict[str, List[WorkflowEdge]] = {}
        for edge in self.edges:
            outgoing.setdefault(edge.source, []).append(edge)

        bound: Dict[str, AnchorPoint] = {}
        for node_id, node_edges in outgoing.items():
            anchors = distributions[node_id].anchors
            claimed: Set[int] = set()
            unbound = []

            for edge in node_edges:
                slot = self._find_semantic_slot(edge, anchors, claimed)
                if slot is None:
                    unbound.append(edge)
                else:
                    claimed.add(slot)
                    bound[edge.id] = anchors[slot]

            free = (i for i in range(len(anchors)) if i not in claimed)
            for edge, slot in zip(unbound, free):
                bound[edge.id] = anchors[slot]

        return bound

    @staticmethod
    def _find_semantic_slot(
        edge: WorkflowEdge, anchors: List[AnchorPoint], claimed: Set[int]
    ) -> Optional[int]:
        if edge.source_handle is None:
            return None
        try:
            wanted = SemanticType(edge.source_handle)
        except ValueError:
            return None
        for i, anchor in enumerate(anchors):
            if i not in claimed and anchor.semantic_type is wanted:
                return i
        return None

    def geometry(self) -> WorkflowGeometry:
        """
        Lay out every anchor and curve without touching the trace.

        Returns:
            WorkflowGeometry with distributions per node and anchors and
            curves per edge.
        """
        groups = self.parallel_groups()
        distributions = self.distributions()
        anchors = self.bind_anchors(distributions)

        curves = {}
        for edge in self.edges:
            group = groups[edge.id]
            target = self.nodes[edge.target].geometry.top_center
            curves[edge.id] = self.edge_engine.curve(
                anchors[edge.id], target, group.count, group.index
            )

        logger.info(
            "Laid out %d node(s) and %d edge(s)", len(self.nodes), len(self.edges)
        )
        return WorkflowGeometry(
            distributions=distributions, anchors=anchors, curves=curves
        )

    def compute(self, debug: bool = False) -> WorkflowGeometry:
        """
        Lay out the workflow and record or clear the trace.

        Args:
            debug: Record a LayoutTrace, available from get_trace(). Without
                it any earlier trace is cleared.

        Returns:
            The same WorkflowGeometry as geometry().
        """
        result = self.geometry()
        if not debug:
            self._trace = None
            return result

        trace = LayoutTrace(node_count=len(self.nodes), edge_count=len(self.edges))
        trace.add_stage("branch_counts", self.branch_counts())
        trace.add_stage(
            "parallel_groups",
            {eid: (g.count, g.index) for eid, g in self.parallel_groups().items()},
        )
        trace.add_stage(
            "distributions",
            {nid: d.strategy.value for nid, d in result.distributions.items()},
        )
        for node_id, distribution in result.distributions.items():
            for i, anchor in enumerate(distribution.anchors):
                trace.add_placement(
                    node_id,
                    i,
                    anchor.x,
                    anchor.y,
                    distribution.strategy.value,
                    f"{anchor.distribution_class.value}/"
                    f"{anchor.semantic_type.value}",
                )
        trace.add_stage(
            "curves", {eid: c.to_svg_path() for eid, c in result.curves.items()}
        )
        self._trace = trace
        return result

    def get_trace(self) -> Optional[LayoutTrace]:
        """Trace of the last compute(debug=True) call, if any."""
        return self._trace
