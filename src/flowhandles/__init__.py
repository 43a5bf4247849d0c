"""
flowhandles - Handle layout and edge geometry for workflow editors

Decides where on a node's border each outgoing connection starts, and
computes the Bezier curve of every connection, spreading parallel edges.

Example:
    >>> from flowhandles import calculate_handle_positions, calculate_edge_curve
    >>> dist = calculate_handle_positions(3, "action", 0, 0)
    >>> curve = calculate_edge_curve(dist.anchors[0], (40, 300))
    >>> curve.to_svg_path()

Debug Mode Example:
    >>> layout = WorkflowLayout(nodes, edges)
    >>> geometry = layout.compute(debug=True)
    >>> print(layout.get_trace().summary())
"""

from .edges import EdgeGeometryEngine, calculate_edge_curve, lateral_offset
from .handles import HandleLayoutEngine, calculate_handle_positions
from .labels import (
    SemanticLabel,
    edge_decoration,
    get_handle_label,
    get_semantic_color,
    label,
)
from .models import (
    AnchorPoint,
    Distribution,
    DistributionClass,
    EdgeCurve,
    NodeGeometry,
    NodeKind,
    ParallelEdgeGroup,
    Point,
    SemanticType,
    Strategy,
)
from .png_renderer import PNGRenderer, render_to_png
from .tracer import AnchorPlacement, LayoutStage, LayoutTrace
from .validation import LayoutError
from .workflow import WorkflowEdge, WorkflowGeometry, WorkflowLayout, WorkflowNode

__version__ = "0.1.0"

__all__ = [
    # Handle layout
    "HandleLayoutEngine",
    "calculate_handle_positions",
    # Edge geometry
    "EdgeGeometryEngine",
    "calculate_edge_curve",
    "lateral_offset",
    # Labels
    "SemanticLabel",
    "label",
    "get_handle_label",
    "get_semantic_color",
    "edge_decoration",
    # Models
    "AnchorPoint",
    "Distribution",
    "DistributionClass",
    "EdgeCurve",
    "NodeGeometry",
    "NodeKind",
    "ParallelEdgeGroup",
    "Point",
    "SemanticType",
    "Strategy",
    "LayoutError",
    # Workflow
    "WorkflowLayout",
    "WorkflowNode",
    "WorkflowEdge",
    "WorkflowGeometry",
    # Rendering
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "LayoutTrace",
    "LayoutStage",
    "AnchorPlacement",
]
