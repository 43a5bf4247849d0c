"""Pytest configuration and shared fixtures for flowhandles tests."""

import pytest

from flowhandles import (
    EdgeGeometryEngine,
    HandleLayoutEngine,
    NodeGeometry,
    WorkflowEdge,
    WorkflowLayout,
    WorkflowNode,
)


@pytest.fixture
def engine():
    """Default HandleLayoutEngine instance."""
    return HandleLayoutEngine()


@pytest.fixture
def edge_engine():
    """Default EdgeGeometryEngine instance."""
    return EdgeGeometryEngine()


@pytest.fixture
def linear_workflow():
    """Trigger -> action -> action."""
    nodes = [
        WorkflowNode("start", "trigger", NodeGeometry(0, 0)),
        WorkflowNode("send", "action", NodeGeometry(0, 200)),
        WorkflowNode("log", "action", NodeGeometry(0, 400)),
    ]
    edges = [
        WorkflowEdge("e1", "start", "send"),
        WorkflowEdge("e2", "send", "log"),
    ]
    return WorkflowLayout(nodes, edges)


@pytest.fixture
def branching_workflow():
    """A condition node with yes/no branches plus a parallel pair."""
    nodes = [
        WorkflowNode("check", "condition", NodeGeometry(200, 0)),
        WorkflowNode("approve", "action", NodeGeometry(0, 250)),
        WorkflowNode("reject", "action", NodeGeometry(400, 250)),
        WorkflowNode("notify", "action", NodeGeometry(200, 500)),
    ]
    edges = [
        WorkflowEdge("no-edge", "check", "reject", source_handle="no"),
        WorkflowEdge("yes-edge", "check", "approve", source_handle="yes"),
        WorkflowEdge("p1", "approve", "notify"),
        WorkflowEdge("p2", "approve", "notify"),
        WorkflowEdge("p3", "approve", "notify"),
    ]
    return WorkflowLayout(nodes, edges)


@pytest.fixture
def fanout_workflow():
    """A switch node with seven outgoing branches."""
    nodes = [WorkflowNode("switch", "switch", NodeGeometry(300, 0))]
    edges = []
    for i in range(7):
        target = f"case{i}"
        nodes.append(WorkflowNode(target, "action", NodeGeometry(i * 250, 300)))
        edges.append(WorkflowEdge(f"e{i}", "switch", target))
    return WorkflowLayout(nodes, edges)
