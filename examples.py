#!/usr/bin/env python3
"""
Examples of using flowhandles.

Run this file to render example workflows as PNG files and print the
layout trace of each.
"""

import logging

from flowhandles import (
    NodeGeometry,
    WorkflowEdge,
    WorkflowLayout,
    WorkflowNode,
    render_to_png,
)


def example_condition():
    """Condition node with Yes/No branches and a third fallback branch."""
    print("Example 1: Condition Branches")

    nodes = [
        WorkflowNode("webhook", "trigger", NodeGeometry(250, 0)),
        WorkflowNode("amount > 100", "condition", NodeGeometry(250, 200)),
        WorkflowNode("approve", "action", NodeGeometry(0, 450)),
        WorkflowNode("review", "action", NodeGeometry(250, 450)),
        WorkflowNode("reject", "action", NodeGeometry(500, 450)),
    ]
    edges = [
        WorkflowEdge("e1", "webhook", "amount > 100"),
        WorkflowEdge("e2", "amount > 100", "approve", source_handle="yes"),
        WorkflowEdge("e3", "amount > 100", "reject", source_handle="no"),
        WorkflowEdge("e4", "amount > 100", "review"),
    ]
    run(WorkflowLayout(nodes, edges), "example_condition.png")


def example_parallel():
    """Three edges between the same pair of nodes."""
    print("Example 2: Parallel Edges")

    nodes = [
        WorkflowNode("fetch", "action", NodeGeometry(0, 0)),
        WorkflowNode("merge", "transform", NodeGeometry(0, 300)),
    ]
    edges = [WorkflowEdge(f"e{i}", "fetch", "merge") for i in range(3)]
    run(WorkflowLayout(nodes, edges), "example_parallel.png")


def example_switch():
    """Switch node with enough branches to use the arc strategy."""
    print("Example 3: Eight-Way Switch")

    nodes = [WorkflowNode("route", "switch", NodeGeometry(800, 0))]
    edges = []
    for i in range(8):
        case = f"case {i}"
        nodes.append(WorkflowNode(case, "action", NodeGeometry(i * 240, 350)))
        edges.append(WorkflowEdge(f"e{i}", "route", case))
    run(WorkflowLayout(nodes, edges), "example_switch.png")


def run(layout: WorkflowLayout, filename: str) -> None:
    layout.compute(debug=True)
    print(layout.get_trace().summary())
    render_to_png(layout, filename)
    print(f"  Saved: {filename}\n")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_condition()
    example_parallel()
    example_switch()
