"""Topology-preserving graph simplification.

Interior trail points whose only neighbours are the adjacent points of
the same stage carry no routing information; each is bypassed by a
single edge carrying the summed weight.
"""

from __future__ import annotations

import logging

from ..domain.models import SimplifyReport
from .model import Graph

logger = logging.getLogger(__name__)


def _collapsible(graph: Graph, index: int) -> bool:
    node = graph.node(index)
    if not node.is_trail_point:
        return False
    edges = graph.edges_of(index)
    if len(edges) != 2:
        return False
    a, b = (edge.other(index) for edge in edges)
    if a == b:
        return False
    return all(
        graph.node(n).is_trail_point and graph.node(n).stage == node.stage
        for n in (a, b)
    )


def simplify(graph: Graph) -> SimplifyReport:
    """Collapse interior trail chains and prune isolated nodes in place."""
    report = SimplifyReport(nodes_before=graph.node_count)

    for node in graph.nodes():
        if not _collapsible(graph, node.index):
            continue
        first, second = graph.edges_of(node.index)
        graph.remove_edge(first.index)
        graph.remove_edge(second.index)
        graph.add_edge(
            first.other(node.index),
            second.other(node.index),
            first.weight + second.weight,
        )
        report.collapsed += 1

    report.removed_nodes = graph.remove_isolated_nodes()
    report.nodes_after = graph.node_count

    logger.info(
        "Graph simplified",
        extra={
            "collapsed": report.collapsed,
            "removed": report.removed_nodes,
            "nodes_before": report.nodes_before,
            "nodes_after": report.nodes_after,
        },
    )
    return report
