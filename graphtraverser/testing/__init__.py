"""Testing utilities for graphtraverser consumers."""

from .fixtures import (
    GraphNode,
    RecordingVisitor,
    build_graph,
    complete_graph,
    cyclic_triangle,
    node_children,
)

__all__ = [
    'GraphNode',
    'RecordingVisitor',
    'build_graph',
    'complete_graph',
    'cyclic_triangle',
    'node_children',
]
