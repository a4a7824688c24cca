"""Test fixtures for graphtraverser consumers.

These helpers build small graphs and record visitor callbacks so test
suites can assert on traversal order without writing the same glue
again and again.
"""

from collections.abc import Hashable
from typing import Any, Dict, List, Optional, Tuple

from ..core.action import Action
from ..core.context import TraverseContext
from ..core.visitor import TraverseVisitor


class GraphNode:
    """Minimal mutable graph node.

    Nodes compare by identity, so two nodes with the same data are still
    distinct vertices.

    Example:
        >>> root = GraphNode("root").child(GraphNode("left")).child(GraphNode("right"))
        >>> [c.data for c in root.children]
        ['left', 'right']
    """

    def __init__(self, data: Any = None, children: Optional[List['GraphNode']] = None):
        self.data = data
        self.children: List['GraphNode'] = list(children) if children else []

    def child(self, node: 'GraphNode') -> 'GraphNode':
        """Append a child and return self for chaining."""
        self.children.append(node)
        return self

    def get_children(self) -> List['GraphNode']:
        return self.children

    def __repr__(self) -> str:
        return f"GraphNode({self.data!r})"


def node_children(node: GraphNode) -> List[GraphNode]:
    """Children provider for GraphNode."""
    return node.children


def build_graph(edges: Dict[Any, List[Any]]) -> Dict[Any, GraphNode]:
    """Build GraphNodes from an adjacency mapping of data values.

    Args:
        edges: ``{data: [child data, ...]}``; children that are not keys
            become leaves

    Returns:
        Mapping from data value to its GraphNode
    """
    nodes: Dict[Any, GraphNode] = {}

    def get(data):
        if data not in nodes:
            nodes[data] = GraphNode(data)
        return nodes[data]

    for data, child_data in edges.items():
        parent = get(data)
        for item in child_data:
            parent.child(get(item))
    return nodes


def complete_graph(size: int, prefix: str = "vertexK") -> List[GraphNode]:
    """Build the complete directed graph K(size).

    Every vertex has an edge to every other vertex.
    """
    vertices = [GraphNode(f"{prefix}{i + 1}") for i in range(size)]
    for vertex in vertices:
        for other in vertices:
            if other is not vertex:
                vertex.child(other)
    return vertices


def cyclic_triangle() -> Tuple[GraphNode, GraphNode, GraphNode]:
    """root -> {left, right}, left -> root, right -> left."""
    root = GraphNode("root")
    left = GraphNode("left")
    right = GraphNode("right")
    root.child(left).child(right)
    left.child(root)
    right.child(left)
    return root, left, right


class RecordingVisitor(TraverseVisitor):
    """Visitor that records every callback as ``(event, data)``.

    Actions for ``enter`` and ``leave`` can be scripted per recorded
    value. Values produced by ``key`` that are not hashable are still
    recorded but always continue.

    Example:
        >>> visitor = RecordingVisitor(enter_actions={"left": Action.SKIP})
        >>> traverser.traverse(root, None, visitor)
        >>> visitor.entered
        ['root', 'left', 'right']
    """

    def __init__(self,
                 enter_actions: Optional[Dict[Any, Action]] = None,
                 leave_actions: Optional[Dict[Any, Action]] = None,
                 key=lambda node: getattr(node, 'data', node)):
        self.events: List[Tuple[str, Any]] = []
        self.contexts: List[TraverseContext] = []
        self._enter_actions = enter_actions or {}
        self._leave_actions = leave_actions or {}
        self._key = key

    def _record(self, event: str, context: TraverseContext) -> Any:
        value = self._key(context.node)
        self.events.append((event, value))
        self.contexts.append(context)
        return value

    @staticmethod
    def _scripted(actions: Dict[Any, Action], value: Any) -> Action:
        # Unhashable keys can never be scripted
        if not isinstance(value, Hashable):
            return Action.CONTINUE
        return actions.get(value, Action.CONTINUE)

    def enter(self, context):
        value = self._record("enter", context)
        return self._scripted(self._enter_actions, value)

    def leave(self, context):
        value = self._record("leave", context)
        return self._scripted(self._leave_actions, value)

    def on_back_ref(self, context):
        self._record("back_ref", context)
        return Action.CONTINUE

    def _of(self, event: str) -> List[Any]:
        return [value for kind, value in self.events if kind == event]

    @property
    def entered(self) -> List[Any]:
        return self._of("enter")

    @property
    def left(self) -> List[Any]:
        return self._of("leave")

    @property
    def back_refs(self) -> List[Any]:
        return self._of("back_ref")
