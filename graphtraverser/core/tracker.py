"""Visited trackers: cycle detection for one traversal.

A visit tracker is any callable taking a TraverseContext and returning
either None (first visit, now recorded) or a BackRef carrying the result
that was current when the node was first seen.

Trackers are scoped to a single ``traverse`` call or iterator and must
not be shared between concurrent traversals.
"""

from collections.abc import MutableMapping
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple

from ..errors import InvalidArgumentError
from .context import TraverseContext


class BackRef(NamedTuple):
    """A prior visit of a node."""
    result: Any


VisitTracker = Callable[[TraverseContext], Optional[BackRef]]


class IdentityVisitTracker:
    """Tracks nodes by object identity.

    This is the default tracker. Nodes that compare equal but are distinct
    objects are treated as different nodes, and unhashable nodes work.
    References to visited nodes are held so their ids stay unique for the
    lifetime of the tracker.
    """

    def __init__(self):
        self._visited: Dict[int, Tuple[Any, Any]] = {}

    def __call__(self, context: TraverseContext) -> Optional[BackRef]:
        node = context.node
        if node is None:
            return None

        key = id(node)
        if key in self._visited:
            return BackRef(self._visited[key][1])

        self._visited[key] = (node, context.result)
        return None

    def __contains__(self, node: Any) -> bool:
        return id(node) in self._visited

    def __len__(self) -> int:
        return len(self._visited)


class MappingVisitTracker:
    """Tracks nodes by equality in a caller-supplied mapping.

    The mapping receives ``node -> result at first visit`` entries, so a
    caller can inspect it once the traversal has finished.
    """

    def __init__(self, visited: MutableMapping[Any, Any]):
        if visited is None:
            raise InvalidArgumentError("visited mapping is required")
        self.visited = visited

    def __call__(self, context: TraverseContext) -> Optional[BackRef]:
        node = context.node
        if node is None:
            return None

        if node in self.visited:
            return BackRef(self.visited[node])

        self.visited[node] = context.result
        return None

    def __contains__(self, node: Any) -> bool:
        return node in self.visited

    def __len__(self) -> int:
        return len(self.visited)


def as_visit_tracker(visited: Any = None) -> VisitTracker:
    """Coerce the ``visited`` argument of traverse into a tracker.

    Args:
        visited: None for a fresh IdentityVisitTracker, a mutable mapping
            for a MappingVisitTracker, or a tracker callable

    Returns:
        A visit tracker callable

    Raises:
        InvalidArgumentError: If visited is none of the above
    """
    if visited is None:
        return IdentityVisitTracker()
    if isinstance(visited, MutableMapping):
        return MappingVisitTracker(visited)
    if callable(visited):
        return visited
    raise InvalidArgumentError(
        f"visited must be a mapping or a tracker callable, got {type(visited).__name__}"
    )
