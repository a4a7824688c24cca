"""High-level API for graphtraverser.

This module provides simple, functional interfaces for common traversal
operations. These functions wrap the Traverser/visitor API for ease of
use in simple cases.
"""

from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from .config import (
    TraversalConfig,
    TraversalStrategy,
    VisitOrder,
    create_traverser,
    parse_order,
    parse_strategy,
)
from .core.action import Action
from .core.traverser import ChildrenFunc
from .core.visitor import NOOP_VISITOR, TraverseVisitor, VisitorBuilder


def traverse_graph(
    root: Any,
    children: ChildrenFunc,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST,
    order: Union[VisitOrder, str] = VisitOrder.PRE_ORDER,
    visitor: TraverseVisitor = NOOP_VISITOR,
    log_events: bool = False,
) -> Iterator[Any]:
    """Simple interface for graph traversal.

    This is the primary high-level function. It handles the common case
    of wanting to iterate over nodes without building visitors.

    Args:
        root: Starting node
        children: Function returning a node's children
        strategy: dfs or bfs
        order: pre or post
        visitor: Delegate visitor; its Actions still steer the traversal
        log_events: Log every visitor callback at DEBUG level

    Yields:
        Nodes in the requested order, each at most once

    Example:
        >>> for node in traverse_graph(root, lambda n: n.children, "bfs"):
        ...     print(node.name)
    """
    config = TraversalConfig(
        strategy=parse_strategy(strategy),
        order=parse_order(order),
        log_events=log_events,
    )
    yield from config.iterate(root, children, visitor)


def collect_nodes(root: Any, children: ChildrenFunc, **kwargs) -> List[Any]:
    """Return every reachable node as a list.

    Args:
        root: Starting node
        children: Function returning a node's children
        **kwargs: Traversal options (see traverse_graph)
    """
    return list(traverse_graph(root, children, **kwargs))


def count_nodes(root: Any, children: ChildrenFunc, **kwargs) -> int:
    """Count reachable nodes.

    Example:
        >>> count_nodes(root, lambda n: n.children)
        7
    """
    count = 0
    for _ in traverse_graph(root, children, **kwargs):
        count += 1
    return count


def find_nodes(
    root: Any,
    children: ChildrenFunc,
    predicate: Callable[[Any], bool],
    **kwargs
) -> Iterator[Any]:
    """Find all nodes that match a predicate.

    Yields:
        Nodes for which predicate returns True
    """
    for node in traverse_graph(root, children, **kwargs):
        if predicate(node):
            yield node


def find_first(
    root: Any,
    children: ChildrenFunc,
    predicate: Callable[[Any], bool],
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST,
) -> Optional[Any]:
    """Return the first node matching predicate, stopping right there.

    Unlike ``next(find_nodes(...))`` this uses QUIT, so nothing beyond
    the match is ever discovered.

    Returns:
        The matching node, or None
    """
    def on_enter(context):
        if predicate(context.node):
            context.set_result(context.node)
            return Action.QUIT
        return Action.CONTINUE

    traverser = create_traverser(strategy, children)
    return traverser.traverse(root, None, VisitorBuilder().on_enter(on_enter).build())


def get_node_paths(
    root: Any,
    children: ChildrenFunc,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST,
) -> Iterator[Tuple[Any, List[Any]]]:
    """Get the discovery path from root to each node.

    Yields:
        Tuples of (node, path) where path starts at root and ends at node
    """
    iterator = create_traverser(strategy, children).pre_order_iterator(root)
    for node in iterator:
        path = iterator.path()
        path.reverse()
        yield node, path


def detect_cycles(
    root: Any,
    children: ChildrenFunc,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST,
) -> List[Tuple[Any, Any]]:
    """Find edges that lead back to an already visited node.

    For depth-first traversal these include every back edge of a cycle.
    Shared children (diamonds) are reported too, since they also reach
    a node that was already visited.

    Returns:
        List of (parent, node) edges in discovery order
    """
    def on_back_ref(context):
        context.result.append((context.parent.node, context.node))
        return Action.CONTINUE

    traverser = create_traverser(strategy, children)
    return traverser.traverse(root, [], VisitorBuilder().on_back_ref(on_back_ref).build())
