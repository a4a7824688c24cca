"""Configuration system for graphtraverser.

This module defines how users describe a traversal declaratively: which
order to discover nodes in, which phase to surface, how to detect cycles
and whether to log events. A TraversalConfig builds the matching
Traverser and visitor wrapping.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, MutableMapping, Optional, Union

from .core.iterator import TraversingIterator
from .core.traverser import Traverser, ChildrenFunc
from .core.visitor import LoggingVisitor, TraverseVisitor, NOOP_VISITOR
from .errors import ConfigurationError


class TraversalStrategy(Enum):
    """Order in which nodes are discovered."""
    DEPTH_FIRST = "dfs"      # Subtree before siblings
    BREADTH_FIRST = "bfs"    # Level by level


class VisitOrder(Enum):
    """Which phase of a node's visit is surfaced to iterators."""
    PRE_ORDER = "pre"        # Parent before children
    POST_ORDER = "post"      # Children before parent (depth-first only differs)


_STRATEGY_ALIASES = {
    'dfs': TraversalStrategy.DEPTH_FIRST,
    'depth_first': TraversalStrategy.DEPTH_FIRST,
    'depth-first': TraversalStrategy.DEPTH_FIRST,
    'bfs': TraversalStrategy.BREADTH_FIRST,
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'breadth-first': TraversalStrategy.BREADTH_FIRST,
}

_ORDER_ALIASES = {
    'pre': VisitOrder.PRE_ORDER,
    'pre_order': VisitOrder.PRE_ORDER,
    'preorder': VisitOrder.PRE_ORDER,
    'post': VisitOrder.POST_ORDER,
    'post_order': VisitOrder.POST_ORDER,
    'postorder': VisitOrder.POST_ORDER,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse a strategy from an enum value or a name such as "dfs".

    Raises:
        ConfigurationError: If the name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    parsed = _STRATEGY_ALIASES.get(str(strategy).lower())
    if parsed is None:
        raise ConfigurationError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(_STRATEGY_ALIASES.keys())}"
        )
    return parsed


def parse_order(order: Union[VisitOrder, str]) -> VisitOrder:
    """Parse a visit order from an enum value or a name such as "post".

    Raises:
        ConfigurationError: If the name is not recognized
    """
    if isinstance(order, VisitOrder):
        return order

    parsed = _ORDER_ALIASES.get(str(order).lower())
    if parsed is None:
        raise ConfigurationError(
            f"Unknown visit order: {order}. "
            f"Choose from: {', '.join(_ORDER_ALIASES.keys())}"
        )
    return parsed


def create_traverser(strategy: Union[TraversalStrategy, str],
                     children: ChildrenFunc) -> Traverser:
    """Create a traverser by strategy name.

    Args:
        strategy: TraversalStrategy or one of dfs, depth_first, bfs,
            breadth_first
        children: ``node -> children`` function

    Returns:
        Configured Traverser
    """
    if parse_strategy(strategy) is TraversalStrategy.BREADTH_FIRST:
        return Traverser.breadth_first(children)
    return Traverser.depth_first(children)


@dataclass
class TraversalConfig:
    """Complete declarative configuration for a traversal.

    Example:
        >>> config = TraversalConfig.depth_first(order=VisitOrder.POST_ORDER)
        >>> for node in config.iterate(root, lambda n: n.children):
        ...     print(node)
    """

    strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST
    order: VisitOrder = VisitOrder.PRE_ORDER

    # Cycle detection: identity (default) or equality in a caller mapping
    track_identity: bool = True
    visited: Optional[MutableMapping[Any, Any]] = None

    # Event logging through LoggingVisitor
    log_events: bool = False
    log_level: int = logging.DEBUG

    @classmethod
    def depth_first(cls, order: VisitOrder = VisitOrder.PRE_ORDER, **kwargs) -> 'TraversalConfig':
        return cls(strategy=TraversalStrategy.DEPTH_FIRST, order=order, **kwargs)

    @classmethod
    def breadth_first(cls, order: VisitOrder = VisitOrder.PRE_ORDER, **kwargs) -> 'TraversalConfig':
        return cls(strategy=TraversalStrategy.BREADTH_FIRST, order=order, **kwargs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")

        if not isinstance(self.order, VisitOrder):
            errors.append(f"order must be a VisitOrder, got {self.order!r}")

        if self.track_identity and self.visited is not None:
            errors.append("visited mapping requires track_identity=False")

        if not self.track_identity and self.visited is None:
            errors.append("track_identity=False requires a visited mapping")

        if not isinstance(self.log_level, int) or self.log_level < 0:
            errors.append("log_level must be a non-negative logging level")

        return errors

    def check(self) -> None:
        """Raise ConfigurationError if ``validate`` reports problems."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")

    def create_traverser(self, children: ChildrenFunc) -> Traverser:
        self.check()
        return create_traverser(self.strategy, children)

    def wrap_visitor(self, visitor: TraverseVisitor = NOOP_VISITOR) -> TraverseVisitor:
        """Layer event logging over ``visitor`` when enabled."""
        if self.log_events:
            return LoggingVisitor(level=self.log_level).and_then(visitor)
        return visitor

    def visit_tracker_arg(self) -> Optional[MutableMapping[Any, Any]]:
        """The ``visited`` argument to pass to Traverser methods."""
        return None if self.track_identity else self.visited

    def traverse(self,
                 roots: Iterable[Any],
                 children: ChildrenFunc,
                 seed: Any,
                 visitor: TraverseVisitor,
                 vars: Optional[dict] = None) -> Any:
        """Run ``Traverser.traverse_all`` with this configuration."""
        traverser = self.create_traverser(children)
        return traverser.traverse_all(roots, seed, self.wrap_visitor(visitor),
                                      vars, self.visit_tracker_arg())

    def iterate(self,
                root: Any,
                children: ChildrenFunc,
                delegate: TraverseVisitor = NOOP_VISITOR) -> TraversingIterator:
        """Iterate from one root in this configuration's order."""
        return self.iterate_all([root], children, delegate)

    def iterate_all(self,
                    roots: Iterable[Any],
                    children: ChildrenFunc,
                    delegate: TraverseVisitor = NOOP_VISITOR) -> TraversingIterator:
        """Iterate from several roots in this configuration's order."""
        traverser = self.create_traverser(children)
        delegate = self.wrap_visitor(delegate)
        if self.order is VisitOrder.POST_ORDER:
            return traverser.post_order_iterator_all(roots, delegate, self.visit_tracker_arg())
        return traverser.pre_order_iterator_all(roots, delegate, self.visit_tracker_arg())

