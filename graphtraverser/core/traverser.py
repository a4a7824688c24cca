"""The traversal engine.

Traverser ties together three independent concerns:

1. How to discover children: a children provider supplied by the caller.
2. What order to discover nodes in: a frontier queue (depth-first or
   breadth-first).
3. What to do with each node: a TraverseVisitor.

The main loop pops a context, classifies it (leave / back reference /
enter), invokes the matching visitor callback and applies the returned
Action. The same loop is reused step by step by TraversingIterator.

Example:
    >>> traverser = Traverser.depth_first(lambda node: node.children)
    >>> names = traverser.traverse(root, [], VisitorBuilder()
    ...     .on_enter(lambda ctx: ctx.result.append(ctx.node.name) or Action.CONTINUE)
    ...     .build())
"""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, Optional

from ..errors import InvalidArgumentError
from .action import Action
from .builder import ContextBuilder, new_builder
from .context import ContextType, TraverseContext
from .iterator import TraversingIterator
from .queue import BreadthFirstQueue, DepthFirstQueue, TraverseContextQueue
from .tracker import VisitTracker, as_visit_tracker
from .visitor import NOOP_VISITOR, TraverseVisitor, VisitorBuilder

logger = logging.getLogger(__name__)

ChildrenFunc = Callable[[Any], Iterable[Any]]
ContextChildrenFunc = Callable[['Traverser', TraverseContext], Iterable[TraverseContext]]
QueueFactory = Callable[['Traverser'], TraverseContextQueue]
BuilderFactory = Callable[[ContextType], ContextBuilder]


def _require(value, name: str):
    if value is None:
        raise InvalidArgumentError(f"{name} is required")
    return value


def _adapt(children: ChildrenFunc) -> ContextChildrenFunc:
    """Turn a ``node -> children`` function into a context provider."""
    _require(children, "children provider")

    def provider(traverser: 'Traverser', context: TraverseContext) -> Iterable[TraverseContext]:
        return (traverser.new_context(context, child) for child in children(context.node))

    return provider


class Traverser:
    """Enumerates nodes of a possibly cyclic directed graph.

    Instances are immutable: ``with_queue_factory`` and
    ``with_context_builder_factory`` return new traversers. All mutable
    state (frontier, visited tracker) is created per ``traverse`` call or
    per iterator, so one Traverser may be reused for many traversals but
    a single traversal must stay on one thread.
    """

    def __init__(self,
                 queue_factory: QueueFactory,
                 children_provider: ContextChildrenFunc,
                 builder_factory: BuilderFactory = new_builder):
        """Initialize a traverser.

        Prefer the ``depth_first``/``breadth_first`` constructors.

        Args:
            queue_factory: Creates the frontier queue for each traversal
            children_provider: ``(traverser, parent_context) -> contexts``
            builder_factory: Creates a ContextBuilder for a ContextType
        """
        self._queue_factory = _require(queue_factory, "queue_factory")
        self._children_provider = _require(children_provider, "children_provider")
        self._builder_factory = _require(builder_factory, "builder_factory")

    # Construction

    @classmethod
    def depth_first(cls, children: ChildrenFunc) -> 'Traverser':
        """Depth-first traverser from a ``node -> children`` function."""
        return cls(DepthFirstQueue, _adapt(children))

    @classmethod
    def breadth_first(cls, children: ChildrenFunc) -> 'Traverser':
        """Breadth-first traverser from a ``node -> children`` function."""
        return cls(BreadthFirstQueue, _adapt(children))

    @classmethod
    def depth_first_contexts(cls,
                             provider: ContextChildrenFunc,
                             builder_factory: Optional[BuilderFactory] = None) -> 'Traverser':
        """Depth-first traverser from a context-level children provider.

        The provider receives the traverser and the parent context and
        returns child contexts, usually built with ``traverser.new_context``.
        This allows attaching variables or results per edge.
        """
        return cls(DepthFirstQueue, provider, builder_factory or new_builder)

    @classmethod
    def breadth_first_contexts(cls,
                               provider: ContextChildrenFunc,
                               builder_factory: Optional[BuilderFactory] = None) -> 'Traverser':
        """Breadth-first counterpart of ``depth_first_contexts``."""
        return cls(BreadthFirstQueue, provider, builder_factory or new_builder)

    def with_queue_factory(self, queue_factory: QueueFactory) -> 'Traverser':
        return Traverser(queue_factory, self._children_provider, self._builder_factory)

    def with_context_builder_factory(self, builder_factory: BuilderFactory) -> 'Traverser':
        return Traverser(self._queue_factory, self._children_provider, builder_factory)

    # Traversal

    def traverse(self,
                 root: Any,
                 seed: Any,
                 visitor: TraverseVisitor,
                 vars: Optional[Dict[Hashable, Any]] = None,
                 visited: Any = None) -> Any:
        """Traverse everything reachable from a single root.

        See ``traverse_all`` for the arguments.
        """
        return self.traverse_all([root], seed, visitor, vars, visited)

    def traverse_all(self,
                     roots: Iterable[Any],
                     seed: Any,
                     visitor: TraverseVisitor,
                     vars: Optional[Dict[Hashable, Any]] = None,
                     visited: Any = None) -> Any:
        """Run the traversal loop to completion or until a visitor quits.

        Args:
            roots: Nodes to start from, visited in the given order
            seed: Initial data and initial result of the traversal
            visitor: Receives enter/leave/on_back_ref callbacks
            vars: Variables of the root scope (defaults to a new dict)
            visited: Visit tracker, mapping, or None for identity tracking

        Returns:
            The accumulated result

        Raises:
            InvalidArgumentError: If roots or visitor is missing, or
                visited is not a valid tracker
        """
        _require(roots, "roots")
        _require(visitor, "visitor")
        visit_tracker = as_visit_tracker(visited)
        if vars is None:
            vars = {}

        root_context = self._new_root_context(seed, vars)
        queue = self._new_context_queue(root_context, roots)
        logger.debug("Starting traversal with %s", type(queue).__name__)

        action = Action.CONTINUE
        steps = 0
        while not queue.is_done(action):
            action = self.traverse_one(queue, visit_tracker, visitor)
            steps += 1

        if action is Action.QUIT:
            logger.debug("Traversal quit after %d steps", steps)
        else:
            logger.debug("Traversal finished after %d steps", steps)

        head = queue.peek()
        return (head if head is not None else root_context).result

    def traverse_one(self,
                     queue: TraverseContextQueue,
                     visit_tracker: VisitTracker,
                     visitor: TraverseVisitor) -> Action:
        """Process exactly one context from the frontier.

        Returns:
            The Action returned by the visitor callback that was invoked
        """
        context = queue.pop()

        if context.is_post_order:
            return _check_action(visitor.leave(context), "leave")

        if context.is_back_ref(visit_tracker):
            return _check_action(visitor.on_back_ref(context), "on_back_ref")

        action = _check_action(visitor.enter(context), "enter")
        if action is Action.CONTINUE:
            self._push_children(queue, context)
        return action

    # Iteration

    def new_iterator(self,
                     roots: Iterable[Any],
                     visitor: TraverseVisitor = NOOP_VISITOR,
                     visited: Any = None) -> TraversingIterator:
        """Suspend the traversal loop behind an iterator.

        The iterator surfaces a node whenever a visitor callback sets a
        TraverseContext as the result (see ``pre_order_iterator``).
        """
        _require(roots, "roots")
        _require(visitor, "visitor")
        visit_tracker = as_visit_tracker(visited)

        root_context = self._new_root_context(None, {})
        queue = self._new_context_queue(root_context, roots)
        return TraversingIterator(self, queue, visit_tracker, visitor)

    def pre_order_iterator(self,
                           root: Any,
                           delegate: TraverseVisitor = NOOP_VISITOR,
                           visited: Any = None) -> TraversingIterator:
        """Iterate nodes as they are entered, starting from one root."""
        return self.pre_order_iterator_all([root], delegate, visited)

    def pre_order_iterator_all(self,
                               roots: Iterable[Any],
                               delegate: TraverseVisitor = NOOP_VISITOR,
                               visited: Any = None) -> TraversingIterator:
        """Iterate nodes as they are entered.

        The delegate still receives every callback and its Actions steer
        the traversal.
        """
        _require(delegate, "delegate")
        return self.new_iterator(roots, VisitorBuilder.of(delegate)
                                 .on_enter(lambda ctx: delegate.enter(ctx.set_result(ctx)))
                                 .build(), visited)

    def post_order_iterator(self,
                            root: Any,
                            delegate: TraverseVisitor = NOOP_VISITOR,
                            visited: Any = None) -> TraversingIterator:
        """Iterate nodes as they are left, starting from one root."""
        return self.post_order_iterator_all([root], delegate, visited)

    def post_order_iterator_all(self,
                                roots: Iterable[Any],
                                delegate: TraverseVisitor = NOOP_VISITOR,
                                visited: Any = None) -> TraversingIterator:
        """Iterate nodes as they are left.

        Depth-first this yields children before parents. Breadth-first it
        yields the same sequence as ``pre_order_iterator_all``.
        """
        _require(delegate, "delegate")
        return self.new_iterator(roots, VisitorBuilder.of(delegate)
                                 .on_leave(lambda ctx: delegate.leave(ctx.set_result(ctx)))
                                 .build(), visited)

    # Contexts

    def new_context(self, parent: TraverseContext, child: Any) -> TraverseContext:
        """Build the pre-order context for a child discovered under parent.

        Context-level children providers use this to create the contexts
        they return.
        """
        _require(parent, "parent")
        return self._new_pre_order_context(parent, child, parent.initial_data, parent.context_vars)

    def new_post_order_context(self, pre_order: TraverseContext) -> TraverseContext:
        """Build the deferred "leave" context paired with ``pre_order``."""
        _require(pre_order, "pre_order")
        return (self._builder_factory(ContextType.POST_ORDER)
                .from_context(pre_order)
                .build())

    def _new_root_context(self, seed: Any, vars: Dict[Hashable, Any]) -> TraverseContext:
        return self._new_pre_order_context(None, None, seed, vars)

    def _new_pre_order_context(self,
                               parent: Optional[TraverseContext],
                               node: Any,
                               initial_data: Any,
                               vars: Dict[Hashable, Any]) -> TraverseContext:
        return (self._builder_factory(ContextType.PRE_ORDER)
                .node(node)
                .parent(parent)
                .initial_data(initial_data)
                .vars(vars)
                .build())

    def _new_context_queue(self,
                           root_context: TraverseContext,
                           roots: Iterable[Any]) -> TraverseContextQueue:
        queue = self._queue_factory(self)
        # Roots share the synthetic root as parent, which never gets a post-order marker
        queue.push_all(None, (self.new_context(root_context, root) for root in roots))
        return queue

    def _push_children(self, queue: TraverseContextQueue, context: TraverseContext) -> None:
        queue.push_all(context, self._children_provider(self, context))


def _check_action(action: Any, callback: str) -> Action:
    if not isinstance(action, Action):
        raise TypeError(
            f"Visitor.{callback} must return an Action, got {type(action).__name__}"
        )
    return action
