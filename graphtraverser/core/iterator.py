"""Pull-style access to the push-style traversal loop."""

from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional

from ..errors import InvalidArgumentError, IteratorStateError
from .action import Action
from .context import TraverseContext
from .queue import TraverseContextQueue
from .tracker import VisitTracker

if TYPE_CHECKING:
    from .traverser import Traverser
    from .visitor import TraverseVisitor


class TraversingIterator(Iterator[Any]):
    """Iterator over nodes produced by a suspended traversal.

    The engine loop is driven one step at a time until some visitor
    callback stores a TraverseContext as the result. That context is
    buffered, and ``__next__`` hands out its node and clears the result
    again. Pre-order and post-order iterators differ only in which
    callback stores the context.

    Besides the iterator protocol this exposes ``has_next()``,
    ``path()`` and ``replace()`` for the most recently returned node.
    """

    def __init__(self,
                 traverser: 'Traverser',
                 queue: TraverseContextQueue,
                 visit_tracker: VisitTracker,
                 visitor: 'TraverseVisitor'):
        self._traverser = traverser
        self._queue = queue
        self._visit_tracker = visit_tracker
        self._visitor = visitor
        self._action = Action.CONTINUE
        self._next: Optional[TraverseContext] = None
        self._last: Optional[TraverseContext] = None

    def __iter__(self) -> 'TraversingIterator':
        return self

    def has_next(self) -> bool:
        """Advance the traversal until the next node is available.

        Returns:
            True if ``next()`` will return a node
        """
        while self._next is None and not self._queue.is_done(self._action):
            current = self._queue.peek()
            self._action = self._traverser.traverse_one(
                self._queue, self._visit_tracker, self._visitor
            )
            result = current.result
            if isinstance(result, TraverseContext):
                self._next = result
        return self._next is not None

    def __next__(self) -> Any:
        if not self.has_next():
            raise StopIteration

        context = self._next
        self._last = context
        self._next = None
        context.set_result(None)
        return context.node

    @property
    def current_context(self) -> Optional[TraverseContext]:
        """Context of the node most recently returned by ``next()``."""
        return self._last

    def path(self, func: Optional[Callable[[TraverseContext], Any]] = None) -> List[Any]:
        """Nodes from the current one up to its traversal root.

        The current node comes first, the traversal root last.

        Args:
            func: Maps each context to the value to return (defaults to
                the context's node)

        Raises:
            IteratorStateError: If no node was returned yet
        """
        if self._last is None:
            raise IteratorStateError("no results")
        if func is None:
            return list(self._last.path())
        return [func(context) for context in self._last.parents() if context.node is not None]

    def replace(self, new_value: Any, replace_func: Callable[[TraverseContext, Any], Any]) -> Any:
        """Apply ``replace_func(current_context, new_value)`` and return its result.

        Lets callers mutate whatever the traversal considers the current
        value without restarting the loop.

        Raises:
            InvalidArgumentError: If replace_func is missing
            IteratorStateError: If no node was returned yet
        """
        if replace_func is None:
            raise InvalidArgumentError("replace_func is required")
        if self._last is None:
            raise IteratorStateError("no results")
        return replace_func(self._last, new_value)
