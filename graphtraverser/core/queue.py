"""Frontier queues: the pending contexts of a traversal.

The queue alone decides discovery order. Both variants share one
interface so the engine loop never needs to know whether it is running
depth-first or breadth-first:

- DepthFirstQueue inserts new contexts at the head, so the most recently
  discovered subtree is drained first.
- BreadthFirstQueue appends new contexts at the tail, so shallower nodes
  are drained before deeper ones.

In both cases a parent's post-order context is inserted right after its
children. Breadth-first, post-order contexts therefore come out in the
same relative order as pre-order ones.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Deque, Iterable, List, Optional

from .action import Action
from .context import TraverseContext

if TYPE_CHECKING:
    from .traverser import Traverser


class TraverseContextQueue(ABC):
    """Abstract frontier holding contexts awaiting processing."""

    def __init__(self, traverser: 'Traverser'):
        """Initialize an empty queue.

        Args:
            traverser: Owning traverser, used to build post-order contexts
        """
        self._traverser = traverser
        self._impl: Deque[TraverseContext] = deque()

    def is_empty(self) -> bool:
        return not self._impl

    def is_done(self, action: Action) -> bool:
        """Check whether the traversal loop should stop."""
        return action is Action.QUIT or self.is_empty()

    def pop(self) -> TraverseContext:
        """Remove and return the next context to process.

        Raises:
            IndexError: If the queue is empty
        """
        return self._impl.popleft()

    def peek(self) -> Optional[TraverseContext]:
        """Return the next context without removing it, or None."""
        return self._impl[0] if self._impl else None

    @abstractmethod
    def push_all(self,
                 parent: Optional[TraverseContext],
                 contexts: Iterable[TraverseContext]) -> None:
        """Enqueue discovered children followed by the parent's post-order context.

        Args:
            parent: Context whose children are being pushed, or None when
                pushing traversal roots (roots get no post-order marker
                for the synthetic root)
            contexts: Child contexts in the order they were discovered
        """
        pass

    def _pending(self,
                 parent: Optional[TraverseContext],
                 contexts: Iterable[TraverseContext]) -> List[TraverseContext]:
        pending = list(contexts)
        if parent is not None:
            pending.append(self._traverser.new_post_order_context(parent))
        return pending

    def __len__(self) -> int:
        return len(self._impl)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pending={len(self._impl)})"


class DepthFirstQueue(TraverseContextQueue):
    """LIFO frontier: children are visited before siblings.

    Given children {c1, c2, ..., cN} of parent P and a queue holding
    {q1, q2, ...}, the queue becomes {c1, ..., cN, post(P), q1, q2, ...}.
    """

    def push_all(self, parent, contexts):
        # extendleft reverses its input, so reverse first to keep provider order
        self._impl.extendleft(reversed(self._pending(parent, contexts)))


class BreadthFirstQueue(TraverseContextQueue):
    """FIFO frontier: all shallower nodes are visited before deeper ones.

    Given children {c1, c2, ..., cN} of parent P and a queue holding
    {q1, q2, ...}, the queue becomes {q1, q2, ..., c1, ..., cN, post(P)}.
    """

    def push_all(self, parent, contexts):
        self._impl.extend(self._pending(parent, contexts))
