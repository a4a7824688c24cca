"""TraverseContext: the engine's view of one node occurrence.

A context wraps a single node as it moves through the frontier. Contexts
form a singly linked chain back to a synthetic root context, and that
chain is what drives result propagation, variable scoping and path
reconstruction.

How results and variables propagate is not decided by the context itself
but by the ContextStrategy it was built with (see ContextBuilder).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterator, Optional


# Returned by ContextStrategy.get_var when no scope declared the key
UNDECLARED = object()


class ContextType(Enum):
    """Whether a context represents entering or leaving a node."""
    PRE_ORDER = "pre_order"
    POST_ORDER = "post_order"


class ContextStrategy(ABC):
    """Decides where a context reads and writes its result and variables."""

    @abstractmethod
    def set_result(self, context: 'TraverseContext', value: Any) -> None:
        pass

    @abstractmethod
    def get_result(self, context: 'TraverseContext') -> Any:
        pass

    @abstractmethod
    def get_var(self, context: 'TraverseContext', key: Hashable) -> Any:
        """Resolve ``key``, or return UNDECLARED if no scope declared it."""
        pass

    @abstractmethod
    def set_var(self, context: 'TraverseContext', key: Hashable, value: Any) -> Any:
        pass


class RootStrategy(ContextStrategy):
    """Result and variables live in the context itself.

    Used for the one context per traversal that has no parent.
    """

    def set_result(self, context, value):
        context._result = value

    def get_result(self, context):
        return context._result

    def get_var(self, context, key):
        return context._vars.get(key, UNDECLARED)

    def set_var(self, context, key, value):
        previous = context._vars.get(key)
        context._vars[key] = value
        return previous


class NestedStrategy(ContextStrategy):
    """Results bubble up to the parent, variables are lexically scoped.

    Writing a result stores it locally and forwards it to the parent, so by
    default every result ends up at the root. Reading a result reads the
    parent's. Variable lookups fall through the parent chain until a scope
    that declared the key is found.

    The parent chain is walked iteratively, it is as long as the graph
    is deep.
    """

    def set_result(self, context, value):
        scope = context
        while scope._strategy is self:
            scope._result = value
            scope = scope._parent
        scope._strategy.set_result(scope, value)

    def get_result(self, context):
        scope = context._parent
        while scope._strategy is self:
            scope = scope._parent
        return scope._strategy.get_result(scope)

    def get_var(self, context, key):
        scope = context
        while scope._strategy is self:
            if key in scope._vars:
                return scope._vars[key]
            scope = scope._parent
        return scope._strategy.get_var(scope, key)

    def set_var(self, context, key, value):
        # Nearest scope that declared the key wins, this one included
        scope = context
        while scope is not None:
            if key in scope._vars:
                previous = scope._vars[key]
                scope._vars[key] = value
                return previous
            scope = scope._parent

        # Nobody declared it yet: define it in the immediate parent
        context._parent._vars[key] = value
        return None


ROOT_STRATEGY = RootStrategy()
NESTED_STRATEGY = NestedStrategy()


class TraverseContext:
    """One occurrence of a node during traversal.

    Contexts are created by ContextBuilder just before they are needed and
    discarded once processed. The parent link is read-only navigation and
    never changes after construction.

    Variable keys may be any hashable value. Classes and string tags both
    work; visitors written independently should pick keys that cannot
    collide (a private class or a dotted string).
    """

    def __init__(self,
                 context_type: ContextType,
                 node: Any,
                 parent: Optional['TraverseContext'],
                 initial_data: Any,
                 context_vars: Dict[Hashable, Any],
                 strategy: ContextStrategy):
        self._context_type = context_type
        self._node = node
        self._parent = parent
        self._initial_data = initial_data
        self._result = initial_data
        self._vars = context_vars
        self._strategy = strategy
        self._back_ref = None

    # Identity

    @property
    def node(self) -> Any:
        """The wrapped node (None only for the synthetic root)."""
        return self._node

    @property
    def parent(self) -> Optional['TraverseContext']:
        """The context that discovered this one."""
        return self._parent

    @property
    def context_type(self) -> ContextType:
        return self._context_type

    @property
    def is_post_order(self) -> bool:
        """True for the deferred "leave" context of a node."""
        return self._context_type is ContextType.POST_ORDER

    @property
    def is_root(self) -> bool:
        """True for the synthetic root and for traversal roots.

        A traversal root is any context whose parent wraps no node.
        """
        return self._parent is None or self._parent.node is None

    @property
    def strategy(self) -> ContextStrategy:
        return self._strategy

    # Results

    @property
    def result(self) -> Any:
        """Accumulated result as seen through this context's strategy."""
        return self._strategy.get_result(self)

    @result.setter
    def result(self, value: Any) -> None:
        self._strategy.set_result(self, value)

    def get_result(self) -> Any:
        return self.result

    def set_result(self, value: Any) -> 'TraverseContext':
        """Set the result and return this context for chaining."""
        self._strategy.set_result(self, value)
        return self

    @property
    def context_result(self) -> Any:
        """The value stored in this context's own result slot."""
        return self._result

    @property
    def parent_result(self) -> Any:
        return self._parent.result

    @parent_result.setter
    def parent_result(self, value: Any) -> None:
        self._parent.result = value

    @property
    def initial_data(self) -> Any:
        """Seed supplied to ``traverse``, inherited by every context."""
        return self._initial_data

    # Variables

    @property
    def context_vars(self) -> Dict[Hashable, Any]:
        """This context's local variable scope.

        Adding a key here declares the variable locally, shadowing any
        ancestor's variable with the same key for this subtree.
        """
        return self._vars

    def get_var(self, key: Hashable, default: Any = None) -> Any:
        """Look up a variable through the scope chain.

        Args:
            key: Variable key
            default: Returned when no scope declared the key

        Returns:
            The value from the nearest scope that declared the key, which
            may itself be None
        """
        value = self._strategy.get_var(self, key)
        return default if value is UNDECLARED else value

    def set_var(self, key: Hashable, value: Any) -> Any:
        """Assign a variable, returning its previous value."""
        return self._strategy.set_var(self, key, value)

    def declare_var(self, key: Hashable, value: Any = None) -> 'TraverseContext':
        """Declare a variable in this context's own scope."""
        self._vars[key] = value
        return self

    def var(self, key: Hashable, value: Any) -> 'TraverseContext':
        """Chaining form of ``set_var``."""
        self.set_var(key, value)
        return self

    # Cycle detection

    def is_back_ref(self, visit_tracker: Callable[['TraverseContext'], Any]) -> bool:
        """Ask the tracker whether this node was already visited.

        The tracker's answer is kept so ``back_ref_result`` can expose the
        result captured at the first visit.
        """
        self._back_ref = visit_tracker(self)
        return self._back_ref is not None

    @property
    def back_ref_result(self) -> Any:
        if self._back_ref is None:
            return None
        return self._back_ref.result

    # Navigation

    def parents(self) -> Iterator['TraverseContext']:
        """Iterate this context followed by every ancestor, nearest first."""
        current = self
        while current is not None:
            yield current
            current = current._parent

    def path(self) -> Iterator[Any]:
        """Iterate the nodes from this context up to the traversal root."""
        for context in self.parents():
            if context.node is not None:
                yield context.node

    def depth(self) -> int:
        """Number of node-bearing ancestors above this context."""
        return sum(1 for _ in self.path()) - (1 if self._node is not None else 0)

    def __repr__(self) -> str:
        phase = "post" if self.is_post_order else "pre"
        return f"{self.__class__.__name__}({phase}, node={self._node!r})"
