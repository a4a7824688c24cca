"""ContextBuilder: assembles TraverseContext instances.

The builder is where the propagation strategy is chosen. A context built
without a parent is the traversal root and keeps its result and variables
locally; every other context gets the nested strategy so its results
bubble up and its variable lookups fall through to the parent.
"""

from typing import Any, Dict, Hashable, Optional

from ..errors import InvalidArgumentError
from .context import (
    ContextType,
    ContextStrategy,
    TraverseContext,
    ROOT_STRATEGY,
    NESTED_STRATEGY,
)


class ContextBuilder:
    """Fluent builder for TraverseContext.

    Subclasses customise construction by overriding ``_pre_construct``,
    ``_post_construct``, ``_init_vars`` or ``context_class``. Register a
    subclass with ``Traverser.with_context_builder_factory``.

    Example:
        >>> context = (ContextBuilder(ContextType.PRE_ORDER)
        ...            .node(child)
        ...            .parent(parent_context)
        ...            .initial_data(parent_context.initial_data)
        ...            .build())
    """

    context_class = TraverseContext

    def __init__(self, context_type: ContextType):
        if context_type is None:
            raise InvalidArgumentError("context_type is required")
        self.context_type = context_type
        self._node: Any = None
        self._parent: Optional[TraverseContext] = None
        self._initial_data: Any = None
        self._vars: Dict[Hashable, Any] = {}
        self._strategy: Optional[ContextStrategy] = None

    def node(self, node: Any) -> 'ContextBuilder':
        self._node = node
        return self

    def parent(self, parent: Optional[TraverseContext]) -> 'ContextBuilder':
        self._parent = parent
        return self

    def initial_data(self, initial_data: Any) -> 'ContextBuilder':
        """Set the seed; it also becomes the context's starting result."""
        self._initial_data = initial_data
        return self

    def vars(self, context_vars: Dict[Hashable, Any]) -> 'ContextBuilder':
        if context_vars is None:
            raise InvalidArgumentError("context_vars is required")
        self._vars = context_vars
        return self

    def strategy(self, strategy: ContextStrategy) -> 'ContextBuilder':
        """Force a propagation strategy instead of the default choice."""
        self._strategy = strategy
        return self

    def from_context(self, other: TraverseContext) -> 'ContextBuilder':
        """Copy node, parent, seed and variable scope from another context.

        Post-order contexts are built this way so they share the variable
        scope of their pre-order counterpart.
        """
        if other is None:
            raise InvalidArgumentError("other context is required")
        return (self
                .node(other.node)
                .parent(other.parent)
                .initial_data(other.initial_data)
                .vars(other.context_vars))

    def build(self) -> TraverseContext:
        """Create the context."""
        self._pre_construct()
        context = self.context_class(
            self.context_type,
            self._node,
            self._parent,
            self._initial_data,
            self._vars,
            self._strategy,
        )
        return self._post_construct(context)

    def _pre_construct(self) -> None:
        if self._strategy is None:
            self._strategy = ROOT_STRATEGY if self._parent is None else NESTED_STRATEGY
        self._vars = self._init_vars(self._vars)

    def _post_construct(self, context: TraverseContext) -> TraverseContext:
        return context

    def _init_vars(self, context_vars: Dict[Hashable, Any]) -> Dict[Hashable, Any]:
        """Pick the variable scope for the new context.

        A nested pre-order context always opens a fresh scope. The root
        keeps the caller's mapping and a post-order context reuses the
        scope of the pre-order context it was copied from.
        """
        if self.context_type is ContextType.PRE_ORDER and self._parent is not None:
            return {}
        return context_vars


def new_builder(context_type: ContextType) -> ContextBuilder:
    """Default builder factory used by Traverser."""
    return ContextBuilder(context_type)
