"""Core abstractions for graphtraverser.

This package contains the traversal engine and the pieces it is built
from: contexts, frontier queues, visit trackers and visitors.
"""

from .action import Action
from .context import (
    ContextType,
    ContextStrategy,
    RootStrategy,
    NestedStrategy,
    TraverseContext,
    ROOT_STRATEGY,
    NESTED_STRATEGY,
    UNDECLARED,
)
from .builder import ContextBuilder, new_builder
from .queue import TraverseContextQueue, DepthFirstQueue, BreadthFirstQueue
from .tracker import (
    BackRef,
    IdentityVisitTracker,
    MappingVisitTracker,
    as_visit_tracker,
)
from .visitor import (
    TraverseVisitor,
    FunctionVisitor,
    TreeVisitor,
    LoggingVisitor,
    VisitorBuilder,
    NOOP_VISITOR,
)
from .iterator import TraversingIterator
from .traverser import Traverser

__all__ = [
    "Action",
    "ContextType",
    "ContextStrategy",
    "RootStrategy",
    "NestedStrategy",
    "TraverseContext",
    "ROOT_STRATEGY",
    "NESTED_STRATEGY",
    "UNDECLARED",
    "ContextBuilder",
    "new_builder",
    "TraverseContextQueue",
    "DepthFirstQueue",
    "BreadthFirstQueue",
    "BackRef",
    "IdentityVisitTracker",
    "MappingVisitTracker",
    "as_visit_tracker",
    "TraverseVisitor",
    "FunctionVisitor",
    "TreeVisitor",
    "LoggingVisitor",
    "VisitorBuilder",
    "NOOP_VISITOR",
    "TraversingIterator",
    "Traverser",
]
