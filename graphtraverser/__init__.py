"""graphtraverser - Generic graph traversal engine.

graphtraverser enumerates the nodes of any directed graph, cyclic or not,
depth-first or breadth-first, with pre-order and post-order visits. It
keeps three concerns apart:

    How to discover children:   a function you supply
    What order to visit nodes:  Traverser.depth_first / breadth_first
    What to do at each node:    a TraverseVisitor returning an Action

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Functional:
    from graphtraverser import traverse_graph
    for node in traverse_graph(root, lambda n: n.children, "bfs"):
        ...

Engine:
    from graphtraverser import Traverser, VisitorBuilder, Action
    result = Traverser.depth_first(children).traverse(root, seed, visitor)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .errors import (
    TraversalError,
    InvalidArgumentError,
    IteratorStateError,
    UnexpectedCycleError,
    ConfigurationError,
)

# Core components
from .core import (
    Action,
    ContextType,
    TraverseContext,
    ContextBuilder,
    TraverseContextQueue,
    DepthFirstQueue,
    BreadthFirstQueue,
    BackRef,
    IdentityVisitTracker,
    MappingVisitTracker,
    TraverseVisitor,
    FunctionVisitor,
    TreeVisitor,
    LoggingVisitor,
    VisitorBuilder,
    NOOP_VISITOR,
    TraversingIterator,
    Traverser,
)

# Configuration
from .config import (
    TraversalConfig,
    TraversalStrategy,
    VisitOrder,
    create_traverser,
    parse_strategy,
    parse_order,
)

# High-level API
from .api import (
    traverse_graph,
    collect_nodes,
    count_nodes,
    find_nodes,
    find_first,
    get_node_paths,
    detect_cycles,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    '__version__',
    # Errors
    'TraversalError',
    'InvalidArgumentError',
    'IteratorStateError',
    'UnexpectedCycleError',
    'ConfigurationError',
    # Core
    'Action',
    'ContextType',
    'TraverseContext',
    'ContextBuilder',
    'TraverseContextQueue',
    'DepthFirstQueue',
    'BreadthFirstQueue',
    'BackRef',
    'IdentityVisitTracker',
    'MappingVisitTracker',
    'TraverseVisitor',
    'FunctionVisitor',
    'TreeVisitor',
    'LoggingVisitor',
    'VisitorBuilder',
    'NOOP_VISITOR',
    'TraversingIterator',
    'Traverser',
    # Config
    'TraversalConfig',
    'TraversalStrategy',
    'VisitOrder',
    'create_traverser',
    'parse_strategy',
    'parse_order',
    # API
    'traverse_graph',
    'collect_nodes',
    'count_nodes',
    'find_nodes',
    'find_first',
    'get_node_paths',
    'detect_cycles',
]
