"""Visitor contract for graph traversal.

A visitor receives three callbacks from the engine and steers the loop
with the Action it returns:

- ``enter(context)``: first pre-order visit of a node. CONTINUE expands
  its children, SKIP does not, QUIT stops the traversal.
- ``leave(context)``: post-order visit, after all children were processed.
  Only QUIT has an effect here; nodes are never expanded twice.
- ``on_back_ref(context)``: the node was already visited (a cycle or a
  shared child). Back references are never expanded.

Visitors can be layered with ``and_then``/``compose`` or assembled from
plain functions with VisitorBuilder. When two visitors are combined both
are always called and the more severe Action wins, so one concern cannot
override another's request to stop.
"""

import logging
from typing import Callable, Optional

from ..errors import InvalidArgumentError, UnexpectedCycleError
from .action import Action
from .context import TraverseContext

logger = logging.getLogger(__name__)

VisitorFunc = Callable[[TraverseContext], Action]


def _noop(context: TraverseContext) -> Action:
    return Action.CONTINUE


def _require(func, name: str):
    if func is None:
        raise InvalidArgumentError(f"{name} is required")
    return func


class TraverseVisitor:
    """Base visitor. Every callback continues the traversal by default.

    Subclass and override the callbacks you care about.
    """

    def enter(self, context: TraverseContext) -> Action:
        return Action.CONTINUE

    def leave(self, context: TraverseContext) -> Action:
        return Action.CONTINUE

    def on_back_ref(self, context: TraverseContext) -> Action:
        return Action.CONTINUE

    def and_then(self, visitor: 'TraverseVisitor') -> 'TraverseVisitor':
        """Combine with another visitor called after this one."""
        return VisitorBuilder.of(self).then_apply(visitor).build()

    def compose(self, visitor: 'TraverseVisitor') -> 'TraverseVisitor':
        """Combine with another visitor called before this one."""
        return VisitorBuilder.of(self).compose(visitor).build()


class FunctionVisitor(TraverseVisitor):
    """Visitor whose callbacks are plain functions."""

    def __init__(self,
                 on_enter: VisitorFunc = _noop,
                 on_leave: VisitorFunc = _noop,
                 on_back_ref: VisitorFunc = _noop):
        self._on_enter = _require(on_enter, "on_enter")
        self._on_leave = _require(on_leave, "on_leave")
        self._on_back_ref = _require(on_back_ref, "on_back_ref")

    def enter(self, context):
        return self._on_enter(context)

    def leave(self, context):
        return self._on_leave(context)

    def on_back_ref(self, context):
        return self._on_back_ref(context)


class TreeVisitor(TraverseVisitor):
    """Visitor for traversals that assume the graph is a tree.

    Meeting a node twice is reported as UnexpectedCycleError, which the
    engine lets propagate to the caller.
    """

    def on_back_ref(self, context):
        raise UnexpectedCycleError(
            f"Node {context.node!r} was reached more than once"
        )


class LoggingVisitor(TraverseVisitor):
    """Logs every callback and always continues.

    Meant to be layered over a visitor that makes the real decisions:

        >>> visitor = LoggingVisitor().and_then(FindVisitor(target))
    """

    def __init__(self,
                 log: Optional[logging.Logger] = None,
                 level: int = logging.DEBUG,
                 describe: Callable[[object], str] = repr):
        self._log = log or logger
        self._level = level
        self._describe = describe

    def _emit(self, event: str, context: TraverseContext) -> Action:
        if self._log.isEnabledFor(self._level):
            self._log.log(self._level, "%s: %s (depth %d)",
                          event, self._describe(context.node), context.depth())
        return Action.CONTINUE

    def enter(self, context):
        return self._emit("enter", context)

    def leave(self, context):
        return self._emit("leave", context)

    def on_back_ref(self, context):
        return self._emit("back-ref", context)


def _combine(first: VisitorFunc, following: VisitorFunc) -> VisitorFunc:
    def combined(context: TraverseContext) -> Action:
        return Action.most_severe(first(context), following(context))
    return combined


class VisitorBuilder:
    """Assembles a visitor from independent functions.

    Example:
        >>> visitor = (VisitorBuilder()
        ...            .on_enter(lambda ctx: Action.CONTINUE)
        ...            .on_back_ref(lambda ctx: Action.SKIP)
        ...            .build())
    """

    def __init__(self,
                 on_enter: VisitorFunc = _noop,
                 on_leave: VisitorFunc = _noop,
                 on_back_ref: VisitorFunc = _noop):
        self._on_enter = _require(on_enter, "on_enter")
        self._on_leave = _require(on_leave, "on_leave")
        self._on_back_ref = _require(on_back_ref, "on_back_ref")

    @classmethod
    def of(cls, visitor: TraverseVisitor) -> 'VisitorBuilder':
        """Start from an existing visitor's callbacks."""
        _require(visitor, "visitor")
        return cls(visitor.enter, visitor.leave, visitor.on_back_ref)

    def on_enter(self, func: VisitorFunc) -> 'VisitorBuilder':
        self._on_enter = _require(func, "on_enter")
        return self

    def on_leave(self, func: VisitorFunc) -> 'VisitorBuilder':
        self._on_leave = _require(func, "on_leave")
        return self

    def on_back_ref(self, func: VisitorFunc) -> 'VisitorBuilder':
        self._on_back_ref = _require(func, "on_back_ref")
        return self

    def then_apply(self, visitor: TraverseVisitor) -> 'VisitorBuilder':
        """Call ``visitor`` after the callbacks collected so far."""
        _require(visitor, "visitor")
        return (self
                .on_enter(_combine(self._on_enter, visitor.enter))
                .on_leave(_combine(self._on_leave, visitor.leave))
                .on_back_ref(_combine(self._on_back_ref, visitor.on_back_ref)))

    def compose(self, visitor: TraverseVisitor) -> 'VisitorBuilder':
        """Call ``visitor`` before the callbacks collected so far."""
        _require(visitor, "visitor")
        return (self
                .on_enter(_combine(visitor.enter, self._on_enter))
                .on_leave(_combine(visitor.leave, self._on_leave))
                .on_back_ref(_combine(visitor.on_back_ref, self._on_back_ref)))

    def build(self) -> TraverseVisitor:
        return FunctionVisitor(self._on_enter, self._on_leave, self._on_back_ref)


NOOP_VISITOR = TraverseVisitor()
