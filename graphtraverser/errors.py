"""Exceptions raised by graphtraverser.

The engine performs no local recovery. Every error below propagates
synchronously to the caller of ``traverse``/``has_next``/``next``.
"""


class TraversalError(Exception):
    """Base class for all graphtraverser errors."""
    pass


class InvalidArgumentError(TraversalError, ValueError):
    """Raised when a required provider, visitor, root collection,
    variable mapping or visit tracker is missing.

    Always raised before any traversal step is taken.
    """
    pass


class IteratorStateError(TraversalError, RuntimeError):
    """Raised when ``path()`` or ``replace()`` is called on an iterator
    that has not returned any element yet."""
    pass


class UnexpectedCycleError(TraversalError, NotImplementedError):
    """Raised by visitors that do not support back references.

    A traversal that assumes a tree but meets a cycle has a wrong
    assumption about its graph, so this is never caught by the engine.
    """
    pass


class ConfigurationError(TraversalError, ValueError):
    """Raised when a TraversalConfig fails validation."""
    pass
