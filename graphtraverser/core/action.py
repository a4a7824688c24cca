"""Control signals returned by visitors."""

from enum import Enum
from functools import total_ordering


@total_ordering
class Action(Enum):
    """What the engine should do after a visitor callback.

    Values are ordered by severity so that combined visitors can agree
    on the stronger request: QUIT > SKIP > CONTINUE.
    """
    CONTINUE = 0    # Expand children of the entered node
    SKIP = 1        # Do not expand children, keep going
    QUIT = 2        # Stop the whole traversal

    @classmethod
    def most_severe(cls, left: 'Action', right: 'Action') -> 'Action':
        """Return the more severe of two actions.

        Ties resolve to ``right``.
        """
        return left if left.value > right.value else right

    def __lt__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.value < other.value
