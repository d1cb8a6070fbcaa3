"""
Expression trees for the Countdown Numbers Game.

A node is either a leaf holding one of the drawn numbers or an operation
combining two child nodes. Nodes are immutable: the search shares them
between many candidate trees, so a node's value and rendering are computed
once and cached.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Callable, Iterator, Optional, Tuple


class Kind(Enum):
    """Node kind. Operation kinds carry their rendering symbol."""
    VALUE = "value"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def symbol(self) -> Optional[str]:
        """Rendering symbol of an operation kind. Leaves have none."""
        if self is Kind.VALUE:
            return None
        return self.value


# Operators tried by the search, in order. Division only ever sees
# exact quotients, so floor division is the integer quotient.
OPERATIONS: Tuple[Tuple[Kind, Callable[[int, int], int]], ...] = (
    (Kind.ADD, operator.add),
    (Kind.SUB, operator.sub),
    (Kind.MUL, operator.mul),
    (Kind.DIV, operator.floordiv),
)

_APPLY = dict(OPERATIONS)


@dataclass(frozen=True, eq=False)
class Node:
    """
    A node of an expression tree.

    Use ``Node.leaf`` and ``Node.combine`` rather than the constructor.
    Nodes compare by identity.
    """
    kind: Kind
    number: Optional[int] = None
    left: Optional['Node'] = None
    right: Optional['Node'] = None

    @classmethod
    def leaf(cls, number: int) -> 'Node':
        """Create a leaf for one input number."""
        return cls(Kind.VALUE, number=number)

    @classmethod
    def combine(cls, kind: Kind, left: 'Node', right: 'Node') -> 'Node':
        """
        Create an operation node. No validation is done here: callers
        must only combine operands that give a non-negative, exact result.
        """
        return cls(kind, left=left, right=right)

    @property
    def is_leaf(self) -> bool:
        return self.kind is Kind.VALUE

    @cached_property
    def _value(self) -> int:
        if self.is_leaf:
            return self.number
        return _APPLY[self.kind](self.left.evaluate(), self.right.evaluate())

    @cached_property
    def _text(self) -> str:
        if self.is_leaf:
            return str(self.number)
        return f"({self.left.render()} {self.kind.symbol} {self.right.render()})"

    def evaluate(self) -> int:
        """Numeric value of the tree."""
        return self._value

    def render(self) -> str:
        """Fully parenthesized infix form, e.g. ``((100 - 9) * (5 + 4))``."""
        return self._text

    def leaves(self) -> Iterator[int]:
        """Yield the leaf numbers of the tree from left to right."""
        if self.is_leaf:
            yield self.number
        else:
            yield from self.left.leaves()
            yield from self.right.leaves()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Node({self.render()} = {self.evaluate()})"
