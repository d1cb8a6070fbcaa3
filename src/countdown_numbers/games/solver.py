import logging
from typing import List, Sequence

from .node import Kind, Node, OPERATIONS

logger = logging.getLogger(__name__)


def _check_number(value, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{what} must not be negative, got {value}")


def search(candidates: Sequence[Node], target: int) -> List[Node]:
    """
    Find every combination of the candidates that evaluates to the target.

    Each candidate is used at most once per expression and every solution
    combines at least two of them. Expressions that only differ by
    associativity are all returned.

    Args:
        candidates: The nodes available for combining (at least two).
        target: The number to reach.

    Returns:
        List of solution nodes, in a deterministic order.

    Raises:
        ValueError: If fewer than two candidates are given or a candidate
            or the target is not a non-negative integer.
    """
    if len(candidates) < 2:
        raise ValueError(f"Need at least two numbers to combine, got {len(candidates)}")
    _check_number(target, "Target")
    for node in candidates:
        _check_number(node.evaluate(), "Number")
    return _search(list(candidates), target)


def _search(candidates: List[Node], target: int) -> List[Node]:
    solutions = []
    values = [node.evaluate() for node in candidates]
    count = len(candidates)

    for i in range(count):
        a = values[i]
        for j in range(count):
            if i == j:
                continue
            b = values[j]
            # Larger operand first keeps subtraction non-negative and tries
            # each unordered pair once. Equal values go in index order.
            if a < b or (a == b and i > j):
                continue

            rest = [candidates[k] for k in range(count) if k != i and k != j]

            for kind, _ in OPERATIONS:
                if kind is Kind.DIV and (b == 0 or a % b != 0):
                    continue

                node = Node.combine(kind, candidates[i], candidates[j])
                # No short-circuit: subtracting zero or multiplying by one
                # can reach the target again further down.
                if node.evaluate() == target:
                    solutions.append(node)

                reduced = rest + [node]
                if len(reduced) > 1:
                    solutions.extend(_search(reduced, target))

    return solutions


class CountdownSolver:
    """
    Solver for the Countdown Numbers Game.
    Finds every expression over the given numbers that reaches the target.
    """

    def find(self, target: int, numbers: Sequence[int]) -> List[Node]:
        """
        Run the search over leaves built from the numbers.

        Returns:
            The raw solution nodes, duplicates included.
        """
        for number in numbers:
            _check_number(number, "Number")
        leaves = [Node.leaf(n) for n in numbers]
        logger.debug("Searching %s for target %s", list(numbers), target)
        solutions = search(leaves, target)
        logger.debug("Found %d raw solutions", len(solutions))
        return solutions

    def solve(self, target: int, numbers: Sequence[int]) -> List[str]:
        """
        Find the distinct solutions for a round.

        Args:
            target: The target number to reach.
            numbers: List of available numbers.

        Returns:
            Renderings of all solutions, sorted, without repeated strings.
        """
        renderings = unique_renderings(self.find(target, numbers))
        logger.debug("%d distinct solutions", len(renderings))
        return renderings


def unique_renderings(solutions: Sequence[Node]) -> List[str]:
    """Sort solution renderings and drop repeated strings."""
    renderings = sorted(node.render() for node in solutions)
    unique = []
    for text in renderings:
        if not unique or unique[-1] != text:
            unique.append(text)
    return unique
