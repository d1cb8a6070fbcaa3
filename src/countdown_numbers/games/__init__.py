# Countdown numbers game: expression trees, solver and answer checking
from .node import Kind, Node, OPERATIONS
from .solver import CountdownSolver, search, unique_renderings
from .expression_parser import ExpressionParser

__all__ = [
    'Kind',
    'Node',
    'OPERATIONS',
    'CountdownSolver',
    'search',
    'unique_renderings',
    'ExpressionParser',
]
