"""
Expression parser for the Countdown Numbers Game.

Turns a rendered solution or a player's answer back into an expression
tree, using Python's ast module instead of eval(). The arithmetic rules
are the solver's: non-negative integers only and exact division.
"""

import ast
import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .node import Kind, Node


class ExpressionParser:
    """
    Parses and checks Countdown expressions.
    Only allows: +, -, *, / operators, integers, and parentheses.
    """

    # Mapping of AST operators to node kinds
    OPERATORS = {
        ast.Add: Kind.ADD,
        ast.Sub: Kind.SUB,
        ast.Mult: Kind.MUL,
        ast.Div: Kind.DIV,
        ast.FloorDiv: Kind.DIV,
    }

    # Characters allowed in expressions
    ALLOWED_CHARS = set('0123456789+-*/() ')

    def sanitize(self, expression: str) -> str:
        """Remove any characters not in the allowed set."""
        return ''.join(c for c in expression if c in self.ALLOWED_CHARS)

    def extract_numbers(self, expression: str) -> List[int]:
        """Return the integers found in the expression, in order."""
        return [int(n) for n in re.findall(r'\d+', expression)]

    def validate_numbers(self, expression: str, available: List[int]) -> Tuple[bool, Optional[str]]:
        """
        Check if expression only uses available numbers (each once max).

        Args:
            expression: The mathematical expression
            available: List of available numbers to use

        Returns:
            Tuple of (is_valid, error_message or None)
        """
        available_counter = Counter(available)
        used_counter = Counter(self.extract_numbers(expression))

        for num, count in used_counter.items():
            if num not in available_counter:
                return False, f"Number **{num}** is not available"
            if count > available_counter[num]:
                return False, f"Number **{num}** used more times than available"

        return True, None

    def _build(self, node: ast.AST) -> Node:
        """
        Recursively convert an AST into an expression tree.

        Raises:
            ValueError: If the expression breaks the game's rules
        """
        if isinstance(node, ast.Expression):
            return self._build(node.body)

        if isinstance(node, ast.Constant):
            if isinstance(node.value, int) and not isinstance(node.value, bool):
                return Node.leaf(node.value)
            raise ValueError("Only whole numbers allowed")

        if isinstance(node, ast.BinOp):
            kind = self.OPERATORS.get(type(node.op))
            if kind is None:
                raise ValueError(f"Operator not allowed: {type(node.op).__name__}")

            left = self._build(node.left)
            right = self._build(node.right)
            a, b = left.evaluate(), right.evaluate()

            if kind is Kind.SUB and a < b:
                raise ValueError(f"{a} - {b} is negative")
            if kind is Kind.DIV:
                if b == 0:
                    raise ValueError("Division by zero")
                if a % b != 0:
                    raise ValueError(f"{a} / {b} is not a whole number")

            return Node.combine(kind, left, right)

        if isinstance(node, ast.UnaryOp):
            raise ValueError("Signs are not allowed, only + - * / between numbers")

        raise ValueError("Invalid expression structure")

    def parse(self, expression: str) -> Node:
        """
        Parse an expression into a tree.

        Raises:
            ValueError: On empty input, bad syntax or a rule violation
        """
        clean_expr = self.sanitize(expression)
        if not clean_expr.strip():
            raise ValueError("Empty expression")

        try:
            tree = ast.parse(clean_expr.strip(), mode='eval')
        except SyntaxError as e:
            raise ValueError(f"Invalid syntax: {e.msg}") from e

        return self._build(tree)

    def parse_and_validate(self, expression: str, available_numbers: List[int]) -> Dict:
        """
        Complete validation and evaluation of an expression.

        Args:
            expression: The mathematical expression
            available_numbers: List of numbers the player can use

        Returns:
            Dictionary with:
            - valid: bool
            - result: int or None
            - error: str or None
            - numbers_used: list of numbers used
        """
        result = {
            'valid': False,
            'result': None,
            'error': None,
            'numbers_used': []
        }

        clean_expr = self.sanitize(expression)
        if not clean_expr.strip():
            result['error'] = "Empty expression"
            return result

        try:
            result['numbers_used'] = self.extract_numbers(clean_expr)

            is_valid, error = self.validate_numbers(clean_expr, available_numbers)
            if not is_valid:
                result['error'] = error
                return result

            tree = self.parse(clean_expr)
        except ValueError as e:
            result['error'] = str(e)
            return result

        result['valid'] = True
        result['result'] = tree.evaluate()
        return result
