import pytest

from countdown_numbers.games.expression_parser import ExpressionParser
from countdown_numbers.games.node import Node
from countdown_numbers.games.solver import search


@pytest.fixture
def parser():
    return ExpressionParser()


def test_parse_rendering_round_trips(parser):
    tree = parser.parse("((100 - 9) * (5 + 4))")
    assert tree.render() == "((100 - 9) * (5 + 4))"
    assert tree.evaluate() == 819


def test_parse_follows_precedence(parser):
    tree = parser.parse("100 - 9 * 5")
    assert tree.render() == "(100 - (9 * 5))"
    assert tree.evaluate() == 55


def test_solver_output_parses_back(parser):
    numbers = [25, 4, 3, 1]
    for node in search([Node.leaf(n) for n in numbers], 100):
        result = parser.parse_and_validate(node.render(), numbers)
        assert result['valid'], result['error']
        assert result['result'] == 100


@pytest.mark.parametrize("expression,message", [
    ("3 - 5", "negative"),
    ("7 / 2", "not a whole number"),
    ("7 / (3 - 3)", "Division by zero"),
    ("2 ** 3", "Operator not allowed: Pow"),
    ("-3 + 5", "Signs are not allowed"),
    ("(2 + ", "Invalid syntax"),
])
def test_parse_rejects_rule_violations(parser, expression, message):
    with pytest.raises(ValueError, match=message):
        parser.parse(expression)


def test_parse_rejects_empty(parser):
    with pytest.raises(ValueError, match="Empty expression"):
        parser.parse("abc")


def test_validate_numbers(parser):
    assert parser.validate_numbers("(50 + 50)", [50, 50, 3]) == (True, None)

    valid, error = parser.validate_numbers("(50 + 50)", [50, 3])
    assert not valid
    assert "more times than available" in error

    valid, error = parser.validate_numbers("(7 + 3)", [50, 3])
    assert not valid
    assert "**7** is not available" in error


def test_parse_and_validate_success(parser):
    result = parser.parse_and_validate("(100 - 9) * (5 + 4)", [100, 50, 9, 5, 2, 4])
    assert result == {
        'valid': True,
        'result': 819,
        'error': None,
        'numbers_used': [100, 9, 5, 4],
    }


def test_parse_and_validate_reports_errors(parser):
    result = parser.parse_and_validate("9 / 2", [9, 2])
    assert not result['valid']
    assert result['result'] is None
    assert "not a whole number" in result['error']

    result = parser.parse_and_validate("", [9, 2])
    assert result['error'] == "Empty expression"


def test_parse_and_validate_oversized_number(parser):
    result = parser.parse_and_validate("1" * 5000 + " + 1", [1, 2])
    assert not result['valid']
    assert result['result'] is None
    assert result['error']
