## mathfp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from mathfp import parser
from mathfp.errors import MathParseError, MathLexError
from mathfp.nodes import (Literal, Identifier, Binding, FunctionLiteral, Call,
                          BinaryOp, UnaryOp, Grouping, Conditional, Sequence)


def _parse_one(source: str):
    """Helper: parse a single statement and return its node."""
    program = parser.parse(source, filename="<test>")
    [stmt] = program.statements
    return stmt


def test_empty_source_is_empty_sequence():
    program = parser.parse("")
    assert isinstance(program, Sequence)
    assert program.statements == ()


def test_multiplicative_binds_tighter_than_additive():
    node = _parse_one("2 + 3 * 4")
    assert isinstance(node, BinaryOp) and node.op == '+'
    assert node.left == Literal(2.0, line=1, column=1)
    assert isinstance(node.right, BinaryOp) and node.right.op == '*'


def test_binary_operators_are_left_associative():
    node = _parse_one("1 - 2 - 3")
    assert node.op == '-'
    assert isinstance(node.left, BinaryOp) and node.left.op == '-'
    assert node.right == Literal(3.0, line=1, column=9)


def test_comparison_binds_loosest():
    node = _parse_one("1 + 2 < 4 * 1")
    assert node.op == '<'
    assert node.left.op == '+' and node.right.op == '*'


def test_binary_op_is_positioned_on_operator():
    node = _parse_one("10 % 3")
    assert (node.line, node.column) == (1, 4)


def test_unary_minus_binds_tighter_than_binary():
    node = _parse_one("-2 * 3")
    assert node.op == '*'
    assert isinstance(node.left, UnaryOp) and node.left.operand == Literal(2.0, line=1, column=2)


def test_call_binds_tighter_than_unary():
    node = _parse_one("-f(2)")
    assert isinstance(node, UnaryOp)
    assert isinstance(node.operand, Call)
    assert node.operand.callee == Identifier('f', line=1, column=2)


def test_chained_calls():
    node = _parse_one("add(2)(3)")
    assert isinstance(node, Call) and len(node.args) == 1
    assert isinstance(node.callee, Call)


def test_grouping():
    node = _parse_one("(2 + 3) * 4")
    assert node.op == '*'
    assert isinstance(node.left, Grouping) and node.left.inner.op == '+'


def test_function_literal_single_parameter():
    node = _parse_one("x |-> x * x")
    assert isinstance(node, FunctionLiteral)
    assert node.params == ('x',)
    assert isinstance(node.body, BinaryOp)


def test_function_literal_parameter_lists():
    assert _parse_one("(a, b) |-> a + b").params == ('a', 'b')
    assert _parse_one("(a) |-> a").params == ('a',)
    assert _parse_one("() |-> 1").params == ()


def test_function_body_can_be_a_function():
    node = _parse_one("a |-> b |-> a + b")
    assert isinstance(node.body, FunctionLiteral)
    assert node.body.params == ('b',)


def test_parenthesized_expression_is_not_mistaken_for_parameters():
    node = _parse_one("make_adder := n |-> (x |-> x + n)")
    assert isinstance(node, Binding)
    assert isinstance(node.value.body, Grouping)
    assert isinstance(node.value.body.inner, FunctionLiteral)


def test_binding_and_chained_binding():
    node = _parse_one("x := y := 5")
    assert isinstance(node, Binding) and node.name == 'x'
    assert isinstance(node.value, Binding) and node.value.name == 'y'
    assert node.value.value == Literal(5.0, line=1, column=11)


def test_conditional_expression():
    node = _parse_one("if n < 2 then 1 else n * 2")
    assert isinstance(node, Conditional)
    assert node.test.op == '<'
    assert node.orelse.op == '*'


def test_statements_are_separated_by_semicolons_and_newlines():
    program = parser.parse("x := 1;\n\ny := 2;;\n  x + y\n")
    assert [type(s) for s in program.statements] == [Binding, Binding, BinaryOp]


def test_call_arguments_can_be_function_literals():
    node = _parse_one("twice(n |-> n * 3, 2)")
    assert isinstance(node.args[0], FunctionLiteral)
    assert node.args[1] == Literal(2.0, line=1, column=20)


def test_missing_expression_after_binding():
    with pytest.raises(MathParseError) as exc:
        parser.parse("x := ;")
    assert exc.value.reason == "unexpected token"
    assert (exc.value.line, exc.value.column) == (1, 6)
    assert str(exc.value.diagnostic) == "ParseError: expected expression, found `;` at 1:6"


def test_missing_expression_at_end_of_input():
    with pytest.raises(MathParseError) as exc:
        parser.parse("1 +")
    assert "found end of input" in exc.value.message
    assert (exc.value.line, exc.value.column) == (1, 4)


def test_missing_closing_parenthesis():
    with pytest.raises(MathParseError) as exc:
        parser.parse("f(1 2)")
    assert exc.value.reason == "missing expected token"
    assert exc.value.message == "expected `)`, found number 2"
    assert exc.value.column == 5


def test_two_expressions_without_separator():
    with pytest.raises(MathParseError) as exc:
        parser.parse("1 2")
    assert exc.value.reason == "unexpected token"
    assert exc.value.column == 3


def test_malformed_binding_target():
    with pytest.raises(MathParseError) as exc:
        parser.parse("5 := 3")
    assert exc.value.reason == "malformed binding"
    assert (exc.value.line, exc.value.column) == (1, 1)


@pytest.mark.parametrize("source", ["1 |-> 2", "(x, x) |-> x", "(x, 1) |-> x", "(x,) |-> x"])
def test_malformed_function_literals(source):
    with pytest.raises(MathParseError):
        parser.parse(source)


def test_duplicate_parameter_is_reported_on_the_duplicate():
    with pytest.raises(MathParseError) as exc:
        parser.parse("(x, x) |-> x")
    assert exc.value.reason == "malformed function"
    assert exc.value.column == 5


def test_incomplete_conditional():
    with pytest.raises(MathParseError) as exc:
        parser.parse("if 1 < 2 then 3")
    assert exc.value.message == "expected `else`, found end of input"


def test_keywords_are_not_identifiers():
    with pytest.raises(MathParseError):
        parser.parse("then := 1")


def test_lex_errors_surface_through_parse():
    with pytest.raises(MathLexError):
        parser.parse("x := 1 $ 2")


def test_error_carries_filename():
    with pytest.raises(MathParseError) as exc:
        parser.parse("(", filename="model.mfp")
    assert exc.value.filename == "model.mfp"


def test_deeply_nested_input_is_a_parse_error():
    with pytest.raises(MathParseError) as exc:
        parser.parse("(" * 100_000 + "1" + ")" * 100_000)
    assert exc.value.message == "expression nested too deeply"


def test_source_context_highlights_offending_token():
    context = parser.format_source_context("<test>", 2, 3, "zz", source="a := 1\nb zz c\n")
    assert 'File "<test>", line 2' in context
    assert "zz" in context
    assert "    2 |" in context


@pytest.mark.parametrize("source, column", [("(true) |-> true", 2), ("nil |-> 1", 1), ("(a, false) |-> a", 5)])
def test_constants_cannot_be_parameters(source, column):
    with pytest.raises(MathParseError) as exc:
        parser.parse(source)
    assert exc.value.reason == "malformed function"
    assert exc.value.column == column
