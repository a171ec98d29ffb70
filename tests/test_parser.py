import os

import pytest

from interpreter import Parser, Scanner, Token, Type, parse
from interpreter.error.communicator import Communicator
from interpreter.error.parser_error import (
    NestingDepthError,
    NoPrefixParseFunctionError,
    ParserException,
    UnexpectedTokenError,
)
from interpreter.tree.visitor import NodeVisitor
from tests.test_util import DATA_DIR, open_file, parse_errors, parse_program

from interpreter.tree.tree import (  # isort:skip
    ArrayLiteral,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    StatementBlock,
)


def test_let_statements():
    tree = parse_program("let x = 5; let y = true; let foobar = y")

    match tree:
        case Program(
            statements=[
                LetStatement(name=Identifier("x"), value=IntegerLiteral(5)),
                LetStatement(name=Identifier("y"), value=BooleanLiteral(True)),
                LetStatement(name=Identifier("foobar"), value=Identifier("y")),
            ]
        ):
            pass

        case _:
            print(repr(tree))
            raise Exception("Did not match expected let statements.")


def test_return_statements():
    tree = parse_program("return 5; return 10; return add(15);")

    assert len(tree.statements) == 3
    assert all(isinstance(stmt, ReturnStatement) for stmt in tree.statements)
    assert str(tree) == "return 5; return 10; return add(15);"


def test_literals():
    tree = parse_program("foobar; 5; true; false; [1, 2 * 2]")

    assert tree.statements == [
        ExpressionStatement(Identifier("foobar")),
        ExpressionStatement(IntegerLiteral(5)),
        ExpressionStatement(BooleanLiteral(True)),
        ExpressionStatement(BooleanLiteral(False)),
        ExpressionStatement(
            ArrayLiteral(
                [
                    IntegerLiteral(1),
                    InfixExpression(
                        IntegerLiteral(2), Token("*", Type.STAR), IntegerLiteral(2)
                    ),
                ]
            )
        ),
    ]


@pytest.mark.parametrize(
    "program, operator, operand",
    [
        ("!5;", "!", IntegerLiteral(5)),
        ("-15;", "-", IntegerLiteral(15)),
        ("!true;", "!", BooleanLiteral(True)),
        ("-a", "-", Identifier("a")),
    ],
)
def test_prefix_expressions(program, operator, operand):
    tree = parse_program(program)

    match tree.statements:
        case [ExpressionStatement(PrefixExpression(op, right))]:
            assert op.text == operator
            assert right == operand
        case _:
            raise Exception("Did not match a single prefix expression.")


@pytest.mark.parametrize("operator", ["+", "-", "*", "/", ">", "<", "<=", ">=", "==", "!="])
def test_infix_expressions(operator: str):
    tree = parse_program(f"5 {operator} 5;")

    match tree.statements:
        case [ExpressionStatement(InfixExpression(IntegerLiteral(5), op, IntegerLiteral(5)))]:
            assert op.text == operator
        case _:
            raise Exception("Did not match a single infix expression.")


@pytest.mark.parametrize(
    "program, expected",
    [
        ("1 + 2 * 3", "(1 + (2 * 3))"),
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b + c", "((a + b) + c)"),
        ("a + b - c", "((a + b) - c)"),
        ("a * b * c", "((a * b) * c)"),
        ("a * b / c", "((a * b) / c)"),
        ("a + b / c", "(a + (b / c))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("3 + 4; -5 * 5", "(3 + 4); ((-5) * 5)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
        ("a <= b == b >= a", "((a <= b) == (b >= a))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("3 > 5 == false", "((3 > 5) == false)"),
        ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
        ("(5 + 5) * 2", "((5 + 5) * 2)"),
        ("2 / (5 + 5)", "(2 / (5 + 5))"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("!(true == true)", "(!(true == true))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
        (
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))",
            "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
        ),
        ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
        ("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
        (
            "add(a * b[2], b[1], 2 * [1, 2][1])",
            "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))",
        ),
        ("-a[0]", "(-(a[0]))"),
        ("f(1)(2)[0]", "(f(1)(2)[0])"),
    ],
)
def test_operator_precedence(program: str, expected: str):
    tree = parse_program(program)
    assert str(tree) == expected


def test_if_expression():
    tree = parse_program("if (x < y) { x }")

    match tree.statements:
        case [
            ExpressionStatement(
                IfExpression(
                    condition=InfixExpression(Identifier("x"), _, Identifier("y")),
                    consequence=StatementBlock([ExpressionStatement(Identifier("x"))]),
                    alternative=None,
                )
            )
        ]:
            pass
        case _:
            raise Exception("Did not match an if expression without else.")


def test_if_else_expression():
    tree = parse_program("if (x < y) { x } else { y; 1 }")

    expression = tree.statements[0].expression
    assert isinstance(expression, IfExpression)
    assert len(expression.alternative.statements) == 2
    assert str(tree) == "if (x < y) { x } else { y; 1 }"


def test_function_literal():
    tree = parse_program("func(x, y) { x + y; }")

    match tree.statements:
        case [
            ExpressionStatement(
                FunctionLiteral(
                    parameters=[Identifier("x"), Identifier("y")],
                    body=StatementBlock([ExpressionStatement(InfixExpression())]),
                )
            )
        ]:
            pass
        case _:
            raise Exception("Did not match a function literal.")


@pytest.mark.parametrize(
    "program, parameters",
    [
        ("func() {};", []),
        ("func(x) {};", ["x"]),
        ("func(x, y, z) {};", ["x", "y", "z"]),
    ],
)
def test_function_parameters(program: str, parameters):
    function = parse_program(program).statements[0].expression
    assert [parameter.value for parameter in function.parameters] == parameters


def test_call_expression():
    tree = parse_program("add(1, 2 * 3, 4 + 5);")
    call = tree.statements[0].expression

    assert isinstance(call, CallExpression)
    assert call.function == Identifier("add")
    assert [str(argument) for argument in call.arguments] == ["1", "(2 * 3)", "(4 + 5)"]


def test_index_expression():
    tree = parse_program("myArray[1 + 1]")
    index = tree.statements[0].expression

    assert isinstance(index, IndexExpression)
    assert index.left == Identifier("myArray")
    assert str(index.index) == "(1 + 1)"


def test_contains():
    tree = parse_program("let f = func(a) { a * [1, 2][0] };")
    assert IntegerLiteral(2) in tree
    assert Identifier("a") in tree
    assert IntegerLiteral(3) not in tree


def test_empty():
    tree = parse_program("")
    assert tree == Program([])
    assert str(tree) == ""


def test_optional_semicolons():
    assert parse_program("let a = 1\nlet b = 2\na").statements == parse_program(
        "let a = 1; let b = 2; a;"
    ).statements


def test_parse_tokens():
    # The parser also accepts any iterable of tokens, e.g. without spans
    tokens = [Token("1", Type.DIGIT), Token("+", Type.PLUS), Token("2", Type.DIGIT)]
    parser = Parser(tokens)
    tree = parser.parse_program()

    assert parser.errors == []
    assert str(tree) == "(1 + 2)"


def test_parser_errors():
    assert parse_errors("let x 5; let = 10; let 838383;") == [
        "expected next token to be '=', got integer instead",
        "expected next token to be identifier, got '=' instead",
        "no prefix parse function for '=' found",
        "expected next token to be identifier, got integer instead",
    ]


@pytest.mark.parametrize(
    "program, first_error",
    [
        ("1 + ;", "no prefix parse function for ';' found"),
        ("if x { 1 }", "expected next token to be '(', got identifier instead"),
        ("func(1) { }", "expected next token to be identifier, got integer instead"),
        ("add(1, 2", "expected next token to be ')', got end of input instead"),
        ("[1, 2", "expected next token to be ']', got end of input instead"),
        ("a[1", "expected next token to be ']', got end of input instead"),
        ("9223372036854775808", "could not parse '9223372036854775808' as integer"),
        ("x @ 1", "no prefix parse function for illegal found"),
    ],
)
def test_parser_error_messages(program: str, first_error: str):
    # Later errors may follow from the first, as parsing resumes at the next token
    assert parse_errors(program)[0] == first_error


def test_largest_integer():
    tree = parse_program("9223372036854775807")
    assert tree.statements[0].expression == IntegerLiteral(9223372036854775807)


def test_error_recovery():
    # The malformed statement is dropped, the rest of the program survives
    tree, errors = parse("let x 5; let y = 10; y")

    assert [type(error) for error in errors] == [UnexpectedTokenError]
    assert tree.statements == [
        ExpressionStatement(IntegerLiteral(5)),
        LetStatement(Identifier("y"), IntegerLiteral(10)),
        ExpressionStatement(Identifier("y")),
    ]


def test_invalid_file(invalid_file: str):
    program: str = open_file(invalid_file)
    tree, errors = parse(program)

    assert errors
    with pytest.raises(ParserException) as excinfo:
        Communicator.communicate(errors, ParserException, color=False)
    assert "SyntaxError" in str(excinfo.value)


def test_detailed_error():
    program = open_file(os.path.join(DATA_DIR, "invalid", "illegal_character.pratt"))
    tree, errors = parse(program)

    assert len(errors) == 1
    assert isinstance(errors[0], NoPrefixParseFunctionError)
    detailed = errors[0].detailed(color=False)
    assert detailed.startswith("SyntaxError: no prefix parse function for illegal found")
    assert "-> 2. price @ 2;" in detailed
    assert "   1. let price = 5;" in detailed


def test_communicate_limits_errors():
    tree, errors = parse("let 1; " * 12)
    assert len(errors) == 12

    with pytest.raises(ParserException) as excinfo:
        Communicator.communicate(errors, ParserException, color=False)
    assert "Showing 10 errors, omitting 2 errors..." in str(excinfo.value)


def test_communicate_without_errors():
    Communicator.communicate([], ParserException)


def test_parser(valid_file: str):
    # Ensure that we can scan and parse this program without errors
    program: str = open_file(valid_file)
    tree = parse_program(program)
    assert tree.statements


def test_print(valid_file: str):
    # Ensure that
    # 1. the pretty print results in the same AST as the original program
    # 2. printing the reparsed program gives the same text again
    program: str = open_file(valid_file)
    original_tree = parse_program(program)

    program_pprint = str(original_tree)
    parser = Parser(Scanner(program_pprint))
    pprint_tree = parser.parse_program()

    assert parser.errors == []
    assert original_tree == pprint_tree
    assert str(original_tree) == str(pprint_tree)


def test_visitor():
    # Nodes without a visit method are walked through, in source order
    class IdentifierCollector(NodeVisitor):
        def __init__(self) -> None:
            self.names = []

        def visit_Identifier(self, node: Identifier) -> None:
            self.names.append(node.value)

    collector = IdentifierCollector()
    collector.visit(parse_program("let f = func(a, b) { a + g(b)[c] }; f(x, -y)"))
    assert collector.names == ["f", "a", "b", "a", "g", "b", "c", "f", "x", "y"]


def test_nesting_depth():
    tree, errors = parse("let a = 1; " + "!" * 5000 + "true; let b = 2;")

    # The statements before the overly nested one survive
    assert tree.statements == [LetStatement(Identifier("a"), IntegerLiteral(1))]
    assert [str(error) for error in errors] == ["maximum nesting depth exceeded"]
    assert isinstance(errors[0], NestingDepthError)
