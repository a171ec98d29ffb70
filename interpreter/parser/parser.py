from typing import Callable, Dict, Iterable, List, Optional, Tuple

from interpreter.scanner.scanner import Scanner
from interpreter.token import Token
from interpreter.type import Type
from interpreter.util import INT_MAX, Precedence, Span, operator_precedence

from interpreter.error.parser_error import (  # isort:skip
    IntegerLiteralError,
    NestingDepthError,
    NoPrefixParseFunctionError,
    ParseError,
    UnexpectedTokenError,
)
from interpreter.tree.tree import (  # isort:skip
    ArrayLiteral,
    BooleanLiteral,
    CallExpression,
    Expression,
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
    Statement,
    StatementBlock,
)

PrefixParseFunction = Callable[[], Optional[Expression]]
InfixParseFunction = Callable[[Optional[Expression]], Optional[Expression]]


class Parser:
    """
    Pratt parser, turning a stream of tokens into a `Program`.

    The parser looks at exactly two tokens at a time, `current` and `peek`, and never
    backtracks. Every token type that can start an expression maps to a prefix parse
    function, and every token type that can continue one maps to an infix parse function.

    Malformed input never stops the parse. Each problem is recorded in `errors` and the
    statement it occurred in is dropped, after which parsing resumes at the next token.
    """

    def __init__(self, tokens: Scanner | Iterable[Token], program: str = "") -> None:
        if isinstance(tokens, Scanner):
            self.og_program = tokens.og_program
            self.next_token = tokens.next_token
        else:
            self.og_program = program
            iterator = iter(tokens)
            eof = Token("", Type.EOF)
            self.next_token = lambda: next(iterator, eof)

        self.errors: List[ParseError] = []

        self.prefix_parse_functions: Dict[Type, PrefixParseFunction] = {
            Type.ID: self.parse_identifier,
            Type.DIGIT: self.parse_integer_literal,
            Type.TRUE: self.parse_boolean,
            Type.FALSE: self.parse_boolean,
            Type.NOT: self.parse_prefix_expression,
            Type.MINUS: self.parse_prefix_expression,
            Type.LRB: self.parse_grouped_expression,
            Type.IF: self.parse_if_expression,
            Type.FUNC: self.parse_function_literal,
            Type.LSB: self.parse_array_literal,
        }
        self.infix_parse_functions: Dict[Type, InfixParseFunction] = {
            Type.PLUS: self.parse_infix_expression,
            Type.MINUS: self.parse_infix_expression,
            Type.STAR: self.parse_infix_expression,
            Type.SLASH: self.parse_infix_expression,
            Type.EQ: self.parse_infix_expression,
            Type.NEQ: self.parse_infix_expression,
            Type.LT: self.parse_infix_expression,
            Type.GT: self.parse_infix_expression,
            Type.LEQ: self.parse_infix_expression,
            Type.GEQ: self.parse_infix_expression,
            Type.LRB: self.parse_call_expression,
            Type.LSB: self.parse_index_expression,
        }

        # Fill both `current` and `peek`
        self.current: Optional[Token] = None
        self.peek: Token = self.next_token()
        self.advance()

    def advance(self) -> None:
        self.current = self.peek
        self.peek = self.next_token()

    def current_is(self, type: Type) -> bool:
        return self.current.type == type

    def peek_is(self, type: Type) -> bool:
        return self.peek.type == type

    def expect_peek(self, type: Type) -> bool:
        """Advance if the next token is of type `type`, or record an error otherwise.

        Args:
            type (Type): The required type of the next token.

        Returns:
            bool: True if the token was found and consumed.
        """
        if self.peek_is(type):
            self.advance()
            return True

        self.errors.append(
            UnexpectedTokenError(self.og_program, self.peek.span, type, self.peek)
        )
        return False

    def peek_precedence(self) -> Precedence:
        return operator_precedence.get(self.peek.type, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return operator_precedence.get(self.current.type, Precedence.LOWEST)

    def span_from(self, start: Token) -> Span:
        return start.span & self.current.span

    def parse_program(self) -> Program:
        """Parse statements until the end of the input.

        Returns:
            Program: The root of the AST. Statements that could not be parsed are left out,
                the reasons are found in `self.errors`.
        """
        start = self.current
        statements = []
        while not self.current_is(Type.EOF):
            try:
                statement = self.parse_statement()
            except RecursionError:
                # Parsing stops here, as there is no telling where the nesting ends
                self.errors.append(NestingDepthError(self.og_program, self.current.span))
                break
            if statement is not None:
                statements.append(statement)
            self.advance()

        return Program(statements, span=self.span_from(start))

    def parse_statement(self) -> Optional[Statement]:
        match self.current.type:
            case Type.LET:
                return self.parse_let_statement()
            case Type.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        start = self.current
        if not self.expect_peek(Type.ID):
            return None

        name = Identifier(self.current.text, span=self.current.span)

        if not self.expect_peek(Type.ASSIGN):
            return None

        self.advance()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(Type.SEMICOLON):
            self.advance()

        if value is None:
            return None
        return LetStatement(name, value, span=self.span_from(start))

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        start = self.current
        self.advance()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(Type.SEMICOLON):
            self.advance()

        if value is None:
            return None
        return ReturnStatement(value, span=self.span_from(start))

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        start = self.current
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(Type.SEMICOLON):
            self.advance()

        if expression is None:
            return None
        return ExpressionStatement(expression, span=self.span_from(start))

    def parse_statement_block(self) -> StatementBlock:
        # Starts on the `{`, ends on the `}` or at the end of the input
        start = self.current
        statements = []
        self.advance()

        while not self.current_is(Type.RCB) and not self.current_is(Type.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.advance()

        return StatementBlock(statements, span=self.span_from(start))

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """Parse an expression whose operators all bind tighter than `precedence`.

        The prefix parse function of the current token produces the left operand.
        While the next token binds tighter than `precedence`, its infix parse function
        extends that operand, e.g. into an InfixExpression or a CallExpression.
        Because an infix operator parses its right operand with its own precedence,
        operators of equal precedence associate to the left.

        Args:
            precedence (Precedence): The binding power of the operator to the left.

        Returns:
            Optional[Expression]: The expression, or None if it could not be parsed.
        """
        prefix = self.prefix_parse_functions.get(self.current.type)
        if prefix is None:
            self.errors.append(
                NoPrefixParseFunctionError(
                    self.og_program, self.current.span, self.current
                )
            )
            return None
        left = prefix()

        while not self.peek_is(Type.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_functions.get(self.peek.type)
            if infix is None:
                return left

            self.advance()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.current.text, span=self.current.span)

    def parse_integer_literal(self) -> Optional[IntegerLiteral]:
        value = int(self.current.text)
        # Only the magnitude is scanned, so the smallest integer is out of reach
        if value > INT_MAX:
            self.errors.append(
                IntegerLiteralError(self.og_program, self.current.span, self.current)
            )
            return None
        return IntegerLiteral(value, span=self.current.span)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.current_is(Type.TRUE), span=self.current.span)

    def parse_prefix_expression(self) -> Optional[PrefixExpression]:
        operator = self.current
        self.advance()
        operand = self.parse_expression(Precedence.PREFIX)

        if operand is None:
            return None
        return PrefixExpression(operator, operand, span=self.span_from(operator))

    def parse_infix_expression(
        self, left: Optional[Expression]
    ) -> Optional[InfixExpression]:
        operator = self.current
        precedence = self.current_precedence()
        self.advance()
        right = self.parse_expression(precedence)

        if left is None or right is None:
            return None
        return InfixExpression(left, operator, right, span=left.span & right.span)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.advance()
        expression = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(Type.RRB):
            return None
        return expression

    def parse_if_expression(self) -> Optional[IfExpression]:
        start = self.current
        if not self.expect_peek(Type.LRB):
            return None

        self.advance()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(Type.RRB):
            return None

        if not self.expect_peek(Type.LCB):
            return None

        consequence = self.parse_statement_block()

        alternative = None
        if self.peek_is(Type.ELSE):
            self.advance()
            if not self.expect_peek(Type.LCB):
                return None
            alternative = self.parse_statement_block()

        if condition is None:
            return None
        return IfExpression(
            condition, consequence, alternative, span=self.span_from(start)
        )

    def parse_function_literal(self) -> Optional[FunctionLiteral]:
        start = self.current
        if not self.expect_peek(Type.LRB):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(Type.LCB):
            return None

        body = self.parse_statement_block()
        return FunctionLiteral(parameters, body, span=self.span_from(start))

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        # Starts on the `(`, ends on the `)`
        parameters = []
        if self.peek_is(Type.RRB):
            self.advance()
            return parameters

        if not self.expect_peek(Type.ID):
            return None
        parameters.append(self.parse_identifier())

        while self.peek_is(Type.COMMA):
            self.advance()
            if not self.expect_peek(Type.ID):
                return None
            parameters.append(self.parse_identifier())

        if not self.expect_peek(Type.RRB):
            return None
        return parameters

    def parse_array_literal(self) -> Optional[ArrayLiteral]:
        start = self.current
        elements = self.parse_expression_list(Type.RSB)

        if elements is None:
            return None
        return ArrayLiteral(elements, span=self.span_from(start))

    def parse_call_expression(
        self, function: Optional[Expression]
    ) -> Optional[CallExpression]:
        arguments = self.parse_expression_list(Type.RRB)

        if function is None or arguments is None:
            return None
        return CallExpression(function, arguments, span=function.span & self.current.span)

    def parse_index_expression(
        self, left: Optional[Expression]
    ) -> Optional[IndexExpression]:
        self.advance()
        index = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(Type.RSB):
            return None

        if left is None or index is None:
            return None
        return IndexExpression(left, index, span=left.span & self.current.span)

    def parse_expression_list(self, end: Type) -> Optional[List[Expression]]:
        """Parse comma-separated expressions up to and including the `end` token.

        Used for both call arguments and array elements. Starts on the opening bracket.

        Args:
            end (Type): The type of the closing bracket.

        Returns:
            Optional[List[Expression]]: The expressions, or None if any could not be parsed.
        """
        expressions = []
        if self.peek_is(end):
            self.advance()
            return expressions

        self.advance()
        expressions.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_is(Type.COMMA):
            self.advance()
            self.advance()
            expressions.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(end):
            return None

        if any(expression is None for expression in expressions):
            return None
        return expressions


def parse(program: str) -> Tuple[Program, List[ParseError]]:
    """Scan and parse `program` in one go.

    Args:
        program (str): The source text.

    Returns:
        Tuple[Program, List[ParseError]]: The AST and the errors encountered, in order.
    """
    parser = Parser(Scanner(program))
    tree = parser.parse_program()
    return tree, parser.errors
