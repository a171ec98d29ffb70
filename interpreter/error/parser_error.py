from dataclasses import dataclass

from interpreter.error.error import InterpreterError, InterpreterException
from interpreter.token import Token
from interpreter.type import Type


class ParserException(InterpreterException):
    pass


@dataclass
class ParseError(InterpreterError):
    def detailed(self, color: bool = True) -> str:
        return self.create_error(self.message, class_name="SyntaxError", color=color)


@dataclass
class UnexpectedTokenError(ParseError):
    expected: Type
    got: Token

    @property
    def message(self) -> str:
        return f"expected next token to be {self.expected}, got {self.got.type} instead"

    def detailed(self, color: bool = True) -> str:
        after = f"Expected {self.expected.article_str()}"
        if self.got.type != Type.EOF:
            after += f", but got {self.got.text!r} instead"
        after += f" on {self.span.lines_str} column {self.span.start_col}."
        return self.create_error(
            self.message, after, class_name="SyntaxError", color=color
        )


@dataclass
class NoPrefixParseFunctionError(ParseError):
    token: Token

    @property
    def message(self) -> str:
        return f"no prefix parse function for {self.token.type} found"


@dataclass
class IntegerLiteralError(ParseError):
    token: Token

    @property
    def message(self) -> str:
        return f"could not parse {self.token.text!r} as integer"


@dataclass
class NestingDepthError(ParseError):
    @property
    def message(self) -> str:
        return "maximum nesting depth exceeded"
