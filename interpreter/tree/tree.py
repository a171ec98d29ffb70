from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Iterator, List, Optional, Tuple

from interpreter.token import Token
from interpreter.util import Span


@dataclass(frozen=True)
class Node:
    span: Span = field(repr=False, kw_only=True, compare=False, default=None)

    def __str__(self) -> str:
        from interpreter.tree.printer import Printer

        printer = Printer()
        return printer.print(self)

    def __contains__(self, element: Node) -> bool:
        if self == element:
            return True
        for field_name, child in self.iter_fields():
            children = child if isinstance(child, list) else [child]
            if any(isinstance(item, Node) and element in item for item in children):
                return True
        return False

    def iter_fields(self) -> Iterator[Tuple[str, object]]:
        # Yield the dataclass field, skipping the location information
        for _field in fields(self):
            if _field.name != "span":
                yield _field.name, getattr(self, _field.name)


@dataclass(frozen=True)
class Program(Node):
    statements: List[Statement]


@dataclass(frozen=True)
class LetStatement(Node):
    name: Identifier
    value: Expression


@dataclass(frozen=True)
class ReturnStatement(Node):
    value: Expression


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression


@dataclass(frozen=True)
class StatementBlock(Node):
    statements: List[Statement]


@dataclass(frozen=True)
class Identifier(Node):
    value: str


@dataclass(frozen=True)
class IntegerLiteral(Node):
    value: int


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool


@dataclass(frozen=True)
class ArrayLiteral(Node):
    elements: List[Expression]


@dataclass(frozen=True)
class PrefixExpression(Node):
    operator: Token
    operand: Expression


@dataclass(frozen=True)
class InfixExpression(Node):
    left: Expression
    operator: Token
    right: Expression


@dataclass(frozen=True)
class IfExpression(Node):
    condition: Expression
    consequence: StatementBlock
    alternative: Optional[StatementBlock] = None


@dataclass(frozen=True)
class FunctionLiteral(Node):
    parameters: List[Identifier]
    body: StatementBlock


@dataclass(frozen=True)
class CallExpression(Node):
    function: Expression
    arguments: List[Expression]


@dataclass(frozen=True)
class IndexExpression(Node):
    left: Expression
    index: Expression


Statement = LetStatement | ReturnStatement | ExpressionStatement | StatementBlock

Expression = (
    Identifier
    | IntegerLiteral
    | BooleanLiteral
    | ArrayLiteral
    | PrefixExpression
    | InfixExpression
    | IfExpression
    | FunctionLiteral
    | CallExpression
    | IndexExpression
)
