from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from interpreter.tree.tree import Identifier, StatementBlock
from interpreter.util import INT_BITS, INT_MIN

if TYPE_CHECKING:
    from interpreter.runtime.environment import Environment


class ValueType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ARRAY = "ARRAY"
    FUNCTION = "FUNCTION"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


# Values compare by identity, which is what `==` means for anything but integers
@dataclass(eq=False)
class Value:
    type = None

    def inspect(self) -> str:
        raise NotImplementedError()

    def __str__(self) -> str:
        return self.inspect()


@dataclass(eq=False)
class Integer(Value):
    value: int
    type = ValueType.INTEGER

    def __post_init__(self) -> None:
        # Wrap around like a two's complement 64-bit integer
        self.value = (self.value - INT_MIN) % 2**INT_BITS + INT_MIN

    def inspect(self) -> str:
        return str(self.value)


@dataclass(eq=False)
class Boolean(Value):
    value: bool
    type = ValueType.BOOLEAN

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(eq=False)
class Null(Value):
    type = ValueType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass(eq=False)
class Array(Value):
    elements: List[Value]
    type = ValueType.ARRAY

    def inspect(self) -> str:
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


@dataclass(eq=False)
class Function(Value):
    parameters: List[Identifier]
    body: StatementBlock
    # The environment the function was defined in, not a copy of it
    env: Environment
    type = ValueType.FUNCTION

    def inspect(self) -> str:
        parameters = ", ".join(parameter.value for parameter in self.parameters)
        return f"func({parameters}) {self.body}"

    def __repr__(self) -> str:
        # The environment may hold this very function
        return f"Function({self.inspect()!r})"


@dataclass(eq=False)
class ReturnValue(Value):
    value: Value
    type = ValueType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(eq=False)
class Error(Value):
    message: str
    type = ValueType.ERROR

    def inspect(self) -> str:
        return self.message


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(value: Value) -> bool:
    return value is not NULL and value is not FALSE


def is_error(value: Optional[Value]) -> bool:
    return value is not None and value.type == ValueType.ERROR
