from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from interpreter.type import Type


@dataclass
class Span:
    ln: Tuple[int, int]
    col: Tuple[int, int]

    @property
    def start_ln(self) -> int:
        return self.ln[0]

    @property
    def end_ln(self) -> int:
        return self.ln[1]

    @property
    def start_col(self) -> int:
        return self.col[0]

    @property
    def end_col(self) -> int:
        return self.col[1]

    @property
    def multiline(self) -> bool:
        return self.start_ln != self.end_ln

    @property
    def lines_str(self) -> str:
        if self.multiline:
            return f"lines [{self.start_ln}-{self.end_ln}]"
        return f"line [{self.start_ln}]"

    @classmethod
    def default(cls):
        return cls(-1, (0, -1))

    def __init__(self, line_no: int | Tuple[int, int], span: Tuple[int, int]) -> None:
        if isinstance(line_no, int):
            self.ln = (line_no, line_no)
        else:
            self.ln = line_no
        self.col = span

    def __and__(self, other: Span) -> Span:
        # Determine the correct columns based on the starting line
        if self.start_ln < other.start_ln:
            col = (self.start_col, other.end_col)
        elif self.start_ln > other.start_ln:
            col = (other.start_col, self.end_col)
        else:
            col = (
                min(self.start_col, other.start_col),
                max(self.end_col, other.end_col),
            )

        return Span(
            line_no=(
                min(self.start_ln, other.start_ln),
                max(self.end_ln, other.end_ln),
            ),
            span=col,
        )


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < > <= >=
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # !x -x
    CALL = 7  # f(x) a[i]


# Binding power of every token that may continue an expression
operator_precedence = {
    Type.EQ: Precedence.EQUALS,
    Type.NEQ: Precedence.EQUALS,
    Type.LT: Precedence.LESSGREATER,
    Type.GT: Precedence.LESSGREATER,
    Type.LEQ: Precedence.LESSGREATER,
    Type.GEQ: Precedence.LESSGREATER,
    Type.PLUS: Precedence.SUM,
    Type.MINUS: Precedence.SUM,
    Type.STAR: Precedence.PRODUCT,
    Type.SLASH: Precedence.PRODUCT,
    Type.LRB: Precedence.CALL,
    Type.LSB: Precedence.CALL,
}

# Integers are signed 64-bit
INT_BITS = 64
INT_MIN = -(2 ** (INT_BITS - 1))
INT_MAX = 2 ** (INT_BITS - 1) - 1

PROMPT = ">> "

# Default is 1000, which a handful of nested calls in the language exhaust
RECURSION_LIMIT = 5000

# Diagnostics shown by Communicator.communicate before the rest are summarised
MAX_REPORTED_ERRORS = 10


class Colors:
    RED = "\033[31m"
    ENDC = "\033[m"
