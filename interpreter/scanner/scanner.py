import re
from typing import Iterator, List

from interpreter.token import Token
from interpreter.type import KEYWORDS, Type
from interpreter.util import Span


class Scanner:
    def __init__(self, program: str) -> None:
        self.og_program = program

        self.pattern = re.compile(
            r"""
                (?P<LRB>\()| # lb = Left Round Bracket
                (?P<RRB>\))| # rb = Right Round Bracket
                (?P<LCB>\{)| # lcb = Left Curly Bracket
                (?P<RCB>\})| # rcb = Right Curly Bracket
                (?P<LSB>\[)| # lsb = Left Square Bracket
                (?P<RSB>\])| # rsb = Right Square Bracket
                (?P<SEMICOLON>\;)|
                (?P<COMMA>\,)|
                (?P<COMMENT>\/\/.*)|
                (?P<PLUS>\+)|
                (?P<MINUS>\-)|
                (?P<STAR>\*)|
                (?P<SLASH>\/)|
                (?P<EQ>\=\=)|
                (?P<NEQ>\!\=)|
                (?P<LEQ>\<\=)|
                (?P<GEQ>\>\=)|
                (?P<LT>\<)|
                (?P<GT>\>)|
                (?P<ASSIGN>\=)|
                (?P<NOT>\!)|
                # Keywords are split off from identifiers in `scan_line`
                (?P<ID>[a-zA-Z_][a-zA-Z0-9_]*)|
                (?P<DIGIT>[0-9]+)|
                (?P<SPACE>[\ \r\t\f\v])|
                (?P<ILLEGAL>.)
            """,
            flags=re.X,
        )

        self._tokens = self._generate()
        self._eof = None

    def next_token(self) -> Token:
        """Pull the next token from the program.

        Once the program is exhausted, every call returns the same EOF token.

        Returns:
            Token: The next Token instance.
        """
        if self._eof is not None:
            return self._eof

        token = next(self._tokens, None)
        if token is None:
            self._eof = self.eof_token()
            return self._eof
        return token

    def scan(self) -> List[Token]:
        """Extract the list of tokens from the program passed to `Scanner(program)`,
        up to and including the EOF token.

        Scanning never fails: characters that belong to no token become ILLEGAL tokens.

        Returns:
            List[Token]: A list of Token instances
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == Type.EOF:
                return tokens

    def __iter__(self) -> Iterator[Token]:
        token = self.next_token()
        while token.type != Type.EOF:
            yield token
            token = self.next_token()

    def _generate(self) -> Iterator[Token]:
        # Extract the tokens from the lines line by line
        for line_no, line in enumerate(self.og_program.splitlines(), start=1):
            yield from self.scan_line(line, line_no)

    def scan_line(self, line: str, line_no: int) -> Iterator[Token]:
        for match in self.pattern.finditer(line):
            span = Span(line_no, match.span())
            match match.lastgroup:
                case "SPACE" | "COMMENT":
                    continue
                case "ID":
                    yield Token(match[0], KEYWORDS.get(match[0], Type.ID), span)
                case _:
                    yield Token(match[0], match.lastgroup, span)

    def eof_token(self) -> Token:
        lines = self.og_program.splitlines()
        if not lines:
            return Token("", Type.EOF, Span(1, (0, 0)))
        end = len(lines[-1])
        return Token("", Type.EOF, Span(len(lines), (end, end)))
