from enum import Enum


class Type(Enum):
    LRB = "("
    RRB = ")"
    LCB = "{"
    RCB = "}"
    LSB = "["
    RSB = "]"
    SEMICOLON = ";"
    COMMA = ","
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    EQ = "=="
    NEQ = "!="
    LEQ = "<="
    GEQ = ">="
    LT = "<"
    GT = ">"
    ASSIGN = "="
    NOT = "!"
    FUNC = "func"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"
    # Kinds without a fixed text, valued by their description
    ID = "identifier"
    DIGIT = "integer"
    ILLEGAL = "illegal"
    EOF = "end of input"

    def to_type(type_str: str):
        return Type[type_str]

    def __str__(self) -> str:
        match self:
            case Type.ID:
                return "identifier"
            case Type.DIGIT:
                return "integer"
            case Type.ILLEGAL:
                return "illegal"
            case Type.EOF:
                return "end of input"
        return repr(self.value)

    def article_str(self) -> str:
        match self:
            case Type.ILLEGAL | Type.IF | Type.ELSE | Type.ID | Type.DIGIT | Type.EOF:
                return f"an {self}"
            case _:
                return f"a {self}"


KEYWORDS = {
    "func": Type.FUNC,
    "let": Type.LET,
    "true": Type.TRUE,
    "false": Type.FALSE,
    "if": Type.IF,
    "else": Type.ELSE,
    "return": Type.RETURN,
}
