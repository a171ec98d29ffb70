from typing import List

from interpreter.tree.visitor import NodeVisitor

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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StatementBlock,
)


class Printer(NodeVisitor):
    """
    Render an AST back into source text.

    Every prefix, infix and index expression is wrapped in parentheses, so the output
    spells out how the parser grouped the operators, e.g. `-a * b` prints as `((-a) * b)`.
    The output is itself a valid program that parses into an equal tree.
    """

    def print(self, tree: Node) -> str:
        return self.visit(tree)

    def print_statements(self, statements: List[Statement]) -> str:
        parts = []
        for i, statement in enumerate(statements):
            text = self.visit(statement)
            # An expression statement only ends where a semicolon says so
            if isinstance(statement, ExpressionStatement) and i < len(statements) - 1:
                text += ";"
            parts.append(text)
        return " ".join(parts)

    def visit_Program(self, node: Program) -> str:
        return self.print_statements(node.statements)

    def visit_StatementBlock(self, node: StatementBlock) -> str:
        if not node.statements:
            return "{ }"
        return "{ " + self.print_statements(node.statements) + " }"

    def visit_LetStatement(self, node: LetStatement) -> str:
        return f"let {self.visit(node.name)} = {self.visit(node.value)};"

    def visit_ReturnStatement(self, node: ReturnStatement) -> str:
        return f"return {self.visit(node.value)};"

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> str:
        return self.visit(node.expression)

    def visit_Identifier(self, node: Identifier) -> str:
        return node.value

    def visit_IntegerLiteral(self, node: IntegerLiteral) -> str:
        return str(node.value)

    def visit_BooleanLiteral(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def visit_ArrayLiteral(self, node: ArrayLiteral) -> str:
        return "[" + ", ".join(self.visit(element) for element in node.elements) + "]"

    def visit_PrefixExpression(self, node: PrefixExpression) -> str:
        return f"({node.operator.text}{self.visit(node.operand)})"

    def visit_InfixExpression(self, node: InfixExpression) -> str:
        return f"({self.visit(node.left)} {node.operator.text} {self.visit(node.right)})"

    def visit_IndexExpression(self, node: IndexExpression) -> str:
        return f"({self.visit(node.left)}[{self.visit(node.index)}])"

    def visit_IfExpression(self, node: IfExpression) -> str:
        condition = self.visit(node.condition)
        # Operators already print their own parentheses
        if not isinstance(node.condition, (PrefixExpression, InfixExpression, IndexExpression)):
            condition = f"({condition})"

        program = f"if {condition} {self.visit(node.consequence)}"
        if node.alternative is not None:
            program += f" else {self.visit(node.alternative)}"
        return program

    def visit_FunctionLiteral(self, node: FunctionLiteral) -> str:
        parameters = ", ".join(self.visit(parameter) for parameter in node.parameters)
        return f"func({parameters}) {self.visit(node.body)}"

    def visit_CallExpression(self, node: CallExpression) -> str:
        arguments = ", ".join(self.visit(argument) for argument in node.arguments)
        return f"{self.visit(node.function)}({arguments})"
