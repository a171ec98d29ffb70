from typing import List, Optional

from interpreter.error.communicator import Communicator
from interpreter.error.parser_error import ParserException
from interpreter.parser.parser import parse
from interpreter.runtime.environment import Environment
from interpreter.token import Token
from interpreter.tree.visitor import NodeVisitor
from interpreter.type import Type

from interpreter.runtime.values import (  # isort:skip
    FALSE,
    NULL,
    TRUE,
    Array,
    Error,
    Function,
    Integer,
    ReturnValue,
    Value,
    ValueType,
    is_truthy,
    native_bool,
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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StatementBlock,
)


def is_marker(value: Optional[Value]) -> bool:
    """Whether `value` stops evaluation and travels up to the enclosing function or program."""
    return value is not None and value.type in (
        ValueType.ERROR,
        ValueType.RETURN_VALUE,
    )


class Evaluator(NodeVisitor):
    """
    Tree-walking evaluator. Every `visit_*` method takes the node and the Environment
    to evaluate it in, and returns a Value, or None for statements that produce nothing.

    Runtime errors are Error values rather than Python exceptions. Just like the
    ReturnValue produced by a return statement, an Error stops every enclosing
    evaluation step and is passed upward as the result.
    """

    def evaluate(self, node: Node, env: Environment) -> Optional[Value]:
        try:
            return self.visit(node, env)
        except RecursionError:
            return Error("maximum recursion depth exceeded")

    def visit_children(self, node: Node, env: Environment) -> None:
        # Every node type has a visitor, so there is nothing to evaluate here
        return None

    def visit_Program(self, node: Program, env: Environment) -> Optional[Value]:
        result = None
        for statement in node.statements:
            result = self.visit(statement, env)
            match result:
                case ReturnValue(value=value):
                    return value
                case Error():
                    return result
        return result

    def visit_StatementBlock(
        self, node: StatementBlock, env: Environment
    ) -> Optional[Value]:
        return self.evaluate_statements(node.statements, env)

    def evaluate_statements(
        self, statements: List[Statement], env: Environment
    ) -> Optional[Value]:
        # Unlike a Program, a block leaves a ReturnValue wrapped for the caller to see
        result = None
        for statement in statements:
            result = self.visit(statement, env)
            if is_marker(result):
                return result
        return result

    def visit_ExpressionStatement(
        self, node: ExpressionStatement, env: Environment
    ) -> Optional[Value]:
        return self.visit(node.expression, env)

    def visit_LetStatement(self, node: LetStatement, env: Environment) -> Optional[Value]:
        value = self.visit(node.value, env)
        if is_marker(value):
            return value
        env.set(node.name.value, value)
        return None

    def visit_ReturnStatement(self, node: ReturnStatement, env: Environment) -> Value:
        value = self.visit(node.value, env)
        if is_marker(value):
            return value
        return ReturnValue(value)

    def visit_IntegerLiteral(self, node: IntegerLiteral, env: Environment) -> Integer:
        return Integer(node.value)

    def visit_BooleanLiteral(self, node: BooleanLiteral, env: Environment) -> Value:
        return native_bool(node.value)

    def visit_Identifier(self, node: Identifier, env: Environment) -> Value:
        value = env.get(node.value)
        if value is None:
            return Error(f"identifier not found: {node.value}")
        return value

    def visit_PrefixExpression(self, node: PrefixExpression, env: Environment) -> Value:
        operand = self.visit(node.operand, env)
        if is_marker(operand):
            return operand
        return self.evaluate_prefix_expression(node.operator, operand)

    def evaluate_prefix_expression(self, operator: Token, operand: Value) -> Value:
        match operator.type:
            case Type.NOT:
                return FALSE if is_truthy(operand) else TRUE
            case Type.MINUS:
                if operand.type != ValueType.INTEGER:
                    return Error(f"unknown operator: -{operand.type}")
                return Integer(-operand.value)
            case _:
                return Error(f"unknown operator: {operator.text}{operand.type}")

    def visit_InfixExpression(self, node: InfixExpression, env: Environment) -> Value:
        left = self.visit(node.left, env)
        if is_marker(left):
            return left

        right = self.visit(node.right, env)
        if is_marker(right):
            return right

        return self.evaluate_infix_expression(left, node.operator, right)

    def evaluate_infix_expression(
        self, left: Value, operator: Token, right: Value
    ) -> Value:
        if left.type == ValueType.INTEGER and right.type == ValueType.INTEGER:
            return self.evaluate_integer_infix_expression(left, operator, right)

        if left.type != right.type:
            return Error(f"type mismatch: {left.type} {operator.text} {right.type}")

        # Booleans and null are singletons, so identity is equality
        match operator.type:
            case Type.EQ:
                return native_bool(left is right)
            case Type.NEQ:
                return native_bool(left is not right)
            case _:
                return Error(
                    f"unknown operator: {left.type} {operator.text} {right.type}"
                )

    def evaluate_integer_infix_expression(
        self, left: Integer, operator: Token, right: Integer
    ) -> Value:
        lhs = left.value
        rhs = right.value
        match operator.type:
            case Type.PLUS:
                return Integer(lhs + rhs)
            case Type.MINUS:
                return Integer(lhs - rhs)
            case Type.STAR:
                return Integer(lhs * rhs)
            case Type.SLASH:
                if rhs == 0:
                    return Error(f"division by zero: {lhs} / {rhs}")
                # Truncate towards zero rather than flooring
                quotient = abs(lhs) // abs(rhs)
                return Integer(quotient if (lhs < 0) == (rhs < 0) else -quotient)
            case Type.LT:
                return native_bool(lhs < rhs)
            case Type.GT:
                return native_bool(lhs > rhs)
            case Type.LEQ:
                return native_bool(lhs <= rhs)
            case Type.GEQ:
                return native_bool(lhs >= rhs)
            case Type.EQ:
                return native_bool(lhs == rhs)
            case Type.NEQ:
                return native_bool(lhs != rhs)
            case _:
                return Error(
                    f"unknown operator: {left.type} {operator.text} {right.type}"
                )

    def visit_IfExpression(self, node: IfExpression, env: Environment) -> Optional[Value]:
        condition = self.visit(node.condition, env)
        if is_marker(condition):
            return condition

        if is_truthy(condition):
            result = self.visit(node.consequence, env)
        elif node.alternative is not None:
            result = self.visit(node.alternative, env)
        else:
            return NULL

        # A block without a value, e.g. `{ let a = 1; }`, still makes an expression
        return NULL if result is None else result

    def visit_FunctionLiteral(self, node: FunctionLiteral, env: Environment) -> Function:
        return Function(node.parameters, node.body, env)

    def visit_CallExpression(self, node: CallExpression, env: Environment) -> Value:
        function = self.visit(node.function, env)
        if is_marker(function):
            return function

        arguments = self.evaluate_expressions(node.arguments, env)
        if isinstance(arguments, Value):
            return arguments

        return self.apply_function(function, arguments)

    def evaluate_expressions(
        self, expressions: List[Expression], env: Environment
    ) -> List[Value] | Value:
        """Evaluate `expressions` from left to right.

        Returns:
            List[Value] | Value: The values, or the first Error or ReturnValue encountered.
        """
        values = []
        for expression in expressions:
            value = self.visit(expression, env)
            if is_marker(value):
                return value
            values.append(value)
        return values

    def apply_function(self, function: Value, arguments: List[Value]) -> Value:
        if function.type != ValueType.FUNCTION:
            return Error(f"not a function: {function.type}")

        # Scoped under the environment the function was defined in, not the caller's
        env = function.env.enclose()
        # There is no arity check: surplus arguments are ignored,
        # and parameters without an argument stay unbound
        for parameter, argument in zip(function.parameters, arguments):
            env.set(parameter.value, argument)

        result = self.visit(function.body, env)
        if isinstance(result, ReturnValue):
            return result.value
        if result is None:
            return NULL
        return result

    def visit_ArrayLiteral(self, node: ArrayLiteral, env: Environment) -> Value:
        elements = self.evaluate_expressions(node.elements, env)
        if isinstance(elements, Value):
            return elements
        return Array(elements)

    def visit_IndexExpression(self, node: IndexExpression, env: Environment) -> Value:
        left = self.visit(node.left, env)
        if is_marker(left):
            return left

        index = self.visit(node.index, env)
        if is_marker(index):
            return index

        # Anything but an in-range integer index into an array yields null
        if left.type == ValueType.ARRAY and index.type == ValueType.INTEGER:
            if 0 <= index.value < len(left.elements):
                return left.elements[index.value]
        return NULL


def evaluate(program: str, env: Optional[Environment] = None) -> Optional[Value]:
    """Parse and evaluate `program`.

    Args:
        program (str): The source text.
        env (Optional[Environment]): The environment to evaluate in, a fresh one if None.

    Raises:
        ParserException: If the program could not be parsed, listing every error.

    Returns:
        Optional[Value]: The value of the last statement, or None if it produced nothing.
    """
    tree, errors = parse(program)
    Communicator.communicate(errors, ParserException, color=False)
    if env is None:
        env = Environment()
    return Evaluator().evaluate(tree, env)
