"""Tree-walking evaluator: reduces a Program (or any node of it) to a runtime value.

Return statements produce a ReturnValue instead of a plain value. Blocks stop at the first ReturnValue they see and
hand it up unchanged, and so does every expression that has one as an operand; only the Program unwraps it. A return
therefore leaves every enclosing block at once, however deeply it's nested.
"""

from monkey.lang.error import EvaluationError, GenericException
from monkey.lang.nodes import (BlockStatement, BooleanLiteral, ExpressionStatement, FunctionLiteral, Identifier,
                               IfExpression, InfixExpression, IntegerLiteral, LetStatement, PrefixExpression, Program,
                               ReturnStatement)
from monkey.lang.objects import FALSE, NULL, Function, Integer, ReturnValue, native_bool, wrap_int64


def is_truthy(value):
    """Everything but false and null is truthy, including 0."""
    return value is not FALSE and value is not NULL


def evaluate(node):
    """Evaluates node. Raises EvaluationError if the program can't be reduced to a value."""
    if isinstance(node, Program):
        return _eval_program(node)

    elif isinstance(node, BlockStatement):
        return _eval_block(node)

    elif isinstance(node, ExpressionStatement):
        return evaluate(node.expression)

    elif isinstance(node, ReturnStatement):
        value = evaluate(node.value)
        return value if isinstance(value, ReturnValue) else ReturnValue(value)

    elif isinstance(node, LetStatement):
        raise EvaluationError("cannot bind '{}': let bindings are not supported", node.name.value)

    elif isinstance(node, IntegerLiteral):
        return Integer(node.value)

    elif isinstance(node, BooleanLiteral):
        return native_bool(node.value)

    elif isinstance(node, PrefixExpression):
        right = evaluate(node.right)
        if isinstance(right, ReturnValue):
            return right
        return _eval_prefix(node.operator, right)

    elif isinstance(node, InfixExpression):
        left = evaluate(node.left)
        if isinstance(left, ReturnValue):
            return left

        right = evaluate(node.right)
        if isinstance(right, ReturnValue):
            return right

        return _eval_infix(node.operator, left, right)

    elif isinstance(node, IfExpression):
        return _eval_if(node)

    elif isinstance(node, FunctionLiteral):
        return Function(node.parameters, node.body)

    elif isinstance(node, Identifier):
        raise EvaluationError("identifier not found: '{}'", node.value)

    raise GenericException("no evaluation rule for '{}'", type(node).__name__, internal=True)


def _eval_program(program):
    result = NULL
    for statement in program.statements:
        result = evaluate(statement)

        if isinstance(result, ReturnValue):
            return result.value

    return result


def _eval_block(block):
    result = NULL
    for statement in block.statements:
        result = evaluate(statement)

        if isinstance(result, ReturnValue):
            return result  # unwrapped by _eval_program only

    return result


def _eval_if(node):
    condition = evaluate(node.condition)
    if isinstance(condition, ReturnValue):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence)
    elif node.alternative is not None:
        return evaluate(node.alternative)
    return NULL


def _eval_prefix(operator, right):
    if operator == "!":
        return native_bool(not is_truthy(right))

    elif operator == "-":
        if not isinstance(right, Integer):
            raise EvaluationError("unknown operator: '{}'", f"-{right.type_name}")
        return Integer(wrap_int64(-right.value))

    raise EvaluationError("unknown operator: '{}'", f"{operator}{right.type_name}")


def _eval_infix(operator, left, right):
    if isinstance(left, Integer) and isinstance(right, Integer):
        return _eval_integer_infix(operator, left.value, right.value)

    # booleans and null are singletons, so identity is equality
    elif operator == "==":
        return native_bool(left is right)
    elif operator == "!=":
        return native_bool(left is not right)

    elif left.type_name != right.type_name:
        raise EvaluationError("type mismatch: '{}'", f"{left.type_name} {operator} {right.type_name}")
    raise EvaluationError("unknown operator: '{}'", f"{left.type_name} {operator} {right.type_name}")


def _eval_integer_infix(operator, left, right):
    if operator == "+":
        return Integer(wrap_int64(left + right))
    elif operator == "-":
        return Integer(wrap_int64(left - right))
    elif operator == "*":
        return Integer(wrap_int64(left * right))
    elif operator == "/":
        if right == 0:
            raise EvaluationError("division by zero: '{}'", f"{left} / {right}")

        quotient = abs(left) // abs(right)  # truncates toward zero
        if (left < 0) != (right < 0):
            quotient = -quotient
        return Integer(wrap_int64(quotient))

    elif operator == "<":
        return native_bool(left < right)
    elif operator == ">":
        return native_bool(left > right)
    elif operator == "==":
        return native_bool(left == right)
    elif operator == "!=":
        return native_bool(left != right)

    raise EvaluationError("unknown operator: '{}'", f"INTEGER {operator} INTEGER")
