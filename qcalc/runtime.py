import math
from dataclasses import dataclass, field
from typing import Callable

from qcalc.builtins import DEFAULT_BUILTINS, BuiltinTable
from qcalc.outcome import Err, ErrorKind, Ok, Outcome
from qcalc.parser import (
    Assignment,
    BinaryOperation,
    BinaryOperator,
    Call,
    Expression,
    Number,
    UnaryOperation,
    UnaryOperator,
    Variable,
)


@dataclass
class Context:
    """Variables of one question.

    ``base`` is the numeral-base hint the question arrived with. It is kept
    alongside the variables but nothing reads it: literals always follow their
    own notation.
    """

    variables: dict[str, float] = field(default_factory=dict)
    base: int = 10


def parse_numeral(lexeme: str) -> Outcome[float]:
    if lexeme.startswith("0b"):
        integer = int(lexeme[2:], 2)
    elif lexeme.startswith("0x"):
        integer = int(lexeme[2:], 16)
    else:
        value = float(lexeme)
        if math.isinf(value):
            return Err(ErrorKind.DOMAIN_ERROR, f"numeral {lexeme} is too large for a float")
        return Ok(value)
    try:
        return Ok(float(integer))
    except OverflowError:
        return Err(ErrorKind.DOMAIN_ERROR, f"numeral {lexeme} is too large for a float")


BinaryOperationImpl = Callable[[float, float], Outcome[float]]


def _add(a: float, b: float) -> Outcome[float]:
    return Ok(a + b)


def _sub(a: float, b: float) -> Outcome[float]:
    return Ok(a - b)


def _mul(a: float, b: float) -> Outcome[float]:
    return Ok(a * b)


def _div(a: float, b: float) -> Outcome[float]:
    if b == 0:
        return Err(ErrorKind.DIVISION_BY_ZERO, f"division of {a:g} by zero")
    return Ok(a / b)


def _pow(a: float, b: float) -> Outcome[float]:
    try:
        result = math.pow(a, b)
    except ValueError:
        return Err(ErrorKind.DOMAIN_ERROR, f"{a:g} ^ {b:g} has no real value")
    except OverflowError:
        return Err(ErrorKind.DOMAIN_ERROR, f"{a:g} ^ {b:g} is out of range")
    if math.isnan(result):
        return Err(ErrorKind.DOMAIN_ERROR, f"{a:g} ^ {b:g} has no real value")
    return Ok(result)


BINARY_OPERATIONS: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.ADD: _add,
    BinaryOperator.SUB: _sub,
    BinaryOperator.MUL: _mul,
    BinaryOperator.DIV: _div,
    BinaryOperator.POW: _pow,
}


class Evaluator:
    def __init__(self, context: Context, builtins: BuiltinTable = DEFAULT_BUILTINS) -> None:
        self.context = context
        self.builtins = builtins

    def evaluate(self, expression: Expression) -> Outcome[float]:
        if isinstance(expression, Number):
            return parse_numeral(expression.lexeme)
        elif isinstance(expression, Variable):
            if expression.name not in self.context.variables:
                return Err(ErrorKind.UNDEFINED_VARIABLE, f"variable {expression.name!r} is not defined")
            return Ok(self.context.variables[expression.name])
        elif isinstance(expression, Assignment):
            value = self.evaluate(expression.value)
            if isinstance(value, Ok):
                self.context.variables[expression.name] = value.value
            return value
        elif isinstance(expression, BinaryOperation):
            left = self.evaluate(expression.left)
            if isinstance(left, Err):
                return left
            right = self.evaluate(expression.right)
            if isinstance(right, Err):
                return right
            return BINARY_OPERATIONS[expression.operator](left.value, right.value)
        elif isinstance(expression, UnaryOperation):
            operand = self.evaluate(expression.operand)
            if isinstance(operand, Err):
                return operand
            if expression.operator is UnaryOperator.NEG:
                return Ok(-operand.value)
            raise RuntimeError(f"Unexpected unary operator: {expression.operator}")
        elif isinstance(expression, Call):
            return self._evaluate_call(expression)
        else:
            raise RuntimeError(f"Unexpected expression type: {expression}")

    def _evaluate_call(self, call: Call) -> Outcome[float]:
        func = self.builtins.get(call.name)
        if func is None:
            return Err(ErrorKind.UNKNOWN_FUNCTION, f"unknown function {call.name!r}")
        if len(call.arguments) != func.arity:
            return Err(
                ErrorKind.ARITY_MISMATCH,
                f"{call.name!r} takes {func.arity} argument(s), {len(call.arguments)} given",
            )
        args: list[float] = []
        for argument in call.arguments:
            value = self.evaluate(argument)
            if isinstance(value, Err):
                return value
            args.append(value.value)
        try:
            return Ok(float(func(*args)))
        except (ValueError, OverflowError, ZeroDivisionError) as e:
            return Err(ErrorKind.DOMAIN_ERROR, f"{call.name}({', '.join(f'{a:g}' for a in args)}): {e}")
