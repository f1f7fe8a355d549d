import enum
from dataclasses import dataclass
from typing import Union

from qcalc.outcome import Err, ErrorKind, Ok, Outcome
from qcalc.tokenizer import Token, TokenType
from qcalc.utils import PrintableEnum


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()


@dataclass(frozen=True)
class Number:
    lexeme: str


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


@dataclass(frozen=True)
class Call:
    name: str
    arguments: tuple["Expression", ...]


@dataclass(frozen=True)
class Assignment:
    name: str
    value: "Expression"


Expression = Union[Number, Variable, BinaryOperation, UnaryOperation, Call, Assignment]

ADDITIVE_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}
MULTIPLICATIVE_OPERATORS = {
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}


def parse(tokens: list[Token]) -> Outcome[Expression]:
    """Parse one statement; the first error rejects the whole statement.

    statement  := (Identifier '=' expression) | expression
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := primary ('^' factor)?
    primary    := Number
                | Identifier ['(' (expression (',' expression)*)? ')']
                | '(' expression ')'
                | '-' primary
    """
    return _Parser(tokens).parse_statement()


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.idx = 0

    def _peek(self) -> Token:
        if self.idx < len(self.tokens):
            return self.tokens[self.idx]
        end_offset = self.tokens[-1].offset + len(self.tokens[-1].lexeme) if self.tokens else 0
        return Token(type=TokenType.END, lexeme="", offset=end_offset)

    def _consume(self) -> Token:
        token = self._peek()
        if self.idx < len(self.tokens):
            self.idx += 1
        return token

    def parse_statement(self) -> Outcome[Expression]:
        statement = self._parse_assignment_or_expression()
        if isinstance(statement, Err):
            return statement
        # a statement must span the whole line: "5 % 2" is rejected, not read as 5
        trailing = self._peek()
        if trailing.type is not TokenType.END:
            return Err(ErrorKind.UNEXPECTED_TOKEN, f"unexpected token {trailing.lexeme!r}", trailing.offset)
        return statement

    def _parse_assignment_or_expression(self) -> Outcome[Expression]:
        if self._peek().type is TokenType.IDENTIFIER:
            name = self._consume()
            if self._peek().type is TokenType.EQUAL:
                self._consume()
                value = self._parse_expression()
                if isinstance(value, Err):
                    return value
                return Ok(Assignment(name=name.lexeme, value=value.value))
            self.idx -= 1  # not an assignment, rewind the identifier
        return self._parse_expression()

    def _parse_expression(self) -> Outcome[Expression]:
        left = self._parse_term()
        if isinstance(left, Err):
            return left
        result = left.value
        while self._peek().type in ADDITIVE_OPERATORS:
            operator = ADDITIVE_OPERATORS[self._consume().type]
            right = self._parse_term()
            if isinstance(right, Err):
                return right
            result = BinaryOperation(operator=operator, left=result, right=right.value)
        return Ok(result)

    def _parse_term(self) -> Outcome[Expression]:
        left = self._parse_factor()
        if isinstance(left, Err):
            return left
        result = left.value
        while self._peek().type in MULTIPLICATIVE_OPERATORS:
            operator = MULTIPLICATIVE_OPERATORS[self._consume().type]
            right = self._parse_factor()
            if isinstance(right, Err):
                return right
            result = BinaryOperation(operator=operator, left=result, right=right.value)
        return Ok(result)

    def _parse_factor(self) -> Outcome[Expression]:
        base = self._parse_primary()
        if isinstance(base, Err):
            return base
        if self._peek().type is not TokenType.CARET:
            return base
        self._consume()
        # recursing on the exponent makes ^ right-associative
        exponent = self._parse_factor()
        if isinstance(exponent, Err):
            return exponent
        return Ok(BinaryOperation(operator=BinaryOperator.POW, left=base.value, right=exponent.value))

    def _parse_primary(self) -> Outcome[Expression]:
        token = self._peek()
        if token.type is TokenType.NUMBER:
            self._consume()
            return Ok(Number(token.lexeme))
        elif token.type is TokenType.IDENTIFIER:
            self._consume()
            if self._peek().type is TokenType.BRACKET_OPEN:
                return self._parse_call(token)
            return Ok(Variable(token.lexeme))
        elif token.type is TokenType.BRACKET_OPEN:
            self._consume()
            inner = self._parse_expression()
            if isinstance(inner, Err):
                return inner
            closing = self._expect_closing_bracket()
            if isinstance(closing, Err):
                return closing
            return inner
        elif token.type is TokenType.MINUS:
            self._consume()
            operand = self._parse_primary()
            if isinstance(operand, Err):
                return operand
            return Ok(UnaryOperation(operator=UnaryOperator.NEG, operand=operand.value))
        return Err(ErrorKind.UNEXPECTED_TOKEN, "unexpected token in primary", token.offset)

    def _parse_call(self, name: Token) -> Outcome[Expression]:
        self._consume()  # (
        arguments: list[Expression] = []
        if self._peek().type is not TokenType.BRACKET_CLOSE:
            while True:
                argument = self._parse_expression()
                if isinstance(argument, Err):
                    return argument
                arguments.append(argument.value)
                if self._peek().type is not TokenType.COMMA:
                    break
                self._consume()
        closing = self._expect_closing_bracket()
        if isinstance(closing, Err):
            return closing
        return Ok(Call(name=name.lexeme, arguments=tuple(arguments)))

    def _expect_closing_bracket(self) -> Outcome[Token]:
        token = self._peek()
        if token.type is not TokenType.BRACKET_CLOSE:
            return Err(ErrorKind.MISSING_CLOSING_PAREN, "expected closing parenthesis", token.offset)
        return Ok(self._consume())
