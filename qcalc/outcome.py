"""Uniform success/error result returned at every fallible boundary.

Parsing and evaluation never raise on bad input; they return ``Ok(value)`` or
``Err(kind, errmsg, position)`` and callers branch with ``isinstance``.
"""
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from qcalc.utils import PrintableEnum, render_caret

T = TypeVar("T")


class ErrorKind(PrintableEnum):
    # parse level
    UNEXPECTED_TOKEN = enum.auto()
    MISSING_CLOSING_PAREN = enum.auto()
    # evaluation level
    UNDEFINED_VARIABLE = enum.auto()
    UNKNOWN_FUNCTION = enum.auto()
    ARITY_MISMATCH = enum.auto()
    DIVISION_BY_ZERO = enum.auto()
    DOMAIN_ERROR = enum.auto()
    EMPTY_QUESTION = enum.auto()


PARSE_ERROR_KINDS = frozenset({ErrorKind.UNEXPECTED_TOKEN, ErrorKind.MISSING_CLOSING_PAREN})


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    errmsg: str
    position: Optional[int] = None

    @property
    def is_parse_error(self) -> bool:
        return self.kind in PARSE_ERROR_KINDS

    def render(self, line: str) -> str:
        if self.position is None:
            return str(self)
        return "\n".join([str(self), render_caret(line, self.position)])

    def __str__(self) -> str:
        return f"{self.kind}: {self.errmsg}"


Outcome = Union[Ok[T], Err]
