import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional


@dataclass(frozen=True)
class BuiltinFunc:
    name: str
    arity: int
    fn: Callable[..., float]

    def __call__(self, *args: float) -> float:
        return self.fn(*args)


BuiltinTable = Mapping[str, BuiltinFunc]


def builtin_func(arity: int, name: Optional[str] = None):
    """Wrap a plain function as a BuiltinFunc; the name defaults to the function's, minus a trailing _"""

    def decorator(fn: Callable[..., float]) -> BuiltinFunc:
        return BuiltinFunc(name=name or fn.__name__.rstrip("_"), arity=arity, fn=fn)

    return decorator


def builtin_table(*funcs: BuiltinFunc) -> BuiltinTable:
    """Read-only name -> function table handed to the evaluator"""
    table: dict[str, BuiltinFunc] = {}
    for func in funcs:
        if func.name in table:
            raise ValueError(f"Duplicate built-in function {func.name!r}")
        table[func.name] = func
    return MappingProxyType(table)


def _from_math(name: str, arity: int = 1) -> BuiltinFunc:
    return BuiltinFunc(name=name, arity=arity, fn=getattr(math, name))


@builtin_func(arity=1)
def cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1 / 3), x)


@builtin_func(arity=2)
def root(x: float, n: float) -> float:
    if x < 0 and n == int(n) and int(n) % 2 == 1:
        return -math.pow(-x, 1 / n)
    return math.pow(x, 1 / n)


@builtin_func(arity=2)
def logb(x: float, base: float) -> float:
    return math.log(x, base)


@builtin_func(arity=1)
def abs_(x: float) -> float:
    return abs(x)


@builtin_func(arity=1)
def floor(x: float) -> float:
    return float(math.floor(x))


@builtin_func(arity=1)
def ceil(x: float) -> float:
    return float(math.ceil(x))


@builtin_func(arity=1)
def round_(x: float) -> float:
    return float(round(x))


@builtin_func(arity=2)
def min_(a: float, b: float) -> float:
    return min(a, b)


@builtin_func(arity=2)
def max_(a: float, b: float) -> float:
    return max(a, b)


@builtin_func(arity=0)
def pi() -> float:
    return math.pi


@builtin_func(arity=0)
def euler() -> float:
    return math.e


DEFAULT_BUILTINS: BuiltinTable = builtin_table(
    *(_from_math(name) for name in ["sin", "cos", "tan", "asin", "acos", "atan", "sinh", "cosh", "tanh"]),
    *(_from_math(name) for name in ["sqrt", "exp", "log", "log10", "log2"]),
    *(_from_math(name, arity=2) for name in ["pow", "atan2", "hypot"]),
    cbrt,
    root,
    logb,
    abs_,
    floor,
    ceil,
    round_,
    min_,
    max_,
    pi,
    euler,
)
