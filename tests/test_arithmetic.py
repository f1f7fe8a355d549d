import math

import pytest

from qcalc.outcome import Ok, Outcome
from qcalc.question import Question, evaluate_question


@pytest.mark.parametrize(
    "code, expected_outcome",
    [
        pytest.param("1", Ok(1.0)),
        pytest.param("-1", Ok(-1.0)),
        pytest.param("--1", Ok(1.0)),
        pytest.param("1+2", Ok(3.0)),
        pytest.param("(1+2)", Ok(3.0)),
        pytest.param("-(1+2)", Ok(-3.0)),
        pytest.param("(((1)))", Ok(1.0)),
        pytest.param("1 * 4 + 5", Ok(9.0)),
        pytest.param("1 + 4 * 5", Ok(21.0)),
        pytest.param("2+3*4", Ok(14.0)),
        pytest.param("(2+3)*4", Ok(20.0)),
        pytest.param("10 / 5 / 2 / 2", Ok(0.5)),
        pytest.param("10 - 4 - 3", Ok(3.0)),
        pytest.param("10 + 2 * (5 + 3 - 1)", Ok(24.0)),
        pytest.param("2^3^2", Ok(512.0)),
        pytest.param("(2^3)^2", Ok(64.0)),
        pytest.param("-2^2", Ok(4.0)),
        pytest.param("2^-1", Ok(0.5)),
        # numerals
        pytest.param("12_000.5", Ok(12000.5)),
        pytest.param("0xFF", Ok(255.0)),
        pytest.param("FF", Ok(255.0)),
        pytest.param("0XfF + 1", Ok(256.0)),
        pytest.param("0b101", Ok(5.0)),
        pytest.param("0b_1_0_1", Ok(5.0)),
        pytest.param("FACE", Ok(64206.0)),
        # variables
        pytest.param("x = 1\nx", Ok(1.0)),
        pytest.param("x = 5\nx + 1", Ok(6.0)),
        pytest.param("x = 1\ny = 2\nx + y", Ok(3.0)),
        pytest.param("x = 1\ny = 2\nz = x + y", Ok(3.0)),
        pytest.param("n = 1\nn = n + 1\nn = n * 10", Ok(20.0)),
        # funcs
        pytest.param("cos(0)", Ok(1.0)),
        pytest.param("sqrt(16) + abs(-2)", Ok(6.0)),
        pytest.param("max(1, min(7, 3))", Ok(3.0)),
        pytest.param("floor(pi())", Ok(3.0)),
    ],
)
def test_eval_arithmetic(code: str, expected_outcome: Outcome[float]) -> None:
    assert evaluate_question(Question(code)) == expected_outcome


@pytest.mark.parametrize(
    "code, expected_value",
    [
        pytest.param("sin(pi() / 2)", 1.0),
        pytest.param("log(euler())", 1.0),
        pytest.param("logb(8, 2)", 3.0),
        pytest.param("cbrt(-27)", -3.0),
        pytest.param("root(-8, 3)", -2.0),
        pytest.param("atan2(1, 1) * 4", math.pi),
        pytest.param("0.1 + 0.2", 0.3),
    ],
)
def test_eval_approximate(code: str, expected_value: float) -> None:
    outcome = evaluate_question(Question(code))
    assert isinstance(outcome, Ok)
    assert outcome.value == pytest.approx(expected_value)
