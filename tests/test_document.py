from qcalc.document import (
    REPORT_RULE,
    evaluate_document,
    format_answer,
    format_outcome,
    format_report,
    format_report_entry,
    split_questions,
)
from qcalc.outcome import Err, ErrorKind, Ok
from qcalc.question import Question

DOCUMENT = """\
x = 5
x + 1
----
y
------------
----

1 +
----
2^3^2
"""


def test_split_questions() -> None:
    assert split_questions(DOCUMENT) == [
        Question("x = 5\nx + 1"),
        Question("y"),
        Question("1 +"),
        Question("2^3^2"),
    ]


def test_split_questions_without_delimiter() -> None:
    assert split_questions("1 + 1\n2 + 2\n") == [Question("1 + 1\n2 + 2")]


def test_split_questions_passes_base() -> None:
    assert [q.base for q in split_questions("1\n----\n2", base=16)] == [16, 16]


def test_dashes_inside_expression_do_not_split() -> None:
    assert split_questions("----5\n1") == [Question("----5\n1")]


def test_evaluate_document_keeps_going_after_errors() -> None:
    outcomes = [outcome for _, outcome in evaluate_document(DOCUMENT)]
    assert outcomes[0] == Ok(6.0)
    assert isinstance(outcomes[1], Err) and outcomes[1].kind is ErrorKind.UNDEFINED_VARIABLE
    assert isinstance(outcomes[2], Err) and outcomes[2].kind is ErrorKind.EMPTY_QUESTION
    assert outcomes[3] == Ok(512.0)


def test_format_answer() -> None:
    assert format_answer(6.0) == "6.000000000000"
    assert format_answer(1 / 3, precision=4) == "0.3333"


def test_format_outcome() -> None:
    assert format_outcome(Ok(2.5), precision=2) == "Answer: 2.50"
    assert format_outcome(Err(ErrorKind.DIVISION_BY_ZERO, "division of 1 by zero")) == (
        "Error: DIVISION_BY_ZERO: division of 1 by zero"
    )


def test_format_report_entry() -> None:
    entry = format_report_entry(3, Question("x = 5\nx + 1"), Ok(6.0), precision=1)
    assert entry == f"Question: 3\nx = 5\nx + 1\nAnswer: 6.0\n{REPORT_RULE}\n"


def test_format_report_numbers_questions() -> None:
    report = format_report(evaluate_document("1\n----\n2"), precision=0)
    assert report.splitlines() == ["Question: 1", "1", "Answer: 1", REPORT_RULE, "Question: 2", "2", "Answer: 2", REPORT_RULE]


def test_only_newlines_separate_lines() -> None:
    assert split_questions("1\x0c----\n2") == [Question("1\x0c----\n2")]
