"""Splitting an input document into questions and rendering the report."""
import re
from typing import Iterable

from qcalc.builtins import DEFAULT_BUILTINS, BuiltinTable
from qcalc.outcome import Ok, Outcome
from qcalc.question import Question, evaluate_question

DELIMITER_RE = re.compile(r"^\s*-{4,}\s*$")
REPORT_RULE = "-" * 40


def split_questions(document: str, base: int = 10) -> list[Question]:
    questions: list[Question] = []
    block: list[str] = []
    for line in document.split("\n") + ["----"]:
        if DELIMITER_RE.match(line):
            text = "\n".join(block).strip("\n")
            if text.strip():
                questions.append(Question(text=text, base=base))
            block = []
        else:
            block.append(line)
    return questions


def evaluate_document(
    document: str, builtins: BuiltinTable = DEFAULT_BUILTINS
) -> list[tuple[Question, Outcome[float]]]:
    return [(question, evaluate_question(question, builtins)) for question in split_questions(document)]


def format_answer(value: float, precision: int = 12) -> str:
    return f"{value:.{precision}f}"


def format_outcome(outcome: Outcome[float], precision: int = 12) -> str:
    if isinstance(outcome, Ok):
        return f"Answer: {format_answer(outcome.value, precision)}"
    return f"Error: {outcome}"


def format_report_entry(number: int, question: Question, outcome: Outcome[float], precision: int = 12) -> str:
    return "\n".join(
        [
            f"Question: {number}",
            question.text,
            format_outcome(outcome, precision),
            REPORT_RULE,
            "",
        ]
    )


def format_report(results: Iterable[tuple[Question, Outcome[float]]], precision: int = 12) -> str:
    return "".join(
        format_report_entry(number, question, outcome, precision)
        for number, (question, outcome) in enumerate(results, start=1)
    )
