import logging
from dataclasses import dataclass
from typing import Optional

from qcalc.builtins import DEFAULT_BUILTINS, BuiltinTable
from qcalc.outcome import Err, ErrorKind, Ok, Outcome
from qcalc.parser import parse
from qcalc.runtime import Context, Evaluator
from qcalc.tokenizer import tokenize, untokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Question:
    text: str
    base: int = 10


def evaluate_question(question: Question, builtins: BuiltinTable = DEFAULT_BUILTINS) -> Outcome[float]:
    """Evaluate the lines of ``question`` in order against one shared Context.

    A line that fails to parse is skipped with a warning. A line that fails to
    evaluate ends the question with that error. Otherwise the answer is the
    value of the last evaluated line.
    """
    evaluator = Evaluator(Context(base=question.base), builtins)
    answer: Optional[float] = None
    for line_number, raw_line in enumerate(question.text.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue

        tokens = tokenize(line)
        logger.debug("Line %d reads as %s", line_number, untokenize(tokens))
        statement = parse(tokens)
        if isinstance(statement, Err):
            logger.warning("Skipping line %d: %s", line_number, statement.render(line))
            continue

        result = evaluator.evaluate(statement.value)
        if isinstance(result, Err):
            logger.info("Line %d failed, abandoning question: %s", line_number, result)
            return result
        answer = result.value

    if answer is None:
        return Err(ErrorKind.EMPTY_QUESTION, "no line of the question could be evaluated")
    return Ok(answer)
