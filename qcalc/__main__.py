"""Command line front-end for qcalc.

Usage:
    python -m qcalc run input.txt                    # Answer every question, write output.txt
    python -m qcalc run input.txt -o answers.txt -p 4
    python -m qcalc repl                             # Type a question, blank line to evaluate
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from qcalc.document import evaluate_document, format_answer, format_report
from qcalc.outcome import Ok, Outcome
from qcalc.question import Question, evaluate_question

app = typer.Typer(
    name="qcalc",
    help="Evaluate arithmetic questions separated by '----' lines",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False, markup=False)],
        force=True,
    )


def _print_outcome(outcome: Outcome[float], precision: int) -> None:
    if isinstance(outcome, Ok):
        console.print(format_answer(outcome.value, precision), highlight=False)
    else:
        console.print(f"[red]Error: {escape(str(outcome))}[/red]")


@app.command("run")
def cmd_run(
    input_path: Path = typer.Argument(help="Document with questions separated by '----' lines"),
    output_path: Path = typer.Option(Path("output.txt"), "--output", "-o", help="Report file, overwritten"),
    precision: int = typer.Option(12, "--precision", "-p", min=0, help="Digits after the decimal point"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also log why questions were abandoned"),
) -> None:
    """Answer every question in a document and write a report."""
    _setup_logging(verbose)
    output_path.write_text("", encoding="utf-8")
    try:
        document = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Cannot read {escape(str(input_path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    if not document.strip():
        err_console.print(f"[red]Empty input file: {escape(str(input_path))}[/red]")
        raise typer.Exit(1)

    results = evaluate_document(document)
    for number, (_, outcome) in enumerate(results, start=1):
        console.print(f"[bold]Question: {number}[/bold]")
        _print_outcome(outcome, precision)

    output_path.write_text(format_report(results, precision), encoding="utf-8")
    console.print(f"Results saved to {escape(str(output_path))}")


@app.command("repl")
def cmd_repl(
    precision: int = typer.Option(12, "--precision", "-p", min=0, help="Digits after the decimal point"),
) -> None:
    """Read questions interactively; an empty line ends a question."""
    _setup_logging(verbose=False)
    lines: list[str] = []
    while True:
        try:
            line = input("... " if lines else "> ")
        except EOFError:
            break
        if line.strip():
            lines.append(line)
            continue
        if lines:
            _print_outcome(evaluate_question(Question("\n".join(lines))), precision)
            lines = []
    if lines:
        _print_outcome(evaluate_question(Question("\n".join(lines))), precision)


if __name__ == "__main__":
    app()
