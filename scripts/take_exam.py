#!/usr/bin/env python
"""
Take an exam in the terminal, under the exam's countdown timer.

Commands at the prompt:
    a-d / 1-4   select an option for the current question
    x           clear the current answer
    n / p       next / previous question
    g <number>  go to a position (1-based)
    s           submit
    q           abandon the attempt
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from exam_service.core.constants import OPTION_LETTERS
from exam_service.core.data import load_csv_to_question_records
from exam_service.exams import (
    ExamExpiredError,
    ExamNotFoundError,
    QuestionBank,
    get_exam,
    load_exam_catalog,
)
from exam_service.hierarchy.resolver import (
    build_id_positions,
    resolve_parent_index,
)
from exam_service.results import (
    CandidateInfo,
    JsonlResultSink,
    build_submission,
)
from exam_service.scoring import ScoreResult, marks_label
from exam_service.session import ExamSession, SessionStatus, run_timer
from exam_service.settings import get_settings

BACKEND_DIR = Path(__file__).parent.parent.absolute()
DEFAULT_DATA_DIR = BACKEND_DIR / "data" / "sample"

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def format_remaining(remaining_ms: float) -> str:
    total_s = int(remaining_ms // 1000)
    return f"{total_s // 60:02d}:{total_s % 60:02d}"


def render_current(session: ExamSession) -> None:
    record = session.current_record
    number = session.current_number
    assert record is not None and number is not None

    # Show the passage above its sub-questions
    parent_ix = resolve_parent_index(record, build_id_positions(session.records))
    if parent_ix is not None:
        console.print(
            Panel(session.records[parent_ix].prompt_text, title="Passage")
        )

    lines = [f"[bold]{number.display}.[/bold] {record.prompt_text}"]
    selected = session.answers[session.current_index]
    for ix, option in enumerate(record.options):
        if not option.strip():
            continue
        marker = "[green]>[/green]" if selected == ix else " "
        lines.append(f"{marker} {OPTION_LETTERS[ix]}) {option}")

    console.print(
        Panel(
            "\n".join(lines),
            title=f"{record.subject}  [{marks_label(record)}]",
            subtitle=f"Time left {format_remaining(session.remaining_time_ms)}",
        )
    )


def parse_option(command: str) -> int | None:
    if len(command) != 1:
        return None
    if command.upper() in OPTION_LETTERS:
        return OPTION_LETTERS.index(command.upper())
    if command.isdigit() and 1 <= int(command) <= len(OPTION_LETTERS):
        return int(command) - 1
    return None


def apply_command(session: ExamSession, command: str) -> None:
    command = command.strip().lower()
    option = parse_option(command)

    if option is not None:
        if not session.select_answer(session.current_index, option):
            console.print("[yellow]Answer not recorded[/yellow]")
        else:
            session.next_question()
    elif command == "x":
        session.select_answer(session.current_index, None)
    elif command == "n":
        session.next_question()
    elif command == "p":
        session.previous_question()
    elif command.startswith("g "):
        target = command[2:].strip()
        if target.isdigit():
            session.go_to(int(target) - 1)
    elif command == "s":
        session.submit()
    elif command == "q":
        session.abandon()
    else:
        console.print("[dim]a-d select, x clear, n/p move, g N go, s submit, q quit[/dim]")


async def run_exam(
    session: ExamSession, tick_interval_s: float
) -> ScoreResult | None:
    timer = asyncio.create_task(run_timer(session, tick_interval_s))

    while session.status == SessionStatus.IN_PROGRESS:
        render_current(session)
        command = await asyncio.to_thread(console.input, "> ")
        # Input that arrives after the deadline is dropped
        if session.tick() <= 0:
            break
        apply_command(session, command)

    return await timer


def print_result(result: ScoreResult, timed_out: bool) -> None:
    table = Table(title="Result" + (" (time up)" if timed_out else ""))
    table.add_column("Score", justify="right")
    table.add_column("Answered", justify="right")
    table.add_column("Correct", justify="right")
    table.add_column("Wrong", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_row(
        f"{result.score:.2f}",
        str(result.answered),
        str(result.correct),
        str(result.wrong),
        str(result.skipped),
    )
    console.print(table)


@app.command()
def main(
    exam_code: str = typer.Argument(..., help="Code of the exam to take"),
    name: str = typer.Option(..., "-n", "--name", help="Candidate name"),
    mobile: str = typer.Option("", "-m", "--mobile", help="Candidate mobile"),
    questions_path: Path = typer.Option(
        DEFAULT_DATA_DIR / "questions.csv",
        "-q",
        "--questions",
        help="CSV of question records",
    ),
    exams_dir: Path = typer.Option(
        DEFAULT_DATA_DIR / "exams",
        "-e",
        "--exams-dir",
        help="Directory of exam definition YAML files",
    ),
    results_path: Path | None = typer.Option(
        None,
        "-o",
        "--results",
        help="JSON-lines file results are appended to",
    ),
) -> None:
    """Take an exam and save the result."""
    settings = get_settings()

    try:
        records = load_csv_to_question_records(questions_path)
        catalog = load_exam_catalog(exams_dir)
        exam = get_exam(catalog, exam_code)
        exam.ensure_available()
        candidate = CandidateInfo(name=name, mobile=mobile)
    except (ExamNotFoundError, ExamExpiredError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading exam: {e}[/red]")
        raise typer.Exit(1) from e

    exam_records = QuestionBank(records).records_for_exam(exam)
    if not exam_records:
        console.print(f"[red]Exam {exam_code} has no questions[/red]")
        raise typer.Exit(1)

    sink = JsonlResultSink(results_path or settings.results_path)

    def on_complete(session: ExamSession, result: ScoreResult) -> None:
        if session.timed_out:
            console.print("\n[bold red]Time is up![/bold red] Press Enter.")
        sink.write(build_submission(exam.exam_code, candidate, session))

    session = ExamSession(
        scheme=settings.marking_scheme(), on_complete=on_complete
    )
    session.start(exam_records, exam.duration_ms)

    console.print(
        Panel(
            f"[bold]{exam.title}[/bold]\n\n"
            f"Candidate: [cyan]{candidate.name}[/cyan]\n"
            f"Questions: [cyan]{len(exam_records)}[/cyan]\n"
            f"Duration: [cyan]{exam.duration_minutes} min[/cyan]",
            title=exam.exam_code,
        )
    )

    result = asyncio.run(run_exam(session, settings.tick_interval_ms / 1000))

    if result is None:
        console.print("[yellow]Attempt abandoned, nothing saved[/yellow]")
        raise typer.Exit(0)

    print_result(result, session.timed_out)


if __name__ == "__main__":
    app()
