#!/usr/bin/env python
"""
Score a CSV of candidate answer sheets against one exam.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from exam_service.core.data import (
    load_csv_to_answer_sheets,
    load_csv_to_question_records,
)
from exam_service.core.paths import get_project_version
from exam_service.exams import (
    ExamNotFoundError,
    QuestionBank,
    get_exam,
    load_exam_catalog,
)
from exam_service.hierarchy import audit_hierarchy
from exam_service.scoring import score_answer_matrix
from exam_service.settings import get_settings

BACKEND_DIR = Path(__file__).parent.parent.absolute()
DEFAULT_DATA_DIR = BACKEND_DIR / "data" / "sample"

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


@app.command()
def main(
    exam_code: str = typer.Argument(..., help="Code of the exam"),
    answers_path: Path = typer.Argument(
        ...,
        help="CSV of answer sheets (columns: candidate_id, answer_string)",
    ),
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
    output_path: Path | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Write per-candidate scores to this JSON file",
    ),
) -> None:
    """Score answer sheets with negative marking."""
    if not answers_path.exists():
        console.print(f"[red]File not found: {answers_path}[/red]")
        raise typer.Exit(1)

    console.print("[dim]Loading data...[/dim]")
    try:
        records = load_csv_to_question_records(questions_path)
        exam = get_exam(load_exam_catalog(exams_dir), exam_code)
        candidate_ids, responses = load_csv_to_answer_sheets(answers_path)
    except ExamNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading data: {e}[/red]")
        raise typer.Exit(1) from e

    exam_records = QuestionBank(records).records_for_exam(exam)

    for issue in audit_hierarchy(exam_records):
        console.print(
            f"[yellow]Question {issue.index + 1} ({issue.record_id}): "
            f"{issue.message}[/yellow]"
        )

    try:
        scores = score_answer_matrix(
            exam_records, responses, get_settings().marking_scheme()
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        Panel(
            f"[bold]{exam.title}[/bold]\n\n"
            f"Questions: [cyan]{len(exam_records)}[/cyan]\n"
            f"Candidates: [cyan]{scores.n_candidates}[/cyan]\n"
            f"Version: [cyan]{get_project_version()}[/cyan]",
            title=exam.exam_code,
        )
    )

    table = Table(title="Scores")
    table.add_column("Candidate")
    table.add_column("Score", justify="right")
    table.add_column("Correct", justify="right")
    table.add_column("Wrong", justify="right")
    table.add_column("Skipped", justify="right")
    rows = []
    for ix, candidate_id in enumerate(candidate_ids):
        row = {
            "candidate_id": candidate_id,
            "score": float(scores.scores[ix]),
            "answered": int(scores.answered[ix]),
            "correct": int(scores.correct[ix]),
            "wrong": int(scores.wrong[ix]),
            "skipped": int(scores.skipped[ix]),
        }
        rows.append(row)
        table.add_row(
            candidate_id,
            f"{row['score']:.2f}",
            str(row["correct"]),
            str(row["wrong"]),
            str(row["skipped"]),
        )
    console.print(table)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump({"exam_code": exam.exam_code, "scores": rows}, f, indent=4)
        console.print(f"Saved scores to [cyan]{output_path}[/cyan]")


if __name__ == "__main__":
    app()
