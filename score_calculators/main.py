"""CLI entry point for Score Calculators."""

import csv
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import DEFAULT_SCALE, MAX_COURSE_CREDITS
from .output import (
    exam_report,
    export_exams_to_csv,
    export_gpa_to_csv,
    format_errors,
    format_exam_list,
    format_exam_table,
    format_gpa_table,
    format_json,
    format_raise_table,
    format_scale_list,
    format_semester_table,
    gpa_report,
    raise_report,
    semester_report,
)
from .scoring import (
    ExamInputs,
    ExamSession,
    GpaSession,
    RaiseInputs,
    SemesterInputs,
    SemesterRow,
    recompute_exam,
    recompute_raise,
    recompute_semesters,
)
from .tables import EXAMS, SCALES, get_exam, get_scale
from .tables.grading import GPA_CLASSIFICATIONS, GRADE_NEEDED

app = typer.Typer(
    name="score-calculators",
    help="Compute GPAs and scaled standardized-test scores from raw inputs.",
    add_completion=False,
)
console = Console()

LABEL_COLUMNS = ("label", "name", "student")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging from the scoring engines",
    ),
) -> None:
    """Compute GPAs and scaled standardized-test scores from raw inputs."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def parse_course(text: str) -> tuple[str, str, str]:
    """Split 'GRADE:CREDITS[:LEVEL]' into its raw fields; level defaults to blank."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid course '{text}'. Use GRADE:CREDITS[:LEVEL], e.g. A-:3 or A:4:ap")
    grade, credits = parts[:2]
    level = parts[2] if len(parts) == 3 else ""
    return grade, credits, level


def parse_semester(text: str) -> SemesterRow:
    """Split 'GPA:CREDITS' into one semester row."""
    if text.count(":") != 1:
        raise ValueError(f"Invalid semester '{text}'. Use GPA:CREDITS, e.g. 3.4:15")
    gpa_text, credits = text.split(":")
    return SemesterRow(gpa=gpa_text, credits=credits)


def parse_section(text: str) -> tuple[str, str]:
    """Split 'KEY=RAW' into a section key and its raw entry."""
    if "=" not in text:
        raise ValueError(f"Invalid section '{text}'. Use KEY=RAW, e.g. verbal=19")
    key, raw = text.split("=", 1)
    return key.strip().lower(), raw


def _resolve_scale(scale: str):
    try:
        return get_scale(scale)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(1)


def _resolve_exam(exam: str):
    try:
        return get_exam(exam)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(1)


@app.command()
def gpa(
    courses: Optional[list[str]] = typer.Option(
        None,
        "--course",
        "-c",
        help="Course as GRADE:CREDITS[:LEVEL], level regular, honors or ap (repeat for each course)",
    ),
    scale: str = typer.Option(
        DEFAULT_SCALE,
        "--scale",
        "-s",
        help=f"Grading scale. Available: {', '.join(SCALES)}",
    ),
    prior_gpa: str = typer.Option(
        "",
        "--prior-gpa",
        help="Cumulative GPA before these courses",
    ),
    prior_credits: str = typer.Option(
        "",
        "--prior-credits",
        help="Credits earned before these courses (whole number)",
    ),
    max_credits: float = typer.Option(
        MAX_COURSE_CREDITS,
        "--max-credits",
        help="Maximum credits for a single course",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (CSV format)",
    ),
) -> None:
    """Calculate term and cumulative GPA."""
    grading_scale = _resolve_scale(scale)
    session = GpaSession(grading_scale, classifications=GPA_CLASSIFICATIONS, max_weight=max_credits)

    for course in courses or []:
        try:
            grade, credits, level = parse_course(course)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        session.add_course(grade, credits, level)

    state = session.set_prior(prior_gpa, prior_credits)
    report = gpa_report(state, grading_scale, session.inputs.rows)

    if report["errors"]:
        console.print("[red]Invalid input:[/red]")
        format_errors(report["errors"], console)
        raise typer.Exit(1)

    if bool(prior_gpa.strip()) != bool(prior_credits.strip()):
        console.print("[dim]Cumulative GPA skipped: give both --prior-gpa and --prior-credits[/dim]")

    if state.gpa is None and state.cumulative_gpa is None:
        console.print("[red]No graded courses entered[/red]")
        raise typer.Exit(1)

    if output:
        export_gpa_to_csv([report], output)
        console.print(f"[green]Results saved to {output}[/green]")
    elif output_format == "json":
        format_json(report, console)
    else:
        format_gpa_table(report, console)


@app.command("raise-gpa")
def raise_gpa(
    current_gpa: str = typer.Argument(..., help="Current cumulative GPA"),
    current_credits: str = typer.Argument(..., help="Credits earned so far (whole number)"),
    target_gpa: str = typer.Argument(..., help="Target cumulative GPA"),
    planned_credits: str = typer.Argument(..., help="Credits planned per term"),
    scale: str = typer.Option(
        DEFAULT_SCALE,
        "--scale",
        "-s",
        help=f"Grading scale. Available: {', '.join(SCALES)}",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
) -> None:
    """Show the term GPA needed to reach a target over one to four terms."""
    grading_scale = _resolve_scale(scale)
    state = recompute_raise(RaiseInputs(
        scale=grading_scale,
        grade_bands=GRADE_NEEDED,
        current_gpa=current_gpa,
        current_credits=current_credits,
        target_gpa=target_gpa,
        planned_credits=planned_credits,
    ))
    report = raise_report(state, grading_scale)

    if report["errors"]:
        console.print("[red]Invalid input:[/red]")
        format_errors(report["errors"], console)
        raise typer.Exit(1)

    if output_format == "json":
        format_json(report, console)
    else:
        format_raise_table(report, console)


@app.command()
def cumulative(
    semesters: Optional[list[str]] = typer.Option(
        None,
        "--semester",
        "-S",
        help="Completed semester as GPA:CREDITS (repeat for each semester)",
    ),
    scale: str = typer.Option(
        DEFAULT_SCALE,
        "--scale",
        "-s",
        help=f"Grading scale. Available: {', '.join(SCALES)}",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
) -> None:
    """Calculate a cumulative GPA from per-semester GPAs and credits."""
    grading_scale = _resolve_scale(scale)

    rows = []
    for entry in semesters or []:
        try:
            rows.append(parse_semester(entry))
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    state = recompute_semesters(SemesterInputs(
        scale=grading_scale,
        semesters=tuple(rows),
        classifications=GPA_CLASSIFICATIONS,
    ))
    report = semester_report(state, grading_scale, tuple(rows))

    if report["errors"]:
        console.print("[red]Invalid input:[/red]")
        format_errors(report["errors"], console)
        raise typer.Exit(1)

    if state.cumulative is None:
        console.print("[red]No semesters with credits entered[/red]")
        raise typer.Exit(1)

    if output_format == "json":
        format_json(report, console)
    else:
        format_semester_table(report, console)


@app.command()
def exam(
    exam_key: str = typer.Argument(..., metavar="EXAM", help="Exam key (see the 'exams' command)"),
    sections: Optional[list[str]] = typer.Option(
        None,
        "--section",
        "-s",
        help="Raw section score as KEY=RAW (repeat for each section)",
    ),
    difficulty: Optional[str] = typer.Option(
        None,
        "--difficulty",
        "-d",
        help="Conversion curve for adaptive exams (auto, easy, normal, hard)",
    ),
    adjust: str = typer.Option(
        "",
        "--adjust",
        "-a",
        help="Difficulty adjustment in percent, for exams that support it",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (CSV format)",
    ),
) -> None:
    """Convert raw section scores to scaled scores for one exam."""
    definition = _resolve_exam(exam_key)
    session = ExamSession(definition)

    for entry in sections or []:
        try:
            key, raw = parse_section(entry)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        if key not in definition.section_keys:
            console.print(f"[red]Unknown section '{key}' for {definition.name}[/red]")
            console.print(f"Available sections: {', '.join(definition.section_keys)}")
            raise typer.Exit(1)
        session.set_section(key, raw)

    session.set_difficulty(difficulty)
    state = session.set_adjustment(adjust)
    report = exam_report(state, definition, dict(session.inputs.raw))

    if report["errors"]:
        console.print("[red]Invalid input:[/red]")
        format_errors(report["errors"], console)
        raise typer.Exit(1)

    if state.score is None:
        missing = [key for key in definition.section_keys if not session.inputs.raw.get(key, "").strip()]
        console.print(f"[red]Missing sections: {', '.join(missing)}[/red]")
        raise typer.Exit(1)

    if output:
        export_exams_to_csv([report], output)
        console.print(f"[green]Results saved to {output}[/green]")
    elif output_format == "json":
        format_json(report, console)
    else:
        format_exam_table(report, console)


@app.command("exam-bulk")
def exam_bulk(
    input_file: str = typer.Argument(..., help="CSV file with one column per section key"),
    exam_key: str = typer.Argument(..., metavar="EXAM", help="Exam key (see the 'exams' command)"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output CSV file path",
    ),
    difficulty: Optional[str] = typer.Option(
        None,
        "--difficulty",
        "-d",
        help="Conversion curve for adaptive exams (auto, easy, normal, hard)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show the result for each row",
    ),
) -> None:
    """Score many attempts of one exam from a CSV file."""
    definition = _resolve_exam(exam_key)

    input_path = Path(input_file)
    if not input_path.exists():
        console.print(f"[red]File not found: {input_file}[/red]")
        raise typer.Exit(1)

    rows = _read_score_rows(input_path)
    if not rows:
        console.print("[red]No rows found in file[/red]")
        raise typer.Exit(1)

    missing_columns = [key for key in definition.section_keys if key not in rows[0]]
    if missing_columns:
        console.print(f"[red]Missing columns: {', '.join(missing_columns)}[/red]")
        raise typer.Exit(1)

    console.print(f"[cyan]Scoring {len(rows)} rows for {definition.name}...[/cyan]")

    reports = []
    skipped = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Scoring...", total=len(rows))

        for number, row in enumerate(rows, 1):
            label = next((row[column] for column in LABEL_COLUMNS if row.get(column)), f"row {number}")
            raw = {key: row.get(key, "") for key in definition.section_keys}
            state = recompute_exam(ExamInputs(
                definition=definition,
                raw=raw,
                difficulty=difficulty,
                adjustment=row.get("adjust", ""),
            ))
            report = exam_report(state, definition, raw, label=label)
            progress.advance(task)

            if state.score is None:
                skipped += 1
                if verbose:
                    reason = "; ".join(report["errors"]) or "incomplete"
                    console.print(f"[yellow]Skipping {label}: {reason}[/yellow]")
                continue

            reports.append(report)
            if verbose:
                console.print(f"  [dim]{label}[/dim]: {report['composite_label']} {report['composite']}")

    console.print(f"\n[green]Scored {len(reports)} rows[/green]")
    if skipped:
        console.print(f"[yellow]Skipped {skipped} invalid or incomplete rows[/yellow]")

    if output:
        export_exams_to_csv(reports, output)
        console.print(f"[green]Results saved to {output}[/green]")
    else:
        console.print("\n[bold]Results Summary:[/bold]")
        for report in reports[:10]:
            bands = ", ".join(f"{name} {label}" for name, label in report["bands"].items())
            console.print(f"  {report['label']}: {report['composite']} ({bands})")

        if len(reports) > 10:
            console.print(f"  ... and {len(reports) - 10} more")
        console.print("\n[dim]Use --output to save full results to CSV[/dim]")


def _read_score_rows(path: Path) -> list[dict[str, str]]:
    """Read score rows from a CSV file with a header row; column names are lowercased."""
    rows = []

    with path.open("r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            normalized = {
                (key or "").strip().lower(): (value or "").strip()
                for key, value in row.items()
                if key is not None
            }
            if any(normalized.values()):
                rows.append(normalized)

    return rows


@app.command()
def exams() -> None:
    """List the available exams and their sections."""
    format_exam_list(dict(EXAMS), console)


@app.command()
def scales() -> None:
    """List the available grading scales."""
    format_scale_list(dict(SCALES), console)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"score-calculators version {__version__}")


if __name__ == "__main__":
    app()
