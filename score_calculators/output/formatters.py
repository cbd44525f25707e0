"""Output formatters for calculator reports."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .. import config
from ..scoring.models import GradingScale
from ..scoring.piecewise import ExamDefinition

BAND_COLORS = {
    "Excellent Standing": "green",
    "Good Standing": "green",
    "Academic Probation": "yellow",
    "Dismissal Risk": "red",
}


def format_gpa_table(report: dict, console: Console) -> None:
    """Format and print a GPA report as a rich table."""
    header = Text()
    header.append(f"GPA ({report['scale']})\n", style="bold cyan")
    header.append(f"Term GPA: {_number(report['gpa'])}  |  Credits: {_number(report['total_credits'], 1)}")
    if report["cumulative_gpa"] is not None:
        header.append(
            f"\nCumulative GPA: {_number(report['cumulative_gpa'])}  |  "
            f"Credits: {_number(report['cumulative_credits'], 1)}"
        )

    console.print(Panel(header, title="[bold]GPA Results[/bold]", border_style="cyan"))
    console.print()

    if report["courses"]:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", width=4)
        table.add_column("Grade", style="cyan", width=8)
        table.add_column("Credits", justify="right", width=8)
        table.add_column("Level", width=10)

        for index, course in enumerate(report["courses"], 1):
            table.add_row(
                str(index),
                course["grade"] or "[dim]-[/dim]",
                course["credits"] or "[dim]-[/dim]",
                course["level"],
            )

        console.print(table)
        console.print()

    _print_bands(report["bands"], console)


def format_raise_table(report: dict, console: Console) -> None:
    """Format and print raise-GPA scenarios."""
    header = Text()
    header.append(f"Raise GPA ({report['scale']})\n", style="bold cyan")
    header.append(
        f"Current: {_number(report['current_gpa'])} over {_number(report['current_credits'], 0)} credits  |  "
        f"Target: {_number(report['target_gpa'])}"
    )
    console.print(Panel(header, title="[bold]GPA Planner[/bold]", border_style="cyan"))
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Terms", justify="right", width=6)
    table.add_column("Credits", justify="right", width=8)
    table.add_column("Required GPA", justify="right", width=13)
    table.add_column("Grade Needed", width=28)

    for scenario in report["scenarios"]:
        color = "green" if scenario["achievable"] else "red"
        table.add_row(
            str(scenario["periods"]),
            _number(scenario["additional_credits"], 1),
            f"[{color}]{_number(scenario['required_gpa'])}[/{color}]",
            str(scenario["grade_needed"]),
        )

    console.print(table)
    console.print()


def format_semester_table(report: dict, console: Console) -> None:
    """Format and print a cumulative GPA built from semester entries."""
    header = Text()
    header.append(f"Cumulative GPA ({report['scale']})\n", style="bold cyan")
    header.append(
        f"Cumulative GPA: {_number(report['cumulative_gpa'])}  |  "
        f"Credits: {_number(report['total_credits'], 0)}"
    )
    console.print(Panel(header, title="[bold]GPA Results[/bold]", border_style="cyan"))
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Semester", justify="right", width=9)
    table.add_column("GPA", justify="right", width=8)
    table.add_column("Credits", justify="right", width=8)

    for index, semester in enumerate(report["semesters"], 1):
        table.add_row(str(index), semester["gpa"] or "[dim]-[/dim]", semester["credits"] or "[dim]-[/dim]")

    console.print(table)
    console.print()

    _print_bands(report["bands"], console)


def format_exam_table(report: dict, console: Console) -> None:
    """Format and print an exam report as a rich table."""
    header = Text()
    header.append(f"{report['name']}\n", style="bold cyan")
    header.append(f"{report['composite_label']}: {report['composite']}")
    if report["difficulty"]:
        header.append(f"  |  Difficulty: {report['difficulty']}")
    if report["adjustment_pct"]:
        header.append(f"  |  Adjustment: {report['adjustment_pct']:+g}%")

    console.print(Panel(header, title="[bold]Score Results[/bold]", border_style="cyan"))
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Section", style="cyan", width=40)
    table.add_column("Raw", justify="right", width=8)
    table.add_column("Range", justify="right", width=8)
    table.add_column("Scaled", justify="right", width=8)
    table.add_column("Percentile", justify="right", width=10)

    for section in report["sections"]:
        percentile = section["percentile"]
        table.add_row(
            section["name"],
            str(section["raw"]),
            section["range"],
            str(section["scaled"]),
            "[dim]-[/dim]" if percentile is None else _ordinal(percentile),
        )

    console.print(table)
    console.print()

    _print_bands(report["bands"], console)


def format_exam_list(exams: dict[str, ExamDefinition], console: Console) -> None:
    """Print every configured exam with its sections."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Exam")
    table.add_column("Sections")
    table.add_column("Options", style="dim")

    for key, exam in exams.items():
        sections = "\n".join(
            f"{section.key} ({section.minimum}-{section.domain_max})" for section in exam.sections
        )
        options = []
        if exam.difficulty_choices:
            options.append("difficulty: " + ", ".join(exam.difficulty_choices))
        if exam.supports_adjustment:
            options.append(f"adjust: {config.DIFFICULTY_ADJUST_MIN:g}..{config.DIFFICULTY_ADJUST_MAX:g}%")
        table.add_row(key, exam.name, sections, "\n".join(options))

    console.print(table)


def format_scale_list(scales: dict[str, GradingScale], console: Console) -> None:
    """Print every grading scale with its point values."""
    for key, scale in scales.items():
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Grade", style="cyan")
        table.add_column("Points", justify="right")

        for token in scale.tokens:
            if scale.is_graded(token):
                table.add_row(token, f"{scale.points[token]:.1f}")
            else:
                table.add_row(token, "[dim]not counted[/dim]")
        for level, bonus in scale.level_bonus.items():
            table.add_row(f"[dim]{level}[/dim]", f"[dim]+{bonus:g}[/dim]")

        title = f"[bold]{scale.name}[/bold] [dim]({key})[/dim]"
        console.print(Panel(table, title=title, subtitle=scale.description or None, border_style="dim"))


def format_errors(messages: list[str], console: Console) -> None:
    """Print validation messages, one per line."""
    for message in messages:
        console.print(f"[red]- {message}[/red]")


def format_json(report: dict, console: Console) -> None:
    """Format and print a report as JSON."""
    console.print_json(json.dumps(report, indent=2, default=str))


def _print_bands(bands: dict, console: Console) -> None:
    if not bands:
        return

    band_table = Table(show_header=False, box=None, padding=(0, 2))
    band_table.add_column("Key", style="dim")
    band_table.add_column("Value")

    for name, label in bands.items():
        color = BAND_COLORS.get(label, "white")
        value = _ordinal(label) if "percentile" in name.lower() else str(label)
        band_table.add_row(name, f"[{color}]{value}[/{color}]")

    console.print(Panel(band_table, title="[bold]Classification[/bold]", border_style="dim"))
    console.print()


def _number(value: float | None, digits: int = config.DISPLAY_DIGITS) -> str:
    """Round for display only; engines keep full precision."""
    if value is None:
        return "[dim]N/A[/dim]"
    return f"{value:.{digits}f}"


def _ordinal(value) -> str:
    """Render a percentile label: 84 -> 84th, strings pass through."""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and not value.is_integer():
        return f"{value:g}th"

    number = int(value)
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"
