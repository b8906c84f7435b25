"""Console script for lab_autograder."""

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config.loader import ConfigLoader
from .config.models import ConfigError
from .main import GradingPipeline
from .output.report import format_console_line, format_marks
from .rubrics.loader import RubricError, RubricLoader
from .utils.logging import setup_logging

app = typer.Typer(help="Grade HTML/CSS lab submissions against a rubric.")
console = Console()


def _load_config(config_path: Optional[Path]):
    if config_path is not None:
        config_path = config_path.expanduser().resolve()
    try:
        return ConfigLoader().load_lab(config_path)
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def grade(
    submission_dir: Path = typer.Argument(
        Path("."), help="Submission directory to grade", file_okay=False
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Lab config YAML (default: packaged lab)"
    ),
    artifacts_dir: Optional[Path] = typer.Option(
        None, "--artifacts-dir", "-o", help="Output directory for grade.csv and feedback"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write log records to this file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Grade a submission and write grade.csv plus the feedback document."""
    load_dotenv()
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING, log_file=log_file)

    config = _load_config(config_path)
    submission_dir = submission_dir.expanduser().resolve()
    if not submission_dir.is_dir():
        console.print(f"[red]Error:[/red] Directory not found: {submission_dir}")
        raise typer.Exit(code=1)

    try:
        pipeline = GradingPipeline(config)
    except (FileNotFoundError, RubricError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    report = pipeline.run(submission_dir, artifacts_dir=artifacts_dir)

    table = Table(title=f"{report.lab_name} marks")
    table.add_column("Component")
    table.add_column("Marks", justify="right")
    for result in report.results:
        table.add_row(result.name, f"{format_marks(result.score)}/{format_marks(result.max_marks)}")
    table.add_row(
        "Submission (timing)",
        f"{format_marks(report.timing.score)}/{format_marks(report.timing.max_score)}",
    )
    console.print(table)
    console.print(format_console_line(report), markup=False)


@app.command()
def rubric(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Lab config YAML (default: packaged lab)"
    ),
):
    """Show the rubric items and their marks."""
    config = _load_config(config_path)
    try:
        loaded = RubricLoader().load(config.rubric_file)
    except (FileNotFoundError, RubricError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=loaded.name or config.rubric_file)
    table.add_column("Item")
    table.add_column("Checks", justify="right")
    table.add_column("Marks", justify="right")
    for item in loaded.items:
        table.add_row(item.name, str(len(item.checks)), format_marks(item.marks))
    table.add_row("Total", "", format_marks(loaded.total_marks))
    console.print(table)


if __name__ == "__main__":
    app()
