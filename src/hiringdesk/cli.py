"""Typer CLI entrypoint for the review pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .logging import configure_logging
from .pipeline import PoolLoadError
from .schemas.config import load_config

app = typer.Typer(help="Candidate review CLI.")


@app.command()
def run(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applicant JSON array path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Report JSON path.",
    ),
    csv_output: Optional[Path] = typer.Option(None, "--csv", dir_okay=False, help="Also export the visible candidates as CSV."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
    log_json: bool = typer.Option(True, "--log-json/--log-console", help="Render log events as JSON or as console lines."),
    search: Optional[str] = typer.Option(None, help="Case-insensitive name search."),
    location: Optional[list[str]] = typer.Option(None, help="Restrict to these locations (repeatable)."),
    min_experience: int = typer.Option(0, min=0, help="Minimum number of roles held."),
    max_salary: Optional[int] = typer.Option(None, min=0, help="Maximum full-time salary expectation."),
    top: int = typer.Option(10, min=1, help="Number of top candidates in the report."),
) -> None:
    """Score a candidate file and write a hiring report."""
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        try:
            settings = load_config(loaded).to_settings()
        except ValidationError as exc:
            raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc

    configure_logging(log_level, json_output=log_json)

    filters: dict[str, Any] = {"min_experience": min_experience}
    if search:
        filters["search"] = search
    if location:
        filters["locations"] = location
    if max_salary is not None:
        filters["max_salary"] = max_salary

    container = create_container(settings=settings)
    pipeline = container.pipeline()

    try:
        payload = pipeline.run(
            source_path=candidates,
            output_path=output,
            csv_path=csv_output,
            filters=filters,
            top=top,
        )
    except PoolLoadError as exc:
        typer.echo(f"Failed to load candidates: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    summary = payload["summary"]
    typer.echo(
        f"Scored {summary['total_candidates']} candidates "
        f"({summary['visible_candidates']} match filters). Report saved to {output}."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
