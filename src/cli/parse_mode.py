"""Parse mode: show the question/answer pairs extracted from one email."""

import json
from pathlib import Path

import typer

from .shared import console, load_submission, logger, print_submission


def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Email body (.html/.txt) or payload (.json)"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the submission as JSON"),
) -> None:
    """Parse a form email into ordered question/answer pairs."""
    log = logger.bind(command="parse", file=str(file))
    submission = load_submission(file)
    log.info("parse.complete", questions=len(submission.form_data))
    if as_json:
        typer.echo(json.dumps(submission.model_dump(by_alias=True), indent=2))
        return
    if not submission.form_data:
        console.print("[red]No questions found in the email.[/red]")
        raise typer.Exit(1)
    print_submission(submission)
