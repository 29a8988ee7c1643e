"""Draft mode: build campaign drafts for one submission."""

from pathlib import Path
from typing import Optional

import typer

from src.drafts import build_drafts
from src.models.budget import PlatformToken
from src.models.drafts import DraftRequest
from src.utils.logger import submission_context

from .shared import console, load_submission, logger, print_bundle, write_json_result


def draft(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Email body (.html/.txt) or payload (.json)"),
    platform: Optional[list[PlatformToken]] = typer.Option(
        None,
        "--platform",
        "-p",
        help="Platform to draft (repeatable). Defaults to the platforms the form requests.",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the draft bundle as JSON"),
) -> None:
    """Build per-platform campaign drafts, with budget split and warnings."""
    log = logger.bind(command="draft", file=str(file))
    with submission_context(command="draft"):
        submission = load_submission(file)
        if not submission.form_data:
            console.print("[red]No questions found in the email.[/red]")
            log.warning("draft.empty_submission")
            raise typer.Exit(1)
        request = DraftRequest(selection=list(platform) if platform else None)
        try:
            bundle = build_drafts(submission, request)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            log.warning("draft.failed", error=str(e))
            raise typer.Exit(1) from e
        print_bundle(bundle)
        if output is not None:
            path = write_json_result(bundle.model_dump(mode="json"), path=output)
            console.print(f"[green]Wrote {path}[/green]")
        log.info("draft.complete", platforms=list(bundle.drafts))
