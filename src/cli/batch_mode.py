"""Batch mode: parse every forwarded email in the inbox and draft its campaigns."""

from pathlib import Path

import typer

from src.config import INBOX_PATH, OUTPUT_DIR
from src.drafts import build_drafts
from src.intake.payload import parse_inbound_email
from src.utils.logger import submission_context

from .shared import (
    append_csv_log_row,
    console,
    load_inbox,
    logger,
    processing_log_row,
    write_json_result,
)


def batch(
    inbox: Path = typer.Option(INBOX_PATH, "--inbox", "-i", help="Path to inbox.json"),
    output_dir: Path = typer.Option(OUTPUT_DIR, "--output", "-o", help="Output directory"),
) -> None:
    """Process all forwarded emails in the inbox: parse, allocate and draft each one."""
    log = logger.bind(command="batch", inbox=str(inbox), output_dir=str(output_dir))
    log.info("batch.start")
    if not inbox.exists():
        console.print(f"[red]Inbox not found: {inbox}[/red]")
        log.warning("batch.inbox_missing")
        raise typer.Exit(1)
    emails = load_inbox(inbox)
    if not emails:
        console.print("[red]No emails in inbox.[/red]")
        log.info("batch.no_emails")
        raise typer.Exit(1)

    output_dir.mkdir(parents=True, exist_ok=True)
    log_path = output_dir / "processing_log.csv"
    if log_path.exists():
        log_path.unlink()
        log.debug("batch.reset_processing_log", path=str(log_path))

    results = []
    for i, payload in enumerate(emails, 1):
        console.print(f"[dim]Processing {i}/{len(emails)}...[/dim]")
        parsed = parse_inbound_email(payload)
        with submission_context(command="batch", uuid_fragment=parsed.uuid_fragment):
            try:
                bundle = build_drafts(parsed.submission)
            except Exception as e:
                console.print(f"[red]Error in email {i}: {e}[/red]")
                log.exception("batch.email_error", index=i)
                append_csv_log_row(processing_log_row(i, parsed, None, error=str(e)), path=log_path)
                continue
            results.append({
                "to": parsed.to,
                "uuid_fragment": parsed.uuid_fragment,
                "subject": parsed.subject,
                "submission": parsed.submission.model_dump(by_alias=True),
                "drafts": bundle.model_dump(mode="json"),
            })
            append_csv_log_row(processing_log_row(i, parsed, bundle), path=log_path)
            log.debug("batch.processed_email", index=i, platforms=list(bundle.drafts))

    if not results:
        console.print("[red]No results to write.[/red]")
        log.warning("batch.no_results")
        raise typer.Exit(1)
    json_path = write_json_result(results, path=output_dir / "responses.json")
    console.print(f"[green]Wrote {json_path}[/green]")
    console.print(f"[green]Wrote {log_path}[/green]")
    console.print(f"\n[bold]Processed {len(results)} of {len(emails)} emails.[/bold]")
    log.info("batch.complete", processed=len(results), total=len(emails))
