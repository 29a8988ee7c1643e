"""Shared CLI helpers: console, logger, input loading, output paths, result formatting."""

import csv
import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.budget.currency import format_currency_amount
from src.config import OUTPUT_DIR
from src.intake.form_parser import parse_form_submission
from src.intake.payload import parse_inbound_email
from src.models.drafts import DraftBundle
from src.models.email import InboundEmail, ParsedEmail
from src.models.submission import StructuredSubmission
from src.utils.logger import get_logger

console = Console()
logger = get_logger("campaign_intake.cli")


def ensure_output_dirs() -> None:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    logger.debug("filesystem.ensure_output_dirs", output_dir=str(OUTPUT_DIR))


def write_json_result(result: dict | list, path: Path | None = None) -> Path:
    ensure_output_dirs()
    path = path or OUTPUT_DIR / "responses.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, default=str)
    logger.info("results.write_json", path=str(path))
    return path


def append_csv_log_row(row: dict, path: Path | None = None) -> Path:
    ensure_output_dirs()
    path = path or OUTPUT_DIR / "processing_log.csv"
    file_exists = path.exists()
    with path.open("a", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        if not file_exists:
            writer.writeheader()
        writer.writerow(row)
    logger.debug("results.append_csv_row", path=str(path), headers=not file_exists)
    return path


def load_inbox(path: Path) -> list[InboundEmail]:
    """Forwarded-email payloads from a JSON list (or ``{"emails": [...]}``)."""
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    items = raw.get("emails", []) if isinstance(raw, dict) else raw
    return [InboundEmail.model_validate(item) for item in items]


def load_submission(path: Path) -> StructuredSubmission:
    """A ``.json`` file is one forwarded-email payload; anything else is a raw email body."""
    if path.suffix.lower() == ".json":
        with path.open(encoding="utf-8") as f:
            payload = InboundEmail.model_validate(json.load(f))
        return parse_inbound_email(payload).submission
    return parse_form_submission(path.read_text(encoding="utf-8"))


def print_submission(submission: StructuredSubmission) -> None:
    table = Table(title="Form submission")
    table.add_column("#", style="cyan")
    table.add_column("Question", style="green")
    table.add_column("Answer", style="white")
    for i, pair in enumerate(submission.form_data, 1):
        table.add_row(str(i), pair.question, pair.answer)
    console.print(table)


def print_bundle(bundle: DraftBundle) -> None:
    """Print budget, allocation and feedback for every drafted platform."""
    budget = bundle.budget
    console.print(
        f"\n[bold]Budget[/bold]: {format_currency_amount(budget.total_amount, budget.currency, show_code=True)} "
        f"({budget.period.label}), "
        f"{bundle.detection.group_count} platform group(s)"
    )
    if not bundle.drafts:
        console.print("[yellow]No platforms requested or selected.[/yellow]")
    for platform, result in bundle.drafts.items():
        console.print(f"\n[bold]{platform}[/bold]")
        console.print(f"  {result.summary}")
        if result.populated_fields:
            console.print(f"  Populated: {', '.join(result.populated_fields)}")
        if result.overridden_fields:
            console.print(f"  Overridden: {', '.join(result.overridden_fields)}")
        if result.suggestion is not None:
            console.print(f"  [dim]{result.suggestion.message}[/dim]")
        for warning in result.warnings:
            console.print(f"  [yellow]! {warning}[/yellow]")


def processing_log_row(index: int, parsed: ParsedEmail, bundle: DraftBundle | None, error: str = "") -> dict:
    """Build a single row for processing_log.csv."""
    drafts = bundle.drafts if bundle else {}
    return {
        "index": str(index),
        "uuid_fragment": parsed.uuid_fragment or "",
        "subject": parsed.subject,
        "questions": str(len(parsed.submission.form_data)),
        "platforms": ";".join(drafts),
        "total_budget": f"{bundle.budget.total_amount:.2f}" if bundle else "",
        "currency": bundle.budget.currency if bundle else "",
        "warnings": str(sum(len(r.warnings) for r in drafts.values())),
        "error": error,
    }
