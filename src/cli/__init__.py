"""CLI commands: one module per mode (parse, draft, batch, minimums, serve)."""

from typer import Typer

from src.cli import batch_mode, draft_mode, minimums_mode, parse_mode, serve_mode

app = Typer(help="Campaign intake: form emails to ad platform campaign drafts")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(parse_mode.parse)
    app.command()(draft_mode.draft)
    app.command()(batch_mode.batch)
    app.command()(minimums_mode.minimums)
    app.command()(serve_mode.serve)


register_commands()
