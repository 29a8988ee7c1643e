"""Minimums: print the per-platform minimum-spend tables."""

from rich.table import Table

from src.budget.validator import MINIMUM_BUDGETS, PLATFORM_NAMES

from .shared import console, logger


def minimums() -> None:
    """Show minimum daily and total budgets per platform and currency."""
    logger.bind(command="minimums").debug("minimums.show")
    table = Table(title="Minimum budgets")
    table.add_column("Platform", style="cyan")
    table.add_column("Currency", style="green")
    table.add_column("Daily", justify="right")
    table.add_column("Total", justify="right")
    for platform, rows in MINIMUM_BUDGETS.items():
        for code, row in rows.items():
            table.add_row(PLATFORM_NAMES[platform], code, f"{row.daily:.2f}", f"{row.total:.2f}")
    console.print(table)
