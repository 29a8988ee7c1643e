"""Budget Allocator: split one submitted budget evenly across the requested platform groups.

The split is flat: every detected group gets ``total / group_count`` whatever
order the platforms were listed in. A platform that the form does not mention
gets nothing, even when a total budget exists. Per-group amounts are not
reconciled, so native-unit rounding drift on the last group is accepted.
"""

import math
from collections.abc import Sequence
from datetime import date, datetime
from typing import Optional

from src.budget.currency import detect_currency, format_currency_amount
from src.extraction.fields import find_answer, parse_amount
from src.extraction.terms import BUDGET_PERIOD_TERMS, budget_terms_for
from src.models.budget import (
    AllocatedBudget,
    BudgetPeriod,
    BudgetSpec,
    PlatformDetection,
    PlatformToken,
    ValidationResult,
)
from src.models.submission import QAPair
from src.platforms.classifier import detect_platforms
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.budget.allocator")

_DAILY_MARKERS = ("daily", "per day", "day")


def extract_total_budget(form_data: Sequence[QAPair], platform: Optional[PlatformToken] = None) -> float:
    """Total budget from the most specific budget question present, or 0.0."""
    key = platform.value if platform else None
    return parse_amount(find_answer(form_data, budget_terms_for(key)))


def detect_budget_period(form_data: Sequence[QAPair]) -> BudgetPeriod:
    """DAILY when the period answer mentions days; TOTAL (lifetime) otherwise."""
    answer = find_answer(form_data, BUDGET_PERIOD_TERMS).lower()
    if any(marker in answer for marker in _DAILY_MARKERS):
        return BudgetPeriod.DAILY
    return BudgetPeriod.TOTAL


def extract_budget_spec(form_data: Sequence[QAPair]) -> BudgetSpec:
    """Budget, currency and period shared by every platform allocation."""
    spec = BudgetSpec(
        total_amount=extract_total_budget(form_data),
        currency=detect_currency(form_data),
        period=detect_budget_period(form_data),
    )
    logger.debug(
        "allocator.budget_spec",
        total=spec.total_amount,
        currency=spec.currency,
        period=spec.period.value,
    )
    return spec


# -----------------------------------------------------------------------------
# Native units
# -----------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_cents(amount: float) -> int:
    """Minor units (Meta ``lifetime_budget`` / ``daily_budget``)."""
    return _round_half_up(amount * 100)


def to_micros(amount: float) -> int:
    """Google Ads ``amount_micros``."""
    return _round_half_up(amount * 1_000_000)


def to_decimal_string(amount: float) -> str:
    """Fixed two-decimal string (LinkedIn, TikTok)."""
    return f"{amount:.2f}"


PLATFORM_LABELS = {
    PlatformToken.META: "Meta",
    PlatformToken.GOOGLE: "Google",
    PlatformToken.LINKEDIN: "LinkedIn",
    PlatformToken.TIKTOK: "TikTok",
}

NATIVE_CONVERTERS = {
    PlatformToken.META: to_cents,
    PlatformToken.GOOGLE: to_micros,
    PlatformToken.LINKEDIN: to_decimal_string,
    PlatformToken.TIKTOK: to_decimal_string,
}


# -----------------------------------------------------------------------------
# Allocation
# -----------------------------------------------------------------------------


def allocated_amount(total: float, platform: PlatformToken, detection: PlatformDetection) -> float:
    if total <= 0 or not detection.is_requested(platform):
        return 0.0
    if detection.group_count == 0:
        return total
    return total / detection.group_count


def allocate(
    form_data: Sequence[QAPair],
    platform: PlatformToken,
    detection: Optional[PlatformDetection] = None,
    spec: Optional[BudgetSpec] = None,
) -> AllocatedBudget:
    """One platform's share of the submitted budget."""
    detection = detection or detect_platforms(form_data)
    spec = spec or extract_budget_spec(form_data)
    amount = allocated_amount(spec.total_amount, platform, detection)
    allocation = AllocatedBudget(
        platform=platform,
        amount=amount,
        amount_native=NATIVE_CONVERTERS[platform](amount),
        currency=spec.currency,
        period=spec.period,
        group_count=detection.group_count,
        is_requested=detection.is_requested(platform),
    )
    logger.info(
        "allocator.allocated",
        platform=platform.value,
        total=spec.total_amount,
        groups=detection.group_count,
        amount=amount,
        native=allocation.amount_native,
    )
    return allocation


def allocate_all(
    form_data: Sequence[QAPair],
    detection: Optional[PlatformDetection] = None,
    spec: Optional[BudgetSpec] = None,
) -> dict[PlatformToken, AllocatedBudget]:
    """Allocations for every known platform, requested or not."""
    detection = detection or detect_platforms(form_data)
    spec = spec or extract_budget_spec(form_data)
    return {p: allocate(form_data, p, detection=detection, spec=spec) for p in PlatformToken}


# -----------------------------------------------------------------------------
# Google daily amount
# -----------------------------------------------------------------------------


def _as_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def daily_budget_for_period(
    period: BudgetPeriod,
    amount: float,
    start: str | date | None = None,
    end: str | date | None = None,
) -> float:
    """Daily spend for a campaign budget; a total is spread over the flight's days.

    Raises ValueError when a total budget has no valid start/end range.
    """
    if period is BudgetPeriod.DAILY:
        return amount
    if not start or not end:
        raise ValueError("start and end dates are required to spread a total budget")
    days = (_as_date(end) - _as_date(start)).days
    if days <= 0:
        raise ValueError(f"end date must be after start date (start={start}, end={end})")
    return round(amount / math.ceil(days), 2)


def allocation_summary(
    platform: PlatformToken,
    spec: BudgetSpec,
    allocation: AllocatedBudget,
    validation: Optional[ValidationResult] = None,
) -> str:
    """Human-readable breakdown of how the platform's share was reached."""
    label = PLATFORM_LABELS[platform]
    if spec.total_amount <= 0:
        return "No budget information found in form data"
    total = f"Total budget: {format_currency_amount(spec.total_amount, spec.currency)} ({spec.period.label})"
    if not allocation.is_requested:
        return f"{total} - {label} not mentioned in form data"
    if allocation.group_count == 0:
        return f"{total} - No platforms detected, using full budget for {label}"
    summary = (
        f"{total} → {allocation.group_count} platform groups → "
        f"{format_currency_amount(allocation.amount, spec.currency)} allocated to {label}"
    )
    if validation is not None and not validation.is_valid:
        summary += f" ({validation.message})"
    return summary
