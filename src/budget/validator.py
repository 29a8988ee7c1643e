"""Constraint Validator: advisory minimum-spend checks and planning ranges.

Results never block a draft; they are surfaced to the operator, who decides.
Minimums are approximate platform values per currency; unknown currencies use
the USD row.
"""

from types import MappingProxyType

from pydantic import BaseModel

from src.models.budget import BudgetPeriod, BudgetSuggestion, PlatformToken, ValidationResult
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.budget.validator")

FALLBACK_CURRENCY = "USD"


class PeriodMinimum(BaseModel):
    """Minimum spend for a daily and a total (lifetime) budget."""

    model_config = {"frozen": True}

    daily: float
    total: float

    def for_period(self, period: BudgetPeriod) -> float:
        return self.daily if period is BudgetPeriod.DAILY else self.total


def _table(rows: dict[str, tuple[float, float]]) -> MappingProxyType:
    return MappingProxyType({code: PeriodMinimum(daily=d, total=t) for code, (d, t) in rows.items()})


MINIMUM_BUDGETS = MappingProxyType({
    PlatformToken.META: _table({"USD": (1, 30), "GBP": (1, 25), "EUR": (1, 27), "CAD": (1.5, 40)}),
    PlatformToken.GOOGLE: _table({"USD": (1, 30), "GBP": (1, 25), "EUR": (1, 27), "CAD": (1, 40)}),
    PlatformToken.LINKEDIN: _table({"USD": (10, 100), "GBP": (8, 80), "EUR": (9, 90), "CAD": (12, 120)}),
    PlatformToken.TIKTOK: _table({"USD": (50, 50), "GBP": (40, 40), "EUR": (45, 45), "CAD": (65, 65)}),
})

PLATFORM_NAMES = MappingProxyType({
    PlatformToken.META: "Meta",
    PlatformToken.GOOGLE: "Google Ads",
    PlatformToken.LINKEDIN: "LinkedIn",
    PlatformToken.TIKTOK: "TikTok",
})


def _number(value: float) -> str:
    """Display 10 as "10" and 333.3333 as "333.33"."""
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


def minimum_for(platform: PlatformToken, period: BudgetPeriod, currency: str) -> float:
    table = MINIMUM_BUDGETS[platform]
    row = table.get((currency or "").upper()) or table[FALLBACK_CURRENCY]
    return row.for_period(period)


def validate_budget(
    amount: float,
    period: BudgetPeriod,
    currency: str,
    platform: PlatformToken,
) -> ValidationResult:
    """Check an allocated amount against the platform's minimum for the period."""
    currency = (currency or FALLBACK_CURRENCY).upper()
    minimum = minimum_for(platform, period, currency)
    is_valid = amount >= minimum
    name = PLATFORM_NAMES[platform]
    if is_valid:
        message = f"Budget meets {name} {period.label} minimum of {currency} {_number(minimum)}"
    else:
        message = (
            f"Budget below {name} {period.label} minimum. "
            f"Required: {currency} {_number(minimum)}, Provided: {currency} {_number(amount)}"
        )
        logger.info(
            "validator.below_minimum",
            platform=platform.value,
            amount=amount,
            minimum=minimum,
            currency=currency,
        )
    return ValidationResult(
        is_valid=is_valid,
        minimum_required=minimum,
        message=message,
        platform=platform,
        currency=currency,
    )


# -----------------------------------------------------------------------------
# Planning ranges (min / suggested / high)
# -----------------------------------------------------------------------------

_GOOGLE_SUGGESTIONS = {
    "SEARCH": {
        BudgetPeriod.DAILY: {"USD": (1, 30, 150), "GBP": (1, 25, 120), "EUR": (1, 27, 135)},
        BudgetPeriod.TOTAL: {"USD": (30, 500, 3000), "GBP": (25, 400, 2400), "EUR": (27, 450, 2700)},
    },
    "DISPLAY": {
        BudgetPeriod.DAILY: {"USD": (1, 20, 100), "GBP": (1, 16, 80), "EUR": (1, 18, 90)},
        BudgetPeriod.TOTAL: {"USD": (30, 300, 2000), "GBP": (25, 240, 1600), "EUR": (27, 270, 1800)},
    },
}

_LINKEDIN_SUGGESTIONS = {
    "SPONSORED_UPDATES": {
        BudgetPeriod.DAILY: {"USD": (10, 50, 200), "GBP": (8, 40, 160), "EUR": (9, 45, 180)},
        BudgetPeriod.TOTAL: {"USD": (100, 1000, 5000), "GBP": (80, 800, 4000), "EUR": (90, 900, 4500)},
    },
    "TEXT_AD": {
        BudgetPeriod.DAILY: {"USD": (10, 25, 100), "GBP": (8, 20, 80), "EUR": (9, 22, 90)},
        BudgetPeriod.TOTAL: {"USD": (100, 500, 2000), "GBP": (80, 400, 1600), "EUR": (90, 450, 1800)},
    },
    "SPONSORED_INMAILS": {
        BudgetPeriod.DAILY: {"USD": (10, 75, 300), "GBP": (8, 60, 240), "EUR": (9, 67, 270)},
        BudgetPeriod.TOTAL: {"USD": (100, 1500, 7500), "GBP": (80, 1200, 6000), "EUR": (90, 1350, 6750)},
    },
    "DYNAMIC": {
        BudgetPeriod.DAILY: {"USD": (10, 40, 150), "GBP": (8, 32, 120), "EUR": (9, 36, 135)},
        BudgetPeriod.TOTAL: {"USD": (100, 800, 3000), "GBP": (80, 640, 2400), "EUR": (90, 720, 2700)},
    },
}

BUDGET_SUGGESTIONS = MappingProxyType({
    PlatformToken.GOOGLE: (_GOOGLE_SUGGESTIONS, "SEARCH"),
    PlatformToken.LINKEDIN: (_LINKEDIN_SUGGESTIONS, "SPONSORED_UPDATES"),
})


def budget_suggestions(
    platform: PlatformToken,
    campaign_type: str,
    period: BudgetPeriod,
    currency: str = FALLBACK_CURRENCY,
) -> BudgetSuggestion | None:
    """Planning range for a Google or LinkedIn campaign type; None for other platforms."""
    if platform not in BUDGET_SUGGESTIONS:
        return None
    table, default_type = BUDGET_SUGGESTIONS[platform]
    by_currency = table.get(campaign_type, table[default_type])[period]
    code = (currency or FALLBACK_CURRENCY).upper()
    if code not in by_currency:
        code = FALLBACK_CURRENCY
    minimum, suggested, high = by_currency[code]
    return BudgetSuggestion(
        minimum=minimum,
        suggested=suggested,
        high=high,
        currency=code,
        message=(
            f"{PLATFORM_NAMES[platform]} {campaign_type} {period.label} budget: "
            f"minimum {code} {_number(minimum)}, suggested {code} {_number(suggested)}, "
            f"high {code} {_number(high)}"
        ),
    )
