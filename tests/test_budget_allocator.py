"""Tests for budget extraction, the flat group split and native encodings."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.budget.allocator import (
    allocate,
    allocate_all,
    allocation_summary,
    daily_budget_for_period,
    detect_budget_period,
    extract_budget_spec,
    to_cents,
    to_decimal_string,
    to_micros,
)
from src.budget.currency import detect_currency, format_currency_amount, normalize_currency
from src.models.budget import BudgetPeriod, PlatformToken
from src.models.submission import QAPair


def _form(*pairs: tuple[str, str]) -> tuple[QAPair, ...]:
    return tuple(QAPair(question=q, answer=a) for q, a in pairs)


THREE_GROUPS = _form(
    ("Channels", "Facebook, Instagram, LinkedIn, Google Search"),
    ("Total Budget", "£900"),
)


def test_single_platform_gets_whole_budget_in_cents():
    form = _form(("Preferred Channels", "Facebook, Instagram"), ("Total Budget", "$1,000"))
    allocation = allocate(form, PlatformToken.META)
    assert allocation.amount == 1000.0
    assert allocation.amount_native == 100000
    assert allocation.currency == "USD"
    assert allocation.period is BudgetPeriod.TOTAL
    assert allocation.group_count == 1


def test_even_split_across_groups_in_native_units():
    allocations = allocate_all(THREE_GROUPS)
    assert allocations[PlatformToken.META].amount_native == 30000
    assert allocations[PlatformToken.GOOGLE].amount_native == 300_000_000
    assert allocations[PlatformToken.LINKEDIN].amount_native == "300.00"
    assert all(a.currency == "GBP" for a in allocations.values())


def test_platform_not_mentioned_gets_nothing():
    allocation = allocate(THREE_GROUPS, PlatformToken.TIKTOK)
    assert allocation.amount == 0.0
    assert allocation.amount_native == "0.00"
    assert allocation.is_requested is False


def test_requested_allocations_sum_to_total():
    form = _form(("Channels", "Facebook, LinkedIn, TikTok"), ("Budget", "1000"))
    requested = [a.amount for a in allocate_all(form).values() if a.is_requested]
    assert len(requested) == 3
    assert sum(requested) == pytest.approx(1000.0)


def test_no_budget_allocates_zero():
    allocation = allocate(_form(("Channels", "LinkedIn")), PlatformToken.LINKEDIN)
    assert allocation.amount == 0.0
    assert allocation.amount_native == "0.00"
    assert allocation.is_requested is True


def test_budget_period_detection():
    assert detect_budget_period(_form(("Budget Type", "Daily"))) is BudgetPeriod.DAILY
    assert detect_budget_period(_form(("Budget Period", "Lifetime"))) is BudgetPeriod.TOTAL
    assert detect_budget_period(()) is BudgetPeriod.TOTAL


def test_currency_detection():
    assert detect_currency(_form(("Budget", "£250"))) == "GBP"
    assert detect_currency(_form(("Budget", "C$400"))) == "CAD"
    assert detect_currency(_form(("Budget", "500"), ("Currency", "Euro"))) == "EUR"
    assert detect_currency(_form(("Budget", "500"))) == "USD"
    assert detect_currency(_form(("Budget", "5000"), ("Currency", "JPY"))) == "USD"
    # a region name is not a currency
    assert detect_currency(_form(("Budget", "500"), ("Target Geography", "Europe"))) == "USD"


def test_budget_spec_combines_amount_currency_period():
    spec = extract_budget_spec(_form(("Budget Amount", "€300"), ("Budget Type", "per day")))
    assert (spec.total_amount, spec.currency, spec.period) == (300.0, "EUR", BudgetPeriod.DAILY)


def test_native_unit_conversions():
    assert to_cents(19.99) == 1999
    assert to_cents(0.125) == 13
    assert to_micros(12.5) == 12_500_000
    assert to_decimal_string(333.3333) == "333.33"


def test_daily_budget_for_period():
    assert daily_budget_for_period(BudgetPeriod.TOTAL, 300, "2026-03-01", "2026-03-31") == 10.0
    assert daily_budget_for_period(BudgetPeriod.DAILY, 25, None, None) == 25


@pytest.mark.parametrize(
    "start,end",
    [(None, "2026-03-31"), ("2026-03-01", ""), ("2026-03-31", "2026-03-01"), ("2026-03-01", "2026-03-01")],
)
def test_daily_budget_for_period_rejects_bad_range(start, end):
    with pytest.raises(ValueError):
        daily_budget_for_period(BudgetPeriod.TOTAL, 300, start, end)


def test_allocation_summary():
    spec = extract_budget_spec(THREE_GROUPS)
    linkedin = allocate(THREE_GROUPS, PlatformToken.LINKEDIN, spec=spec)
    tiktok = allocate(THREE_GROUPS, PlatformToken.TIKTOK, spec=spec)
    assert allocation_summary(PlatformToken.LINKEDIN, spec, linkedin).endswith(
        "3 platform groups → £300.00 allocated to LinkedIn"
    )
    assert allocation_summary(PlatformToken.TIKTOK, spec, tiktok) == (
        "Total budget: £900.00 (total) - TikTok not mentioned in form data"
    )


def test_currency_helpers():
    assert format_currency_amount(12.5, "GBP") == "£12.50"
    assert format_currency_amount(12.5, "USD", show_code=True) == "$12.50 USD"
    assert normalize_currency("gbp") == "GBP"
    assert normalize_currency("JPY") == "USD"
